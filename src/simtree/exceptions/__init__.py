"""
simtree exception classes.

This package provides all exception types used throughout simtree for
consistent error handling and reporting.
"""

from simtree.exceptions.core import (
    AttributeAccessError,
    AttributeNotFoundError,
    AttributeTypeError,
    CycleError,
    DuplicateParentError,
    ErrorContext,
    ErrorLevel,
    InvalidParentError,
    LinkResolutionError,
    MissingResourceError,
    NodeInstantiationError,
    NodeNotFoundError,
    PathValidationError,
    ReadOnlyAttributeError,
    SimTreeError,
    StructuralInvariantError,
    UnknownKindError,
)

__all__ = [
    "SimTreeError",
    "ErrorContext",
    "ErrorLevel",
    "PathValidationError",
    "NodeNotFoundError",
    "AttributeAccessError",
    "AttributeNotFoundError",
    "ReadOnlyAttributeError",
    "AttributeTypeError",
    "StructuralInvariantError",
    "CycleError",
    "DuplicateParentError",
    "InvalidParentError",
    "UnknownKindError",
    "NodeInstantiationError",
    "LinkResolutionError",
    "MissingResourceError",
]
