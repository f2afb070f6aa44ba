"""
Exception classes for simtree tree construction and path resolution.

This module defines specific exception types for the failure conditions
that can occur while building a component tree, mutating it, and resolving
paths or attributes against it.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Path and failing segment only
    DEVELOPER = "developer"  # Adds the resolved prefix and node kinds


@dataclass
class ErrorContext:
    """
    Context information for resolution error messages.

    Captures where a lookup failed: the node the lookup started from, the
    path being resolved, and how far resolution got before failing.

    Params:
        path: The path string being resolved
        start_node: Full path of the node the lookup started from
        segment: The segment that failed to match
        resolved_prefix: Full path of the last node successfully resolved
        node_kind: Kind tag of the value the failing segment was applied to
    """

    path: str | None = None
    start_node: str | None = None
    segment: str | None = None
    resolved_prefix: str | None = None
    node_kind: str | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.start_node:
            lines.append(f"  from {self.start_node}")

        if self.segment:
            lines.append(f"  at segment '{self.segment}'")

        if error_level == ErrorLevel.DEVELOPER:
            if self.resolved_prefix:
                lines.append(f"  resolved up to {self.resolved_prefix}")
            if self.node_kind:
                lines.append(f"  on kind {self.node_kind}")

        if self.path:
            lines.append(f"  path: {self.path}")

        return "\n".join(lines)


class SimTreeError(Exception):
    """Base exception for all simtree errors."""

    pass


def _with_context(
    message: str, context: ErrorContext | None, error_level: ErrorLevel
) -> str:
    if context is None:
        return message
    location = context.format_location(error_level)
    return f"{message}\n{location}" if location else message


class PathValidationError(SimTreeError):
    """Raised when a path string is malformed or cannot be used as requested."""

    def __init__(self, path: str, reason: str):
        """
        Initialize the exception.

        Params:
            path: The invalid path
            reason: Why the path is invalid
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path '{path}': {reason}")


class NodeNotFoundError(SimTreeError):
    """Raised when the structural prefix of a path does not resolve to a node."""

    def __init__(
        self,
        path: str,
        segment: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            path: The path being resolved
            segment: The node name that could not be found
            context: ErrorContext with resolution location information
            error_level: Level of detail to show in error message
        """
        self.path = path
        self.segment = segment
        self.context = context
        super().__init__(
            _with_context(
                f"Node '{segment}' not found while resolving '{path}'",
                context,
                error_level,
            )
        )


class AttributeAccessError(SimTreeError):
    """Base exception for attribute read/write failures."""

    pass


class AttributeNotFoundError(AttributeAccessError):
    """Raised when an attribute-chain segment does not name a readable attribute."""

    def __init__(
        self,
        attribute: str,
        owner: str,
        message: str = "does not exist",
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            attribute: The attribute name that was not found
            owner: Description of the value the attribute was looked up on
            message: Specific error message
            context: ErrorContext with resolution location information
            error_level: Level of detail to show in error message
        """
        self.attribute = attribute
        self.owner = owner
        self.context = context
        super().__init__(
            _with_context(
                f"Attribute '{attribute}' {message} on {owner}",
                context,
                error_level,
            )
        )


class ReadOnlyAttributeError(AttributeNotFoundError):
    """Raised when a write targets an attribute that is readable but not writable."""

    def __init__(self, attribute: str, owner: str):
        """
        Initialize the exception.

        Params:
            attribute: The attribute name that cannot be written
            owner: Description of the value owning the attribute
        """
        super().__init__(attribute, owner, message="is not writable")


class AttributeTypeError(AttributeAccessError):
    """Raised when a written value is incompatible with the attribute's declared type."""

    def __init__(self, attribute: str, expected: str, actual: str):
        """
        Initialize the exception.

        Params:
            attribute: The attribute being written
            expected: Name of the declared type
            actual: Name of the supplied value's type
        """
        self.attribute = attribute
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot assign {actual} to attribute '{attribute}' of type {expected}"
        )


class StructuralInvariantError(SimTreeError):
    """Raised when a mutation would break the single-rooted tree invariants."""

    def __init__(self, node_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            node_name: Name of the node the mutation was applied to
            reason: Which invariant the mutation would violate
        """
        self.node_name = node_name
        self.reason = reason
        super().__init__(f"Cannot attach '{node_name}': {reason}")


class CycleError(StructuralInvariantError):
    """Raised when attaching a node would make it its own ancestor."""

    pass


class DuplicateParentError(StructuralInvariantError):
    """Raised when attaching a node that already has a parent."""

    pass


class InvalidParentError(StructuralInvariantError):
    """Raised when a node's kind does not accept the requested parent kind."""

    pass


class UnknownKindError(SimTreeError):
    """Raised when a kind tag is not present in a kind registry."""

    def __init__(self, kind: str, available: list[str]):
        """
        Initialize the exception.

        Params:
            kind: The kind tag that was requested
            available: Kind tags currently registered
        """
        self.kind = kind
        self.available = available
        super().__init__(f"Unknown kind: {kind}. Available: {available}")


class NodeInstantiationError(SimTreeError):
    """Raised when a node cannot be instantiated from its description."""

    def __init__(self, node_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            node_name: The name of the node that failed to instantiate
            reason: The underlying reason for the failure
        """
        self.node_name = node_name
        self.reason = reason
        super().__init__(f"Cannot instantiate node '{node_name}': {reason}")


class LinkResolutionError(SimTreeError):
    """Raised when a required link cannot be satisfied from a node's scope."""

    def __init__(self, node_path: str, field_name: str, target: str):
        """
        Initialize the exception.

        Params:
            node_path: Full path of the node declaring the link
            field_name: Name of the link field
            target: Description of the kind/name that was searched for
        """
        self.node_path = node_path
        self.field_name = field_name
        self.target = target
        super().__init__(
            f"Cannot resolve link '{field_name}' on {node_path}: no {target} in scope"
        )


class MissingResourceError(SimTreeError):
    """Raised when a requested resource group or item is not in scope."""

    def __init__(self, requested_by: str, resource: str):
        """
        Initialize the exception.

        Params:
            requested_by: Full path of the requesting node
            resource: Description of the missing resource
        """
        self.requested_by = requested_by
        self.resource = resource
        super().__init__(f"Resource {resource} requested by {requested_by} not found")
