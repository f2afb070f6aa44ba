"""
Type compatibility rules for attribute writes.

Used when an attribute has no declared annotation and the type of its current
value is the only reference. Only numeric widening (int -> float) is accepted
as a conversion; everything else must already be of a compatible type.
"""

from enum import Enum
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin


class CompatibilityLevel(Enum):
    """Type compatibility levels for attribute writes."""

    IDENTICAL = "identical"  # Same type or subclass, no conversion needed
    SAFE = "safe"  # Numeric widening (int -> float)
    FORBIDDEN = "forbidden"  # Never allowed


def is_integer_value(value: Any) -> bool:
    """Check for a plain integer; bools are not integers here."""
    return isinstance(value, int) and not isinstance(value, bool)


def check_compatibility(
    source_type: type, target_type: type, allow_widening: bool = True
) -> CompatibilityLevel:
    """
    Check compatibility level between a value's type and an attribute's type.

    Params:
        source_type: Type of the value being written
        target_type: Type the attribute currently holds
        allow_widening: Whether int -> float counts as SAFE

    Returns:
        CompatibilityLevel for the pair
    """
    if source_type is bool or target_type is bool:
        return (
            CompatibilityLevel.IDENTICAL
            if source_type is target_type
            else CompatibilityLevel.FORBIDDEN
        )

    if issubclass(source_type, target_type):
        return CompatibilityLevel.IDENTICAL

    if allow_widening and issubclass(source_type, int) and target_type is float:
        return CompatibilityLevel.SAFE

    return CompatibilityLevel.FORBIDDEN


def union_members(annotation: Any) -> tuple:
    """Get the members of a union annotation, or the annotation alone."""
    if get_origin(annotation) in (Union, UnionType):
        return get_args(annotation)
    return (annotation,)


def widens_to_float(annotation: Any) -> bool:
    """
    Check whether an int written to `annotation` is a float widening.

    True for `float` and for optional floats; False whenever the annotation
    also accepts int directly (e.g. `int | float`).
    """
    members = [m for m in union_members(annotation) if m is not NoneType]
    return float in members and int not in members


def type_name(annotation: Any) -> str:
    """Render an annotation for error messages."""
    if isinstance(annotation, type) and get_origin(annotation) is None:
        return annotation.__name__
    return str(annotation).replace("typing.", "")
