"""
Path parsing utilities for simtree.

A path has a structural prefix that selects a node and an optional trailing
attribute chain read or written on that node. Three prefix forms exist:

    .Simulations.Test.Field1.Name   absolute, anchored at the tree root
    [Soil].Water.Name               scope-qualified, located by scope search
    Field1Report.Name               relative, searched in the start node's subtree

Parsing is a pure string transform; nothing here touches a tree.
"""

from dataclasses import dataclass, field
from enum import Enum

from simtree.exceptions import PathValidationError

ANCHOR = "."
SEPARATOR = "."
SCOPE_OPEN = "["
SCOPE_CLOSE = "]"


class PathMode(Enum):
    """How the structural prefix of a path is resolved."""

    ABSOLUTE = "absolute"
    SCOPE_QUALIFIED = "scope_qualified"
    RELATIVE = "relative"


@dataclass
class PathComponents:
    """Result of splitting a path into its components."""

    first_part: str
    remainder: str
    has_remainder: bool

    @classmethod
    def split_path(cls, path: str) -> "PathComponents":
        """
        Split a path at the first dot separator.

        Params:
            path: Path string to split (e.g., "Field1Report.Name")

        Returns:
            PathComponents with first_part, remainder, and has_remainder flag

        Examples:
            "Soil.Water.Name" -> PathComponents("Soil", "Water.Name", True)
            "Clock" -> PathComponents("Clock", "", False)
        """
        if not path or SEPARATOR not in path:
            return cls(first_part=path, remainder="", has_remainder=False)

        first_part, remainder = path.split(SEPARATOR, 1)
        return cls(first_part=first_part, remainder=remainder, has_remainder=True)


@dataclass
class ParsedPath:
    """
    A path split into its resolution mode, structural segments and attribute chain.

    For absolute paths every segment after the anchor is a structural
    candidate; the evaluator decides where structure ends and the attribute
    chain begins. For the other modes `segments` holds exactly the node name
    to locate and `attributes` holds the rest.
    """

    mode: PathMode
    segments: list[str]
    original_path: str
    attributes: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        """Return the original path string."""
        return self.original_path

    @property
    def target(self) -> str:
        """The first structural segment."""
        return self.segments[0]

    @property
    def has_attributes(self) -> bool:
        """Check if the parser already split off an attribute chain."""
        return bool(self.attributes)


class PathParser:
    """Single-pass parser from path strings to `ParsedPath`."""

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path string.

        Params:
            path: Path in absolute, scope-qualified or relative form

        Returns:
            ParsedPath describing the mode, structural segments and attribute chain

        Raises:
            PathValidationError: If the path is empty, has surrounding whitespace,
                empty segments, or a malformed scope qualifier

        Examples:
            ".Simulations.Test" -> ParsedPath(ABSOLUTE, ["Simulations", "Test"], ...)
            "[Soil].Water.Name" -> ParsedPath(SCOPE_QUALIFIED, ["Soil"], attributes=["Water", "Name"])
            "Field1Report.Name" -> ParsedPath(RELATIVE, ["Field1Report"], attributes=["Name"])
        """
        validate_path_format(path)

        if path.startswith(ANCHOR):
            segments = PathParser.split_path_components(path[len(ANCHOR) :], path)
            return ParsedPath(
                mode=PathMode.ABSOLUTE, segments=segments, original_path=path
            )

        if path.startswith(SCOPE_OPEN):
            close = path.find(SCOPE_CLOSE)
            if close == -1:
                raise PathValidationError(path, f"missing '{SCOPE_CLOSE}'")
            target = path[1:close]
            if not target or SCOPE_OPEN in target or SEPARATOR in target:
                raise PathValidationError(path, "scope qualifier must be a single name")
            rest = path[close + 1 :]
            if rest and not rest.startswith(SEPARATOR):
                raise PathValidationError(
                    path, f"expected '{SEPARATOR}' after '{SCOPE_CLOSE}'"
                )
            attributes = PathParser.split_path_components(rest[1:], path) if rest else []
            return ParsedPath(
                mode=PathMode.SCOPE_QUALIFIED,
                segments=[target],
                original_path=path,
                attributes=attributes,
            )

        components = PathComponents.split_path(path)
        attributes = (
            PathParser.split_path_components(components.remainder, path)
            if components.has_remainder
            else []
        )
        segments = PathParser.split_path_components(components.first_part, path)
        return ParsedPath(
            mode=PathMode.RELATIVE,
            segments=segments,
            original_path=path,
            attributes=attributes,
        )

    @staticmethod
    def split_path_components(path: str, original: str | None = None) -> list[str]:
        """
        Split a dotted path into all its components.

        Params:
            path: Path to split (e.g., "Soil.Water.Name")
            original: Full path for error messages, when `path` is a fragment

        Returns:
            List of path components

        Raises:
            PathValidationError: If any component is empty or contains brackets
        """
        original = path if original is None else original
        parts = path.split(SEPARATOR)
        for part in parts:
            if not part:
                raise PathValidationError(original, "empty path segment")
            if SCOPE_OPEN in part or SCOPE_CLOSE in part:
                raise PathValidationError(
                    original, "scope qualifier is only allowed as the first segment"
                )
        return parts


def validate_path_format(path: str, path_type: str = "path") -> None:
    """
    Validate basic path format requirements.

    Params:
        path: Path string to validate
        path_type: Type description for error messages

    Raises:
        PathValidationError: If path format is invalid
    """
    if not path or not isinstance(path, str):
        raise PathValidationError(str(path), f"{path_type} must be a non-empty string")

    if path.strip() != path:
        raise PathValidationError(
            path, f"{path_type} must not have leading or trailing whitespace"
        )
