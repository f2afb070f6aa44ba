"""
Core simtree components.

This package provides the fundamental building blocks: the Node base class,
path parsing, resolution configuration and shared type aliases.
"""

from simtree.core.config import DEFAULT_CONFIG, ResolutionConfig
from simtree.core.path_utils import (
    ANCHOR,
    ParsedPath,
    PathComponents,
    PathMode,
    PathParser,
    validate_path_format,
)
from simtree.core.tree_node import Node, kind_tag
from simtree.core.types import AttributeValue, KindSpec, NodeDescription

__all__ = [
    "Node",
    "kind_tag",
    "ResolutionConfig",
    "DEFAULT_CONFIG",
    "ANCHOR",
    "ParsedPath",
    "PathComponents",
    "PathMode",
    "PathParser",
    "validate_path_format",
    "AttributeValue",
    "KindSpec",
    "NodeDescription",
]
