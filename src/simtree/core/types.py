"""
Core type definitions for simtree.

This module contains type aliases used throughout simtree for type safety
and consistency.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from simtree.core.tree_node import Node

# A kind filter is either a kind tag or a Node subclass carrying one
KindSpec = Union[str, type["Node"]]

# Value read from or written to a node attribute
AttributeValue = Any

# Nested node description consumed by TreeBuilder
NodeDescription = Mapping[str, Any]
