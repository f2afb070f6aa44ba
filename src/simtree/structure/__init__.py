"""
simtree structure components.

This package provides attribute access, kind registration, tree building
from descriptions, and link resolution for component trees.
"""

from simtree.structure.attributes import AttributeAccessor
from simtree.structure.builder import TreeBuilder
from simtree.structure.links import (
    Link,
    LinkSpec,
    MissingResourceAction,
    get_resource_item,
    link_specs,
    resolve_links,
)
from simtree.structure.registry import KindRegistry
from simtree.structure.type_mapping import CompatibilityLevel, check_compatibility

__all__ = [
    "AttributeAccessor",
    "CompatibilityLevel",
    "check_compatibility",
    "KindRegistry",
    "TreeBuilder",
    "Link",
    "LinkSpec",
    "MissingResourceAction",
    "get_resource_item",
    "link_specs",
    "resolve_links",
]
