"""
Structural and scoped queries over simtree component trees.

All queries are pure functions of the current tree shape. Single-result
queries return None when nothing matches; multi-result queries return lists
in tree order. Wherever several nodes share a name, child order decides
which one is returned.
"""

from collections.abc import Iterator

from simtree.core.config import DEFAULT_CONFIG, ResolutionConfig
from simtree.core.path_utils import ANCHOR, SEPARATOR
from simtree.core.tree_node import Node
from simtree.core.types import KindSpec
from simtree.execution.scopes import scope_visible


def matches(
    node: Node,
    name: str | None = None,
    kind: KindSpec | None = None,
    config: ResolutionConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Check a node against an optional name and an optional kind.

    Params:
        node: Candidate node
        name: Required name, compared under `config`'s case policy
        kind: Required kind tag or Node subclass (subkinds match)
        config: Resolution configuration

    Returns:
        True if every supplied criterion matches
    """
    if name is not None and not config.names_match(node.name, name):
        return False
    if kind is not None and not node.is_kind(kind):
        return False
    return True


def _require_criteria(name: str | None, kind: KindSpec | None) -> None:
    if name is None and kind is None:
        raise ValueError("A name or a kind is required")


def full_path(node: Node) -> str:
    """
    Build the absolute path of a node.

    Params:
        node: Node to describe

    Returns:
        The anchor followed by the dot-joined names from the root to `node`

    Examples:
        Field2 under Test under Simulations -> ".Simulations.Test.Field2"
    """
    names = [node.name, *(ancestor.name for ancestor in node.iter_ancestors())]
    return ANCHOR + SEPARATOR.join(reversed(names))


def find_ancestor(node: Node, kind: KindSpec) -> Node | None:
    """
    Find the closest ancestor whose kind is `kind` or a subkind of it.

    Params:
        node: Node to start from (never itself a candidate)
        kind: Kind tag or Node subclass

    Returns:
        The nearest matching ancestor, or None if no ancestor matches
    """
    for ancestor in node.iter_ancestors():
        if ancestor.is_kind(kind):
            return ancestor
    return None


def scoped_find(
    node: Node,
    name: str | None = None,
    kind: KindSpec | None = None,
    config: ResolutionConfig = DEFAULT_CONFIG,
) -> Node | None:
    """
    Find the first scope-visible node matching a name and/or a kind.

    Params:
        node: Node to search from
        name: Optional exact name to match
        kind: Optional kind tag or Node subclass to match
        config: Resolution configuration

    Returns:
        First match in visibility order, or None

    Raises:
        ValueError: If neither a name nor a kind is supplied
    """
    _require_criteria(name, kind)
    for candidate in scope_visible(node):
        if matches(candidate, name, kind, config):
            return candidate
    return None


def scoped_find_all(node: Node, kind: KindSpec | None = None) -> list[Node]:
    """Get every scope-visible node, optionally filtered by kind, in visibility order."""
    return scope_visible(node, kind)


def children(node: Node, kind: KindSpec | None = None) -> list[Node]:
    """Get the direct children of a node, optionally filtered by kind, in child order."""
    return [child for child in node.children if kind is None or child.is_kind(kind)]


def first_child(
    node: Node,
    name: str | None = None,
    kind: KindSpec | None = None,
    config: ResolutionConfig = DEFAULT_CONFIG,
) -> Node | None:
    """
    Find the first direct child matching a name and/or a kind.

    Raises:
        ValueError: If neither a name nor a kind is supplied
    """
    _require_criteria(name, kind)
    for child in node.children:
        if matches(child, name, kind, config):
            return child
    return None


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield every node below `node` in pre-order, ignoring scope boundaries."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def descendants(node: Node, kind: KindSpec | None = None) -> list[Node]:
    """
    Get the whole subtree below a node in pre-order.

    This is a structural query: scope boundaries are expanded like any other
    node. The node itself is not included.

    Params:
        node: Subtree root
        kind: Optional kind filter

    Returns:
        Descendants in pre-order
    """
    return [
        descendant
        for descendant in iter_descendants(node)
        if kind is None or descendant.is_kind(kind)
    ]


def find_descendant(
    node: Node,
    name: str | None = None,
    kind: KindSpec | None = None,
    config: ResolutionConfig = DEFAULT_CONFIG,
) -> Node | None:
    """
    Find the first node in pre-order below `node` matching a name and/or a kind.

    Raises:
        ValueError: If neither a name nor a kind is supplied
    """
    _require_criteria(name, kind)
    for descendant in iter_descendants(node):
        if matches(descendant, name, kind, config):
            return descendant
    return None


def siblings(node: Node) -> list[Node]:
    """Get the other children of a node's parent, in child order; empty for a root."""
    parent = node.parent
    if parent is None:
        return []
    return [child for child in parent.children if child is not node]
