"""
Scope visibility for simtree component trees.

The visibility set of a node is built like a lexical scope chain. Walking
outwards from the innermost frame, each frame contributes its direct children
(in child order) followed by itself. Children are never expanded, so a
sibling container is visible by name while its interior stays hidden.

The innermost frame is the node itself when it is a scope boundary, and its
parent otherwise. The walk ends at the root, or after a frame whose kind is a
scope root.

Nothing here is cached: every call recomputes from the live tree.
"""

from collections.abc import Iterator

from simtree.core.tree_node import Node
from simtree.core.types import KindSpec


def scope_frames(node: Node) -> Iterator[Node]:
    """
    Yield the frames of a node's scope chain, innermost first.

    Params:
        node: Node whose scope chain is walked

    Returns:
        Iterator over the frames, stopping after the first scope-root frame
        or at the tree root
    """
    frame = node if node.scope_boundary else node.parent
    while frame is not None:
        yield frame
        if frame.scope_root:
            return
        frame = frame.parent


def scope_visible(node: Node, kind: KindSpec | None = None) -> list[Node]:
    """
    Compute the ordered visibility set of a node.

    Params:
        node: Node to compute visibility from
        kind: Optional kind filter; applied after the set is built, keeping order

    Returns:
        Nodes name-resolvable from `node`, without duplicates, in scope-chain order
    """
    visible: list[Node] = []
    seen: set[Node] = set()

    for frame in scope_frames(node):
        for member in (*frame.children, frame):
            if member not in seen:
                seen.add(member)
                visible.append(member)

    if kind is None:
        return visible
    return [member for member in visible if member.is_kind(kind)]
