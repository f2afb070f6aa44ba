"""
Path evaluation for simtree component trees.

Resolves a path string from a start node to either a node or an attribute
value, and assigns attribute values through paths. Each prefix form has its
own lookup rule:

  - absolute: exact child-by-child descent from the root; the first segment
    that names no child starts the attribute chain
  - scope-qualified: `scoped_find` from the start node
  - relative: pre-order search of the start node's own subtree only

Relative lookups never leave the start node's subtree, even for names that
scope search would find.
"""

from typing import Any

from simtree.core.config import DEFAULT_CONFIG, ResolutionConfig
from simtree.core.path_utils import ParsedPath, PathMode, PathParser
from simtree.core.tree_node import Node
from simtree.exceptions import (
    AttributeNotFoundError,
    ErrorContext,
    NodeNotFoundError,
    PathValidationError,
)
from simtree.execution.queries import find_descendant, first_child, full_path, scoped_find
from simtree.structure.attributes import AttributeAccessor


class PathEvaluator:
    """
    Evaluates paths against a tree for reading and writing.

    The evaluator holds no tree state; every call resolves against the live
    tree reachable from the given start node.
    """

    def __init__(
        self,
        config: ResolutionConfig = DEFAULT_CONFIG,
        accessor: AttributeAccessor | None = None,
    ):
        self.config = config
        self.accessor = accessor or AttributeAccessor(config)

    def resolve_node(self, start: Node, path: str) -> tuple[Node, list[str]]:
        """
        Resolve the structural prefix of a path.

        Params:
            start: Node the path is evaluated from
            path: Path string in any supported form

        Returns:
            Tuple of (resolved node, remaining attribute chain)

        Raises:
            PathValidationError: If the path is malformed
            NodeNotFoundError: If the structural prefix matches no node
        """
        parsed = PathParser.parse(path)

        if parsed.mode == PathMode.ABSOLUTE:
            node, unmatched = self._descend_from_root(start, parsed)
            return node, unmatched + parsed.attributes

        if parsed.mode == PathMode.SCOPE_QUALIFIED:
            node = scoped_find(start, name=parsed.target, config=self.config)
        else:
            node = find_descendant(start, name=parsed.target, config=self.config)

        if node is None:
            raise NodeNotFoundError(
                path,
                parsed.target,
                context=ErrorContext(path=path, start_node=full_path(start)),
            )
        return node, list(parsed.attributes)

    def resolve(self, start: Node, path: str) -> Any:
        """
        Resolve a path to a node or attribute value.

        Raises:
            PathValidationError: If the path is malformed
            NodeNotFoundError: If the structural prefix matches no node
            AttributeNotFoundError: If an attribute-chain segment is not readable
        """
        node, chain = self.resolve_node(start, path)
        if not chain:
            return node
        return self._read_chain(start, node, chain, path)

    def get(self, start: Node, path: str, default: Any = None) -> Any:
        """
        Resolve a path, returning `default` when any part of it is not found.

        Malformed paths still raise PathValidationError.
        """
        try:
            return self.resolve(start, path)
        except (NodeNotFoundError, AttributeNotFoundError):
            return default

    def set(self, start: Node, path: str, value: Any) -> None:
        """
        Assign the attribute a path ends in.

        Params:
            start: Node the path is evaluated from
            path: Path whose attribute chain names a writable attribute
            value: New value; int is widened to float for float attributes

        Raises:
            PathValidationError: If the path is malformed or names a bare node
            NodeNotFoundError: If the structural prefix matches no node
            AttributeNotFoundError: If an attribute-chain segment does not exist
            ReadOnlyAttributeError: If the final attribute is not writable
            AttributeTypeError: If `value` does not fit the attribute's type
        """
        node, chain = self.resolve_node(start, path)
        if not chain:
            raise PathValidationError(
                path, "resolves to a node; only attributes can be assigned"
            )
        owner = self._read_chain(start, node, chain[:-1], path)
        self.accessor.write(owner, chain[-1], value)

    def _descend_from_root(
        self, start: Node, parsed: ParsedPath
    ) -> tuple[Node, list[str]]:
        root = start.root
        segments = parsed.segments
        if not self.config.names_match(root.name, segments[0]):
            raise NodeNotFoundError(
                parsed.original_path,
                segments[0],
                context=ErrorContext(
                    path=parsed.original_path,
                    start_node=full_path(start),
                    segment=segments[0],
                ),
            )

        current = root
        for position in range(1, len(segments)):
            child = first_child(current, name=segments[position], config=self.config)
            if child is None:
                return current, segments[position:]
            current = child
        return current, []

    def _read_chain(self, start: Node, node: Node, chain: list[str], path: str) -> Any:
        current: Any = node
        for segment in chain:
            try:
                current = self.accessor.read(current, segment)
            except AttributeNotFoundError as exc:
                raise AttributeNotFoundError(
                    segment,
                    exc.owner,
                    context=ErrorContext(
                        path=path,
                        start_node=full_path(start),
                        segment=segment,
                        resolved_prefix=full_path(node),
                        node_kind=node.kind,
                    ),
                ) from exc
        return current


def get(
    start: Node, path: str, default: Any = None, config: ResolutionConfig = DEFAULT_CONFIG
) -> Any:
    """Resolve `path` from `start`, returning `default` when it is not found."""
    return PathEvaluator(config).get(start, path, default)


def set_value(
    start: Node, path: str, value: Any, config: ResolutionConfig = DEFAULT_CONFIG
) -> None:
    """Assign the attribute `path` ends in, resolving from `start`."""
    PathEvaluator(config).set(start, path, value)
