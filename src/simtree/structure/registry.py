"""
Kind registry for building trees from descriptions.

A registry maps kind tags to the Node subclasses that implement them. It is
an ordinary object owned by whoever builds trees; there is no process-wide
registry.
"""

from collections.abc import Iterable

from simtree.core.tree_node import Node, kind_tag
from simtree.core.types import KindSpec
from simtree.exceptions import UnknownKindError


class KindRegistry:
    """Registry of Node subclasses by kind tag."""

    def __init__(self, node_classes: Iterable[type[Node]] = ()):
        self._classes: dict[str, type[Node]] = {}
        for node_class in node_classes:
            self.register(node_class)

    def register(self, node_class: type[Node]) -> type[Node]:
        """
        Register a Node subclass under its kind tag.

        Returns the class unchanged so this can be used as a class decorator.

        Params:
            node_class: Node subclass to register

        Raises:
            ValueError: If a different class is already registered under the same tag
        """
        existing = self._classes.get(node_class.kind)
        if existing is not None and existing is not node_class:
            raise ValueError(
                f"Kind '{node_class.kind}' already registered by {existing.__qualname__}"
            )
        self._classes[node_class.kind] = node_class
        return node_class

    def lookup(self, kind: str) -> type[Node]:
        """
        Get the class registered for a kind tag.

        Raises:
            UnknownKindError: If the tag is not registered
        """
        node_class = self._classes.get(kind)
        if node_class is None:
            raise UnknownKindError(kind, self.list_kinds())
        return node_class

    def is_registered(self, kind: str) -> bool:
        """Check if a kind tag is registered."""
        return kind in self._classes

    def list_kinds(self) -> list[str]:
        """Get all registered kind tags in registration order."""
        return list(self._classes)

    def kinds_satisfying(self, kind: KindSpec) -> list[str]:
        """Get the registered tags whose classes satisfy `kind`, including itself."""
        tag = kind_tag(kind)
        return [
            registered
            for registered, node_class in self._classes.items()
            if tag in node_class.kind_set()
        ]
