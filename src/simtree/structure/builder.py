"""
Tree construction from nested descriptions.

A description is a mapping with a `kind` tag, the node's attributes (at least
`name`) and an optional ordered `children` list of further descriptions:

    {
        "kind": "Simulations",
        "name": "Simulations",
        "children": [
            {"kind": "Simulation", "name": "Test", "children": [...]},
        ],
    }

Reading descriptions from files is the host application's concern.
"""

import logging

from pydantic import ValidationError

from simtree.core.tree_node import Node
from simtree.core.types import NodeDescription
from simtree.exceptions import NodeInstantiationError
from simtree.structure.registry import KindRegistry

logger = logging.getLogger(__name__)

KIND_KEY = "kind"
CHILDREN_KEY = "children"


class TreeBuilder:
    """Builds Node trees from descriptions using an explicit kind registry."""

    def __init__(self, registry: KindRegistry):
        self.registry = registry

    def build(self, description: NodeDescription) -> Node:
        """
        Build a node and its subtree from a description.

        Children are attached in description order, so every structural
        invariant of `Node.add_child` (including valid parent kinds) is
        enforced during construction.

        Params:
            description: Nested node description

        Returns:
            The root of the built subtree. Callers must keep a reference to it;
            nodes only hold weak references to their parents.

        Raises:
            NodeInstantiationError: If the kind is missing or attributes fail validation
            UnknownKindError: If the kind is not registered
            StructuralInvariantError: If a child is not valid under its parent
        """
        kind = description.get(KIND_KEY)
        label = description.get("name") or kind or "<unnamed>"
        if not kind:
            raise NodeInstantiationError(label, f"description has no '{KIND_KEY}'")

        node_class = self.registry.lookup(kind)
        attributes = {
            key: value
            for key, value in description.items()
            if key not in (KIND_KEY, CHILDREN_KEY)
        }
        try:
            node = node_class.model_validate(attributes)
        except ValidationError as exc:
            raise NodeInstantiationError(label, str(exc)) from exc

        for child_description in description.get(CHILDREN_KEY, ()):
            node.add_child(self.build(child_description))

        logger.debug(
            "Built %s '%s' with %d children", kind, node.name, len(node.children)
        )
        return node
