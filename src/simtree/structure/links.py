"""
Link resolution and resource lookups for components.

A link is a node field declared with `Link()`. After a tree is built,
`resolve_links` fills every link from the declaring node's scope, matching
the field's node type and, optionally, a node name:

    class Report(Node):
        clock: Clock | None = Link()
        weather: WeatherFile | None = Link("Met", required=False)

Whether an unresolved link is fatal is decided per field; the lookup itself
is the scope search of `simtree.execution.queries`.
"""

import logging
from enum import Enum
from typing import Any

from attrs import frozen
from pydantic import Field

from simtree.core.config import DEFAULT_CONFIG, ResolutionConfig
from simtree.core.tree_node import Node, kind_tag
from simtree.core.types import KindSpec
from simtree.exceptions import LinkResolutionError, MissingResourceError
from simtree.execution.queries import (
    first_child,
    full_path,
    iter_descendants,
    matches,
    scoped_find,
)
from simtree.execution.scopes import scope_visible
from simtree.structure.type_mapping import union_members

logger = logging.getLogger(__name__)

LINK_KEY = "simtree_link"


@frozen
class LinkSpec:
    """Declared link requirements of one field."""

    field_name: str
    target: type[Node]
    name: str | None = None
    required: bool = True

    def describe(self) -> str:
        if self.name:
            return f"{self.target.kind} named '{self.name}'"
        return self.target.kind


def Link(name: str | None = None, *, required: bool = True) -> Any:  # noqa: N802
    """
    Declare a field as a link to another node in scope.

    Link fields default to None and are left out of repr and dumps.

    Params:
        name: Restrict the match to nodes with this name
        required: Whether `resolve_links` fails when nothing matches
    """
    return Field(
        default=None,
        exclude=True,
        repr=False,
        json_schema_extra={LINK_KEY: {"name": name, "required": required}},
    )


def link_specs(node_class: type[Node]) -> list[LinkSpec]:
    """
    Collect the link declarations of a node class.

    Raises:
        TypeError: If a link field's annotation names no Node subclass
    """
    specs = []
    for field_name, field_info in node_class.model_fields.items():
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or LINK_KEY not in extra:
            continue
        targets = [
            member
            for member in union_members(field_info.annotation)
            if isinstance(member, type) and issubclass(member, Node)
        ]
        if not targets:
            raise TypeError(
                f"Link '{field_name}' on {node_class.__name__} must be annotated with a Node type"
            )
        declared = extra[LINK_KEY]
        specs.append(
            LinkSpec(
                field_name=field_name,
                target=targets[0],
                name=declared["name"],
                required=declared["required"],
            )
        )
    return specs


def resolve_links(root: Node, config: ResolutionConfig = DEFAULT_CONFIG) -> int:
    """
    Populate the links of `root` and every node below it.

    A node never links to itself; otherwise the first match in visibility
    order is used.

    Params:
        root: Subtree whose links are resolved
        config: Resolution configuration for name matching

    Returns:
        Number of links that were set

    Raises:
        LinkResolutionError: If a required link has no match in scope
    """
    resolved = 0
    for node in (root, *iter_descendants(root)):
        for spec in link_specs(type(node)):
            target = next(
                (
                    candidate
                    for candidate in scope_visible(node, spec.target)
                    if candidate is not node
                    and matches(candidate, name=spec.name, config=config)
                ),
                None,
            )
            if target is None:
                if spec.required:
                    raise LinkResolutionError(
                        full_path(node), spec.field_name, spec.describe()
                    )
                logger.debug(
                    "Optional link '%s' on %s left unresolved",
                    spec.field_name,
                    full_path(node),
                )
                continue
            setattr(node, spec.field_name, target)
            resolved += 1
    return resolved


class MissingResourceAction(Enum):
    """What to do when a requested resource is not found."""

    IGNORE = "ignore"
    REPORT_WARNING = "report_warning"
    REPORT_ERROR = "report_error"


def _handle_missing(
    requester: Node, resource: str, action: MissingResourceAction
) -> None:
    if action == MissingResourceAction.REPORT_ERROR:
        raise MissingResourceError(full_path(requester), resource)
    if action == MissingResourceAction.REPORT_WARNING:
        logger.warning(
            "Resource %s requested by %s not found", resource, full_path(requester)
        )
    return None


def get_resource_item(
    requester: Node,
    group_kind: KindSpec,
    item_name: str,
    on_missing_group: MissingResourceAction = MissingResourceAction.REPORT_ERROR,
    on_missing_item: MissingResourceAction = MissingResourceAction.REPORT_ERROR,
    config: ResolutionConfig = DEFAULT_CONFIG,
) -> Node | None:
    """
    Locate a named item inside the nearest resource group visible from a node.

    Params:
        requester: Node asking for the resource
        group_kind: Kind of the resource group to search for in scope
        item_name: Name of the item among the group's direct children
        on_missing_group: Policy when no group of `group_kind` is in scope
        on_missing_item: Policy when the group has no child named `item_name`
        config: Resolution configuration for name matching

    Returns:
        The item node, or None when missing under a non-error policy

    Raises:
        MissingResourceError: When missing under the REPORT_ERROR policy
    """
    group = scoped_find(requester, kind=group_kind, config=config)
    if group is None:
        return _handle_missing(
            requester, f"group of kind {kind_tag(group_kind)}", on_missing_group
        )

    item = first_child(group, name=item_name, config=config)
    if item is None:
        return _handle_missing(
            requester, f"'{item_name}' in {full_path(group)}", on_missing_item
        )
    return item
