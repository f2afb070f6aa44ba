"""
simtree execution components.

This package provides scope visibility, structural queries and path
evaluation over component trees.
"""

from simtree.execution.queries import (
    children,
    descendants,
    find_ancestor,
    find_descendant,
    first_child,
    full_path,
    iter_descendants,
    matches,
    scoped_find,
    scoped_find_all,
    siblings,
)
from simtree.execution.resolution import PathEvaluator, get, set_value
from simtree.execution.scopes import scope_frames, scope_visible

__all__ = [
    "scope_frames",
    "scope_visible",
    "children",
    "descendants",
    "find_ancestor",
    "find_descendant",
    "first_child",
    "full_path",
    "iter_descendants",
    "matches",
    "scoped_find",
    "scoped_find_all",
    "siblings",
    "PathEvaluator",
    "get",
    "set_value",
]
