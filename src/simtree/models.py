"""
Built-in container kinds for simulation trees.

A typical tree is rooted at a `Simulations` node holding one or more
`Simulation` runs, each of which is divided into `Zone`s:

    Simulations
    └── Simulation        scope root: nothing outside it is visible from inside
        ├── (components)
        └── Zone          scope boundary, may nest further zones
"""

from typing import ClassVar

from simtree.core.tree_node import Node


class Simulations(Node):
    """Top-level container; the conventional root and anchor of absolute paths."""

    pass


class Zone(Node):
    """A spatial or organizational unit that bounds visibility."""

    scope_boundary: ClassVar[bool] = True
    valid_parents: ClassVar[frozenset[str]] = frozenset({"Zone"})

    area: float = 1.0


class Simulation(Zone):
    """A single simulation run. Its siblings and container are outside its scope."""

    scope_root: ClassVar[bool] = True
    valid_parents: ClassVar[frozenset[str]] = frozenset({"Simulations"})
