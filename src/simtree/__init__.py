"""
simtree - scope-bounded name and path resolution for component trees

simtree models a simulation as a tree of named, typed nodes and answers
structural queries, scope-visibility lookups and path reads/writes against it.
"""

from importlib.metadata import version

from simtree.core import Node, ResolutionConfig
from simtree.execution.resolution import PathEvaluator, get, set_value
from simtree.models import Simulation, Simulations, Zone

__version__ = version("simtree")

__all__ = [
    "__version__",
    "Node",
    "ResolutionConfig",
    "PathEvaluator",
    "get",
    "set_value",
    "Simulations",
    "Simulation",
    "Zone",
]
