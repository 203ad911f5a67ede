"""
Hierarchy - generic rooted trees of marks.

Nodes carry their own parent, root and generation bookkeeping and
answer ancestor, containment and lineage questions, plus configurable
depth-first traversal.
"""

from hierarchy.errors import (
    CrossTreeError,
    CycleError,
    HierarchyError,
    InvalidArgumentError,
    InvalidOrderError,
    NotAncestorError,
)
from hierarchy.inspection import HierarchyStatistics, collect_statistics, render_tree
from hierarchy.node import Hierarchy
from hierarchy.traversal import (
    DEFAULT_ORDER,
    Position,
    TraversalOptions,
    TraversalPlan,
    VisitAt,
)

__all__ = [
    "Hierarchy",
    "HierarchyStatistics",
    "collect_statistics",
    "render_tree",
    "Position",
    "VisitAt",
    "TraversalPlan",
    "TraversalOptions",
    "DEFAULT_ORDER",
    "HierarchyError",
    "CycleError",
    "CrossTreeError",
    "NotAncestorError",
    "InvalidArgumentError",
    "InvalidOrderError",
]
