"""
Whole-tree inspection helpers.

Statistics and a printable outline for a hierarchy, built on the
traversal engine. Useful for debugging and analysis.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from hierarchy.errors import InvalidArgumentError
from hierarchy.node import Hierarchy


@dataclass
class HierarchyStatistics:
    """Shape summary of a (sub)tree.

    Attributes:
        total_nodes: Number of nodes, including the starting node.
        leaf_nodes: Nodes without children.
        internal_nodes: Nodes with at least one child.
        insufficient_marks: Nodes whose mark needs ancestor context.
        max_generation: Deepest absolute generation found.
        generation_distribution: Count of nodes at each generation.
    """

    total_nodes: int = 0
    leaf_nodes: int = 0
    internal_nodes: int = 0
    insufficient_marks: int = 0
    max_generation: int = 0
    generation_distribution: dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "total_nodes": self.total_nodes,
            "leaf_nodes": self.leaf_nodes,
            "internal_nodes": self.internal_nodes,
            "insufficient_marks": self.insufficient_marks,
            "max_generation": self.max_generation,
            "generation_distribution": dict(self.generation_distribution),
        }


def collect_statistics(node: Hierarchy) -> HierarchyStatistics:
    """Get statistics for the subtree rooted at ``node``."""
    generations: Counter[int] = Counter()
    stats = HierarchyStatistics()

    def record(visited: Hierarchy) -> None:
        generations[visited.generation] += 1
        if visited.is_leaf:
            stats.leaf_nodes += 1
        else:
            stats.internal_nodes += 1
        if not visited.sufficient:
            stats.insufficient_marks += 1

    node.traverse(record)

    stats.total_nodes = sum(generations.values())
    stats.max_generation = max(generations)
    stats.generation_distribution = dict(sorted(generations.items()))
    return stats


def render_tree(
    node: Hierarchy,
    max_depth: int | None = None,
    indent: str = "  ",
) -> str:
    """
    Render the subtree under ``node`` as an indented outline.

    Each line reads ``[generation] mark``; insufficient marks get a
    trailing ``*``.

    Args:
        node: Where to start.
        max_depth: Levels below ``node`` to include. None means all.
        indent: Indentation per level.

    Raises:
        InvalidArgumentError: If ``max_depth`` is negative.
    """
    if max_depth is not None and max_depth < 0:
        raise InvalidArgumentError(f"max_depth must be non-negative, got {max_depth}")

    def too_deep(visited: Hierarchy) -> bool:
        return max_depth is not None and visited.generation - node.generation > max_depth

    lines: list[str] = []

    def emit(visited: Hierarchy) -> None:
        level = visited.generation - node.generation
        suffix = "" if visited.sufficient else "*"
        lines.append(f"{indent * level}[{visited.generation}] {visited.mark}{suffix}")

    node.traverse(emit, stop_criteria=too_deep)
    return "\n".join(lines)
