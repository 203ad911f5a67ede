"""Tests for tree statistics and rendering."""

from __future__ import annotations

import pytest

from hierarchy.errors import InvalidArgumentError
from hierarchy.inspection import HierarchyStatistics, collect_statistics, render_tree
from hierarchy.node import Hierarchy


class TestCollectStatistics:
    """Tests for collect_statistics."""

    def test_heap(self, triangle: Hierarchy):
        stats = collect_statistics(triangle)
        assert stats.total_nodes == 7
        assert stats.leaf_nodes == 4
        assert stats.internal_nodes == 3
        assert stats.max_generation == 2
        assert stats.generation_distribution == {0: 1, 1: 2, 2: 4}
        assert stats.insufficient_marks == 0

    def test_single_node(self, h: Hierarchy):
        stats = collect_statistics(h)
        assert stats.total_nodes == 1
        assert stats.leaf_nodes == 1
        assert stats.internal_nodes == 0
        assert stats.max_generation == 0

    def test_subtree_uses_absolute_generations(self, heap: list[Hierarchy]):
        stats = collect_statistics(heap[1])
        assert stats.total_nodes == 3
        assert stats.generation_distribution == {1: 1, 2: 2}
        assert stats.max_generation == 2

    def test_counts_insufficient_marks(self, h: Hierarchy):
        h.add_child(Hierarchy("a", False))
        h.add_child(Hierarchy("b", False))
        assert collect_statistics(h).insufficient_marks == 2

    def test_to_dict(self, triangle: Hierarchy):
        data = collect_statistics(triangle).to_dict()
        assert set(data) == {
            "total_nodes",
            "leaf_nodes",
            "internal_nodes",
            "insufficient_marks",
            "max_generation",
            "generation_distribution",
        }
        assert data["total_nodes"] == 7

    def test_defaults(self):
        assert HierarchyStatistics().to_dict()["generation_distribution"] == {}


class TestRenderTree:
    """Tests for render_tree."""

    def test_full_outline(self, h: Hierarchy):
        child = Hierarchy("child", False)
        h.add_child(child)
        child.add_child(Hierarchy("leaf"))
        assert render_tree(h) == "[0] h\n  [1] child*\n    [2] leaf"

    def test_max_depth(self, triangle: Hierarchy):
        lines = render_tree(triangle, max_depth=1).splitlines()
        assert lines == ["[0] 1", "  [1] 2", "  [1] 3"]

    def test_max_depth_zero(self, triangle: Hierarchy):
        assert render_tree(triangle, max_depth=0) == "[0] 1"

    def test_subtree_indent_is_relative(self, heap: list[Hierarchy]):
        assert render_tree(heap[2], indent="-") == "[1] 3\n-[2] 6\n-[2] 7"

    def test_negative_depth_raises(self, h: Hierarchy):
        with pytest.raises(InvalidArgumentError):
            render_tree(h, max_depth=-1)
