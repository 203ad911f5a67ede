"""
Pytest configuration and fixtures for hierarchy tests.
"""

from __future__ import annotations

import pytest

from hierarchy.node import Hierarchy


def make_heap(size: int = 7) -> list[Hierarchy]:
    """Build a heap-shaped tree: node i has children 2i and 2i+1.

    Returns all nodes, index 0 holding mark 1 (the root).
    """
    nodes: list[Hierarchy] = []
    for i in range(1, size + 1):
        nodes.append(Hierarchy(i))
        if i > 1:
            nodes[i // 2 - 1].add_child(nodes[i - 1])
    return nodes


@pytest.fixture
def h() -> Hierarchy:
    """A standalone root."""
    return Hierarchy("h")


@pytest.fixture
def chain(h: Hierarchy) -> list[Hierarchy]:
    """Root h with child h1 and grandchild h2."""
    h1 = Hierarchy(1)
    h2 = Hierarchy(2)
    h.add_child(h1)
    h1.add_child(h2)
    return [h, h1, h2]


@pytest.fixture
def heap() -> list[Hierarchy]:
    """Seven-node heap-shaped tree, marks 1..7."""
    return make_heap()


@pytest.fixture
def triangle(heap: list[Hierarchy]) -> Hierarchy:
    """Root of the seven-node heap."""
    return heap[0]
