"""Errors raised by hierarchy operations.

All failures are local and synchronous. They signal programmer errors
(asking for something the tree cannot answer) and are never retried.
"""

from __future__ import annotations

from typing import Any


class HierarchyError(Exception):
    """Base class for all hierarchy errors."""


class CycleError(HierarchyError):
    """Raised when attaching a node would create a cycle or re-attach a node.

    Attributes:
        parent: The node that was asked to adopt.
        child: The node that could not be attached.
    """

    def __init__(self, parent: Any, child: Any, reason: str) -> None:
        self.parent = parent
        self.child = child
        super().__init__(f"Cannot attach {child!r} to {parent!r}: {reason}")


class CrossTreeError(HierarchyError):
    """Raised when an ancestor query spans two different trees."""


class NotAncestorError(HierarchyError):
    """Raised when an ancestor walk reaches the root without finding the target."""


class InvalidArgumentError(HierarchyError, ValueError):
    """Raised for out-of-range arguments such as a negative depth."""


class InvalidOrderError(HierarchyError, ValueError):
    """Raised when a traversal order is not a permutation of root, left and right."""
