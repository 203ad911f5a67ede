"""
Hierarchy node.

A ``Hierarchy`` is at once a node and a handle to the tree it belongs
to: there is no separate tree object, the root node IS the tree.
Children are built as standalone nodes and adopted with ``add_child``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from hierarchy.errors import (
    CrossTreeError,
    CycleError,
    HierarchyError,
    InvalidArgumentError,
    NotAncestorError,
)
from hierarchy.traversal import (
    DEFAULT_ORDER,
    HierarchyHandler,
    HierarchyMarker,
    Position,
    TraversalOptions,
    make_visitor,
    walk,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Hierarchy:
    """
    A node in a rooted tree of marks.

    Each node keeps its own bookkeeping:
    - ``parent``: the node above it (a root is its own parent)
    - ``root``: the absolute top of its tree (a root is its own root)
    - ``generation``: distance from the root (root = 0)

    A mark may be sufficient or insufficient. An insufficient mark only
    makes sense together with the marks above it, up to the nearest
    sufficient one.

    Nodes compare and hash by identity.
    """

    mark: Any
    sufficient: bool = True
    children: list[Hierarchy] = field(default_factory=list, init=False, repr=False)
    parent: Hierarchy = field(init=False, repr=False)
    root: Hierarchy = field(init=False, repr=False)
    generation: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.parent = self
        self.root = self

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    def add_child(self, child: Hierarchy) -> None:
        """Attach a standalone node (and its subtree) below this node.

        Args:
            child: A root node, not yet part of any other tree.

        Raises:
            CycleError: If ``child`` is this node, a descendant, an
                ancestor, or already attached elsewhere.
        """
        if self.contains(child):
            raise CycleError(self, child, "already part of this subtree")
        if child.contains(self):
            raise CycleError(self, child, "it is an ancestor of the new parent")
        if not child.is_root:
            raise CycleError(self, child, f"already attached below {child.parent!r}")

        self.children.append(child)
        child.parent = self
        child.root = self.root
        child.generation = self.generation + 1
        logger.debug("Attached %r below %r at generation %d", child, self, child.generation)

        if child.children:
            self._cascade(child)

    @staticmethod
    def _cascade(top: Hierarchy) -> None:
        """Propagate root and generation through the subtree under ``top``."""
        stack = list(top.children)
        updated = 0
        while stack:
            node = stack.pop()
            updated += 1
            node.root = top.root
            node.generation = node.parent.generation + 1
            stack.extend(node.children)
        logger.debug("Re-rooted %d descendants of %r", updated, top)

    # ------------------------------------------------------------------
    # Ancestor chains
    # ------------------------------------------------------------------

    def get_parent_branch(self) -> list[Hierarchy]:
        """Get ancestors from the root down to the immediate parent."""
        branch: list[Hierarchy] = []
        if self is self.root:
            return branch

        node = self.parent
        while node is not node.parent:
            branch.append(node)
            node = node.parent
        branch.append(node)
        branch.reverse()
        return branch

    def get_ancestors_until(self, target: Hierarchy) -> list[Hierarchy]:
        """
        Get ancestors from ``target`` (inclusive) down to the immediate parent.

        Args:
            target: An ancestor of this node in the same tree.

        Returns:
            Ancestors ordered root-ward first. Empty when this node is the
            root of ``target``'s tree or when ``target`` is this node.

        Raises:
            CrossTreeError: If ``target`` belongs to another tree.
            NotAncestorError: If ``target`` is not above this node.
        """
        if target.root is self:
            return []
        if target.root is not self.root:
            raise CrossTreeError(
                f"Cannot search ancestors of {self!r} up to {target!r}: distinct roots"
            )
        if target is self:
            return []

        branch: list[Hierarchy] = []
        node = self.parent
        while node is not target and node is not self.root:
            branch.append(node)
            node = node.parent
        branch.append(node)

        if node is not target:
            raise NotAncestorError(f"{target!r} is not an ancestor of {self!r}")

        branch.reverse()
        return branch

    def get_parents_depth(self, depth: int) -> list[Hierarchy]:
        """
        Get at most ``depth`` nearest ancestors, ordered root-ward first.

        Raises:
            InvalidArgumentError: If ``depth`` is negative.
        """
        if depth < 0:
            raise InvalidArgumentError(f"Depth must be non-negative, got {depth}")

        ancestors: list[Hierarchy] = []
        node = self
        while len(ancestors) < depth and node is not self.root:
            node = node.parent
            ancestors.append(node)
        ancestors.reverse()
        return ancestors

    def get_minimal_sufficient_mark(self) -> list[Hierarchy]:
        """
        Get the shortest branch ending here whose first mark is self-contained.

        Walks up through insufficient ancestors to the nearest sufficient
        one, or to the root when none is. The result is ordered
        furthest ancestor first and this node last.
        """
        if self.sufficient:
            return [self]

        branch = [self]
        node = self.parent
        while not node.sufficient and node is not self.root:
            branch.append(node)
            node = node.parent
        if node is not self:
            branch.append(node)
        branch.reverse()
        return branch

    def resolve_mark(self, separator: str = " > ") -> str:
        """
        Get this node's mark qualified by the context it needs.

        Example: "Chapter 2 > 1 > a" for an insufficient "a" under an
        insufficient "1" under a sufficient "Chapter 2".
        """
        return separator.join(str(node.mark) for node in self.get_minimal_sufficient_mark())

    # ------------------------------------------------------------------
    # Relationship predicates
    # ------------------------------------------------------------------

    def contains(self, other: Hierarchy) -> bool:
        """Check if ``other`` is this node or one of its descendants."""
        if other.root is not self.root:
            return False
        if other is self:
            return True
        try:
            branch = other.get_ancestors_until(self)
        except HierarchyError as exc:
            logger.debug("contains: %s", exc)
            return False
        return bool(branch)

    def belongs(self, other: Hierarchy) -> bool:
        """Check if this node is a strict descendant of ``other``."""
        if other.root is not self.root:
            return False
        try:
            branch = self.get_ancestors_until(other)
        except HierarchyError as exc:
            logger.debug("belongs: %s", exc)
            return False
        return bool(branch)

    def same_root(self, other: Hierarchy) -> bool:
        """Check if both nodes live in the same tree."""
        return self.root is other.root

    @property
    def is_root(self) -> bool:
        """Check if this node is the top of its tree."""
        return self.generation == 0

    @property
    def is_leaf(self) -> bool:
        """Check if this node is a leaf (no children)."""
        return len(self.children) == 0

    # ------------------------------------------------------------------
    # Lineage validation
    # ------------------------------------------------------------------

    def _lineage(self, nodes: Iterable[Hierarchy]) -> list[Hierarchy] | None:
        """Dedupe ``nodes`` and sort by generation, or None if any lies outside."""
        unique = list(dict.fromkeys(nodes))
        if not all(self.contains(node) for node in unique):
            return None
        unique.sort(key=lambda node: node.generation)
        return unique

    def is_branch(self, nodes: Iterable[Hierarchy]) -> bool:
        """
        Check if ``nodes`` form an unbroken chain of direct parent-child links.

        Input order does not matter. Every node must lie within this
        subtree.
        """
        lineage = self._lineage(nodes)
        if lineage is None:
            return False
        return all(
            any(child is nxt for child in cur.children)
            for cur, nxt in zip(lineage, lineage[1:])
        )

    def is_on_branch(self, nodes: Iterable[Hierarchy]) -> bool:
        """Check if ``nodes`` lie on a single root-to-leaf path, gaps allowed."""
        lineage = self._lineage(nodes)
        if lineage is None:
            return False
        return all(cur.contains(nxt) for cur, nxt in zip(lineage, lineage[1:]))

    def get_path_to_child(self, child: Hierarchy) -> list[Hierarchy]:
        """Get the inclusive path from this node down to ``child``.

        Returns an empty list if ``child`` is not within this subtree.
        """
        if not self.contains(child):
            return []
        return [*child.get_ancestors_until(self), child]

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def traverse(
        self,
        callback: HierarchyHandler,
        order: Sequence[Position | str] = DEFAULT_ORDER,
        stop_criteria: HierarchyMarker | None = None,
    ) -> None:
        """
        Walk this subtree depth-first, calling ``callback`` on each node.

        Args:
            callback: Called with each visited node.
            order: Permutation of "root", "left" and "right".
            stop_criteria: When it returns True for a node, the callback
                is skipped for that node. Its children are still walked.

        Raises:
            InvalidOrderError: If ``order`` is not a valid permutation.
        """
        self.traverse_with(callback, TraversalOptions.from_order(order, stop_criteria))

    def traverse_with(self, callback: HierarchyHandler, options: TraversalOptions) -> None:
        """Walk this subtree with pre-built traversal options."""
        walk(self, options.plan, make_visitor(callback, options.stop_criteria))

    # ------------------------------------------------------------------
    # Descendants and export
    # ------------------------------------------------------------------

    @property
    def descendant_count(self) -> int:
        """Count all descendants (children, grandchildren, etc.)."""
        count = len(self.children)
        for child in self.children:
            count += child.descendant_count
        return count

    def get_all_descendants(self) -> list[Hierarchy]:
        """Get all descendants as a flat list (pre-order, self excluded)."""
        descendants: list[Hierarchy] = []
        self.traverse(descendants.append, stop_criteria=lambda node: node is self)
        return descendants

    def get_leaves(self) -> list[Hierarchy]:
        """Get all leaf nodes under this node."""
        leaves: list[Hierarchy] = []
        self.traverse(leaves.append, stop_criteria=lambda node: not node.is_leaf)
        return leaves

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary for JSON export.

        Args:
            include_children: If True, recursively include children
        """
        result: dict[str, Any] = {
            "mark": self.mark,
            "sufficient": self.sufficient,
            "generation": self.generation,
            "is_root": self.is_root,
            "is_leaf": self.is_leaf,
            "child_count": len(self.children),
        }

        if include_children:
            result["children"] = [child.to_dict(True) for child in self.children]

        return result

    def __repr__(self) -> str:
        """String representation for debugging."""
        mark_preview = str(self.mark)[:40]
        flag = "" if self.sufficient else " insufficient"
        return (
            f"<Hierarchy '{mark_preview}' generation={self.generation}"
            f"{flag} children={len(self.children)}>"
        )
