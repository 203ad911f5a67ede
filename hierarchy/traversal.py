"""
Depth-first traversal engine.

A traversal order is a permutation of three positions: the node itself
(``root``) and its children seen from the ``left`` or the ``right``.
Trees are n-ary, so the order reduces to two independent choices:

- where the node is visited relative to its children
  (before all, after the first child, after all), and
- whether the children are walked front-to-back or back-to-front.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hierarchy.errors import InvalidArgumentError, InvalidOrderError

HierarchyHandler = Callable[[Any], Any]
HierarchyMarker = Callable[[Any], bool]


class Position(str, Enum):
    """Symbolic position inside a traversal order."""

    ROOT = "root"
    LEFT = "left"
    RIGHT = "right"


class VisitAt(str, Enum):
    """When a node is visited relative to its children."""

    BEFORE = "before"
    BETWEEN = "between"
    AFTER = "after"


DEFAULT_ORDER: tuple[Position, Position, Position] = (
    Position.ROOT,
    Position.LEFT,
    Position.RIGHT,
)


@dataclass(frozen=True)
class TraversalPlan:
    """Decomposed traversal order.

    Attributes:
        visit_at: Where the node visit happens among its children.
        reverse: Walk children last-to-first (``right`` before ``left``).
    """

    visit_at: VisitAt
    reverse: bool

    @classmethod
    def from_order(cls, order: Sequence[Position]) -> TraversalPlan:
        """Build a plan from a validated permutation of positions."""
        visit_at = (VisitAt.BEFORE, VisitAt.BETWEEN, VisitAt.AFTER)[order.index(Position.ROOT)]
        reverse = order.index(Position.RIGHT) < order.index(Position.LEFT)
        return cls(visit_at=visit_at, reverse=reverse)

    def split_index(self, child_count: int) -> int:
        """Number of children walked before the node itself is visited."""
        if self.visit_at is VisitAt.BEFORE:
            return 0
        if self.visit_at is VisitAt.BETWEEN:
            return min(1, child_count)
        return child_count


class TraversalOptions(BaseModel):
    """Validated traversal configuration.

    Positions may be given as ``Position`` members or their string
    values; ``["left", "root", "right"]`` is an in-order walk.
    """

    model_config = ConfigDict(frozen=True)

    order: tuple[Position, Position, Position] = Field(default=DEFAULT_ORDER)
    stop_criteria: HierarchyMarker | None = None

    @field_validator("order")
    @classmethod
    def check_permutation(
        cls, value: tuple[Position, Position, Position]
    ) -> tuple[Position, Position, Position]:
        if set(value) != set(Position):
            raise ValueError("order must name root, left and right exactly once")
        return value

    @classmethod
    def from_order(
        cls,
        order: Sequence[Position | str] = DEFAULT_ORDER,
        stop_criteria: HierarchyMarker | None = None,
    ) -> TraversalOptions:
        """Parse user-supplied traversal arguments.

        Raises:
            InvalidOrderError: If ``order`` is not a permutation of the positions.
            InvalidArgumentError: If ``stop_criteria`` is not callable.
        """
        try:
            return cls(order=order, stop_criteria=stop_criteria)
        except ValidationError as exc:
            failed = {err["loc"][0] for err in exc.errors() if err["loc"]}
            if "order" in failed:
                raise InvalidOrderError(
                    f"Traversal order must specify left, right and root each once, got {order!r}"
                ) from exc
            raise InvalidArgumentError(f"Invalid traversal options: {exc}") from exc

    @property
    def plan(self) -> TraversalPlan:
        """The decomposed form of ``order``."""
        return TraversalPlan.from_order(self.order)


def make_visitor(
    callback: HierarchyHandler,
    stop_criteria: HierarchyMarker | None = None,
) -> Callable[[Any], None]:
    """Wrap ``callback`` so it is skipped for nodes matching ``stop_criteria``.

    The predicate is checked at each visit, so it may observe state the
    callback has changed earlier in the same walk.
    """

    def visit(node: Any) -> None:
        if stop_criteria is not None and stop_criteria(node):
            return
        callback(node)

    return visit


def walk(node: Any, plan: TraversalPlan, visit: Callable[[Any], None]) -> None:
    """Recursively walk ``node`` and its descendants according to ``plan``.

    Recursion always reaches every node; skipping happens inside ``visit``.
    """
    children = list(reversed(node.children)) if plan.reverse else list(node.children)
    split = plan.split_index(len(children))

    for child in children[:split]:
        walk(child, plan, visit)
    visit(node)
    for child in children[split:]:
        walk(child, plan, visit)
