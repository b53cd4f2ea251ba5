from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import RBNode


class InvariantViolation(AssertionError):
    """Raised when the tree structure contradicts the red-black invariants.

    This always indicates a bug in the rebalancing code (or a tree that was
    modified from outside), never a recoverable condition.
    """


class Color(Enum):
    RED = "R"
    BLACK = "B"


class Direction(Enum):
    LEFT = 0
    RIGHT = 1

    @property
    def opposite(self) -> Direction:
        if self is Direction.LEFT:
            return Direction.RIGHT
        return Direction.LEFT


class Single(NamedTuple):
    """Single rotation: the subtree root moves down to `direction`."""

    direction: Direction


class Double(NamedTuple):
    """Double rotation: the inner grandchild is promoted and the subtree root
    moves down to `direction`.
    """

    direction: Direction


RotationType = Union[Single, Double]


def get_color(node: Optional[RBNode]) -> Color:
    # missing children count as black
    if node is None:
        return Color.BLACK
    return node.color


def is_red(node: Optional[RBNode]) -> bool:
    return get_color(node) is Color.RED


def expect(node: Optional[RBNode], msg: str) -> RBNode:
    if node is None:
        raise InvariantViolation(msg)
    return node
