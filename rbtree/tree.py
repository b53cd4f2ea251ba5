from __future__ import annotations

import logging
from enum import Enum
from typing import (
    Generic,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
)

from .iter import IntoIter
from .node import RBNode
from .utils import (
    Color,
    Direction,
    Double,
    InvariantViolation,
    Single,
    expect,
    is_red,
)

K = TypeVar("K")

logger = logging.getLogger(__name__)


class InsertKind(Enum):
    DONE = 0
    # key already stored, nothing was changed
    PRESENT = 1
    # the returned subtree root was recolored red
    RED_NODE = 2
    # the returned subtree root is red and so is its child on `direction`
    RED_PARENT = 3


class InsertSignal(NamedTuple):
    kind: InsertKind
    direction: Optional[Direction] = None


class DeleteSignal(Enum):
    DONE = 0
    NOT_FOUND = 1
    # the returned subtree is one black node short
    REBALANCE = 2


_INSERT_DONE = InsertSignal(InsertKind.DONE)
_INSERT_PRESENT = InsertSignal(InsertKind.PRESENT)
_INSERT_RED_NODE = InsertSignal(InsertKind.RED_NODE)


def _direction_of(key: K, node: RBNode[K]) -> Direction:
    if key < node.key:
        return Direction.LEFT
    return Direction.RIGHT


def _insert(node: RBNode[K], key: K) -> Tuple[RBNode[K], InsertSignal]:
    """Insert `key` below `node`.

    Returns the root of the (possibly rotated) subtree, which the caller must
    re-attach in place of `node`, and a signal telling the caller what is
    left to repair.
    """
    if key == node.key:
        return node, _INSERT_PRESENT

    direction = _direction_of(key, node)
    child = node.child(direction)

    if child is None:
        node.set_child(direction, RBNode(key, Color.RED))
        if node.is_black:
            return node, _INSERT_DONE
        return node, InsertSignal(InsertKind.RED_PARENT, direction)

    child, signal = _insert(child, key)
    node.set_child(direction, child)

    if signal.kind is InsertKind.DONE or signal.kind is InsertKind.PRESENT:
        return node, signal

    if signal.kind is InsertKind.RED_NODE:
        if node.is_black:
            return node, _INSERT_DONE
        return node, InsertSignal(InsertKind.RED_PARENT, direction)

    # `child` is red with a red child; `node` is the grandparent of the
    # offending pair.
    uncle = node.child(direction.opposite)
    if is_red(uncle):
        child.color = Color.BLACK
        uncle.color = Color.BLACK
        node.color = Color.RED
        return node, _INSERT_RED_NODE

    if signal.direction is direction:
        rotation = Single(direction.opposite)
    else:
        rotation = Double(direction.opposite)

    top = node.rotate(rotation)
    top.color = Color.BLACK
    expect(
        top.child(rotation.direction), "rotated grandparent missing after insert"
    ).color = Color.RED
    return top, _INSERT_DONE


def _fix_deficit(
    parent: RBNode[K], direction: Direction
) -> Tuple[RBNode[K], DeleteSignal]:
    """Repair a subtree whose `direction` side lost one black node.

    Returns the new subtree root and either DONE or REBALANCE when the
    deficit could only be pushed up to the caller.
    """
    sibling = expect(
        parent.child(direction.opposite),
        "black-height deficit below {!r} but no sibling to borrow from".format(
            parent.key
        ),
    )

    if sibling.is_red:
        # parent is black and both nephews are black. Rotating the sibling up
        # leaves a red parent with a black sibling, which always resolves.
        top = parent.rotate(Single(direction))
        top.color = Color.BLACK
        parent.color = Color.RED
        fixed, signal = _fix_deficit(parent, direction)
        if signal is not DeleteSignal.DONE:
            raise InvariantViolation(
                "deficit below red node {!r} was not absorbed".format(parent.key)
            )
        top.set_child(direction, fixed)
        return top, DeleteSignal.DONE

    near = sibling.child(direction)
    far = sibling.child(direction.opposite)

    if not is_red(near) and not is_red(far):
        sibling.color = Color.RED
        if parent.is_black:
            return parent, DeleteSignal.REBALANCE
        parent.color = Color.BLACK
        return parent, DeleteSignal.DONE

    if is_red(far):
        top = parent.rotate(Single(direction))
    else:
        top = parent.rotate(Double(direction))

    top.color = parent.color
    top.left.color = Color.BLACK
    top.right.color = Color.BLACK
    return top, DeleteSignal.DONE


def _splice(node: RBNode[K]) -> Tuple[Optional[RBNode[K]], DeleteSignal]:
    """Remove a node with at most one child, returning what replaces it."""
    child = node.left if node.left is not None else node.right

    if node.is_red:
        if child is not None:
            raise InvariantViolation(
                "red node {!r} has a single child".format(node.key)
            )
        return None, DeleteSignal.DONE

    if child is not None:
        if not child.is_red:
            raise InvariantViolation(
                "black node {!r} has a single black child".format(node.key)
            )
        child.color = Color.BLACK
        return child, DeleteSignal.DONE

    return None, DeleteSignal.REBALANCE


def _remove_min(
    node: RBNode[K],
) -> Tuple[Optional[RBNode[K]], K, DeleteSignal]:
    """Remove the leftmost node below `node`.

    Returns the new subtree root, the removed key and the repair signal.
    """
    if node.left is None:
        replacement, signal = _splice(node)
        return replacement, node.key, signal

    left, key, signal = _remove_min(node.left)
    node.left = left
    if signal is DeleteSignal.REBALANCE:
        node, signal = _fix_deficit(node, Direction.LEFT)
    return node, key, signal


def _delete(
    node: RBNode[K], key: K
) -> Tuple[Optional[RBNode[K]], DeleteSignal]:
    if key == node.key:
        if node.left is None or node.right is None:
            return _splice(node)

        # two children: pull the successor's key up and remove the successor
        right, successor, signal = _remove_min(node.right)
        node.right = right
        node.key = successor
        direction = Direction.RIGHT
    else:
        direction = _direction_of(key, node)
        child = node.child(direction)
        if child is None:
            return node, DeleteSignal.NOT_FOUND

        child, signal = _delete(child, key)
        node.set_child(direction, child)

    if signal is DeleteSignal.REBALANCE:
        return _fix_deficit(node, direction)
    return node, signal


class RBTree(Generic[K]):
    """An ordered set of keys backed by a red-black tree.

    Keys must be totally ordered by ``<`` and ``==``. Storing the same key
    twice is not supported: inserting a key that is already present leaves
    the tree untouched.
    """

    def __init__(self, keys: Optional[Iterable[K]] = None):
        self._root: Optional[RBNode[K]] = None
        self._len: int = 0

        if keys is not None:
            for key in keys:
                self.insert(key)

    def is_empty(self) -> bool:
        return self._root is None

    def contains(self, key: K) -> bool:
        node = self._root
        while node is not None:
            if key == node.key:
                return True
            node = node.child(_direction_of(key, node))
        return False

    def insert(self, key: K) -> bool:
        """Add `key` to the tree.

        Returns False if the key was already present.
        """
        if self._root is None:
            self._root = RBNode(key, Color.BLACK)
            self._len = 1
            return True

        old_root = self._root
        self._root, signal = _insert(self._root, key)

        if signal.kind is InsertKind.PRESENT:
            return False

        if self._root is not old_root:
            logger.debug("rotated new root %r into place", self._root.key)
        if self._root.is_red:
            logger.debug("recolored root %r black", self._root.key)
            self._root.color = Color.BLACK

        self._len += 1
        return True

    def delete(self, key: K) -> bool:
        """Remove `key` from the tree.

        Returns False, leaving the tree untouched, if the key was not present.
        """
        if self._root is None:
            return False

        self._root, signal = _delete(self._root, key)

        if signal is DeleteSignal.NOT_FOUND:
            return False
        if signal is DeleteSignal.REBALANCE and self._root is not None:
            logger.debug("black height decreased by deleting %r", key)

        if self._root is not None and self._root.is_red:
            self._root.color = Color.BLACK

        self._len -= 1
        return True

    def into_iter(self) -> IntoIter[K]:
        """Hand every key over to an ascending iterator, emptying the tree."""
        root = self._root
        logger.debug("consuming tree of %d keys", self._len)

        self._root = None
        self._len = 0
        return IntoIter(root)

    def _edge_node(self, direction: Direction) -> RBNode[K]:
        node = self._root
        if node is None:
            raise IndexError("Tree is empty")

        while node.child(direction) is not None:
            node = node.child(direction)
        return node

    def min(self) -> K:
        return self._edge_node(Direction.LEFT).key

    def max(self) -> K:
        return self._edge_node(Direction.RIGHT).key

    def validate(self) -> int:
        """Check every red-black invariant, returning the tree's black height.

        Raises InvariantViolation on the first problem found.
        """
        if self._root is None:
            if self._len != 0:
                raise InvariantViolation(
                    "empty tree reports {} keys".format(self._len)
                )
            return 0

        if self._root.is_red:
            raise InvariantViolation("root {!r} is red".format(self._root.key))

        height, count = _validate_subtree(self._root, None, None)

        if count != self._len:
            raise InvariantViolation(
                "tree holds {} nodes but reports {} keys".format(
                    count, self._len
                )
            )
        return height

    def print(self) -> str:
        if self._root is not None:
            return _print_recursive(self._root, 0)
        else:
            return "<empty tree>"

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[K]:
        stack: List[RBNode[K]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right

    def __len__(self) -> int:
        return self._len

    def __repr__(self) -> str:
        return "RBTree([{}])".format(", ".join(map(repr, self)))


def _validate_subtree(
    node: RBNode[K], lower: Optional[RBNode[K]], upper: Optional[RBNode[K]]
) -> Tuple[int, int]:
    # lower/upper are the nearest ancestors bounding this subtree's keys
    if lower is not None and not lower.key < node.key:
        raise InvariantViolation(
            "key {!r} is not greater than {!r}".format(node.key, lower.key)
        )
    if upper is not None and not node.key < upper.key:
        raise InvariantViolation(
            "key {!r} is not less than {!r}".format(node.key, upper.key)
        )

    if node.is_red and (is_red(node.left) or is_red(node.right)):
        raise InvariantViolation("red node {!r} has a red child".format(node.key))

    if node.left is not None:
        left_height, left_count = _validate_subtree(node.left, lower, node)
    else:
        left_height, left_count = 0, 0

    if node.right is not None:
        right_height, right_count = _validate_subtree(node.right, node, upper)
    else:
        right_height, right_count = 0, 0

    if left_height != right_height:
        raise InvariantViolation(
            "subtrees of {!r} have different black heights ({} != {})".format(
                node.key, left_height, right_height
            )
        )

    count = left_count + right_count + 1
    if node.is_black:
        return left_height + 1, count
    return left_height, count


def _print_recursive(node: RBNode[K], level: int) -> str:
    ret = ("  " * level) + "{!r} ({})".format(node.key, node.color.value) + "\n"

    if node.left is None and node.right is None:
        return ret

    for child in (node.left, node.right):
        if child is not None:
            ret += _print_recursive(child, level + 1)
        else:
            ret += ("  " * (level + 1)) + "Leaf\n"

    return ret
