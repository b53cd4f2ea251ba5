from __future__ import annotations

from typing import Generic, Optional, TypeVar

from .utils import (
    Color,
    Direction,
    Double,
    RotationType,
    Single,
    expect,
)

K = TypeVar("K")


class RBNode(Generic[K]):
    """A key, a color and two exclusively-owned children.

    Nodes hold no reference to their parent; everything the tree needs to know
    about the path above a node is carried by return values during recursion.
    """

    def __init__(self, key: K, color: Color = Color.RED):
        self.key: K = key
        self.color: Color = color
        self.left: Optional[RBNode[K]] = None
        self.right: Optional[RBNode[K]] = None

    @property
    def is_red(self) -> bool:
        return self.color is Color.RED

    @property
    def is_black(self) -> bool:
        return self.color is Color.BLACK

    def child(self, direction: Direction) -> Optional[RBNode[K]]:
        if direction is Direction.LEFT:
            return self.left
        return self.right

    def set_child(self, direction: Direction, child: Optional[RBNode[K]]):
        if direction is Direction.LEFT:
            self.left = child
        else:
            self.right = child

    def take_child(self, direction: Direction) -> Optional[RBNode[K]]:
        """Detach and return the child on `direction`."""
        child = self.child(direction)
        self.set_child(direction, None)
        return child

    def rotate(self, rotation: RotationType) -> RBNode[K]:
        """Rotate the subtree rooted at this node and return its new root.

        Colors are left untouched; insertion and deletion recolor the result
        differently.
        """
        if isinstance(rotation, Double):
            return self._rotate_twice(rotation.direction)
        elif isinstance(rotation, Single):
            return self._rotate_once(rotation.direction)
        raise TypeError("unknown rotation {!r}".format(rotation))

    def _rotate_once(self, direction: Direction) -> RBNode[K]:
        far = direction.opposite
        pivot = expect(self.child(far), "single rotation needs a child to promote")

        self.set_child(far, pivot.take_child(direction))
        pivot.set_child(direction, self)
        return pivot

    def _rotate_twice(self, direction: Direction) -> RBNode[K]:
        far = direction.opposite
        parent = expect(self.child(far), "double rotation needs a parent")
        inner = expect(
            parent.child(direction), "double rotation needs an inner grandchild"
        )

        # inner's subtrees are split between the two nodes moving under it
        parent.set_child(direction, inner.take_child(far))
        self.set_child(far, inner.take_child(direction))

        inner.set_child(far, parent)
        inner.set_child(direction, self)
        return inner

    def __repr__(self) -> str:
        return "<{} {!r}>".format(self.color.value, self.key)
