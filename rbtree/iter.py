from __future__ import annotations

from typing import Generic, List, Optional, Tuple, TypeVar, Union

from .node import RBNode

K = TypeVar("K")


class IntoIter(Generic[K]):
    """Single-pass ascending iterator that takes ownership of a subtree.

    Work is kept on an explicit stack of tasks, so traversal depth does not
    grow the Python call stack.
    """

    KEY = 0
    NODE = 1

    def __init__(self, root: Optional[RBNode[K]]):
        self._tasks: List[Tuple[int, Union[K, RBNode[K]]]] = []
        if root is not None:
            self._push_subtree(root)

    def _push_subtree(self, node: RBNode[K]):
        # pushed in reverse so that popping yields ascending keys
        if node.right is not None:
            self._tasks.append((IntoIter.NODE, node.right))
        self._tasks.append((IntoIter.KEY, node.key))
        if node.left is not None:
            self._tasks.append((IntoIter.NODE, node.left))

        # drop the links so consumed nodes are released as we go
        node.left = None
        node.right = None

    def __iter__(self) -> IntoIter[K]:
        return self

    def __next__(self) -> K:
        while self._tasks:
            kind, item = self._tasks.pop()
            if kind == IntoIter.KEY:
                return item
            self._push_subtree(item)

        raise StopIteration()
