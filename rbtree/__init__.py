from . import utils
from . import node
from . import iter
from . import tree

from .utils import Color, Direction, Single, Double, InvariantViolation
from .node import RBNode
from .iter import IntoIter
from .tree import RBTree

__all__ = [
    "Color",
    "Direction",
    "Single",
    "Double",
    "InvariantViolation",
    "RBNode",
    "IntoIter",
    "RBTree",
]
