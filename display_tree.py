import logging

import numpy as np
from numpy import random

from rbtree import RBTree

NUM_KEYS = 24
SHUFFLE_SEED = 1234
DELETE_FRACTION = 0.5


def shuffled_keys(n: int, shuffle_seed: int) -> np.ndarray:
    rng = random.default_rng(shuffle_seed)
    keys = np.arange(n)
    rng.shuffle(keys)
    return keys


def display_tree(tree: RBTree, title: str):
    print("{} ({} keys, black height {}):".format(title, len(tree), tree.validate()))
    print(tree.print())


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    keys = shuffled_keys(NUM_KEYS, SHUFFLE_SEED)
    tree = RBTree(int(k) for k in keys)
    display_tree(tree, "After inserting {}".format(", ".join(map(str, keys))))

    n_delete = int(NUM_KEYS * DELETE_FRACTION)
    for k in keys[:n_delete]:
        tree.delete(int(k))
    display_tree(
        tree, "After deleting {}".format(", ".join(map(str, keys[:n_delete])))
    )

    print("Remaining keys: {}".format(list(tree.into_iter())))
    print("Tree is empty after consuming: {}".format(tree.is_empty()))
