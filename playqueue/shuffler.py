"""Unbiased shuffling primitives."""

import random


def fisher_yates(items: list, rng: random.Random) -> list[int]:
    """Shuffle a list in place with the Fisher-Yates algorithm (``random.Random.shuffle``).

    Args:
        items: List to shuffle
        rng: Random source; pass a seeded ``random.Random`` for reproducible runs

    Returns:
        The permutation applied: ``result[new_pos]`` is the old position of the
        element now at ``new_pos``
    """
    order = list(range(len(items)))
    rng.shuffle(order)

    items[:] = [items[i] for i in order]
    return order


def shuffle_tracking(items: list, index: int, rng: random.Random) -> int:
    """Shuffle a list in place and follow one element to its new position.

    Args:
        items: List to shuffle
        index: Position of the element to follow, or -1 for none
        rng: Random source

    Returns:
        New position of the followed element, or -1 if ``index`` was -1
    """
    order = fisher_yates(items, rng)
    if index < 0:
        return -1
    return order.index(index)
