"""
Weighted random selection over archetype lists
"""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def weighted_choice(
    options: Sequence[T],
    rng: random.Random,
    weight: Callable[[T], float] = lambda o: o.spawn_weight,
) -> Optional[T]:
    """
    Pick one option with probability proportional to its weight.

    Samples r uniformly in [0, total) and walks the list in order,
    subtracting each weight until r falls inside one. Empty lists and
    lists whose weights sum to zero yield None.
    """
    total = sum(weight(o) for o in options)
    if total <= 0:
        return None

    r = rng.random() * total
    for option in options:
        w = weight(option)
        if r < w:
            return option
        r -= w
    return None
