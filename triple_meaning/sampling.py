"""Random selection primitives.

Every draw goes through a single ``rng.random()`` call returning a float in
[0, 1). Pass a ``random.Random`` (or anything with a ``random()`` method) to
get reproducible quizzes; ``None`` uses the module-level generator.
"""
from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def _uniform(rng: random.Random | None) -> float:
    return rng.random() if rng is not None else random.random()


def random_int(lo: int, hi: int, rng: random.Random | None = None) -> int:
    """Uniform integer in [lo, hi], both ends inclusive."""
    return math.floor(_uniform(rng) * (hi - lo + 1)) + lo


def sample_without_replacement(
    items: Sequence[T],
    count: int,
    rng: random.Random | None = None,
) -> list[T]:
    """Pick ``min(count, len(items))`` distinct items uniformly at random.

    Partial Fisher-Yates over a copy, so *items* is never touched. Asking for
    at least ``len(items)`` elements returns a shuffle of all of them.
    """
    pool = list(items)
    n = min(max(count, 0), len(pool))
    for i in range(n):
        j = random_int(i, len(pool) - 1, rng)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:n]
