"""Random source helpers.

Every stochastic operation takes an optional ``random.Random``; passing a
seeded instance makes generation, mutation and crossover reproducible.
"""

import random
from typing import Optional

_shared_rng = random.Random()


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    """Return ``rng`` or the module-wide unseeded fallback."""
    return rng if rng is not None else _shared_rng


def coin_flip(rng: random.Random) -> bool:
    """Fair coin backed by ``rng.random()`` so scripted sources can drive it."""
    return rng.random() < 0.5


__all__ = ["coin_flip", "resolve_rng"]
