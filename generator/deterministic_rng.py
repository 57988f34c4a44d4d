"""
Deterministic RNG — Seeded random wrapper.

All randomness in the snapshot generator passes through a single
DeterministicRNG instance. Identical seed → identical call sequence →
identical snapshot.
"""

from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


class DeterministicRNG:
    """Local seeded RNG. No global random state touched."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def rand_int(self, low: int, high: int) -> int:
        """Return random integer in [low, high] inclusive."""
        return self._rng.randint(low, high)

    def rand_choice(self, seq: Sequence[T]) -> T:
        """Pick one element from a non-empty sequence."""
        return self._rng.choice(seq)

    def rand_percent(self, percent: int) -> bool:
        """True with probability percent/100 (integer percent, 0..100)."""
        return self._rng.randint(1, 100) <= percent

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """k distinct elements, k clamped to len(seq)."""
        return self._rng.sample(list(seq), min(k, len(seq)))
