"""
Deterministic Sequence Generation

Seeded linear-congruential stream used by the layout engine, plus the two
other randomness sources of the wall:

- a keyed hash that derives a stable rotation for an (seed, id) pair, and
- an ephemeral ambient source used once when an item is created.

The seeded stream never touches global state, so two generators built from
the same seed and queried the same number of times agree exactly.
"""

import hashlib
import math
import random
from typing import Optional

from ..config import DEFAULT_SEED

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class SeededSequence:
    """Linear congruential generator: ``state = (state * A + C) mod M``."""

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = int(seed)
        self._state = self.seed
        self.draws = 0

    def reseed(self, seed: Optional[int] = None):
        """Restart the stream, optionally from a new seed."""
        if seed is not None:
            self.seed = int(seed)
        self._state = self.seed
        self.draws = 0

    def next(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        self.draws += 1
        return self._state / LCG_MODULUS

    def between(self, low: float, high: float) -> float:
        """Value in [low, high)."""
        return low + self.next() * (high - low)

    def int_between(self, low: int, high: int) -> int:
        """Integer in [low, high], both ends inclusive."""
        return int(math.floor(self.between(low, high + 1)))

    def __repr__(self) -> str:
        return f"SeededSequence(seed={self.seed}, draws={self.draws})"


def keyed_unit(seed: int, key: object) -> float:
    """Stable value in [0, 1) for a (seed, key) pair.

    Uses an MD5 digest so the result does not depend on the order in which
    keys are asked for.
    """
    h = hashlib.md5(f"{seed}:{key}".encode()).hexdigest()
    return int(h[:8], 16) / 0x100000000


def derived_rotation(seed: int, item_id: object, max_rotation: float = 4.0) -> float:
    """Rotation in [-max_rotation, max_rotation) that is a pure function of (seed, id)."""
    return (keyed_unit(seed, item_id) - 0.5) * 2 * max_rotation


def ambient_rotation(max_rotation: float = 4.0, rng: Optional[random.Random] = None) -> float:
    """Creation-time rotation drawn from a fresh, unseeded generator.

    Args:
        max_rotation: Half-width of the symmetric range (degrees)
        rng: Optional generator to draw from instead (tests)
    """
    source = rng if rng is not None else random.Random()
    return (source.random() - 0.5) * 2 * max_rotation
