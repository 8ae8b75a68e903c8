from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Protocol

from .logger import get_logger


logger = get_logger(__name__)

SEED_MASK: int = 2**64 - 1


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def time_seed() -> int:
    """Nanoseconds since the epoch, truncated to 64 bits."""
    return time.time_ns() & SEED_MASK


@dataclass(frozen=True)
class DieDistribution:
    """Uniform integers over ``[1, sides]``."""

    sides: int

    def __call__(self, rng: RandomSource) -> int:
        return rng.randint(1, self.sides)


class RollSession:
    """The one generator and distribution cache shared by every roll in a session.

    Pass it explicitly to ``evaluate``; nothing else keeps a generator of its own.
    """

    def __init__(self, seed: int | None = None, rng: RandomSource | None = None) -> None:
        self.seed: int | None
        self.rng: RandomSource
        if rng is not None:
            self.seed = seed
            self.rng = rng
        else:
            self.seed = seed if seed else time_seed()
            self.rng = random.Random(self.seed)
        self._distributions: dict[int, DieDistribution] = {}
        logger.debug("Session started with seed %s", self.seed)

    def distribution(self, sides: int) -> DieDistribution:
        dist = self._distributions.get(sides)
        if dist is None:
            dist = DieDistribution(sides)
            self._distributions[sides] = dist
        return dist

    def draw(self, sides: int) -> int:
        return self.distribution(sides)(self.rng)

    def reseed(self, seed: int | None) -> bool:
        """Replace the generator. ``None`` or 0 keeps the current one.

        Returns True when a new generator was installed. Negative seeds raise
        ValueError, since ``random.Random`` seeds by absolute value.
        """

        if seed is not None and seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        if not seed:
            logger.info("Reseed ignored: no usable seed given, keeping seed %s", self.seed)
            return False
        # Distributions are stateless, so the cache carries over.
        self.rng = random.Random(seed)
        self.seed = seed
        logger.info("Reseeded generator with seed %s", seed)
        return True
