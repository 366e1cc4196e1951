"""Randomness source used for deck shuffling.

Usage:
    rng = RandomSource()          # OS entropy, falls back if unavailable
    rng = RandomSource(seed=123)  # deterministic, for tests and replays
    index = rng.randbelow(16)

The strong generator is ``random.SystemRandom``. When the platform cannot
supply OS entropy the source switches, once and for good, to a
``random.Random`` seeded from the clock and process id. The switch is logged
and never reported to the caller.
"""
from __future__ import annotations

import logging
import os
import random
import time
from typing import Optional

logger = logging.getLogger(__name__)


class RandomSource:
    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._fallback = False
        if seed is not None:
            self._rng: random.Random = random.Random(seed)
        else:
            self._rng = random.SystemRandom()

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def is_fallback(self) -> bool:
        """True once the weaker pseudo-random generator is in use."""
        return self._fallback

    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in ``[0, n)``."""
        if n <= 0:
            raise ValueError(f"upper bound must be positive, got {n}")
        try:
            return self._rng.randrange(n)
        except (NotImplementedError, OSError) as exc:
            self._use_fallback(exc)
            return self._rng.randrange(n)

    def _use_fallback(self, exc: Exception) -> None:
        fallback_seed = time.time_ns() ^ (os.getpid() << 16)
        logger.warning("Strong randomness unavailable (%s), using seeded fallback", exc)
        self._rng = random.Random(fallback_seed)
        self._fallback = True
