"""Uniform integer sources shared by dice and generators."""

from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Produces unbiased integers in ``[0, maximum]``."""

    def next_int(self, maximum: int) -> int:  # pragma: no cover - protocol definition
        ...


class PythonRandomSource:
    """Random source backed by a single :class:`random.Random` stream."""

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random(seed)

    def next_int(self, maximum: int) -> int:
        if maximum < 0:
            raise ValueError("maximum must be non-negative")
        return self._rng.randint(0, maximum)

    def seed(self, value: Optional[int]) -> None:
        """Re-seed the underlying stream so a sequence of draws can be replayed."""

        self._rng.seed(value)


__all__ = ["PythonRandomSource", "RandomSource"]
