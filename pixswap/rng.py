"""Seedable uniform random source driving the annealer."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class UniformSource(Protocol):
    """What the annealer needs from a random number generator."""

    def uniform_int(self, bound: int) -> int: ...

    def uniform_float(self) -> float: ...


class RandomSource:
    """:class:`UniformSource` backed by ``numpy.random.default_rng``.

    Two instances built with the same seed yield the same sequence of
    draws, which is what makes annealing runs reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform_int(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        return int(self._rng.integers(0, bound))

    def uniform_float(self) -> float:
        """Uniform float in ``[0, 1)``."""
        return float(self._rng.random())

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
