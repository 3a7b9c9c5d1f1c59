"""Simulated Annealing over rank-local pixel swaps."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

import numpy as np

from pixswap.color_utils import swap_delta, total_energy
from pixswap.config import SwapConfig
from pixswap.errors import ConfigError, DimensionMismatchError
from pixswap.mapping import check_pixel_counts, initial_mapping, rank_order
from pixswap.rng import RandomSource, UniformSource
from pixswap.schedule import temperature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnealResult:
    """Outcome of an annealing run."""

    mapping: np.ndarray
    initial_energy: float
    energy: float
    steps: int
    accepted: int
    skipped: int
    elapsed: float

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.steps if self.steps else 0.0


def metropolis_accept(delta: float, temp: float, rng: UniformSource) -> bool:
    """Metropolis criterion.

    Improving or neutral moves are always taken without touching *rng*.
    A worsening move consumes exactly one uniform draw and is taken with
    probability ``exp(-delta / temp)``.
    """
    if delta <= 0.0:
        return True
    return rng.uniform_float() < math.exp(-delta / temp)


class Annealer:
    """Owns the mapping and running energy of one annealing run.

    Args:
        src:        (N, C) uint8 source pixels.
        tgt:        (N, C) uint8 target pixels.
        tgt_order:  (N,) target rank ordering; proposals are drawn in rank space.
        mapping:    (N,) starting bijection, target position → source index.
        steps:      Length of the temperature schedule.
        radius:     Largest rank offset between the two swapped entries.
        t_initial:  Temperature at step 0.
        t_final:    Temperature at step ``steps - 1``.
        rng:        Uniform random source, advanced in the order
                    rank, offset, acceptance (the last only for worsening moves).
        log_checkpoints: Progress lines emitted by :meth:`run`.
    """

    def __init__(
        self,
        src: np.ndarray,
        tgt: np.ndarray,
        tgt_order: np.ndarray,
        mapping: np.ndarray,
        *,
        steps: int,
        radius: int,
        t_initial: float,
        t_final: float,
        rng: UniformSource,
        log_checkpoints: int = 0,
    ) -> None:
        n = check_pixel_counts(src, tgt)
        if len(tgt_order) != n or len(mapping) != n:
            raise DimensionMismatchError(
                f"ordering ({len(tgt_order)}) and mapping ({len(mapping)}) "
                f"must cover all {n} pixels",
            )
        if not 1 <= radius <= n - 1:
            raise ConfigError(f"radius must be in [1, {n - 1}], got {radius}")
        # Validates steps and temperatures
        temperature(0, steps, t_initial, t_final)

        self.n = n
        self.steps = steps
        self.radius = radius
        self.t_initial = t_initial
        self.t_final = t_final
        self.rng = rng
        self.log_checkpoints = log_checkpoints

        # Hot-loop state as plain lists
        self._src = np.asarray(src)[:, :3].tolist()
        self._tgt = np.asarray(tgt)[:, :3].tolist()
        self._order = np.asarray(tgt_order).tolist()
        self._mapping = np.asarray(mapping).tolist()

        self.energy = total_energy(mapping, src, tgt)
        self.initial_energy = self.energy
        self.step_index = 0
        self.accepted = 0
        self.skipped = 0

    @property
    def mapping(self) -> np.ndarray:
        """Snapshot of the current mapping."""
        return np.array(self._mapping, dtype=np.int64)

    @property
    def done(self) -> bool:
        return self.step_index >= self.steps

    def current_temperature(self) -> float:
        return temperature(self.step_index, self.steps, self.t_initial, self.t_final)

    def step(self) -> bool:
        """Propose one swap and apply it if accepted.

        Steps beyond the schedule keep running at ``t_final``.

        Returns:
            True if the mapping changed.
        """
        step = self.step_index
        self.step_index += 1
        n = self.n
        radius = self.radius

        k = self.rng.uniform_int(n)
        dk = self.rng.uniform_int(2 * radius + 1) - radius
        if dk == 0:
            dk = 1
        k2 = min(max(k + dk, 0), n - 1)
        if k2 == k:
            self.skipped += 1
            return False

        i = self._order[k]
        j = self._order[k2]
        delta = swap_delta(self._mapping, self._src, self._tgt, i, j)

        temp = temperature(step, self.steps, self.t_initial, self.t_final)
        if not metropolis_accept(delta, temp, self.rng):
            return False

        m = self._mapping
        m[i], m[j] = m[j], m[i]
        self.energy += delta
        self.accepted += 1
        return True

    def run(self) -> AnnealResult:
        """Run the remaining steps of the schedule and report the outcome."""
        logger.info(
            "SA start  | pixels=%s  steps=%s  radius=%s  temp=%.3g→%.3g  energy=%.0f",
            f"{self.n:,}", f"{self.steps:,}", f"{self.radius:,}",
            self.t_initial, self.t_final, self.energy,
        )

        interval = (
            max(1, self.steps // self.log_checkpoints)
            if self.log_checkpoints > 0 else self.steps + 1
        )
        t0 = time.perf_counter()

        while self.step_index < self.steps:
            self.step()
            if self.step_index % interval == 0:
                logger.info(
                    "  SA %5.1f%%  energy=%.0f  temp=%.2e  accepted=%s  (%.0f s)",
                    self.step_index / self.steps * 100,
                    self.energy,
                    self.current_temperature(),
                    f"{self.accepted:,}",
                    time.perf_counter() - t0,
                )

        elapsed = time.perf_counter() - t0
        logger.info(
            "SA done   | energy=%.0f (from %.0f)  accepted=%s/%s  skipped=%s  (%.1f s)",
            self.energy, self.initial_energy,
            f"{self.accepted:,}", f"{self.step_index:,}", f"{self.skipped:,}",
            elapsed,
        )
        return AnnealResult(
            mapping=self.mapping,
            initial_energy=self.initial_energy,
            energy=self.energy,
            steps=self.step_index,
            accepted=self.accepted,
            skipped=self.skipped,
            elapsed=elapsed,
        )


def solve_annealing(
    src: np.ndarray,
    tgt: np.ndarray,
    config: SwapConfig | None = None,
    rng: UniformSource | None = None,
) -> AnnealResult:
    """Rearrange *src* pixels towards *tgt* by simulated annealing.

    Args:
        src:    (N, C) uint8 - source pixels, raster order.
        tgt:    (N, C) uint8 - target pixels, raster order.
        config: Run parameters; ``SwapConfig()`` when omitted.
        rng:    Random source; a :class:`RandomSource` seeded from
                ``config.seed`` when omitted.

    Returns:
        :class:`AnnealResult` whose ``mapping[i]`` is the source index
        placed at target position ``i``.
    """
    cfg = config if config is not None else SwapConfig()

    # Preconditions first: nothing is sorted until both pass
    n = check_pixel_counts(src, tgt)
    cfg.validate_for(n)
    if rng is None:
        rng = RandomSource(cfg.seed)

    logger.info("Ranking %s pixels by colour key ...", f"{n:,}")
    src_order = rank_order(src)
    tgt_order = rank_order(tgt)
    mapping = initial_mapping(src_order, tgt_order)

    annealer = Annealer(
        src, tgt, tgt_order, mapping,
        steps=cfg.steps,
        radius=cfg.radius,
        t_initial=cfg.t_initial,
        t_final=cfg.t_final,
        rng=rng,
        log_checkpoints=cfg.log_checkpoints,
    )
    return annealer.run()
