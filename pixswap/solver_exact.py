"""Optimal pixel assignment via the Hungarian algorithm (scipy)."""

from __future__ import annotations

import logging
import time

import numpy as np
from scipy.optimize import linear_sum_assignment

from pixswap.errors import ConfigError
from pixswap.mapping import check_pixel_counts

logger = logging.getLogger(__name__)

# A float64 N x N cost matrix at this size is already ~200 MB
MAX_EXACT_PIXELS = 5_000


def cost_matrix(src: np.ndarray, tgt: np.ndarray, chunk_size: int = 512) -> np.ndarray:
    """Squared RGB distance for every (target position, source pixel) pair.

    Returns:
        (N, N) float64, ``cost[i, s] = pix_energy(src[s], tgt[i])``.
    """
    s = np.asarray(src)[:, :3].astype(np.int64)
    t = np.asarray(tgt)[:, :3].astype(np.int64)
    n = len(t)
    cost = np.empty((n, len(s)), dtype=np.float64)
    for a in range(0, n, chunk_size):
        b = min(a + chunk_size, n)
        diff = t[a:b, np.newaxis, :] - s[np.newaxis, :, :]
        cost[a:b] = np.sum(diff * diff, axis=2)
    return cost


def solve_exact(
    src: np.ndarray,
    tgt: np.ndarray,
    max_pixels: int = MAX_EXACT_PIXELS,
) -> np.ndarray:
    """Find the mapping with the lowest possible energy.

    Args:
        src:        (N, C) uint8 source pixels.
        tgt:        (N, C) uint8 target pixels.
        max_pixels: Refuse larger inputs (the cost matrix is N x N).

    Returns:
        (N,) int64 mapping, target position → source index.
    """
    n = check_pixel_counts(src, tgt)
    if n > max_pixels:
        raise ConfigError(
            f"exact solver is limited to {max_pixels:,} pixels, got {n:,}; "
            "use the annealing solver",
        )

    logger.info("Building %dx%d cost matrix ...", n, n)
    t0 = time.perf_counter()
    cost = cost_matrix(src, tgt)
    logger.info("Cost matrix ready  (%.1f s)", time.perf_counter() - t0)

    logger.info("Running linear_sum_assignment ...")
    t0 = time.perf_counter()
    row_idx, col_idx = linear_sum_assignment(cost)
    logger.info("Assignment solved  (%.1f s)", time.perf_counter() - t0)

    mapping = np.empty(n, dtype=np.int64)
    mapping[row_idx] = col_idx
    return mapping
