"""Rank orderings, the rank-aligned starting mapping, and output assembly."""

from __future__ import annotations

import numpy as np

from pixswap.color_utils import color_keys
from pixswap.errors import DimensionMismatchError


def rank_order(pixels: np.ndarray) -> np.ndarray:
    """Original indices of *pixels* sorted by colour key, ascending.

    The sort is stable: pixels sharing a key keep their raster order, so
    the ordering is fully deterministic.

    Returns:
        (N,) int64 - ``order[r]`` is the index of the r-th smallest key.
    """
    return np.argsort(color_keys(pixels), kind="stable").astype(np.int64)


def initial_mapping(src_order: np.ndarray, tgt_order: np.ndarray) -> np.ndarray:
    """Align the two orderings rank by rank.

    ``mapping[tgt_order[r]] = src_order[r]`` for every rank r.
    """
    if len(src_order) != len(tgt_order):
        raise DimensionMismatchError(
            f"orderings differ in length: {len(src_order)} vs {len(tgt_order)}",
        )
    mapping = np.empty(len(tgt_order), dtype=np.int64)
    mapping[tgt_order] = src_order
    return mapping


def apply_mapping(mapping: np.ndarray, src: np.ndarray) -> np.ndarray:
    """Build the output buffer: ``out[i] = src[mapping[i]]``.

    Whole pixels move, so any alpha channel in *src* travels with them.
    """
    return np.asarray(src)[np.asarray(mapping)].copy()


def is_bijection(mapping: np.ndarray) -> bool:
    """True when *mapping* is a permutation of ``0..N-1``."""
    m = np.asarray(mapping)
    n = len(m)
    if n == 0:
        return True
    if m.min() < 0 or m.max() >= n:
        return False
    return bool(np.all(np.bincount(m, minlength=n) == 1))


def check_pixel_counts(src: np.ndarray, tgt: np.ndarray) -> int:
    """Return the shared pixel count, or raise if the buffers disagree."""
    if len(src) != len(tgt):
        raise DimensionMismatchError(
            f"source has {len(src)} pixels but target has {len(tgt)}; "
            "both images must contain the same number of pixels",
        )
    return len(src)
