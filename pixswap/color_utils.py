"""Colour keys and the squared-RGB energy model."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def color_key(pixel: Sequence[int]) -> int:
    """Encode an (R, G, B[, A]) pixel as the base-256 number ``RGB``.

    Alpha, if present, is ignored.  The result lies in [0, 16777215].
    """
    r, g, b = int(pixel[0]), int(pixel[1]), int(pixel[2])
    return r * 65536 + g * 256 + b


def color_keys(pixels: np.ndarray) -> np.ndarray:
    """Vectorised :func:`color_key` over an (N, C) uint8 buffer → (N,) int64."""
    rgb = np.asarray(pixels)[:, :3].astype(np.int64)
    return rgb[:, 0] * 65536 + rgb[:, 1] * 256 + rgb[:, 2]


def pix_energy(p: Sequence[int], q: Sequence[int]) -> float:
    """Squared Euclidean distance between two pixels in RGB space."""
    dr = int(p[0]) - int(q[0])
    dg = int(p[1]) - int(q[1])
    db = int(p[2]) - int(q[2])
    return float(dr * dr + dg * dg + db * db)


def swap_delta(
    mapping: Sequence[int],
    src: Sequence[Sequence[int]],
    tgt: Sequence[Sequence[int]],
    i: int,
    j: int,
) -> float:
    """Energy change if target positions *i* and *j* exchanged source pixels.

    Args:
        mapping: target position → source index.
        src:     source pixels, indexable by source index.
        tgt:     target pixels, indexable by target position.
        i, j:    the two target positions.

    Returns:
        ``E_after - E_before``; negative means the swap improves the match.
    """
    mi = mapping[i]
    mj = mapping[j]
    return (
        pix_energy(src[mj], tgt[i]) + pix_energy(src[mi], tgt[j])
        - pix_energy(src[mi], tgt[i]) - pix_energy(src[mj], tgt[j])
    )


def total_energy(
    mapping: np.ndarray,
    src: np.ndarray,
    tgt: np.ndarray,
) -> float:
    """Full recomputation of ``sum_i pix_energy(src[mapping[i]], tgt[i])``."""
    mapped = np.asarray(src)[np.asarray(mapping), :3].astype(np.int64)
    d = mapped - np.asarray(tgt)[:, :3].astype(np.int64)
    return float(np.sum(d * d))


def mean_error(a: np.ndarray, b: np.ndarray) -> float:
    """Mean per-pixel Euclidean RGB distance between two buffers."""
    x = np.asarray(a, dtype=np.float64)
    y = np.asarray(b, dtype=np.float64)
    x = x.reshape(-1, x.shape[-1])[:, :3]
    y = y.reshape(-1, y.shape[-1])[:, :3]
    return float(np.mean(np.sqrt(np.sum((x - y) ** 2, axis=1))))
