"""
pixswap
=======

Rearrange the pixels of a source image so that they approximate a
target image. Every source pixel is used exactly once: the result is
a permutation, never a blend.

- Pixels of both images are ranked by colour key and aligned rank by rank.
- **Simulated Annealing** then refines the pairing with rank-local swaps.
- A **Hungarian** exact solver is available for small images.
"""

__version__ = "1.0.0"

from pixswap.color_utils import color_key, pix_energy, swap_delta, total_energy
from pixswap.config import SwapConfig
from pixswap.errors import (
    ConfigError,
    DecodeError,
    DimensionMismatchError,
    EncodeError,
    PixswapError,
)
from pixswap.image_io import decode, encode, make_comparison_grid
from pixswap.mapping import apply_mapping, initial_mapping, is_bijection, rank_order
from pixswap.rng import RandomSource
from pixswap.schedule import temperature
from pixswap.solver_annealing import AnnealResult, Annealer, solve_annealing
from pixswap.solver_exact import solve_exact

__all__ = [
    "AnnealResult",
    "Annealer",
    "ConfigError",
    "DecodeError",
    "DimensionMismatchError",
    "EncodeError",
    "PixswapError",
    "RandomSource",
    "SwapConfig",
    "apply_mapping",
    "color_key",
    "decode",
    "encode",
    "initial_mapping",
    "is_bijection",
    "make_comparison_grid",
    "pix_energy",
    "rank_order",
    "solve_annealing",
    "solve_exact",
    "swap_delta",
    "temperature",
    "total_energy",
]
