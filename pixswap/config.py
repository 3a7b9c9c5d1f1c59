"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pixswap.errors import ConfigError

SOLVERS = ("annealing", "exact")


@dataclass(frozen=True)
class SwapConfig:
    """All tuneable parameters for a pixswap run.

    Attributes:
        source_path:     Image whose pixels are rearranged.
        target_path:     Image whose colour layout is approximated.
        output_path:     Where the rearranged image is written.
        steps:           Total annealing steps (no early stop).
        radius:          Maximum rank distance between the two swapped entries.
        t_initial:       Temperature at step 0.
        t_final:         Temperature at the last step.
        seed:            Random seed (None = non-deterministic).
        solver:          "annealing" (heuristic) or "exact" (small images only).
        log_checkpoints: Number of progress lines logged during annealing.
        comparison_path: If set, also write a Source | Target | Output grid.
    """

    # Paths
    source_path: Path = field(default_factory=lambda: Path("image1.png"))
    target_path: Path = field(default_factory=lambda: Path("image2.png"))
    output_path: Path = field(default_factory=lambda: Path("out1to2.png"))

    # Simulated Annealing params
    steps: int = 40_000_000
    radius: int = 8_000  # rank-space distance
    t_initial: float = 2.0
    t_final: float = 1e-3

    seed: int | None = 12345
    solver: str = "annealing"

    # Reporting
    log_checkpoints: int = 20
    comparison_path: Path | None = None

    def __post_init__(self) -> None:
        if self.steps < 2:
            raise ConfigError(f"steps must be at least 2, got {self.steps}")
        if self.radius < 1:
            raise ConfigError(f"radius must be at least 1, got {self.radius}")
        if not self.t_initial > 0:
            raise ConfigError(
                f"initial temperature must be positive, got {self.t_initial}",
            )
        if not self.t_final > 0:
            raise ConfigError(
                f"final temperature must be positive, got {self.t_final}",
            )
        if self.solver not in SOLVERS:
            raise ConfigError(
                f"solver must be one of {', '.join(SOLVERS)}, got {self.solver!r}",
            )
        if self.log_checkpoints < 0:
            raise ConfigError(
                f"log_checkpoints must be non-negative, got {self.log_checkpoints}",
            )

    def validate_for(self, num_pixels: int) -> None:
        """Check the parameters that depend on the image size.

        The swap radius must leave room for a second rank position, so
        the largest permitted value is ``num_pixels - 1``.
        """
        if num_pixels < 2:
            raise ConfigError(
                f"images need at least 2 pixels to swap, got {num_pixels}",
            )
        if self.radius > num_pixels - 1:
            raise ConfigError(
                f"radius {self.radius} exceeds the maximum of {num_pixels - 1} "
                f"for {num_pixels} pixels",
            )
