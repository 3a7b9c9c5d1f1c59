"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pixswap.color_utils import mean_error, total_energy
from pixswap.config import SwapConfig
from pixswap.errors import PixswapError
from pixswap.image_io import decode, encode, make_comparison_grid, to_image
from pixswap.mapping import (
    apply_mapping,
    check_pixel_counts,
    initial_mapping,
    rank_order,
)
from pixswap.solver_annealing import solve_annealing
from pixswap.solver_exact import solve_exact

app = typer.Typer(
    name="pixswap",
    help="Rearrange the pixels of one image to resemble another.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _fail(exc: PixswapError) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    return typer.Exit(1)


# Defaults come from SwapConfig - single source of truth
_DEFAULTS = SwapConfig()


# -- run command -------------------------------------------------------

@app.command()
def run(
    source: Path = typer.Argument(..., help="Image whose pixels are rearranged"),
    target: Path = typer.Argument(..., help="Image to approximate"),
    output: Path = typer.Option(_DEFAULTS.output_path, "--output", "-o"),
    steps: int = typer.Option(_DEFAULTS.steps, "--steps", "-n", help="SA steps"),
    radius: int = typer.Option(
        _DEFAULTS.radius, "--radius", "-r",
        help="Largest rank distance between swapped pixels",
    ),
    t_initial: float = typer.Option(_DEFAULTS.t_initial, "--t-initial"),
    t_final: float = typer.Option(_DEFAULTS.t_final, "--t-final"),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", "-s", help="Random seed",
    ),
    solver: str = typer.Option(
        _DEFAULTS.solver, "--solver", help="'annealing' or 'exact' (small images)",
    ),
    comparison: Path | None = typer.Option(
        None, "--comparison", help="Also save a Source | Target | Output grid",
    ),
    checkpoints: int = typer.Option(
        _DEFAULTS.log_checkpoints, "--checkpoints", help="Progress lines during SA",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Rearrange SOURCE's pixels to approximate TARGET and write the result."""
    _setup_logging(verbose)
    t_total = time.perf_counter()

    try:
        cfg = SwapConfig(
            source_path=source,
            target_path=target,
            output_path=output,
            steps=steps,
            radius=radius,
            t_initial=t_initial,
            t_final=t_final,
            seed=seed,
            solver=solver,
            log_checkpoints=checkpoints,
            comparison_path=comparison,
        )

        src_img = decode(cfg.source_path)
        tgt_img = decode(cfg.target_path)
        n = check_pixel_counts(src_img.pixels, tgt_img.pixels)
        if cfg.solver == "annealing":
            cfg.validate_for(n)

        console.print(Panel.fit(
            f"[bold]PIXSWAP[/bold]\n"
            f"Source: {cfg.source_path} ({src_img.width}x{src_img.height})\n"
            f"Target: {cfg.target_path} ({tgt_img.width}x{tgt_img.height})\n"
            f"Solver: {cfg.solver}  |  Steps: {cfg.steps:,}  |  Radius: {cfg.radius:,}\n"
            f"Temperature: {cfg.t_initial:g} → {cfg.t_final:g}  |  Seed: {cfg.seed}",
            border_style="cyan",
        ))

        if cfg.solver == "annealing":
            result = solve_annealing(src_img.pixels, tgt_img.pixels, cfg)
            mapping = result.mapping
            energy = result.energy
            accepted = f"{result.accepted:,}/{result.steps:,}"
        else:
            mapping = solve_exact(src_img.pixels, tgt_img.pixels)
            energy = total_energy(mapping, src_img.pixels, tgt_img.pixels)
            accepted = "n/a"

        out = apply_mapping(mapping, src_img.pixels)
        encode(cfg.output_path, tgt_img.width, tgt_img.height, out)

        if cfg.comparison_path is not None:
            make_comparison_grid(
                to_image(src_img.width, src_img.height, src_img.pixels),
                to_image(tgt_img.width, tgt_img.height, tgt_img.pixels),
                to_image(tgt_img.width, tgt_img.height, out),
                cfg.comparison_path,
            )
    except PixswapError as exc:
        raise _fail(exc) from exc

    err = mean_error(tgt_img.pixels, out)
    elapsed = time.perf_counter() - t_total
    console.print(
        f"[green]✓[/green] Saved to {cfg.output_path}  "
        f"[dim]{n:,} px  energy={energy:.0f}  error={err:.1f}  "
        f"accepted={accepted}[/dim]"
    )
    console.print(f"Total runtime = {elapsed:.4g} s")


# -- check command -----------------------------------------------------

@app.command()
def check(
    source: Path = typer.Argument(..., help="Image whose pixels are rearranged"),
    target: Path = typer.Argument(..., help="Image to approximate"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate an image pair and report the rank-aligned starting energy."""
    _setup_logging(verbose)

    try:
        src_img = decode(source)
        tgt_img = decode(target)
        n = check_pixel_counts(src_img.pixels, tgt_img.pixels)
    except PixswapError as exc:
        raise _fail(exc) from exc

    mapping = initial_mapping(rank_order(src_img.pixels), rank_order(tgt_img.pixels))
    energy = total_energy(mapping, src_img.pixels, tgt_img.pixels)
    err = mean_error(tgt_img.pixels, apply_mapping(mapping, src_img.pixels))
    console.print(
        f"[green]✓[/green] {n:,} px  max radius={n - 1:,}  "
        f"start energy={energy:.0f}  error={err:.1f}"
    )


if __name__ == "__main__":
    app()
