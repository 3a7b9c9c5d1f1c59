"""Exponential cooling schedule for the annealer."""

from __future__ import annotations

from pixswap.errors import ConfigError


def temperature(
    step: int,
    total_steps: int,
    t_initial: float,
    t_final: float,
) -> float:
    """Geometric interpolation from *t_initial* (step 0) to *t_final*.

    ``T = t_initial * (t_final / t_initial) ** (step / (total_steps - 1))``

    The two end points are returned exactly rather than through ``**``
    so that boundary comparisons hold bit-for-bit.
    """
    if total_steps < 2:
        raise ConfigError(f"total_steps must be at least 2, got {total_steps}")
    if not (t_initial > 0 and t_final > 0):
        raise ConfigError(
            f"temperatures must be positive, got {t_initial} and {t_final}",
        )
    if step <= 0:
        return float(t_initial)
    if step >= total_steps - 1:
        return float(t_final)
    fraction = step / (total_steps - 1)
    return t_initial * (t_final / t_initial) ** fraction
