"""Exception hierarchy shared by the engine, the I/O layer and the CLI."""

from __future__ import annotations


class PixswapError(Exception):
    """Base class for every error pixswap raises on purpose."""


class ConfigError(PixswapError, ValueError):
    """Invalid run parameters (step count, radius, temperatures, solver)."""


class DimensionMismatchError(PixswapError, ValueError):
    """Source and target images hold a different number of pixels."""


class DecodeError(PixswapError, OSError):
    """An image file is missing, unreadable or in an unsupported format."""


class EncodeError(PixswapError, OSError):
    """The output image could not be written."""
