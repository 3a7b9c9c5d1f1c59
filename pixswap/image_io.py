"""Image decoding, encoding, and comparison-grid generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from pixswap.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel
_OPAQUE_SUFFIXES = frozenset({".jpg", ".jpeg", ".jfif", ".bmp"})


class DecodedImage(NamedTuple):
    width: int
    height: int
    pixels: np.ndarray  # (width * height, 4) uint8 RGBA, raster order


def decode(path: str | Path) -> DecodedImage:
    """Load an image as a flat RGBA pixel buffer.

    Raises:
        DecodeError: the file is missing, unreadable or not an image.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise DecodeError(f"cannot decode {path}: {exc}") from exc

    w, h = rgba.size
    pixels = np.array(rgba, dtype=np.uint8).reshape(-1, 4)
    logger.debug("Decoded %s: %dx%d", path, w, h)
    return DecodedImage(w, h, pixels)


def to_image(width: int, height: int, pixels: np.ndarray) -> Image.Image:
    """Wrap a flat (N, 3|4) buffer as a PIL image of the given size."""
    arr = np.asarray(pixels, dtype=np.uint8)
    if arr.ndim != 2 or arr.shape[1] not in (3, 4) or len(arr) != width * height:
        raise ValueError(
            f"expected a ({width * height}, 3|4) buffer for {width}x{height}, "
            f"got shape {arr.shape}",
        )
    return Image.fromarray(arr.reshape(height, width, arr.shape[1]))


def encode(
    path: str | Path,
    width: int,
    height: int,
    pixels: np.ndarray,
) -> Path:
    """Write a flat pixel buffer to *path*; the format follows the suffix.

    Alpha is kept only when some pixel is translucent and the format
    can store it.

    Raises:
        EncodeError: bad buffer shape, unknown format, or write failure.
    """
    path = Path(path)
    try:
        img = to_image(width, height, pixels)
    except ValueError as exc:
        raise EncodeError(f"cannot encode {path}: {exc}") from exc

    arr = np.asarray(pixels)
    has_alpha = arr.shape[1] == 4 and bool(np.any(arr[:, 3] != 255))
    if not has_alpha or path.suffix.lower() in _OPAQUE_SUFFIXES:
        img = img.convert("RGB")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        img.save(path)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"cannot write {path}: {exc}") from exc

    logger.debug("Encoded %s: %dx%d (%s)", path, width, height, img.mode)
    return path


def make_comparison_grid(
    source: Image.Image,
    target: Image.Image,
    output: Image.Image,
    output_path: str | Path,
    panel_height: int = 256,
) -> Path:
    """Create a 3-panel comparison: Source | Target | Output.

    Every panel is scaled to *panel_height*, keeping the target's
    aspect ratio.
    """
    tw, th = target.size
    panel_h = panel_height
    panel_w = max(1, round(tw * panel_h / th))
    label_height = 36
    resample = Image.NEAREST if th < panel_h else Image.LANCZOS

    panels = [
        im.convert("RGB").resize((panel_w, panel_h), resample)
        for im in (source, target, output)
    ]
    labels = ["Source", f"Target {tw}x{th}", "Output"]

    gap = 8
    total_w = len(panels) * panel_w + (len(panels) - 1) * gap
    total_h = panel_h + label_height

    canvas = Image.new("RGB", (total_w, total_h), (30, 30, 30))
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels)):
        x = i * (panel_w + gap)
        canvas.paste(panel, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel_w - text_w) // 2
        draw.text((tx, 6), label, fill=(220, 220, 220), font=font)

    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        canvas.save(output_path)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"cannot write {output_path}: {exc}") from exc
    return output_path
