"""Pillow images from colours: swatches and float framebuffers.

Framebuffers are (height, width, 3) float arrays of unbounded channels.
Conversion to 8-bit uses the same rule as Color.rgba: clip to [0, 1],
multiply by 255, truncate. Images are RGB; the display alpha is not used.
"""

from collections.abc import Sequence
from pathlib import Path

import numpy as np
from PIL import Image

from hdrcolor.core.color import Color


def framebuffer(colors: Sequence[Color], width: int, height: int) -> np.ndarray:
    """Pack a flat row-major sequence of colours into a float framebuffer."""
    if len(colors) != width * height:
        raise ValueError(f'Expected {width * height} colours for {width}x{height}, got {len(colors)}')
    arr = np.array([tuple(c) for c in colors], dtype=np.float64)
    return arr.reshape((height, width, 3))


def framebuffer_to_image(buf: np.ndarray) -> Image.Image:
    """Convert a float framebuffer to an 8-bit RGB image."""
    if buf.ndim != 3 or buf.shape[2] != 3:
        raise ValueError(f'Expected a (height, width, 3) array, got shape {buf.shape}')
    clipped = np.clip(np.nan_to_num(buf, nan=0.0), 0.0, 1.0)
    # astype truncates toward zero, matching int() in Color.rgba
    pixels = (clipped * 0xFF).astype(np.uint8)
    return Image.fromarray(pixels)


def render_swatch(colors: Sequence[Color], size: int = 64) -> Image.Image:
    """One size x size square per colour, left to right."""
    if not colors:
        raise ValueError('No colours to render')
    if size <= 0:
        raise ValueError(f'Swatch size must be positive, got {size}')

    buf = np.empty((size, size * len(colors), 3), dtype=np.float64)
    for i, color in enumerate(colors):
        buf[:, i * size : (i + 1) * size] = tuple(color)
    return framebuffer_to_image(buf)


def save_swatch(path: str | Path, colors: Sequence[Color], size: int = 64) -> Path:
    """Render a swatch and save it; the format comes from the file extension."""
    out = Path(path)
    render_swatch(colors, size).save(out)
    return out
