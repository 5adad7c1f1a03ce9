"""
Pillow based image file helpers for palette reduction.
"""

import os
from typing import Optional, Tuple, Union
import numpy as np
from PIL import Image

from .adapter import QuantizationResult, quantize_pixels, side_by_side

PathLike = Union[str, os.PathLike]

# Formats without an alpha channel
_OPAQUE_SUFFIXES = {'.jpg', '.jpeg', '.bmp'}


def load_pixels(path: PathLike) -> np.ndarray:
    """Read an image file into an (H, W, 4) RGBA uint8 array."""
    with Image.open(path) as image:
        return np.asarray(image.convert('RGBA'), dtype=np.uint8).copy()


def save_pixels(pixels: np.ndarray, path: PathLike) -> None:
    """Write an (H, W, 3|4) uint8 array to ``path``; the format follows the suffix."""
    pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
    if os.path.splitext(str(path))[1].lower() in _OPAQUE_SUFFIXES:
        pixels = np.ascontiguousarray(pixels[..., :3])
    Image.fromarray(pixels).save(path)


def quantize_image(image: Image.Image, n_colors: int,
                   **kwargs) -> Tuple[Image.Image, QuantizationResult]:
    """Palette-reduce a Pillow image.

    RGB and RGBA images keep their mode; anything else is converted to RGBA
    first.
    """
    if image.mode not in ('RGB', 'RGBA'):
        image = image.convert('RGBA')

    pixels = np.asarray(image, dtype=np.uint8)
    result = quantize_pixels(pixels, n_colors, **kwargs)
    return Image.fromarray(result.pixels), result


def compress_file(src: PathLike, dst: PathLike, n_colors: int,
                  comparison: Optional[PathLike] = None,
                  **kwargs) -> QuantizationResult:
    """Load ``src``, reduce it to ``n_colors`` colors and save it to ``dst``.

    Args:
        src: Input image path
        dst: Output image path
        n_colors: Number of palette entries
        comparison: Optional path for a side-by-side original/compressed image
        **kwargs: Forwarded to :func:`quantize_pixels`

    Returns:
        The QuantizationResult of the reduction
    """
    pixels = load_pixels(src)
    result = quantize_pixels(pixels, n_colors, **kwargs)
    save_pixels(result.pixels, dst)

    if comparison is not None:
        save_pixels(side_by_side(pixels, result.pixels), comparison)

    return result
