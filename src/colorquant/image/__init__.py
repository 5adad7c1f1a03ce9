"""Pixel buffer adapter and image file helpers."""

from .adapter import (
    QuantizationResult,
    check_n_colors,
    as_pixel_array,
    extract_samples,
    round_palette,
    reconstruct,
    quantize_pixels,
    side_by_side
)

from .io import (
    load_pixels,
    save_pixels,
    quantize_image,
    compress_file
)

__all__ = [
    # Adapter
    'QuantizationResult',
    'check_n_colors',
    'as_pixel_array',
    'extract_samples',
    'round_palette',
    'reconstruct',
    'quantize_pixels',
    'side_by_side',

    # File helpers
    'load_pixels',
    'save_pixels',
    'quantize_image',
    'compress_file'
]
