"""Visualization utilities for palette reduction results."""

from .plot_palette import (
    plot_palette,
    plot_colors_3d
)

__all__ = [
    'plot_palette',
    'plot_colors_3d'
]
