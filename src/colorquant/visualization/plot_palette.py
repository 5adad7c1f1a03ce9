"""
Palette visualization utilities.

Shows a reduced palette as a swatch bar and the clustered colors in RGB
space.
"""

from typing import Optional, Union
from torch import Tensor
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import numpy as np
from mpl_toolkits.mplot3d import Axes3D

ArrayLike = Union[Tensor, np.ndarray]


def _to_numpy(x: ArrayLike) -> np.ndarray:
    if isinstance(x, Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


def _to_unit_rgb(colors: np.ndarray) -> np.ndarray:
    """Map 0-255 channel values to matplotlib's 0-1 range."""
    return np.clip(colors.astype(np.float64) / 255.0, 0.0, 1.0)


def plot_palette(centers: ArrayLike,
                 counts: Optional[ArrayLike] = None,
                 ax: Optional[plt.Axes] = None,
                 show_hex: bool = True,
                 title: Optional[str] = None) -> plt.Axes:
    """Draw the palette as a horizontal bar of color swatches.

    Args:
        centers: (k, 3) palette colors on the 0-255 scale
        counts: Optional (k,) usage counts; swatch widths are proportional
                to them, otherwise all swatches are equal
        ax: Matplotlib axes (created if None)
        show_hex: Whether to label swatches with their hex code
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 2))

    centers_np = _to_numpy(centers)
    n_colors = centers_np.shape[0]

    if counts is None:
        widths = np.full(n_colors, 1.0 / n_colors)
    else:
        counts_np = _to_numpy(counts).astype(np.float64)
        total = counts_np.sum()
        widths = counts_np / total if total > 0 else np.full(n_colors, 1.0 / n_colors)

    rgb = _to_unit_rgb(centers_np)
    left = 0.0
    for k in range(n_colors):
        ax.add_patch(Rectangle((left, 0.0), widths[k], 1.0, facecolor=rgb[k],
                               edgecolor='white', linewidth=0.5))
        if show_hex and widths[k] > 0.04:
            r, g, b = (int(round(c)) for c in np.clip(centers_np[k], 0, 255))
            luminance = 0.299 * r + 0.587 * g + 0.114 * b
            ax.text(left + widths[k] / 2, 0.5, f'#{r:02X}{g:02X}{b:02X}',
                    ha='center', va='center', fontsize=8, rotation=90,
                    color='black' if luminance > 128 else 'white')
        left += widths[k]

    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_xticks([])
    ax.set_yticks([])

    if title:
        ax.set_title(title)
    else:
        ax.set_title(f'Palette ({n_colors} colors)')

    return ax


def plot_colors_3d(samples: ArrayLike,
                   labels: ArrayLike,
                   centers: ArrayLike,
                   ax: Optional[Axes3D] = None,
                   max_points: int = 5000,
                   alpha: float = 0.5,
                   center_size: int = 200,
                   point_size: int = 10,
                   elev: float = 30,
                   azim: float = 45,
                   title: Optional[str] = None) -> Axes3D:
    """Scatter samples in RGB space, each drawn in its palette color.

    Args:
        samples: (n, 3) colors on the 0-255 scale
        labels: (n,) palette index per sample
        centers: (k, 3) palette colors
        ax: 3D axes (created if None)
        max_points: Evenly spaced subsample size for large images
        alpha: Point transparency
        center_size: Size of center markers
        point_size: Size of sample markers
        elev: Elevation angle
        azim: Azimuth angle
        title: Plot title

    Returns:
        3D axes
    """
    if ax is None:
        fig = plt.figure(figsize=(10, 8))
        ax = fig.add_subplot(111, projection='3d')

    X_np = _to_numpy(samples).reshape(-1, 3)
    labels_np = _to_numpy(labels).reshape(-1)
    centers_np = _to_numpy(centers)

    if X_np.shape[0] > max_points:
        keep = np.linspace(0, X_np.shape[0] - 1, max_points).astype(np.int64)
        X_np = X_np[keep]
        labels_np = labels_np[keep]

    palette = _to_unit_rgb(centers_np)
    ax.scatter(X_np[:, 0], X_np[:, 1], X_np[:, 2],
               c=palette[labels_np],
               s=point_size,
               alpha=alpha)

    ax.scatter(centers_np[:, 0], centers_np[:, 1], centers_np[:, 2],
               c=palette,
               marker='X',
               s=center_size,
               edgecolors='black',
               linewidth=1.5,
               label='Palette')

    ax.set_xlabel('Red')
    ax.set_ylabel('Green')
    ax.set_zlabel('Blue')
    ax.set_xlim(0, 255)
    ax.set_ylim(0, 255)
    ax.set_zlim(0, 255)
    ax.view_init(elev=elev, azim=azim)
    ax.legend()

    if title:
        ax.set_title(title)

    return ax
