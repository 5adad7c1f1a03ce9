"""
colorquant: palette reduction for raster images by K-means clustering.

The clustering core partitions pixel colors into K clusters and returns a
label per sample plus the centroid palette. The image adapter flattens
pixel buffers into samples and rebuilds the quantized buffer, passing alpha
through untouched.

Example usage:
    >>> import numpy as np
    >>> from colorquant import KMeans, quantize_pixels
    >>>
    >>> # Cluster raw RGB samples
    >>> samples = np.array([[0, 0, 0], [0, 0, 0], [255, 255, 255], [255, 255, 255]])
    >>> kmeans = KMeans(n_clusters=2, random_state=0).fit(samples)
    >>> kmeans.cluster_centers_.shape
    torch.Size([2, 3])
    >>>
    >>> # Reduce an RGBA image to 16 colors
    >>> image = np.random.default_rng(0).integers(0, 256, (32, 32, 4), dtype=np.uint8)
    >>> result = quantize_pixels(image, n_colors=16, random_state=0)
    >>> result.pixels.shape
    (32, 32, 4)
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.kmeans import KMeans

# Import image adapter
from .image import (
    QuantizationResult,
    check_n_colors,
    quantize_pixels,
    quantize_image,
    compress_file,
    load_pixels,
    save_pixels,
    side_by_side
)

# Import visualization
from .visualization import (
    plot_palette,
    plot_colors_3d
)

# Convenience imports
from .base import (
    ClusterState,
    AssignmentMatrix,
    FitStatus,
    InvalidInputError,
    DimensionMismatchError,
    NotFittedError,
    ConvergenceWarning
)
from .distances import euclidean_distance

__all__ = [
    # Algorithm
    'KMeans',

    # Image adapter
    'QuantizationResult',
    'check_n_colors',
    'quantize_pixels',
    'quantize_image',
    'compress_file',
    'load_pixels',
    'save_pixels',
    'side_by_side',

    # Core data structures
    'ClusterState',
    'AssignmentMatrix',
    'FitStatus',
    'euclidean_distance',

    # Errors
    'InvalidInputError',
    'DimensionMismatchError',
    'NotFittedError',
    'ConvergenceWarning',

    # Visualization
    'plot_palette',
    'plot_colors_3d',

    # Version
    '__version__'
]
