"""Distance metrics for color clustering."""

from .euclidean import EuclideanDistance, euclidean_distance

__all__ = [
    'EuclideanDistance',
    'euclidean_distance'
]
