"""
Euclidean distance metric for color clustering.

Distances are taken directly on channel values (0-255 scale for 8-bit RGB).
"""

from typing import Sequence, Union
import math
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..base.exceptions import DimensionMismatchError


def euclidean_distance(a: Union[Tensor, Sequence[float]],
                       b: Union[Tensor, Sequence[float]]) -> float:
    """Euclidean distance ``sqrt(sum_i (a_i - b_i)^2)`` between two vectors.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    a = torch.as_tensor(a, dtype=torch.float64).flatten()
    b = torch.as_tensor(b, dtype=torch.float64).flatten()

    if a.shape != b.shape:
        raise DimensionMismatchError(f"Cannot compare vectors of length "
                                     f"{a.shape[0]} and {b.shape[0]}")

    diff = a - b.to(a.device)
    return math.sqrt(torch.sum(diff * diff).item())


class EuclideanDistance(DistanceMetric):
    """Euclidean distance from samples to centroids.

    Computes ||x - μ||² (or ||x - μ||) for every sample x and centroid μ.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """(n, K) distances from every point to every center."""
        if points.dim() != 2 or centers.dim() != 2 or points.shape[1] != centers.shape[1]:
            raise DimensionMismatchError(f"Points of shape {tuple(points.shape)} do not "
                                         f"match centers of shape {tuple(centers.shape)}")

        # Direct differences rather than the ||x||² + ||c||² - 2<x,c> expansion,
        # which loses exact zeros and breaks tie ordering.
        diff = points.unsqueeze(1) - centers.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)
