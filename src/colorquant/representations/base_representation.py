"""
Base representation class with common functionality for cluster representations.
"""

import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation
from ..base.exceptions import DimensionMismatchError


class BaseRepresentation(ClusterRepresentation):
    """Base class providing common functionality for cluster representations."""

    def __init__(self, dimension: int, device: torch.device,
                 dtype: torch.dtype = torch.float64):
        """
        Args:
            dimension: Dimension d of the feature space
            device: Torch device for tensor allocation
            dtype: Floating dtype of the stored mean
        """
        self._dimension = dimension
        self._device = device
        self._dtype = dtype
        self._mean = torch.zeros(dimension, device=device, dtype=dtype)

    @property
    def dimension(self) -> int:
        """Dimension of the feature space."""
        return self._dimension

    @property
    def mean(self) -> Tensor:
        """Cluster mean/centroid."""
        return self._mean

    @mean.setter
    def mean(self, value: Tensor):
        """Set cluster mean."""
        if value.shape != (self._dimension,):
            raise DimensionMismatchError(f"Expected mean of shape ({self._dimension},), "
                                         f"got {tuple(value.shape)}")
        self._mean = value.to(device=self._device, dtype=self._dtype)
