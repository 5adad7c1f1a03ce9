"""
Centroid representation for K-means color clustering.

The simplest cluster representation - just a mean color in RGB space.
"""

from typing import Dict
import torch
from torch import Tensor

from .base_representation import BaseRepresentation


class CentroidRepresentation(BaseRepresentation):
    """Cluster represented by a single centroid point."""

    def get_parameters(self) -> Dict[str, Tensor]:
        """Return parameters defining this centroid."""
        return {'mean': self._mean.clone()}

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set centroid parameters."""
        if 'mean' in params:
            self.mean = params['mean']

    @classmethod
    def from_mean(cls, mean: Tensor, dtype: torch.dtype = torch.float64) -> 'CentroidRepresentation':
        """Build a representation holding a copy of ``mean``."""
        rep = cls(mean.shape[0], mean.device, dtype)
        rep.mean = mean.clone()
        return rep

    def __repr__(self) -> str:
        values = ", ".join(f"{v:.2f}" for v in self._mean.tolist())
        return f"CentroidRepresentation(mean=[{values}])"
