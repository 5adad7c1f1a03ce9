"""
Random initialization strategy for color clustering.

Selects random samples from the dataset as initial cluster centers.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..base.exceptions import InvalidInputError
from ..representations.centroid import CentroidRepresentation


class RandomInit(InitializationStrategy):
    """Random initialization by selecting samples from the dataset.

    Draws ``n_clusters`` indices uniformly *with* replacement, so duplicate
    initial centers are possible and ``n_clusters`` may exceed the number of
    samples.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize clusters with random samples.

        Args:
            points: (n, d) samples
            n_clusters: Number of clusters
            generator: CPU random source for reproducible draws

        Returns:
            List of initialized CentroidRepresentations
        """
        if points.dim() != 2 or points.shape[0] == 0:
            raise InvalidInputError("Cannot initialize centroids from an empty sample collection")
        if n_clusters < 1:
            raise InvalidInputError(f"n_clusters must be positive, got {n_clusters}")

        n_points = points.shape[0]

        # Drawn on CPU so a CPU generator works for any device
        indices = torch.randint(n_points, (n_clusters,), generator=generator)
        indices = indices.to(points.device)

        representations = []
        for idx in indices:
            representations.append(
                CentroidRepresentation.from_mean(points[idx], dtype=points.dtype)
            )

        return representations
