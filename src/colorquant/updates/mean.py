"""
Mean update strategy for centroid-based clustering.
"""

import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater
from ..base.exceptions import DimensionMismatchError


class MeanUpdater(ParameterUpdater):
    """Recomputes each centroid as the mean of its assigned samples.

    A cluster that received no samples keeps its previous centroid, so the
    number of clusters never shrinks and nothing is re-randomized.
    """

    def update(self, points: Tensor, labels: Tensor,
               previous_means: Tensor, **kwargs) -> Tensor:
        """Compute new centroids.

        Args:
            points: (n, d) samples
            labels: (n,) hard labels in [0, K)
            previous_means: (K, d) centroids, left untouched
            **kwargs: Ignored

        Returns:
            (K, d) new centroids
        """
        if points.shape[0] != labels.shape[0]:
            raise ValueError(f"Got {labels.shape[0]} labels for {points.shape[0]} samples")
        if points.shape[1] != previous_means.shape[1]:
            raise DimensionMismatchError(f"Samples have dimension {points.shape[1]}, "
                                         f"centroids have {previous_means.shape[1]}")

        n_clusters = previous_means.shape[0]
        labels = labels.long()

        sums = torch.zeros(n_clusters, points.shape[1],
                           dtype=points.dtype, device=points.device)
        sums.index_add_(0, labels, points)
        counts = torch.bincount(labels, minlength=n_clusters).to(points.dtype)

        non_empty = counts > 0
        new_means = previous_means.detach().clone().to(device=points.device, dtype=points.dtype)
        new_means[non_empty] = sums[non_empty] / counts[non_empty].unsqueeze(1)

        return new_means
