"""
Hard assignment strategy for color clustering.

Assigns each sample to its nearest centroid under the Euclidean metric.
"""

from typing import List, Optional, Tuple
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation
from ..base.exceptions import DimensionMismatchError
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Samples are processed in independent chunks of ``batch_size`` rows; each
    chunk only reads the centroids and writes its own slice of the label
    tensor. On exact distance ties the lowest centroid index wins.
    """

    def __init__(self, batch_size: Optional[int] = None):
        """
        Args:
            batch_size: Samples per chunk. None processes all samples at once,
                        which needs an (n, K, d) temporary.
        """
        super().__init__()
        if batch_size is not None and batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size
        self.metric = EuclideanDistance(squared=True)

    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Assign each sample to nearest centroid.

        Args:
            points: (n, d) samples
            representations: List of K cluster representations

        Returns:
            (n,) tensor of cluster indices
        """
        labels, _ = self.assign_with_distances(points, representations)
        return labels

    def assign_with_distances(self, points: Tensor,
                              representations: List[ClusterRepresentation]
                              ) -> Tuple[Tensor, Tensor]:
        """Assign samples and also return each sample's squared distance to its centroid.

        Returns:
            labels: (n,) cluster indices
            min_distances: (n,) squared distances to the assigned centroid
        """
        centers = torch.stack([rep.get_parameters()['mean'] for rep in representations])
        return self.assign_to_centers(points, centers)

    def assign_to_centers(self, points: Tensor, centers: Tensor) -> Tuple[Tensor, Tensor]:
        """Nearest-center labels for a raw (K, d) center tensor."""
        if points.dim() != 2 or centers.dim() != 2 or points.shape[1] != centers.shape[1]:
            raise DimensionMismatchError(f"Samples of shape {tuple(points.shape)} do not "
                                         f"match centroids of shape {tuple(centers.shape)}")

        n_points = points.shape[0]
        centers = centers.to(device=points.device, dtype=points.dtype)
        step = self.batch_size or max(n_points, 1)

        labels = torch.empty(n_points, dtype=torch.long, device=points.device)
        min_distances = torch.empty(n_points, dtype=points.dtype, device=points.device)

        for start in range(0, n_points, step):
            stop = min(start + step, n_points)
            distances = self.metric.pairwise(points[start:stop], centers)

            # argmin returns the first minimal index, giving the lowest-index tie-break
            chunk_labels = torch.argmin(distances, dim=1)
            labels[start:stop] = chunk_labels
            min_distances[start:stop] = torch.gather(
                distances, 1, chunk_labels.unsqueeze(1)).squeeze(1)

        return labels, min_distances
