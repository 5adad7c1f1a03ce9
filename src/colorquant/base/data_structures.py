"""
Core data structures for the color clustering driver.

This module provides the containers for cluster states, hard assignments,
per-iteration snapshots, and the lifecycle status of a fit.
"""

from typing import Dict, Any
from enum import Enum
import torch
from torch import Tensor
from dataclasses import dataclass, field


class FitStatus(Enum):
    """Lifecycle of a single ``fit`` call."""

    UNINITIALIZED = 'uninitialized'
    INITIALIZED = 'initialized'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    MAX_ITERATIONS_REACHED = 'max_iterations_reached'

    @property
    def is_terminal(self) -> bool:
        return self in (FitStatus.CONVERGED, FitStatus.MAX_ITERATIONS_REACHED)


@dataclass
class ClusterState:
    """Container for the centroids of all clusters at a given iteration.

    ``len(means) == n_clusters`` holds for the whole fit; duplicate rows are
    legal when K exceeds the number of distinct samples.
    """

    means: Tensor  # (K, d) cluster centroids
    n_clusters: int
    dimension: int

    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate dimensions."""
        assert self.means.shape == (self.n_clusters, self.dimension)


class AssignmentMatrix:
    """Storage and aggregation of hard cluster assignments (labels)."""

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) hard assignments
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        self._validate_and_store(assignments)

    def _validate_and_store(self, assignments: Tensor):
        """Validate and store assignments in canonical format."""
        assert assignments.dim() == 1
        if assignments.numel() > 0:
            assert assignments.max() < self.n_clusters
            assert assignments.min() >= 0
        self._labels = assignments.long()

    def count_per_cluster(self) -> Tensor:
        """Count samples per cluster, including empty clusters."""
        return torch.bincount(self._labels, minlength=self.n_clusters)

    def empty_clusters(self) -> Tensor:
        """Indices of clusters that received no samples."""
        return torch.where(self.count_per_cluster() == 0)[0]


@dataclass
class AlgorithmState:
    """State of the fit loop after one assignment/update round.

    Used for convergence diagnostics. Only per-cluster data is kept, never
    per-sample labels, so the history stays small for large images.
    """
    iteration: int
    cluster_state: ClusterState
    counts: Tensor  # (K,) samples per cluster
    objective_value: float

    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
