"""
Core interfaces for the color clustering components.

Each step of the fit loop (initialization, assignment, update, convergence
check, objective) is a pluggable strategy so the driver only orchestrates.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
import torch
from torch import Tensor


class ClusterRepresentation(ABC):
    """Abstract base class for cluster representations.

    For color quantization a cluster is just its centroid, but the driver
    only talks to this interface.
    """

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return all parameters defining this cluster representation."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set cluster parameters from dictionary."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Dimension of the feature space."""
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for sample-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Compute cluster labels for samples.

        Args:
            points: (n, d) tensor of samples
            representations: List of K cluster representations
            **kwargs: Strategy-specific parameters

        Returns:
            (n,) long tensor of labels in [0, K)
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Tensor, labels: Tensor,
               previous_means: Tensor, **kwargs) -> Tensor:
        """Compute new cluster parameters from the current assignment.

        Implementations must not modify ``previous_means``; the driver
        decides when the returned tensor replaces it.

        Args:
            points: (n, d) tensor of all samples
            labels: (n,) hard labels
            previous_means: (K, d) centroids used to produce ``labels``

        Returns:
            (K, d) tensor of new centroids
        """
        pass


class DistanceMetric(ABC):
    """Abstract base class for distance computations."""

    @abstractmethod
    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """Compute distances from every point to every center.

        Args:
            points: (n, d) tensor of points
            centers: (K, d) tensor of centers

        Returns:
            (n, K) tensor of distances
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize cluster representations.

        Args:
            points: (n, d) tensor of samples
            n_clusters: Number of clusters to initialize
            generator: Random source; None falls back to torch's default

        Returns:
            List of exactly ``n_clusters`` representations
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, means: Tensor, labels: Tensor) -> Tensor:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of samples
            means: (K, d) centroids
            labels: (n,) hard labels

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
