"""
K-means clustering algorithm.

The classic K-means algorithm implemented using the modular framework,
tuned for palette reduction: random initialization with replacement,
an absolute centroid-shift stopping rule, and empty clusters that keep
their previous centroid.
"""

from typing import Optional, List, Union
import torch
from torch import Tensor
import numpy as np

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusterRepresentation, ClusteringObjective
from ..base.exceptions import InvalidInputError
from ..assignments.hard import HardAssignment
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import CentroidShift
from ..utils.metrics import inertia
from ..updates.mean import MeanUpdater


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to centroids."""

    def compute(self, points: Tensor, means: Tensor, labels: Tensor) -> Tensor:
        """Compute within-cluster sum of squares."""
        return torch.tensor(inertia(points, labels, means), dtype=points.dtype)

    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions samples into K clusters by alternating nearest-centroid
    assignment and centroid recomputation.

    Parameters
    ----------
    n_clusters : int
        Number of clusters, at least 1. May exceed the number of distinct
        samples, in which case some centroids coincide.
    init : str or array-like, default='random'
        Initialization method:
        - 'random' : K samples drawn uniformly with replacement
        - array of shape (n_clusters, n_features) : Use as initial centers
    max_iter : int, default=100
        Maximum number of assignment/update rounds
    tol : float, default=1e-3
        Absolute per-dimension centroid shift below which the fit has converged
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Seed or generator for the initializer. An int seed gives identical
        results for repeated fits on identical input.
    device : str or torch.device, optional
        Device for computation (CPU/GPU)
    batch_size : int, optional
        Samples per assignment chunk; sized automatically when None
    dtype : torch.dtype, default=torch.float64
        Working precision for samples and centroids

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Labels from a final assignment against ``cluster_centers_``
    inertia_ : float
        Sum of squared distances to the assigned centroid
    n_iter_ : int
        Number of iterations run
    status_ : FitStatus
        CONVERGED or MAX_ITERATIONS_REACHED after a fit
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Tensor, np.ndarray, list] = 'random',
                 max_iter: int = 100,
                 tol: float = 1e-3,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None,
                 batch_size: Optional[int] = None,
                 dtype: torch.dtype = torch.float64):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            verbose=verbose,
            random_state=random_state,
            device=device,
            batch_size=batch_size,
            dtype=dtype
        )
        self.init = init

    def _create_components(self) -> None:
        """Create K-means specific components."""
        self.assignment_strategy = HardAssignment(batch_size=self.batch_size_)
        self.update_strategy = MeanUpdater()

        if isinstance(self.init, str):
            if self.init == 'random':
                self.initialization_strategy = RandomInit()
            else:
                raise InvalidInputError(f"Unknown init method: {self.init}")
        else:
            initial_centers = torch.as_tensor(self.init, dtype=self.dtype, device=self.device)
            self.initialization_strategy = FromPreviousInit(initial_centers)

        self.convergence_criterion = CentroidShift(tol=self.tol)
        self.objective = KMeansObjective()

    def _create_representations(self, data: Tensor,
                                generator: Optional[torch.Generator]) -> List[ClusterRepresentation]:
        """Create centroid representations."""
        return self.initialization_strategy.initialize(
            data, self.n_clusters, generator=generator
        )

    def score(self, X: Union[Tensor, np.ndarray, list], y=None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            New data
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Negative of sum of squared distances to centers
        """
        labels = self.predict(X)
        X = self._validate_data(X)
        return -inertia(X, labels, self.cluster_centers_)
