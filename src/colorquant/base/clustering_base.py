"""
Base class for the color clustering driver.

Provides the algorithmic skeleton for alternating optimization between the
assignment and update steps, with the lifecycle recorded in ``status_``.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import numpy as np
import time
import warnings

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import (
    ClusterState, AssignmentMatrix, AlgorithmState, FitStatus
)
from .exceptions import ConvergenceWarning, DimensionMismatchError, NotFittedError
from ..utils.validation import (
    validate_data, check_n_clusters, check_max_iter, check_random_state
)
from ..utils.device import parse_device, get_batch_size


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.

    Subclasses need to specify:
    - Cluster representation type
    - Assignment strategy
    - Parameter update strategy
    - Initialization strategy
    - Convergence criterion
    - Objective function
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 100,
                 tol: float = 1e-3,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None,
                 batch_size: Optional[int] = None,
                 dtype: torch.dtype = torch.float64):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum iterations
            tol: Convergence tolerance
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for the initializer
            device: Torch device (None for auto-detect)
            batch_size: Samples per assignment chunk (None to size automatically)
            dtype: Floating dtype used for samples and centroids
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.random_state = random_state
        self.device = parse_device(device, dtype=dtype)
        self.batch_size = batch_size
        self.dtype = dtype

        # These will be set by subclasses
        self.representations: Optional[List[ClusterRepresentation]] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.status_ = FitStatus.UNINITIALIZED
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None
        self._inertia: Optional[float] = None
        self._n_features: Optional[int] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    @abstractmethod
    def _create_representations(self, data: Tensor,
                                generator: Optional[torch.Generator]) -> List[ClusterRepresentation]:
        """Create the initial cluster representations.

        Args:
            data: (n, d) data tensor
            generator: Random source for the initializer

        Returns:
            List of K cluster representations
        """
        pass

    def fit(self, X: Union[Tensor, np.ndarray, list], y=None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) samples
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X: Union[Tensor, np.ndarray, list], y=None) -> Tensor:
        """Fit and return cluster labels.

        Args:
            X: (n, d) samples
            y: Ignored

        Returns:
            (n,) tensor of cluster labels
        """
        self._fit(X)
        return self.labels_

    def predict(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Assign new samples to the fitted centroids.

        Args:
            X: (n, d) samples

        Returns:
            (n,) tensor of cluster labels
        """
        self._check_fitted()
        X = self._validate_data(X)
        self._check_n_features(X)

        return self.assignment_strategy.compute_assignments(X, self.representations)

    def _fit(self, X: Union[Tensor, np.ndarray, list]) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the alternating optimization."""
        X = self._validate_data(X)
        check_n_clusters(self.n_clusters)
        check_max_iter(self.max_iter)
        n_points, dimension = X.shape

        self.fitted_ = False
        self.status_ = FitStatus.UNINITIALIZED
        self.batch_size_ = self.batch_size or get_batch_size(
            n_points, dimension, self.n_clusters, dtype=self.dtype
        )

        self._create_components()

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters from {n_points} samples...")

        start_time = time.time()
        generator = check_random_state(self.random_state)
        self.representations = self._create_representations(X, generator)
        self.status_ = FitStatus.INITIALIZED

        self.n_iter_ = 0
        self.history_ = []
        self.convergence_criterion.reset()
        converged = False

        # Main optimization loop
        for iteration in range(self.max_iter):
            iter_start_time = time.time()
            self.status_ = FitStatus.ITERATING

            # Assignment step
            labels = self.assignment_strategy.compute_assignments(X, self.representations)
            assignment_matrix = AssignmentMatrix(labels, self.n_clusters)

            # Update step; the current centroids stay valid until the new set is complete
            old_means = self._current_means()
            new_means = self.update_strategy.update(X, labels, old_means)

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'old_means': old_means,
                'new_means': new_means,
                'assignments': labels
            })

            self._set_means(new_means)
            self.n_iter_ = iteration + 1

            objective_value = self.objective.compute(X, new_means, labels).item()
            cluster_state = self._extract_cluster_state()
            counts = assignment_matrix.count_per_cluster()
            empty = assignment_matrix.empty_clusters()
            self.history_.append(AlgorithmState(
                iteration=iteration,
                cluster_state=cluster_state,
                counts=counts.cpu(),
                objective_value=objective_value,
                converged=converged,
                metadata={
                    'max_shift': (new_means - old_means).abs().max().item(),
                    'empty_clusters': empty.tolist()
                }
            ))

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                obj_direction = "↓" if self.objective.minimize else "↑"
                print(f"Iteration {iteration:3d}: objective = {objective_value:.6f} "
                      f"{obj_direction} ({iter_time:.3f}s)")
                if self.verbose >= 2 and len(empty) > 0:
                    print(f"  kept previous centroid for empty clusters {empty.tolist()}")

            if converged:
                self.status_ = FitStatus.CONVERGED
                if self.verbose:
                    print(f"Converged after {self.n_iter_} iterations")
                break

        if not converged:
            self.status_ = FitStatus.MAX_ITERATIONS_REACHED
            if self.verbose:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations",
                              ConvergenceWarning)

        # Final labels always come from the returned centroids
        self.labels_ = self.assignment_strategy.compute_assignments(X, self.representations)
        self._inertia = self.objective.compute(X, self._current_means(), self.labels_).item()
        self._n_features = dimension

        total_time = time.time() - start_time
        if self.verbose:
            print(f"Total fitting time: {total_time:.3f}s")

        self.fitted_ = True
        return self

    def _validate_data(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=self.dtype, device=self.device)

    def _check_fitted(self) -> None:
        if not self.fitted_:
            raise NotFittedError("Model must be fitted before use")

    def _check_n_features(self, X: Tensor) -> None:
        if X.shape[1] != self._n_features:
            raise DimensionMismatchError(f"Model was fitted on {self._n_features} features, "
                                         f"got {X.shape[1]}")

    def _current_means(self) -> Tensor:
        """(K, d) tensor of the current centroids."""
        return torch.stack([
            rep.get_parameters()['mean']
            for rep in self.representations
        ])

    def _set_means(self, means: Tensor) -> None:
        for k, rep in enumerate(self.representations):
            rep.set_parameters({'mean': means[k]})

    def _extract_cluster_state(self) -> ClusterState:
        """Extract current cluster parameters into ClusterState object."""
        means = self._current_means()
        return ClusterState(
            means=means,
            n_clusters=self.n_clusters,
            dimension=means.shape[1]
        )

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers/means."""
        self._check_fitted()
        return self._current_means()

    @property
    def inertia_(self) -> float:
        """Sum of squared distances of the fit samples to their final centroids."""
        self._check_fitted()
        return self._inertia

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device,
            'batch_size': self.batch_size,
            'dtype': self.dtype
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
