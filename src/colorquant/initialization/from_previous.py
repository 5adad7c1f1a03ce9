"""
Initialization from a previous palette or custom centers.

Useful for warm starts, e.g. re-quantizing successive video frames with the
palette of the previous frame.
"""

from typing import List, Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..base.exceptions import DimensionMismatchError, InvalidInputError
from ..representations.centroid import CentroidRepresentation
from ..base.data_structures import ClusterState


class FromPreviousInit(InitializationStrategy):
    """Initialize from previous cluster centers or custom starting points.

    Accepts either:
    - A tensor of shape (n_clusters, dimension) with initial centers
    - A ClusterState object from a previous run
    """

    def __init__(self, initial_state: Union[Tensor, ClusterState]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        self.initial_state = initial_state

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize from previous state.

        Args:
            points: (n, d) samples (used for validation)
            n_clusters: Expected number of clusters
            generator: Ignored

        Returns:
            List of initialized representations
        """
        if points.dim() != 2 or points.shape[0] == 0:
            raise InvalidInputError("Cannot initialize centroids from an empty sample collection")

        if isinstance(self.initial_state, ClusterState):
            centers = self.initial_state.means
        elif isinstance(self.initial_state, Tensor):
            centers = self.initial_state
        else:
            raise TypeError(f"Unknown initial_state type: {type(self.initial_state)}")

        centers = centers.to(device=points.device, dtype=points.dtype)
        dimension = points.shape[1]

        if centers.dim() != 2 or centers.shape[0] != n_clusters:
            raise InvalidInputError(f"Initial centers has shape {tuple(centers.shape)}, "
                                    f"but n_clusters={n_clusters}")
        if centers.shape[1] != dimension:
            raise DimensionMismatchError(f"Initial centers has dimension {centers.shape[1]}, "
                                         f"but data has dimension {dimension}")

        return [CentroidRepresentation.from_mean(centers[k], dtype=points.dtype)
                for k in range(n_clusters)]
