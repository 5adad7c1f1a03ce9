"""
Input validation utilities.

Converts sample collections to tensors and checks the parameters of a fit
before any clustering work starts.
"""

from typing import Optional, Union
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import InvalidInputError


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  copy: bool = False) -> Tensor:
    """Validate and convert a sample collection to a 2D tensor.

    Args:
        X: Samples (tensor, numpy array, or list of vectors)
        dtype: Target floating dtype
        device: Target device
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        copy: Whether to force a copy

    Returns:
        Validated (n, d) tensor

    Raises:
        InvalidInputError: If validation fails
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device, copy=copy)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        if len(X) == 0:
            raise InvalidInputError("Sample collection is empty")
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (ValueError, TypeError) as e:
            raise InvalidInputError(f"Samples are not a rectangular numeric array: {e}") from e
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() != 2:
        raise InvalidInputError(f"Expected 2D array of samples, got {X.dim()}D")

    n_samples, n_features = X.shape

    if n_samples < ensure_min_samples:
        raise InvalidInputError(f"Found {n_samples} samples, but need at least "
                                f"{ensure_min_samples}")
    if n_features < 1:
        raise InvalidInputError("Samples have no features")

    if ensure_finite:
        if torch.isnan(X).any():
            raise InvalidInputError("Input contains NaN values")
        if torch.isinf(X).any():
            raise InvalidInputError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int) -> None:
    """Validate number of clusters.

    Only ``n_clusters >= 1`` is required; more clusters than distinct
    samples is allowed and yields duplicate centroids.

    Raises:
        InvalidInputError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise InvalidInputError(f"n_clusters must be int, got {type(n_clusters).__name__}")

    if n_clusters < 1:
        raise InvalidInputError(f"n_clusters must be positive, got {n_clusters}")


def check_max_iter(max_iter: int) -> None:
    """Validate the iteration cap."""
    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
        raise InvalidInputError(f"max_iter must be int, got {type(max_iter).__name__}")
    if max_iter < 1:
        raise InvalidInputError(f"max_iter must be positive, got {max_iter}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None
    """
    if random_state is None:
        return None
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")
