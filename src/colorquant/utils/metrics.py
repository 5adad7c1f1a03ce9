"""
Clustering quality metrics.
"""

import torch
from torch import Tensor


def inertia(X: Tensor, labels: Tensor, centers: Tensor) -> float:
    """Compute sum of squared distances of samples to their assigned centers.

    Args:
        X: (n, d) samples
        labels: (n,) cluster labels
        centers: (k, d) cluster centers

    Returns:
        Total inertia (lower is better)
    """
    centers = centers.to(device=X.device, dtype=X.dtype)
    diff = X - centers[labels.long()]
    return torch.sum(diff * diff).item()
