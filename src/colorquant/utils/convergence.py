"""
Convergence criteria for the color clustering loop.

The criterion compares consecutive centroid sets with an absolute
per-dimension tolerance in channel units.
"""

from typing import Dict, Any
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion
from ..base.exceptions import DimensionMismatchError


class CentroidShift(ConvergenceCriterion):
    """Converged when every dimension of every centroid moved less than ``tol``.

    All-pairs, all-dimensions AND with a strict ``<`` comparison: a single
    coordinate moving by ``tol`` or more means not converged.
    """

    def __init__(self, tol: float = 1e-3):
        """
        Args:
            tol: Absolute tolerance, in the same units as the sample values
        """
        super().__init__()
        if tol < 0:
            raise ValueError(f"tol must be non-negative, got {tol}")
        self.tol = tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Compare ``old_means`` against ``new_means``."""
        old_means: Tensor = current_state['old_means']
        new_means: Tensor = current_state['new_means']

        if old_means.shape != new_means.shape:
            raise DimensionMismatchError(f"Cannot compare centroids of shape "
                                         f"{tuple(old_means.shape)} and {tuple(new_means.shape)}")

        shift = (new_means - old_means.to(new_means.device)).abs()
        max_shift = shift.max().item() if shift.numel() > 0 else 0.0
        converged = bool((shift < self.tol).all().item())

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': max_shift,
            'converged': converged
        })

        return converged
