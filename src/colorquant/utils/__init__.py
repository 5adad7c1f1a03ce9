"""Utility functions for color clustering."""

from .convergence import CentroidShift

from .metrics import inertia

from .validation import (
    validate_data,
    check_n_clusters,
    check_max_iter,
    check_random_state
)

from .device import (
    get_default_device,
    parse_device,
    get_batch_size
)

__all__ = [
    # Convergence criteria
    'CentroidShift',

    # Metrics
    'inertia',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_max_iter',
    'check_random_state',

    # Device management
    'get_default_device',
    'parse_device',
    'get_batch_size'
]
