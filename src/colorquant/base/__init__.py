"""Base classes and interfaces for color clustering."""

from .interfaces import (
    ClusterRepresentation,
    AssignmentStrategy,
    ParameterUpdater,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    ClusterState,
    AssignmentMatrix,
    AlgorithmState,
    FitStatus
)

from .exceptions import (
    InvalidInputError,
    DimensionMismatchError,
    NotFittedError,
    ConvergenceWarning
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'AssignmentStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',
    'FitStatus',

    # Errors
    'InvalidInputError',
    'DimensionMismatchError',
    'NotFittedError',
    'ConvergenceWarning',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
