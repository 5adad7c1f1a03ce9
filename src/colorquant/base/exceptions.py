"""
Error types raised by the clustering core and the image adapter.

They subclass the builtin exceptions a caller would already catch, so code
written against plain ``ValueError``/``RuntimeError`` keeps working.
"""


class InvalidInputError(ValueError):
    """Empty sample collection, non-positive cluster count, malformed buffers."""


class DimensionMismatchError(ValueError):
    """Vectors of different length were compared.

    Dimensionality is fixed for a whole fit, so this is a programming error
    rather than a data error.
    """


class NotFittedError(RuntimeError):
    """A fitted attribute or method was used before ``fit``."""


class ConvergenceWarning(UserWarning):
    """Iteration cap reached before the centroids settled."""
