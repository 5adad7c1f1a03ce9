"""Initialization strategies for color clustering."""

from .random import RandomInit
from .from_previous import FromPreviousInit

__all__ = [
    'RandomInit',
    'FromPreviousInit'
]
