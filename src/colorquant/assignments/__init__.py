"""Assignment strategies for color clustering."""

from .hard import HardAssignment

__all__ = [
    'HardAssignment'
]
