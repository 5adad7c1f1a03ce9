"""Centroid update strategies for color clustering."""

from .mean import MeanUpdater

__all__ = [
    'MeanUpdater'
]
