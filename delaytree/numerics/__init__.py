# delaytree/numerics/__init__.py
"""Concrete trajectory builder, preselection statistics and loss strategies."""

from .embedding import standardize, genembed, DelayEmbeddingBuilder
from .preselection import RangeFunction, AutocorrelationFunction, local_maxima
from .fnn import FNNStatistic, fnn_fraction, nearest_neighbours


__all__ = [
    "standardize",
    "genembed",
    "DelayEmbeddingBuilder",
    "RangeFunction",
    "AutocorrelationFunction",
    "local_maxima",
    "FNNStatistic",
    "fnn_fraction",
    "nearest_neighbours",
]
