# delaytree/numerics/embedding.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from delaytree.core.dataset import as_dataset, standardize
from delaytree.core.exceptions import DimensionMismatch, InvalidDataset, InvalidEmbeddingPars


__all__ = ["as_dataset", "standardize", "genembed", "DelayEmbeddingBuilder"]


def genembed(dataset, lags: Sequence[int], channels: Sequence[int]) -> np.ndarray:
    """
    Generalized delay embedding.

    Coordinate k of the row for time n is `x[n - lags[k], channels[k] - 1]`,
    for n running from max(lags) to N - 1. Channels are 1-based.

    Output shape: (N - max(lags), len(lags)).
    """
    x = as_dataset(dataset)
    n_samples, n_channels = x.shape

    lags = [int(lag) for lag in lags]
    channels = [int(ch) for ch in channels]
    if len(lags) != len(channels):
        raise DimensionMismatch(
            f"lags and channels must have same length, got {len(lags)} vs {len(channels)}"
        )
    if not lags:
        raise DimensionMismatch("at least one (lag, channel) pair is required")
    if min(lags) < 0:
        raise InvalidEmbeddingPars(f"lags must be >= 0, got {lags}")
    if min(channels) < 1 or max(channels) > n_channels:
        raise DimensionMismatch(
            f"channels must lie in [1, {n_channels}], got {channels}"
        )

    max_lag = max(lags)
    n_points = n_samples - max_lag
    if n_points <= 0:
        raise InvalidDataset(
            f"dataset too short for embedding: {n_samples} samples, "
            f"need at least {max_lag + 1}"
        )

    embedded = np.empty((n_points, len(lags)))
    for k, (lag, ch) in enumerate(zip(lags, channels)):
        start = max_lag - lag
        embedded[:, k] = x[start:start + n_points, ch - 1]
    return embedded


@dataclass(frozen=True, slots=True)
class DelayEmbeddingBuilder:
    """Trajectory builder backed by `genembed`."""

    def embed(self, dataset, lags: Sequence[int], channels: Sequence[int]) -> np.ndarray:
        return genembed(dataset, lags, channels)
