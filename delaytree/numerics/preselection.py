# delaytree/numerics/preselection.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from delaytree.core.exceptions import InvalidEmbeddingPars
from .embedding import as_dataset


def _check_lags(candidate_lags: Sequence[int]) -> np.ndarray:
    lags = np.asarray(candidate_lags, dtype=int)
    if lags.ndim != 1 or lags.size == 0:
        raise InvalidEmbeddingPars("candidate_lags must be a non-empty 1D sequence.")
    if np.any(lags < 0):
        raise InvalidEmbeddingPars(f"candidate_lags must be >= 0, got {lags.tolist()}")
    return lags


def local_maxima(values) -> list[int]:
    """
    Positions i >= 1 where values[i] rises above values[i-1] and does not drop
    below values[i+1] (the last position only needs the rise).
    """
    v = np.asarray(values, dtype=float)
    peaks: list[int] = []
    for i in range(1, v.size):
        if v[i] <= v[i - 1]:
            continue
        if i == v.size - 1 or v[i] >= v[i + 1]:
            peaks.append(i)
    return peaks


@dataclass(frozen=True, slots=True)
class RangeFunction:
    """Every candidate lag is equally admissible: a matrix of ones."""

    def get_delay_statistic(
        self,
        dataset,
        candidate_lags: Sequence[int],
        theiler_window: int,
        current_lags: Sequence[int],
        current_channels: Sequence[int],
        *,
        options: dict[str, Any],
    ) -> np.ndarray:
        x = as_dataset(dataset)
        lags = _check_lags(candidate_lags)
        return np.ones((lags.size, x.shape[1]))


@dataclass(frozen=True, slots=True)
class AutocorrelationFunction:
    """
    Decorrelation statistic: 1 - |acf(lag)| per channel.

    High values mark lags whose shifted copy carries information the unshifted
    series does not. Lags that do not fit in the series score 0.
    """

    def get_delay_statistic(
        self,
        dataset,
        candidate_lags: Sequence[int],
        theiler_window: int,
        current_lags: Sequence[int],
        current_channels: Sequence[int],
        *,
        options: dict[str, Any],
    ) -> np.ndarray:
        x = as_dataset(dataset)
        lags = _check_lags(candidate_lags)
        n_samples, n_channels = x.shape

        centred = x - x.mean(axis=0)
        var = centred.var(axis=0)

        stat = np.zeros((lags.size, n_channels))
        for j in range(n_channels):
            if var[j] == 0:
                continue
            col = centred[:, j]
            for i, lag in enumerate(lags):
                if lag >= n_samples:
                    continue
                if lag == 0:
                    acf = 1.0
                else:
                    acf = np.mean(col[:-lag] * col[lag:]) / var[j]
                stat[i, j] = 1.0 - abs(acf)
        return stat
