# delaytree/core/dataset.py
from __future__ import annotations

import numpy as np

from .exceptions import InvalidDataset


def as_dataset(dataset) -> np.ndarray:
    """
    Return `dataset` as a 2D float array (samples x channels).

    A 1D input is treated as a single channel.
    """
    x = np.asarray(dataset, dtype=float)
    if x.ndim == 1:
        x = x[:, None]
    elif x.ndim != 2:
        raise InvalidDataset(f"dataset must be 1D or 2D, got shape {x.shape}")

    if x.shape[0] == 0 or x.shape[1] == 0:
        raise InvalidDataset(f"dataset must not be empty, got shape {x.shape}")
    if not np.isfinite(x).all():
        raise InvalidDataset("dataset contains non-finite values (NaN/Inf).")
    return x


def standardize(dataset) -> np.ndarray:
    """Column-wise zero mean / unit variance. Constant columns are only centred."""
    x = as_dataset(dataset)
    centred = x - x.mean(axis=0)
    std = x.std(axis=0)
    std[std == 0] = 1.0
    return centred / std
