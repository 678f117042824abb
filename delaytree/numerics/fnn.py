# delaytree/numerics/fnn.py
"""
False-nearest-neighbour loss.

For every admissible candidate lag of a channel, the current trajectory is
extended by one coordinate and the fraction of nearest neighbours that fly
apart in the extended embedding (distance ratio above `r`) is the loss.
A perfect unfolding of the attractor has no false neighbours.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from scipy.spatial import cKDTree

from .embedding import genembed
from .preselection import local_maxima


logger = logging.getLogger(__name__)

_SELECTIONS = {"all", "peaks"}


def nearest_neighbours(points: np.ndarray, theiler_window: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Nearest neighbour of every point, skipping points within `theiler_window`
    steps in time (the point itself included).

    Returns (indices, distances). Points without an admissible neighbour get
    index -1 and distance inf.
    """
    n = points.shape[0]
    idx = np.full(n, -1, dtype=int)
    dist = np.full(n, np.inf)
    if n < 2:
        return idx, dist

    # Among the 2w + 2 nearest points at least one lies outside the window.
    k = min(n, 2 * theiler_window + 2)
    tree = cKDTree(points)
    d_k, i_k = tree.query(points, k=k)
    d_k = d_k.reshape(n, -1)
    i_k = i_k.reshape(n, -1)

    for p in range(n):
        for d, j in zip(d_k[p], i_k[p]):
            if j >= n or abs(int(j) - p) <= theiler_window:
                continue
            idx[p] = j
            dist[p] = d
            break
    return idx, dist


def fnn_fraction(
    current: np.ndarray,
    trial: np.ndarray,
    theiler_window: int,
    r: float,
) -> tuple[float, int]:
    """
    Fraction of false nearest neighbours when going from `current` to `trial`.

    Both trajectories must share their last time index; `current` is cut to
    the length of `trial`. Returns (fraction, n_points_evaluated).
    """
    m = trial.shape[0]
    old = current[-m:]
    nn_idx, nn_dist = nearest_neighbours(old, theiler_window)

    valid = (nn_idx >= 0) & (nn_dist > 0)
    n_valid = int(valid.sum())
    if n_valid == 0:
        return 1.0, 0

    rows = np.flatnonzero(valid)
    new_dist = np.linalg.norm(trial[rows] - trial[nn_idx[rows]], axis=1)
    n_false = int(np.count_nonzero(new_dist / nn_dist[rows] > r))
    return n_false / n_valid, n_valid


@dataclass(frozen=True, slots=True)
class FNNStatistic:
    """
    Loss = fraction of false nearest neighbours of the extended embedding.

    selection:
      - "all"  : every positive entry of the padded statistic is scored
      - "peaks": only local maxima of the padded statistic are scored
    Position 0 (lag 0) is always admissible; pairs already in the embedding
    are never scored twice.
    """
    threshold_value: float = 0.0
    r: float = 2.0
    selection: str = "all"

    def __post_init__(self) -> None:
        if not self.r > 1.0:
            raise ValueError(f"FNNStatistic.r must be > 1, got {self.r}")
        if self.selection not in _SELECTIONS:
            raise ValueError(f"selection must be one of: {', '.join(sorted(_SELECTIONS))}")

    def threshold(self) -> float:
        return float(self.threshold_value)

    def admissible_positions(
        self,
        padded_statistic: np.ndarray,
        candidate_lags: Sequence[int],
        channel: int,
        current_lags: Sequence[int],
        current_channels: Sequence[int],
    ) -> list[int]:
        stat = np.asarray(padded_statistic, dtype=float)
        if self.selection == "peaks":
            positions = [0] + local_maxima(stat)
        else:
            positions = [0] + [i for i in range(1, stat.size) if stat[i] > 0]

        taken = set(zip(current_lags, current_channels))
        out: list[int] = []
        seen_lags: set[int] = set()
        for pos in positions:
            lag = 0 if pos == 0 else int(candidate_lags[pos - 1])
            if (lag, channel) in taken or lag in seen_lags:
                continue
            seen_lags.add(lag)
            out.append(pos)
        return out

    def compute_loss(
        self,
        padded_statistic: np.ndarray,
        trajectory: np.ndarray,
        dataset: np.ndarray,
        candidate_lags: Sequence[int],
        theiler_window: int,
        channel: int,
        current_lags: Sequence[int],
        current_channels: Sequence[int],
        *,
        previous_best_loss: float,
        options: dict[str, Any],
    ) -> tuple[list[float], list[int], dict[int, int]]:
        positions = self.admissible_positions(
            padded_statistic, candidate_lags, channel, current_lags, current_channels
        )

        losses: list[float] = []
        selected: list[int] = []
        aux: dict[int, int] = {}
        n_samples = dataset.shape[0]
        for pos in positions:
            lag = 0 if pos == 0 else int(candidate_lags[pos - 1])
            # Need at least a couple of points left once the new lag is applied.
            if max(max(current_lags), lag) >= n_samples - 1:
                continue

            trial = genembed(dataset, list(current_lags) + [lag], list(current_channels) + [channel])
            loss, n_points = fnn_fraction(trajectory, trial, theiler_window, self.r)
            losses.append(loss)
            selected.append(pos)
            aux[lag] = n_points

        logger.debug(
            "FNN channel=%d scored %d of %d admissible lags",
            channel, len(selected), len(positions),
        )
        return losses, selected, aux
