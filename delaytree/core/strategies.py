# delaytree/core/strategies.py
from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class LossStrategy(Protocol):
    """Structural interface implemented by every loss statistic (lower is better)."""

    def threshold(self) -> float:
        """Loss at or below which an embedding is considered good enough."""
        ...

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
    ) -> tuple[Sequence[float], Sequence[int], Any]:
        """
        Score the admissible lags of one channel.

        `padded_statistic` is the preselection column for `channel` with a single
        0 prepended, so position 0 stands for lag 0 and position i >= 1 for
        `candidate_lags[i - 1]`.

        Returns (losses, selected_positions, aux) where losses[k] is the loss of
        the embedding extended by the lag at selected_positions[k].
        """
        ...


@runtime_checkable
class DelayPreselection(Protocol):
    """Structural interface implemented by every delay-preselection statistic."""

    def get_delay_statistic(
        self,
        dataset: np.ndarray,
        candidate_lags: Sequence[int],
        theiler_window: int,
        current_lags: Sequence[int],
        current_channels: Sequence[int],
        *,
        options: dict[str, Any],
    ) -> np.ndarray:
        """Return a (len(candidate_lags), n_channels) matrix."""
        ...


@runtime_checkable
class TrajectoryBuilder(Protocol):
    """Reconstructs a trajectory from accumulated (lag, channel) pairs."""

    def embed(
        self,
        dataset: np.ndarray,
        lags: Sequence[int],
        channels: Sequence[int],
    ) -> np.ndarray: ...
