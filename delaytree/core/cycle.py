# delaytree/core/cycle.py
"""
One embedding cycle: propose (lag, channel) additions and decide convergence.

Data flow per cycle:
    current lags/channels -> trajectory -> preselection statistic
    -> candidates scored by the loss strategy -> convergence decision
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from .dataset import standardize
from .exceptions import DimensionMismatch, LossContractError
from .params import EmbeddingPars
from .strategies import DelayPreselection, LossStrategy

if TYPE_CHECKING:
    from delaytree.config import OptimGoal


logger = logging.getLogger(__name__)


def _check_sequences(current_lags: Sequence[int], current_channels: Sequence[int]) -> None:
    if len(current_lags) != len(current_channels):
        raise DimensionMismatch(
            "current_lags and current_channels must have same length, "
            f"got {len(current_lags)} vs {len(current_channels)}"
        )


def embedding_trajectory(goal: OptimGoal, dataset, current_lags: Sequence[int], current_channels: Sequence[int]) -> np.ndarray:
    """Trajectory of the embedding described so far, built by `goal.builder`."""
    _check_sequences(current_lags, current_channels)
    return goal.builder.embed(dataset, current_lags, current_channels)


def get_potential_delays(
    goal: OptimGoal,
    dataset,
    candidate_lags: Sequence[int],
    theiler_window: int,
    current_lags: Sequence[int],
    current_channels: Sequence[int],
    previous_best_loss: float,
    options: dict[str, Any] | None = None,
) -> tuple[list[EmbeddingPars], bool]:
    """
    Run one embedding cycle and return (candidates, converged).

    `dataset` may be univariate (1D) or multivariate (samples x channels) and is
    standardized first. `theiler_window` excludes temporally close points from
    the neighbour search; for multivariate input pass the largest window of
    all channels. `current_lags`/`current_channels` describe the embedding up
    to this cycle, `previous_best_loss` is its loss.

    An empty candidate list with `converged=True` is the normal end of a branch.
    """
    options = {} if options is None else options
    _check_sequences(current_lags, current_channels)
    if theiler_window < 0:
        raise ValueError(f"theiler_window must be >= 0, got {theiler_window}")

    ys = standardize(dataset)
    trajectory = embedding_trajectory(goal, ys, current_lags, current_channels)

    candidates = embedding_cycle(
        goal, trajectory, ys, candidate_lags, theiler_window,
        current_lags, current_channels, previous_best_loss, options,
    )
    if not candidates:
        logger.debug("No candidates for lags=%s channels=%s", list(current_lags), list(current_channels))
        return [], True

    return get_embedding_params_according_to_loss(goal.loss, candidates, previous_best_loss)


def embedding_cycle(
    goal: OptimGoal,
    trajectory: np.ndarray,
    dataset: np.ndarray,
    candidate_lags: Sequence[int],
    theiler_window: int,
    current_lags: Sequence[int],
    current_channels: Sequence[int],
    previous_best_loss: float,
    options: dict[str, Any] | None = None,
) -> list[EmbeddingPars]:
    """Preselection statistic for every channel, then candidate generation."""
    options = {} if options is None else options
    statistic = goal.preselection.get_delay_statistic(
        dataset, candidate_lags, theiler_window, current_lags, current_channels,
        options=options,
    )
    return pick_possible_embedding_params(
        goal.loss, goal.preselection, statistic, trajectory, dataset, candidate_lags,
        theiler_window, current_lags, current_channels, previous_best_loss, options,
    )


def pick_possible_embedding_params(
    loss_strategy: LossStrategy,
    preselection_strategy: DelayPreselection,
    statistic,
    trajectory: np.ndarray,
    dataset,
    candidate_lags: Sequence[int],
    theiler_window: int,
    current_lags: Sequence[int],
    current_channels: Sequence[int],
    previous_best_loss: float,
    options: dict[str, Any] | None = None,
) -> list[EmbeddingPars]:
    """
    Candidate embedding parameters for every channel.

    Each statistic column gets a 0 prepended so lag 0 is always selectable as
    position 0, even when the statistic has no entry for it. The loss strategy
    answers with positions into that padded column: position 0 is lag 0 and
    position i >= 1 is `candidate_lags[i - 1]`.
    """
    options = {} if options is None else options
    ys = np.asarray(dataset, dtype=float)
    if ys.ndim == 1:
        ys = ys[:, None]
    n_channels = ys.shape[1]

    stat = np.asarray(statistic, dtype=float)
    if stat.ndim != 2:
        raise DimensionMismatch(f"delay statistic must be 2D, got shape {stat.shape}")
    if stat.shape[1] != n_channels:
        raise DimensionMismatch(
            f"delay statistic has {stat.shape[1]} columns but dataset has {n_channels} channels"
        )
    if stat.shape[0] != len(candidate_lags):
        raise DimensionMismatch(
            f"delay statistic has {stat.shape[0]} rows but there are {len(candidate_lags)} candidate lags"
        )

    embedding_pars: list[EmbeddingPars] = []
    for channel in range(1, n_channels + 1):
        padded = np.concatenate(([0.0], stat[:, channel - 1]))

        losses, positions, aux = loss_strategy.compute_loss(
            padded, trajectory, ys, candidate_lags, theiler_window, channel,
            current_lags, current_channels,
            previous_best_loss=previous_best_loss, options=options,
        )
        losses = list(np.atleast_1d(np.asarray(losses, dtype=float)))
        raw_positions = np.atleast_1d(np.asarray(positions))
        if raw_positions.size and not np.all(np.mod(raw_positions.astype(float), 1) == 0):
            raise LossContractError(
                f"loss strategy returned non-integral positions {raw_positions.tolist()} (channel {channel})"
            )
        positions = [int(p) for p in raw_positions]

        if len(losses) != len(positions):
            raise LossContractError(
                f"loss strategy returned {len(losses)} losses for {len(positions)} selected lags "
                f"(channel {channel})"
            )
        if not positions:
            continue

        lags: list[int] = []
        for pos in positions:
            if pos < 0 or pos >= padded.size:
                raise LossContractError(
                    f"selected position {pos} outside padded statistic of length {padded.size}"
                )
            lags.append(0 if pos == 0 else int(candidate_lags[pos - 1]))

        for lag, loss in zip(lags, losses):
            embedding_pars.append(EmbeddingPars(lag=lag, channel=channel, loss=loss, aux=aux))

        logger.debug("channel=%d produced %d candidate(s)", channel, len(lags))

    return embedding_pars


def get_embedding_params_according_to_loss(
    loss_strategy: LossStrategy,
    candidates: Sequence[EmbeddingPars],
    previous_best_loss: float,
) -> tuple[list[EmbeddingPars], bool]:
    """
    Filter `candidates` against `previous_best_loss` and decide convergence.

    - no candidate below previous_best_loss      -> ([], True)
    - best candidate at or below the threshold   -> (improving candidates, True)
    - otherwise                                  -> (improving candidates, False)

    Every improving candidate survives, not only the best one, so a cycle can
    open several sibling branches.
    """
    if not candidates:
        return [], True

    threshold = loss_strategy.threshold()
    best = min(c.loss for c in candidates)

    if best >= previous_best_loss:
        logger.debug("converged: best loss %.6g does not improve on %.6g", best, previous_best_loss)
        return [], True

    survivors = [c for c in candidates if c.loss < previous_best_loss]
    if best <= threshold:
        logger.debug("converged: best loss %.6g reached threshold %.6g", best, threshold)
        return survivors, True
    return survivors, False
