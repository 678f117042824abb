# delaytree/config.py
"""
Configuration bundle for the embedding search.

Strategies are chosen by name from explicit registries:

    goal = make_optim_goal("fnn", "autocorrelation", loss_options={"r": 3.0})
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from delaytree.core.exceptions import UnknownStrategy
from delaytree.core.params import DEFAULT_SENTINEL_LOSS
from delaytree.core.strategies import DelayPreselection, LossStrategy, TrajectoryBuilder
from delaytree.numerics.embedding import DelayEmbeddingBuilder
from delaytree.numerics.fnn import FNNStatistic
from delaytree.numerics.preselection import AutocorrelationFunction, RangeFunction


LOSS_STRATEGIES: dict[str, type] = {
    "fnn": FNNStatistic,
}

PRESELECTION_STRATEGIES: dict[str, type] = {
    "range": RangeFunction,
    "autocorrelation": AutocorrelationFunction,
}


@dataclass(frozen=True, slots=True)
class OptimGoal:
    """
    What the search optimizes and how candidates are proposed.

    - loss: scores candidate embeddings (lower is better)
    - preselection: narrows candidate lags before scoring
    - builder: reconstructs trajectories from (lag, channel) pairs
    - sentinel_loss: loss of the root node, worse than any real loss
    """
    loss: LossStrategy
    preselection: DelayPreselection
    builder: TrajectoryBuilder = field(default_factory=DelayEmbeddingBuilder)
    sentinel_loss: float = DEFAULT_SENTINEL_LOSS

    def __post_init__(self) -> None:
        if not isinstance(self.loss, LossStrategy):
            raise TypeError("OptimGoal.loss must implement threshold() and compute_loss().")
        if not isinstance(self.preselection, DelayPreselection):
            raise TypeError("OptimGoal.preselection must implement get_delay_statistic().")
        if not isinstance(self.builder, TrajectoryBuilder):
            raise TypeError("OptimGoal.builder must implement embed().")
        object.__setattr__(self, "sentinel_loss", float(self.sentinel_loss))


def _lookup(registry: Mapping[str, type], name: str) -> type:
    try:
        return registry[name]
    except KeyError as e:
        raise UnknownStrategy(
            f"unknown strategy '{name}', expected one of: {', '.join(sorted(registry))}"
        ) from e


def make_optim_goal(
    loss: str = "fnn",
    preselection: str = "range",
    *,
    loss_options: Mapping[str, Any] | None = None,
    preselection_options: Mapping[str, Any] | None = None,
    sentinel_loss: float = DEFAULT_SENTINEL_LOSS,
) -> OptimGoal:
    """Build an OptimGoal from strategy names and their constructor options."""
    loss_cls = _lookup(LOSS_STRATEGIES, loss)
    pre_cls = _lookup(PRESELECTION_STRATEGIES, preselection)
    return OptimGoal(
        loss=loss_cls(**dict(loss_options or {})),
        preselection=pre_cls(**dict(preselection_options or {})),
        sentinel_loss=sentinel_loss,
    )
