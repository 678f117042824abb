# test/test_config.py
import pytest

from delaytree.config import (
    LOSS_STRATEGIES,
    PRESELECTION_STRATEGIES,
    OptimGoal,
    make_optim_goal,
)
from delaytree.core import DEFAULT_SENTINEL_LOSS, UnknownStrategy
from delaytree.numerics import AutocorrelationFunction, DelayEmbeddingBuilder, FNNStatistic, RangeFunction


def test_default_goal():
    goal = make_optim_goal()
    assert isinstance(goal.loss, FNNStatistic)
    assert isinstance(goal.preselection, RangeFunction)
    assert isinstance(goal.builder, DelayEmbeddingBuilder)
    assert goal.sentinel_loss == DEFAULT_SENTINEL_LOSS


def test_goal_from_names_and_options():
    goal = make_optim_goal(
        "fnn",
        "autocorrelation",
        loss_options={"r": 3.0, "threshold_value": 0.05, "selection": "peaks"},
        sentinel_loss=1e6,
    )
    assert isinstance(goal.preselection, AutocorrelationFunction)
    assert goal.loss.r == 3.0
    assert goal.loss.threshold() == 0.05
    assert goal.sentinel_loss == 1e6


def test_registries_are_explicit():
    assert set(LOSS_STRATEGIES) == {"fnn"}
    assert set(PRESELECTION_STRATEGIES) == {"range", "autocorrelation"}


def test_unknown_names_raise():
    with pytest.raises(UnknownStrategy):
        make_optim_goal("ccm")
    with pytest.raises(KeyError):
        make_optim_goal("fnn", "continuity")


def test_goal_rejects_objects_missing_the_interface():
    with pytest.raises(TypeError):
        OptimGoal(loss=object(), preselection=RangeFunction())  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        OptimGoal(loss=FNNStatistic(), preselection=object())  # type: ignore[arg-type]


def test_goal_is_immutable():
    goal = make_optim_goal()
    with pytest.raises(AttributeError):
        goal.sentinel_loss = 1.0  # type: ignore[misc]
