# test/test_preselection.py
import numpy as np
import pytest

from delaytree.core import InvalidEmbeddingPars
from delaytree.numerics import AutocorrelationFunction, RangeFunction


def _stat(strategy, x, lags):
    return strategy.get_delay_statistic(x, lags, 0, [0], [1], options={})


def test_range_function_shape_and_values():
    x = np.random.default_rng(0).normal(size=(100, 3))
    stat = _stat(RangeFunction(), x, [1, 2, 3, 4, 5])
    assert stat.shape == (5, 3)
    assert np.all(stat == 1.0)


def test_range_function_rejects_negative_lags():
    with pytest.raises(InvalidEmbeddingPars):
        _stat(RangeFunction(), np.zeros(10), [-1, 2])


def test_autocorrelation_quarter_and_half_period():
    n = np.arange(400)
    x = np.sin(2 * np.pi * n / 20)
    stat = _stat(AutocorrelationFunction(), x, [0, 5, 10])

    assert stat.shape == (3, 1)
    assert stat[0, 0] == pytest.approx(0.0)
    assert stat[1, 0] == pytest.approx(1.0, abs=0.05)  # quarter period: decorrelated
    assert stat[2, 0] == pytest.approx(0.0, abs=0.05)  # half period: anti-correlated


def test_autocorrelation_lags_beyond_series_score_zero():
    x = np.random.default_rng(1).normal(size=10)
    stat = _stat(AutocorrelationFunction(), x, [1, 12])
    assert stat[1, 0] == 0.0


def test_autocorrelation_constant_channel_scores_zero():
    x = np.column_stack([np.ones(50), np.random.default_rng(2).normal(size=50)])
    stat = _stat(AutocorrelationFunction(), x, [1, 2])
    assert np.all(stat[:, 0] == 0.0)
    assert np.all(stat[:, 1] > 0.0)
