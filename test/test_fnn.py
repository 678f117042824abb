# test/test_fnn.py
import numpy as np
import pytest

from delaytree.numerics import FNNStatistic, fnn_fraction, genembed, nearest_neighbours, standardize


def test_nearest_neighbours_respects_theiler_window():
    points = np.array([[0.0], [1.0], [2.0], [10.0]])
    idx, dist = nearest_neighbours(points, theiler_window=1)

    assert idx.tolist() == [2, 3, 0, 1]
    assert np.allclose(dist, [2.0, 9.0, 2.0, 9.0])


def test_nearest_neighbours_without_admissible_partner():
    points = np.array([[0.0], [1.0]])
    idx, dist = nearest_neighbours(points, theiler_window=1)
    assert idx.tolist() == [-1, -1]
    assert np.all(np.isinf(dist))


def test_fnn_fraction_counts_pairs_that_fly_apart():
    current = np.array([[0.0], [3.0], [0.05], [3.2]])
    trial = np.column_stack([current[:, 0], [0.0, 0.0, 10.0, 0.0]])

    fraction, n_points = fnn_fraction(current, trial, theiler_window=0, r=2.0)
    assert fraction == pytest.approx(0.5)
    assert n_points == 4


def test_fnn_fraction_aligns_on_last_time_index():
    current = np.arange(12.0)[:, None]
    trial = np.column_stack([current[2:, 0], current[2:, 0]])
    fraction, n_points = fnn_fraction(current, trial, theiler_window=0, r=2.0)
    assert fraction == 0.0
    assert n_points == 10


def test_constructor_validation():
    with pytest.raises(ValueError):
        FNNStatistic(r=1.0)
    with pytest.raises(ValueError):
        FNNStatistic(selection="best")


def test_threshold_is_configurable():
    assert FNNStatistic().threshold() == 0.0
    assert FNNStatistic(threshold_value=0.05).threshold() == 0.05


def test_admissible_positions_skip_pairs_already_embedded():
    loss = FNNStatistic()
    padded = np.array([0.0, 1.0, 1.0, 1.0])
    # lag 0 on channel 1 is the root coordinate, lag 2 on channel 1 already added
    assert loss.admissible_positions(padded, [1, 2, 3], 1, [0, 2], [1, 1]) == [1, 3]
    # on another channel lag 0 is still available
    assert loss.admissible_positions(padded, [1, 2, 3], 2, [0, 2], [1, 1]) == [0, 1, 2, 3]


def test_admissible_positions_peaks_and_zero_statistic():
    padded = np.array([0.0, 0.9, 0.2, 0.8, 0.1])
    assert FNNStatistic(selection="peaks").admissible_positions(padded, [1, 2, 3, 4], 2, [0], [1]) == [0, 1, 3]
    assert FNNStatistic().admissible_positions(np.array([0.0, 0.0, 0.5]), [1, 2], 1, [0], [1]) == [2]


def test_admissible_positions_drop_duplicate_zero_lag():
    padded = np.array([0.0, 1.0, 1.0])
    assert FNNStatistic().admissible_positions(padded, [0, 1], 2, [0], [1]) == [0, 2]


def test_compute_loss_on_a_sine():
    x = standardize(np.sin(np.linspace(0, 16 * np.pi, 400)))
    trajectory = genembed(x, [0], [1])
    lags = [1, 5, 10, 20]
    padded = np.concatenate(([0.0], np.ones(len(lags))))

    losses, positions, aux = FNNStatistic().compute_loss(
        padded, trajectory, x, lags, 2, 1, [0], [1],
        previous_best_loss=99999.0, options={},
    )

    assert positions == [1, 2, 3, 4]
    assert len(losses) == 4
    assert all(0.0 <= L <= 1.0 for L in losses)
    assert set(aux) == {1, 5, 10, 20}
    assert 0 < aux[20] <= 380


def test_compute_loss_skips_lags_longer_than_the_series():
    x = standardize(np.sin(np.linspace(0, 4 * np.pi, 30)))
    trajectory = genembed(x, [0], [1])
    padded = np.array([0.0, 1.0, 1.0])

    losses, positions, _ = FNNStatistic().compute_loss(
        padded, trajectory, x, [2, 40], 1, 1, [0], [1],
        previous_best_loss=99999.0, options={},
    )
    assert positions == [1]
    assert len(losses) == 1
