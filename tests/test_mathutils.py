import random

import numpy as np
import pytest

from seiscoherence.mathutils import (
    gaussian_filter_1d,
    gaussian_filter_3d,
    rand_float,
    rand_int,
)


def test_rand_int_stays_in_range_and_is_reproducible():
    first = [rand_int(7, random.Random(3)) for _ in range(5)]
    second = [rand_int(7, random.Random(3)) for _ in range(5)]
    assert first == second
    rng = random.Random(11)
    draws = [rand_int(7, rng) for _ in range(500)]
    assert all(0 <= d < 7 for d in draws)
    assert set(draws) == set(range(7))


def test_rand_int_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        rand_int(0, random.Random(1))


def test_rand_float_in_unit_interval():
    rng = random.Random(5)
    draws = [rand_float(rng) for _ in range(200)]
    assert all(0.0 <= d < 1.0 for d in draws)


def test_constant_signal_is_unchanged():
    out = gaussian_filter_1d(np.full(12, 3.5), 1.0, 0)
    assert np.allclose(out, 3.5)


def test_gradient_of_constant_is_zero():
    out = gaussian_filter_1d(np.full(12, 3.5), 1.0, 1)
    assert np.allclose(out, 0.0)


def test_small_sigma_is_identity():
    values = np.array([1.0, -2.0, 4.0, 0.5])
    out = gaussian_filter_1d(values, 0.2, 0)
    assert np.allclose(out, values)


def test_gradient_of_ramp_recovers_slope_inside():
    values = np.arange(20, dtype=float) * 2.0
    out = gaussian_filter_1d(values, 1.0, 1)
    assert np.allclose(out[5:15], 2.0)


def test_symmetric_input_gives_symmetric_output():
    values = np.array([0.0, 1.0, 5.0, 2.0, 7.0, 2.0, 5.0, 1.0, 0.0])
    out = gaussian_filter_1d(values, 1.0, 0)
    assert np.allclose(out, out[::-1])


def test_too_short_signal_raises():
    with pytest.raises(ValueError):
        gaussian_filter_1d([1.0, 2.0], 1.0, 0)


def test_3d_constant_volume():
    nx, ny, nt = 4, 5, 7
    volume = np.full(nx * ny * nt, 2.0)
    smoothed = gaussian_filter_3d(volume, nx, ny, nt, 1.0, 0)
    gradient = gaussian_filter_3d(volume, nx, ny, nt, 1.0, 1)
    assert smoothed.shape == volume.shape
    assert np.allclose(smoothed, 2.0)
    assert np.allclose(gradient, 0.0)


def test_3d_filter_of_time_only_variation_matches_1d():
    nx, ny, nt = 4, 4, 9
    trace = np.sin(np.arange(nt))
    volume = np.tile(trace, nx * ny)
    out = gaussian_filter_3d(volume, nx, ny, nt, 1.0, 0).reshape(ny, nx, nt)
    expected = gaussian_filter_1d(trace, 1.0, 0)
    for row in out.reshape(-1, nt):
        assert np.allclose(row, expected)


def test_3d_rejects_wrong_size():
    with pytest.raises(ValueError):
        gaussian_filter_3d(np.zeros(10), 2, 2, 2, 1.0, 0)