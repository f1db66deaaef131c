import math

import numpy as np
import pytest

from seiscoherence.agc import Agc


def test_constant_trace_is_normalised():
    agc = Agc(4, 10, 0, 0.1)
    out = agc.apply(np.ones(10))
    assert out.shape == (10,)
    assert np.allclose(out, 0.25, rtol=1e-5)


def test_gain_removes_overall_scale():
    rng = np.random.default_rng(3)
    trace = rng.normal(size=64)
    agc = Agc(8, 10, 0, 0.1)
    small = agc.apply(trace)
    large = agc.apply(trace * 1000.0)
    assert np.allclose(small, large, rtol=1e-4, atol=1e-6)


def test_zero_trace_stays_zero():
    out = Agc(5, 10, 0, 0.1).apply(np.zeros(20))
    assert np.array_equal(out, np.zeros(20, dtype=np.float32))


def test_non_finite_samples_become_zero():
    trace = np.ones(12)
    trace[3] = math.nan
    out = Agc(4, 10, 0, 0.1).apply(trace)
    assert np.all(np.isfinite(out))
    assert out[3] == 0.0


def test_input_is_not_modified():
    trace = np.arange(1.0, 21.0)
    original = trace.copy()
    Agc(4, 10, 0, 0.1).apply(trace)
    assert np.array_equal(trace, original)


@pytest.mark.parametrize("threshold", [-0.1, 1.0, 1.5])
def test_out_of_range_threshold_falls_back(threshold):
    assert Agc(4, 10, 1, threshold).threshold == 0.025


def test_threshold_in_range_is_kept():
    assert Agc(4, 10, 1, 0.3).threshold == pytest.approx(0.3)


def test_clone_keeps_settings():
    agc = Agc(7, 11, 1, 0.2)
    copy = agc.clone()
    assert copy is not agc
    assert (copy.window, copy.dwind, copy.detect, copy.threshold) == (7, 11, True, 0.2)


def test_detection_leaves_leading_silence_alone():
    trace = np.concatenate([np.zeros(20), np.ones(40)])
    out = Agc(6, 10, 1, 0.1).apply(trace)
    assert np.array_equal(out[:20], np.zeros(20, dtype=np.float32))
    assert np.all(out[20:50] > 0)