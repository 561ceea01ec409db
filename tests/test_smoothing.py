# tests/test_smoothing.py

"""
Tests for the one-pole ParameterSmoother in smart_tremolo.core.smoothing.
"""

import math

import pytest
import numpy as np
from numpy.testing import assert_allclose

from smart_tremolo.core.smoothing import (
    DEFAULT_SAMPLE_RATE,
    MIN_TIME_CONSTANT,
    ParameterSmoother,
)

# --- Test Fixtures ---

@pytest.fixture
def smoother():
    """A smoother at 48 kHz with a 10 ms time constant, starting at 0."""
    sm = ParameterSmoother(sample_rate=48000, time_constant=0.01)
    sm.reset(0.0)
    return sm

# --- Test Cases ---

def test_coefficient_matches_time_constant(smoother):
    assert smoother.coefficient == pytest.approx(math.exp(-1.0 / (0.01 * 48000)))
    smoother.set_sample_rate(44100)
    assert smoother.coefficient == pytest.approx(math.exp(-1.0 / (0.01 * 44100)))
    smoother.set_time_constant(0.05)
    assert smoother.coefficient == pytest.approx(math.exp(-1.0 / (0.05 * 44100)))

def test_invalid_sample_rate_uses_default(smoother):
    smoother.set_sample_rate(0)
    assert smoother.sample_rate == DEFAULT_SAMPLE_RATE
    smoother.set_sample_rate(-100)
    assert smoother.sample_rate == DEFAULT_SAMPLE_RATE

def test_time_constant_is_floored(smoother):
    smoother.set_time_constant(0.0)
    assert smoother.time_constant == MIN_TIME_CONSTANT
    smoother.set_time_constant(-1.0)
    assert smoother.time_constant == MIN_TIME_CONSTANT
    assert np.isfinite(smoother.process(1.0))

def test_reset_jumps_without_transition(smoother):
    smoother.reset(0.7)
    assert smoother.value == 0.7
    # Holding the same target stays put (up to the denormal offset)
    assert smoother.process(0.7) == pytest.approx(0.7, abs=1e-15)

def test_converges_monotonically_within_five_tau(smoother):
    """After 5 * tau seconds the output is within 1% of the target."""
    tau, fs, target = 0.01, 48000, 1.0
    n = int(5 * tau * fs)
    values = np.array([smoother.process(target) for _ in range(n)])
    assert np.all(np.diff(values) >= 0.0)
    assert np.all(values <= target)
    assert abs(values[-1] - target) < 0.01 * target

def test_converges_downwards(smoother):
    smoother.reset(2.0)
    values = np.array([smoother.process(0.5) for _ in range(2400)])
    assert np.all(np.diff(values) <= 0.0)
    assert values[-1] == pytest.approx(0.5, abs=0.015)

def test_process_block_matches_per_sample(smoother):
    reference = ParameterSmoother(sample_rate=48000, time_constant=0.01)
    reference.reset(0.2)
    smoother.reset(0.2)
    expected = np.array([reference.process(0.9) for _ in range(1000)])
    block = smoother.process_block(0.9, 1000)
    assert block.shape == (1000,)
    assert_allclose(block, expected, rtol=1e-12, atol=1e-15)
    assert smoother.value == pytest.approx(reference.value, abs=1e-15)

def test_process_block_continues_state(smoother):
    first = smoother.process_block(1.0, 100)
    second = smoother.process_block(1.0, 100)
    assert second[0] > first[-1]
    assert smoother.process_block(1.0, 0).size == 0

def test_tiny_state_does_not_go_subnormal(smoother):
    """Decaying towards zero settles on a normal float, not a subnormal one."""
    smoother.reset(1e-30)
    for _ in range(10000):
        value = smoother.process(0.0)
    assert value == 0.0 or abs(value) >= np.finfo(np.float32).tiny
