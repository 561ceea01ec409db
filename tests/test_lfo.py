# tests/test_lfo.py

"""
Tests for the LFO waveform generators and shape parsing in smart_tremolo.core.lfo.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from smart_tremolo.core.lfo import (
    LFOShape,
    generate_lfo,
    lfo_sine,
    lfo_square,
    lfo_square_soft,
    lfo_triangle,
    lookup_shape,
    parse_shape,
)

# --- Test Fixtures ---

@pytest.fixture
def phases():
    """Dense phase grid over one cycle."""
    return np.linspace(0.0, 1.0, 10001, endpoint=False)

# --- Test Cases ---

@pytest.mark.parametrize("shape", [LFOShape.SINE, LFOShape.TRIANGLE, LFOShape.SQUARE_SOFT])
def test_continuous_shapes_stay_in_unit_range(phases, shape):
    lfo = generate_lfo(shape, phases)
    assert lfo.shape == phases.shape
    assert np.all(lfo >= 0.0) and np.all(lfo <= 1.0)

def test_square_is_binary(phases):
    lfo = lfo_square(phases)
    assert set(np.unique(lfo)) <= {0.0, 1.0}
    # High for the first half cycle, low for the second
    assert np.all(lfo[(phases > 0.01) & (phases < 0.49)] == 1.0)
    assert np.all(lfo[(phases > 0.51) & (phases < 0.99)] == 0.0)

def test_sine_values():
    assert_allclose(lfo_sine([0.0, 0.25, 0.5, 0.75]), [0.5, 1.0, 0.5, 0.0], atol=1e-12)

def test_triangle_values():
    assert_allclose(lfo_triangle([0.0, 0.25, 0.5, 0.75]), [0.0, 0.5, 1.0, 0.5], atol=1e-12)
    # Phases outside [0, 1) wrap
    assert_allclose(lfo_triangle(1.25), 0.5, atol=1e-12)

def test_triangle_is_piecewise_linear(phases):
    expected = np.where(phases < 0.5, 2.0 * phases, 2.0 - 2.0 * phases)
    assert_allclose(lfo_triangle(phases), expected, atol=1e-9)
    assert lfo_triangle(phases[:10000].reshape(100, 100)).shape == (100, 100)

def test_square_soft_is_rounded_square():
    assert lfo_square_soft(0.25) == pytest.approx(0.5 * (1.0 + np.tanh(3.0)))
    assert lfo_square_soft(0.75) == pytest.approx(0.5 * (1.0 - np.tanh(3.0)))
    assert lfo_square_soft(0.0) == pytest.approx(0.5)

def test_scalar_phase_accepted():
    assert float(lfo_sine(0.25)) == pytest.approx(1.0)
    assert float(lfo_square(0.1)) == 1.0

@pytest.mark.parametrize("name, expected", [
    ("SINE", LFOShape.SINE),
    ("Triangle", LFOShape.TRIANGLE),
    ("square", LFOShape.SQUARE),
    ("sQuare-soft", LFOShape.SQUARE_SOFT),
    ("square_soft", LFOShape.SQUARE_SOFT),
    ("foo", LFOShape.SINE),
    ("", LFOShape.SINE),
    (None, LFOShape.SINE),
    (LFOShape.TRIANGLE, LFOShape.TRIANGLE),
])
def test_parse_shape(name, expected):
    assert parse_shape(name) is expected

@pytest.mark.parametrize("name, expected", [
    (" Sine ", LFOShape.SINE),
    ("square_soft", LFOShape.SQUARE_SOFT),
    ("SquareSoft", LFOShape.SQUARE_SOFT),
    ("sawtooth", None),
    ("", None),
])
def test_lookup_shape(name, expected):
    assert lookup_shape(name) is expected
