# smart_tremolo/core/lfo.py

"""
Low-Frequency Oscillator (LFO) waveform generators for the tremolo.

Every generator takes a phase in cycles (scalar or array, nominally in [0, 1))
and returns an LFO value in [0, 1].
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.signal import sawtooth

logger = logging.getLogger(__name__)

# Steepness of the tanh used for the rounded-edge square
SOFT_SQUARE_DRIVE = 3.0

PhaseLike = Union[float, ArrayLike]


class LFOShape(str, Enum):
    """Available LFO waveform shapes. Values are the canonical names."""
    SINE = "sine"
    TRIANGLE = "triangle"
    SQUARE = "square"
    SQUARE_SOFT = "square-soft"


def lfo_sine(phase: PhaseLike) -> NDArray[np.float64]:
    """Sine LFO: 0.5 * (1 + sin(2*pi*phase))."""
    return 0.5 * (1.0 + np.sin(2.0 * np.pi * np.asarray(phase, dtype=np.float64)))


def lfo_triangle(phase: PhaseLike) -> NDArray[np.float64]:
    """
    Triangle LFO: rises linearly over the first half cycle, falls over the second.

    Starts at 0 for phase 0, peaks at 1 for phase 0.5.
    """
    p = np.asarray(phase, dtype=np.float64)
    tri = sawtooth(2.0 * np.pi * p.reshape(-1), width=0.5).reshape(p.shape) # -1..1
    return 0.5 * (tri + 1.0)


def lfo_square(phase: PhaseLike) -> NDArray[np.float64]:
    """Hard-edged square LFO: 1 while sin(2*pi*phase) >= 0, else 0."""
    s = np.sin(2.0 * np.pi * np.asarray(phase, dtype=np.float64))
    return np.where(s >= 0.0, 1.0, 0.0)


def lfo_square_soft(phase: PhaseLike) -> NDArray[np.float64]:
    """Rounded-edge square LFO: 0.5 * (1 + tanh(3 * sin(2*pi*phase)))."""
    s = np.sin(2.0 * np.pi * np.asarray(phase, dtype=np.float64))
    return 0.5 * (np.tanh(SOFT_SQUARE_DRIVE * s) + 1.0)


LFO_GENERATORS: Dict[LFOShape, Callable[[PhaseLike], NDArray[np.float64]]] = {
    LFOShape.SINE: lfo_sine,
    LFOShape.TRIANGLE: lfo_triangle,
    LFOShape.SQUARE: lfo_square,
    LFOShape.SQUARE_SOFT: lfo_square_soft,
}

# Accepted spellings (lower case) for each shape
_SHAPE_ALIASES: Dict[str, LFOShape] = {
    "sine": LFOShape.SINE,
    "triangle": LFOShape.TRIANGLE,
    "square": LFOShape.SQUARE,
    "square-soft": LFOShape.SQUARE_SOFT,
    "square_soft": LFOShape.SQUARE_SOFT,
    "squaresoft": LFOShape.SQUARE_SOFT,
}


def lookup_shape(name: str) -> Optional[LFOShape]:
    """Returns the shape for an accepted spelling of `name`, or None."""
    return _SHAPE_ALIASES.get(str(name).strip().lower())


def parse_shape(name: Union[str, LFOShape, None]) -> LFOShape:
    """
    Maps a waveform name to an LFOShape, case-insensitively.

    Unrecognised names (and None) resolve to LFOShape.SINE; this never raises.

    Example:
        >>> parse_shape("sQuare-soft")
        <LFOShape.SQUARE_SOFT: 'square-soft'>
        >>> parse_shape("foo")
        <LFOShape.SINE: 'sine'>
    """
    if isinstance(name, LFOShape):
        return name
    if name is None:
        return LFOShape.SINE
    shape = lookup_shape(name)
    if shape is None:
        logger.debug(f"Unrecognised LFO shape '{name}', using sine.")
        return LFOShape.SINE
    return shape


def generate_lfo(shape: LFOShape, phase: PhaseLike) -> NDArray[np.float64]:
    """Evaluates the generator for `shape` at `phase`."""
    return LFO_GENERATORS[shape](phase)
