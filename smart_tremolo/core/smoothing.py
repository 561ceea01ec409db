# smart_tremolo/core/smoothing.py

"""
One-pole exponential smoother for click-free parameter changes.

    y[n] = a * (y[n-1] + tiny) + (1 - a) * target,   a = exp(-1 / (tau * fs))

The tiny additive offset keeps the state from decaying into subnormal floats,
which are very slow on many CPUs.
"""

import logging
import math

import numpy as np
from numpy.typing import NDArray
from scipy.signal import lfilter

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 48000.0
DEFAULT_TIME_CONSTANT = 0.01 # 10 ms
MIN_TIME_CONSTANT = 1e-6
DENORMAL_OFFSET = 1e-20


class ParameterSmoother:
    """
    Single-pole low-pass smoother for one scalar control value.

    The coefficient is recomputed whenever the sample rate or the time
    constant changes, so `process` never runs at a stale coefficient.
    """

    def __init__(
        self,
        sample_rate: float = DEFAULT_SAMPLE_RATE,
        time_constant: float = DEFAULT_TIME_CONSTANT,
        value: float = 0.0
    ):
        self._sample_rate = DEFAULT_SAMPLE_RATE
        self._tau = DEFAULT_TIME_CONSTANT
        self._a = 0.0
        self._value = float(value)
        self.set_sample_rate(sample_rate)
        self.set_time_constant(time_constant)

    # --- Configuration ---

    def set_sample_rate(self, fs: float) -> None:
        """Sets the sample rate (Hz). Non-positive values fall back to 48 kHz."""
        self._sample_rate = float(fs) if fs > 0 and math.isfinite(fs) else DEFAULT_SAMPLE_RATE
        self._update_coefficient()

    def set_time_constant(self, tau: float) -> None:
        """Sets the time constant in seconds, floored at 1 microsecond."""
        self._tau = float(tau) if tau > MIN_TIME_CONSTANT else MIN_TIME_CONSTANT
        self._update_coefficient()

    def reset(self, value: float) -> None:
        """Forces the internal state to `value` with no transition."""
        self._value = float(value)

    def _update_coefficient(self) -> None:
        self._a = math.exp(-1.0 / (self._tau * self._sample_rate))

    # --- Processing ---

    def process(self, target: float) -> float:
        """Advances the smoother by one sample towards `target`."""
        a = self._a
        self._value = a * (self._value + DENORMAL_OFFSET) + (1.0 - a) * target
        return self._value

    def process_block(self, target: float, num_samples: int) -> NDArray[np.float64]:
        """
        Runs `num_samples` steps of `process(target)` at once.

        Args:
            target: Constant target value for the whole block.
            num_samples: Number of samples to generate.

        Returns:
            The smoothed trajectory (float64), one value per sample. The
            internal state ends at the last returned value.
        """
        if num_samples <= 0:
            return np.empty(0, dtype=np.float64)
        a = self._a
        # y[n] = a*y[n-1] + u with a constant drive u; zi carries a*y[-1]
        drive = (1.0 - a) * target + a * DENORMAL_OFFSET
        x = np.full(num_samples, drive, dtype=np.float64)
        y, _ = lfilter([1.0], [1.0, -a], x, zi=[a * self._value])
        self._value = float(y[-1])
        return y

    # --- Read-only state ---

    @property
    def value(self) -> float:
        return self._value

    @property
    def coefficient(self) -> float:
        return self._a

    @property
    def time_constant(self) -> float:
        return self._tau

    @property
    def sample_rate(self) -> float:
        return self._sample_rate
