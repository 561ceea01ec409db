# smart_tremolo/core/features/accumulator.py

"""
Frame accumulator for the control-rate features (RMS and zero-crossing rate).

Stereo input is folded to mid, 0.5 * (L + R), before it enters the window.
"""

import logging
from collections import deque
from typing import Deque

import numpy as np
from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

# ~21 ms at 48 kHz
FRAME_SIZE = 1024


class FeatureAccumulator:
    """
    Fixed-capacity FIFO window of mono-folded samples.

    Once the window holds more than `frame_size` samples the oldest ones are
    evicted. The accumulator is `ready()` only when it holds exactly
    `frame_size` samples; after reading the features, call `reset()`.
    """

    def __init__(self, frame_size: int = FRAME_SIZE):
        if frame_size < 1:
            raise ValueError("Frame size must be a positive integer.")
        self._frame_size = int(frame_size)
        self._window: Deque[float] = deque(maxlen=self._frame_size)

    def push_sample(self, left: float, right: float) -> None:
        """Appends one stereo frame (pass the same value twice for mono)."""
        self._window.append(0.5 * (float(left) + float(right)))

    def push_block(self, left: ArrayLike, right: ArrayLike) -> None:
        """Appends many frames at once; same eviction rule as `push_sample`."""
        mid = 0.5 * (np.asarray(left, dtype=np.float64) + np.asarray(right, dtype=np.float64))
        self._window.extend(mid.tolist())

    def ready(self) -> bool:
        return len(self._window) == self._frame_size

    def reset(self) -> None:
        self._window.clear()

    def frame(self) -> NDArray[np.float64]:
        """Returns a copy of the current window, oldest sample first."""
        return np.fromiter(self._window, dtype=np.float64, count=len(self._window))

    def rms(self) -> float:
        """Root-mean-square of the window. Returns 0.0 for an empty window."""
        if not self._window:
            return 0.0
        x = self.frame()
        return float(np.sqrt(np.mean(x * x)))

    def zcr(self) -> float:
        """
        Zero-crossing rate: sign changes per adjacent pair, in [0, 1].

        Zero counts as non-negative. Returns 0.0 for fewer than 2 samples.
        """
        if len(self._window) < 2:
            return 0.0
        negative = self.frame() < 0.0
        crossings = np.count_nonzero(negative[1:] != negative[:-1])
        return crossings / (len(negative) - 1)

    @property
    def frame_size(self) -> int:
        return self._frame_size

    @property
    def remaining(self) -> int:
        """Samples still needed before the window is ready."""
        return self._frame_size - len(self._window)

    def __len__(self) -> int:
        return len(self._window)
