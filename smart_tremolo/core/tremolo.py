# smart_tremolo/core/tremolo.py

"""
Stateful, block-based tremolo (LFO amplitude modulation) engine.

Unlike a one-shot effect function, the engine keeps its LFO phase and its
smoothed rate/depth between calls, so a long signal can be fed through it in
consecutive blocks without discontinuities.
"""

import logging
import math
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from .lfo import LFOShape, generate_lfo, parse_shape
from .smoothing import (
    DEFAULT_SAMPLE_RATE,
    DEFAULT_TIME_CONSTANT,
    DENORMAL_OFFSET,
    ParameterSmoother,
)

logger = logging.getLogger(__name__)

MIN_RATE_HZ = 1e-4
MIN_PHASE_INCREMENT = 1e-9
MAX_STEREO_PHASE_DEG = 180.0

DEFAULT_RATE_HZ = 5.0
DEFAULT_DEPTH = 0.6
DEFAULT_WET = 1.0


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


class ModulationEngine:
    """
    Tremolo core: phase accumulator, LFO, per-channel gain and wet/dry mix.

    Rate and depth pass through one-pole smoothers (10 ms) every sample, so
    parameter changes between blocks never produce clicks. Stereo buffers
    share a single phase; the right channel reads it with a fixed offset.

    All setters clamp silently to their valid range. Non-finite values are
    ignored and the previous setting is kept.

    Setters are not synchronised. Call them from the thread that calls
    `process`, or order them externally before each block.
    """

    def __init__(self, sample_rate: float = DEFAULT_SAMPLE_RATE):
        self._sr = DEFAULT_SAMPLE_RATE
        self._rate_hz = DEFAULT_RATE_HZ
        self._depth = DEFAULT_DEPTH
        self._wet = DEFAULT_WET
        self._stereo_offset = 0.0 # cycles, [0, 0.5]
        self._phase = 0.0 # cycles, [0, 1)
        self._shape = LFOShape.SINE
        self._rate_sm = ParameterSmoother()
        self._depth_sm = ParameterSmoother()
        self.set_sample_rate(sample_rate)

    @classmethod
    def configured(
        cls,
        sample_rate: float,
        rate_hz: float = DEFAULT_RATE_HZ,
        depth: float = DEFAULT_DEPTH,
        wet: float = DEFAULT_WET,
        stereo_phase_deg: float = 0.0,
        shape: Union[LFOShape, str] = LFOShape.SINE
    ) -> "ModulationEngine":
        """
        Builds an engine whose smoothers start at the given parameters.

        The parameters are applied before the sample rate, so the first
        processed sample already uses them (no start-up ramp from defaults).
        """
        engine = cls()
        engine.set_rate_hz(rate_hz)
        engine.set_depth(depth)
        engine.set_wet(wet)
        engine.set_stereo_phase_deg(stereo_phase_deg)
        engine.set_shape(shape)
        engine.set_sample_rate(sample_rate)
        return engine

    # --- Setters ---

    def set_sample_rate(self, fs: float) -> None:
        """
        Sets the sample rate and re-seeds both smoothers.

        Each smoother gets the new rate, a 10 ms time constant and a starting
        value equal to its current target, so reconfiguring never ramps.
        """
        self._sr = float(fs) if fs > 0 and math.isfinite(fs) else DEFAULT_SAMPLE_RATE
        for smoother, target in ((self._rate_sm, self._rate_hz), (self._depth_sm, self._depth)):
            smoother.set_sample_rate(self._sr)
            smoother.set_time_constant(DEFAULT_TIME_CONSTANT)
            smoother.reset(target)
        logger.debug(f"Tremolo sample rate set to {self._sr} Hz")

    def set_depth(self, depth: float) -> None:
        """Target modulation depth, clamped to [0, 1]."""
        if not math.isfinite(depth):
            return
        self._depth = _clamp(float(depth), 0.0, 1.0)

    def set_rate_hz(self, rate_hz: float) -> None:
        """Target LFO rate in Hz, floored at a small positive value."""
        if not math.isfinite(rate_hz):
            return
        self._rate_hz = max(MIN_RATE_HZ, float(rate_hz))

    def set_wet(self, wet: float) -> None:
        """Wet/dry balance, clamped to [0, 1]. 0 is fully dry."""
        if not math.isfinite(wet):
            return
        self._wet = _clamp(float(wet), 0.0, 1.0)

    def set_stereo_phase_deg(self, degrees: float) -> None:
        """Right-channel LFO offset in degrees, clamped to [0, 180]."""
        if not math.isfinite(degrees):
            return
        self._stereo_offset = _clamp(float(degrees), 0.0, MAX_STEREO_PHASE_DEG) / 360.0

    def set_shape(self, shape: Union[LFOShape, str]) -> None:
        """Selects the LFO waveform. Names are parsed with `parse_shape`."""
        self._shape = parse_shape(shape)

    # --- Processing ---

    def process(
        self,
        buffer: Optional[NDArray[np.floating]],
        frames: Optional[int] = None,
        channels: Optional[int] = None
    ) -> None:
        """
        Applies the tremolo to a mutable buffer, in place.

        The buffer is both input and output: its first `frames` frames are
        read, modulated and overwritten. Nothing else is modified.

        Args:
            buffer: Interleaved float samples, either 1D (frames * channels,
                    L then R for stereo) or 2D with shape (frames, channels).
                    Must be a NumPy array. None is a no-op.
            frames: Number of frames to process. Defaults to (and is capped
                    at) the number of whole frames in `buffer`.
            channels: Channel count for 1D buffers (default 1). Ignored for
                      2D buffers, which use `buffer.shape[1]`. Values below 1
                      are a no-op. Channels past the second are left
                      untouched.
        """
        if buffer is None:
            return
        if not isinstance(buffer, np.ndarray):
            raise TypeError("Tremolo buffer must be a NumPy array (processed in place).")

        if buffer.ndim == 2:
            channels = buffer.shape[1]
        elif channels is None:
            channels = 1
        if channels < 1:
            return

        available = buffer.shape[0] if buffer.ndim == 2 else buffer.size // channels
        n = available if frames is None else min(int(frames), available)
        if n <= 0:
            return

        view = buffer[:n] if buffer.ndim == 2 else buffer.reshape(-1)[:n * channels].reshape(n, channels)

        # 1-2. Smoothed control signals, one value per frame
        rates = self._rate_sm.process_block(self._rate_hz, n)
        increments = np.maximum(MIN_PHASE_INCREMENT, rates / self._sr)
        depths = self._depth_sm.process_block(self._depth, n)

        # 3. Phase seen by each frame, then advance the shared accumulator
        advanced = np.cumsum(increments)
        phase_l = np.mod(self._phase + np.concatenate(([0.0], advanced[:-1])), 1.0)
        self._phase = float(np.mod(self._phase + advanced[-1], 1.0))

        # 4-6. LFO -> gain -> wet/dry mix per channel
        view[:, 0] = self._mix(view[:, 0], 1.0 - depths * generate_lfo(self._shape, phase_l))
        if channels >= 2:
            phase_r = np.mod(phase_l + self._stereo_offset, 1.0)
            view[:, 1] = self._mix(view[:, 1], 1.0 - depths * generate_lfo(self._shape, phase_r))

    def _mix(self, x: NDArray[np.floating], gain: NDArray[np.float64]) -> NDArray[np.float64]:
        x = x.astype(np.float64) + DENORMAL_OFFSET
        y = (1.0 - self._wet) * x + self._wet * (x * gain)
        return np.clip(y, -1.0, 1.0)

    # --- Read-only state ---

    @property
    def sample_rate(self) -> float:
        return self._sr

    @property
    def rate_hz(self) -> float:
        """Target LFO rate (before smoothing)."""
        return self._rate_hz

    @property
    def depth(self) -> float:
        """Target depth (before smoothing)."""
        return self._depth

    @property
    def wet(self) -> float:
        return self._wet

    @property
    def stereo_phase_deg(self) -> float:
        return self._stereo_offset * 360.0

    @property
    def shape(self) -> LFOShape:
        return self._shape

    @property
    def phase(self) -> float:
        """Current LFO phase in cycles, always in [0, 1)."""
        return self._phase

    @property
    def smoothed_rate_hz(self) -> float:
        return self._rate_sm.value

    @property
    def smoothed_depth(self) -> float:
        return self._depth_sm.value
