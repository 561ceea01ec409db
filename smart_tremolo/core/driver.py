# smart_tremolo/core/driver.py

"""
Block-processing driver tying the tremolo engine to the feature/controller loop.

For every block the driver first feeds the (unprocessed) frames into the
FeatureAccumulator. Each time a full analysis frame is collected, the
controller is consulted and its result applied to the engine. The engine then
processes the block in place. Controller changes therefore take effect from
the start of the next processed block, and the engine always processes every
sample.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .controller import Controller, ControllerFunc, as_controller
from .features import FeatureAccumulator, FRAME_SIZE
from .tremolo import ModulationEngine

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 512

# Called once per block as automation(engine, time_seconds)
Automation = Callable[[ModulationEngine, float], None]


@dataclass
class FrameFeatures:
    """Features of one analysis frame and the parameters chosen for it."""
    time_seconds: float
    rms: float
    zcr: float
    rate_hz: float
    depth: float


@dataclass
class ProcessingReport:
    """Summary of a `run_tremolo` call."""
    frames: int = 0
    blocks: int = 0
    sample_rate: float = 0.0
    features: List[FrameFeatures] = field(default_factory=list)

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate if self.sample_rate > 0 else 0.0

    def per_second(self) -> List[Tuple[int, float, float, int]]:
        """
        Averages the frame features over one-second intervals.

        Returns:
            A list of (second, mean_rms, mean_zcr, n_frames) tuples for every
            second that completed at least one analysis frame.
        """
        if not self.features:
            return []
        seconds = np.array([int(f.time_seconds) for f in self.features])
        rms = np.array([f.rms for f in self.features])
        zcr = np.array([f.zcr for f in self.features])
        summary = []
        for sec in np.unique(seconds):
            mask = seconds == sec
            summary.append((int(sec), float(rms[mask].mean()), float(zcr[mask].mean()), int(mask.sum())))
        return summary


class DepthRamp:
    """
    Scripted depth automation for demonstrations.

    Between `start` and `end` seconds the depth ramps linearly from 20% to
    100% of `base_depth`; after `end` it returns to `base_depth`.
    """

    def __init__(self, base_depth: float, start: float = 5.0, end: float = 8.0):
        if end <= start:
            raise ValueError("Depth ramp end must be after its start.")
        self.base_depth = base_depth
        self.start = start
        self.end = end

    def __call__(self, engine: ModulationEngine, time_seconds: float) -> None:
        if self.start <= time_seconds <= self.end:
            t = (time_seconds - self.start) / (self.end - self.start)
            engine.set_depth(self.base_depth * (0.2 + 0.8 * t))
        elif time_seconds > self.end:
            engine.set_depth(self.base_depth)


def run_tremolo(
    samples: NDArray[np.floating],
    sample_rate: float,
    channels: int,
    engine: ModulationEngine,
    controller: Optional[Union[Controller, ControllerFunc]] = None,
    block_size: int = DEFAULT_BLOCK_SIZE,
    automation: Optional[Automation] = None,
    frame_size: int = FRAME_SIZE
) -> ProcessingReport:
    """
    Runs the tremolo over a whole interleaved buffer, in place.

    Args:
        samples: Interleaved float buffer, modified in place. Either 1D
                 (L then R for stereo) or 2D with shape (frames, channels).
        sample_rate: Sample rate in Hz, used for elapsed-time bookkeeping.
        channels: 1 (mono) or 2 (stereo).
        engine: A configured ModulationEngine.
        controller: Per-frame controller (Controller instance or plain
                    function). Defaults to a no-op controller.
        block_size: Frames per processing block.
        automation: Optional per-block automation hook, called after the
                    block's analysis frames and before it is processed.
        frame_size: Analysis frame length in samples.

    Returns:
        A ProcessingReport with every analysis frame's features.

    Raises:
        ValueError: If `channels` is not 1 or 2, `block_size` is not positive,
                    or the buffer shape does not match `channels`.
    """
    if channels not in (1, 2):
        raise ValueError(f"Only mono or stereo buffers are supported, got {channels} channels.")
    if block_size < 1:
        raise ValueError("Block size must be a positive integer.")

    ctrl = as_controller(controller)
    accumulator = FeatureAccumulator(frame_size)
    if samples.ndim == 2:
        if samples.shape[1] != channels:
            raise ValueError(f"Buffer has {samples.shape[1]} channels, expected {channels}.")
        view = samples
    elif samples.ndim == 1:
        usable = samples.size - samples.size % channels
        view = samples[:usable].reshape(-1, channels)
    else:
        raise ValueError(f"Expected a 1D or 2D buffer, got {samples.ndim} dimensions.")
    frames = view.shape[0]
    report = ProcessingReport(frames=frames, sample_rate=float(sample_rate))

    logger.info(f"Processing {frames} frames ({channels} ch) in blocks of {block_size}, "
                f"controller={type(ctrl).__name__}")

    for start in range(0, frames, block_size):
        block = view[start:start + block_size]
        n = block.shape[0]
        left = block[:, 0]
        right = block[:, 1] if channels == 2 else left

        pos = 0
        while pos < n:
            take = min(accumulator.remaining, n - pos)
            accumulator.push_block(left[pos:pos + take], right[pos:pos + take])
            pos += take
            if accumulator.ready():
                t = (start + pos - 1) / sample_rate
                rms, zcr = accumulator.rms(), accumulator.zcr()
                rate_hz, depth = ctrl.update(t, rms, zcr, engine.rate_hz, engine.depth)
                engine.set_rate_hz(rate_hz)
                engine.set_depth(depth)
                report.features.append(FrameFeatures(t, rms, zcr, engine.rate_hz, engine.depth))
                accumulator.reset()

        if automation is not None:
            automation(engine, (start + n - 1) / sample_rate)

        engine.process(block)
        report.blocks += 1

    logger.info(f"Processed {report.blocks} blocks, {len(report.features)} analysis frames.")
    return report
