# smart_tremolo/core/controller.py

"""
Controller interface for adaptive, per-frame tremolo parameter control.

The processing driver calls `Controller.update()` once per completed analysis
frame (every 1024 samples) with the frame's features and the engine's current
targets. Whatever rate/depth the controller returns is applied to the engine
through its clamping setters before the next block is processed.

Implementations must be lightweight: no blocking, no heavy allocation.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple, Union

logger = logging.getLogger(__name__)

ControlUpdate = Tuple[float, float]
ControllerFunc = Callable[[float, float, float, float, float], ControlUpdate]


class Controller(ABC):
    """Abstract base class for per-frame parameter controllers."""

    @abstractmethod
    def update(
        self,
        time_seconds: float,
        rms: float,
        zcr: float,
        rate_hz: float,
        depth: float
    ) -> ControlUpdate:
        """
        Called once per analysis frame.

        Args:
            time_seconds: Time of the frame's last sample since processing start.
            rms: Root-mean-square loudness of the frame.
            zcr: Zero-crossing rate of the frame (0..1).
            rate_hz: Current target LFO rate.
            depth: Current target depth.

        Returns:
            The (rate_hz, depth) pair to apply. Return the inputs unchanged
            to leave the engine as it is.
        """


class NoOpController(Controller):
    """Default controller: leaves both parameters unchanged."""

    def update(self, time_seconds, rms, zcr, rate_hz, depth):
        return rate_hz, depth


class LoudnessFollower(Controller):
    """
    Maps frame loudness to tremolo depth: depth = clamp(base + gain * rms, 0, 1).

    Louder passages get a deeper tremolo. The rate is left unchanged.
    """

    def __init__(self, base: float = 0.2, gain: float = 1.5):
        self.base = base
        self.gain = gain

    def update(self, time_seconds, rms, zcr, rate_hz, depth):
        return rate_hz, min(1.0, max(0.0, self.base + self.gain * rms))


class FunctionController(Controller):
    """Adapts a plain function with the `update` signature to a Controller."""

    def __init__(self, func: ControllerFunc):
        self._func = func

    def update(self, time_seconds, rms, zcr, rate_hz, depth):
        return self._func(time_seconds, rms, zcr, rate_hz, depth)


def as_controller(controller: Optional[Union[Controller, ControllerFunc]]) -> Controller:
    """
    Normalises a controller argument.

    None becomes a NoOpController, a plain callable is wrapped in a
    FunctionController and Controller instances pass through.
    """
    if controller is None:
        return NoOpController()
    if isinstance(controller, Controller):
        return controller
    if callable(controller):
        return FunctionController(controller)
    raise TypeError(f"Expected a Controller or a callable, got {type(controller).__name__}")
