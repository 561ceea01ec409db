# smart_tremolo/core/__init__.py

"""
Core Processing Package for SmartTremolo.

Contains modules for:
- Parameter smoothing
- LFO waveform generation
- The tremolo modulation engine
- Frame-based feature extraction
- The controller interface and the block-processing driver
- Tempo sync
- Audio I/O
"""

from . import smoothing
from . import lfo
from . import tremolo
from . import features
from . import controller
from . import tempo
from . import driver
from . import audio

__all__ = [
    "smoothing",
    "lfo",
    "tremolo",
    "features",
    "controller",
    "tempo",
    "driver",
    "audio",
]
