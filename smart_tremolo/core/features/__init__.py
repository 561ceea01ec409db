# smart_tremolo/core/features/__init__.py

"""
Feature Extraction Subpackage.

Frame-based, control-rate features (loudness and zero-crossing rate) used to
drive adaptive parameter control of the tremolo.
"""

from .accumulator import FeatureAccumulator, FRAME_SIZE

__all__ = [
    "FeatureAccumulator",
    "FRAME_SIZE",
]
