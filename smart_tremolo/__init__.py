# smart_tremolo/__init__.py

"""
SmartTremolo: an LFO-driven tremolo with smoothed parameters and a
frame-based feature front end for adaptive control.
"""

from .version import __version__

__all__ = ["__version__"]
