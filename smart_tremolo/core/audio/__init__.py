# smart_tremolo/core/audio/__init__.py

"""
Core Audio Package.

Contains audio file input/output for the tremolo processor.
"""

from . import io

__all__ = [
    "io",
]
