# smart_tremolo/config/__init__.py

"""
Configuration management for SmartTremolo.

This package handles loading configuration from files (TOML),
environment variables, and internal defaults, providing a unified
configuration object.
"""

from .models import TremoloConfig, TremoloParams
from .loaders import load_configuration

__all__ = [
    "TremoloConfig",
    "TremoloParams",
    "load_configuration",
]
