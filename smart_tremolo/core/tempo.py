# smart_tremolo/core/tempo.py

"""
Tempo sync: converts a BPM and a note division into an LFO rate in Hz.

    Hz = (BPM / 60) / beats_per_cycle
"""

import logging
import re
from typing import Dict, Tuple

logger = logging.getLogger(__name__)

# Beats (quarter notes) per LFO cycle for each supported division
BEATS_PER_CYCLE: Dict[str, float] = {
    "1": 4.0,
    "1/2": 2.0,
    "1/4": 1.0,
    "1/8": 0.5,
    "1/16": 0.25,
}

_RATE_SYNC_PATTERN = re.compile(r"^\s*bpm:\s*(?P<bpm>[^,]+?)\s*,\s*div:\s*(?P<div>\S+)\s*$", re.IGNORECASE)


class RateSyncError(ValueError):
    """Raised for malformed rate-sync strings or unknown divisions."""


def parse_rate_sync(sync: str) -> Tuple[float, str]:
    """
    Parses a rate-sync string of the form 'bpm:120,div:1/8'.

    Returns:
        A tuple (bpm, division).

    Raises:
        RateSyncError: If the string does not match the expected format or the
                       BPM is not a positive number.
    """
    match = _RATE_SYNC_PATTERN.match(sync or "")
    if match is None:
        raise RateSyncError(f"Bad rate-sync format '{sync}'. Expected e.g. 'bpm:120,div:1/8'.")
    try:
        bpm = float(match.group("bpm"))
    except ValueError:
        raise RateSyncError(f"Invalid BPM value in rate-sync '{sync}'.")
    if not bpm > 0:
        raise RateSyncError(f"BPM must be positive, got {bpm}.")
    return bpm, match.group("div")


def division_to_hz(bpm: float, division: str) -> float:
    """
    Converts a tempo and note division to an LFO rate.

    Example:
        >>> division_to_hz(120, "1/8")
        4.0

    Raises:
        RateSyncError: If `division` is not one of 1, 1/2, 1/4, 1/8, 1/16.
    """
    beats = BEATS_PER_CYCLE.get(division.strip())
    if beats is None:
        raise RateSyncError(f"Unsupported division '{division}'. "
                            f"Supported: {', '.join(BEATS_PER_CYCLE)}")
    return (bpm / 60.0) / beats


def rate_from_sync(sync: str) -> float:
    """Parses `sync` and returns the corresponding rate in Hz."""
    bpm, division = parse_rate_sync(sync)
    hz = division_to_hz(bpm, division)
    logger.info(f"Rate sync: bpm={bpm} div={division} -> rate={hz:.4f} Hz")
    return hz
