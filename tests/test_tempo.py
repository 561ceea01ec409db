# tests/test_tempo.py

"""
Tests for tempo-synced LFO rates in smart_tremolo.core.tempo.
"""

import pytest

from smart_tremolo.core.tempo import (
    BEATS_PER_CYCLE,
    RateSyncError,
    division_to_hz,
    parse_rate_sync,
    rate_from_sync,
)

# --- Test Cases ---

@pytest.mark.parametrize("division, expected_hz", [
    ("1", 0.5),
    ("1/2", 1.0),
    ("1/4", 2.0),
    ("1/8", 4.0),
    ("1/16", 8.0),
])
def test_division_to_hz_at_120_bpm(division, expected_hz):
    assert division_to_hz(120.0, division) == pytest.approx(expected_hz)

def test_division_table():
    assert BEATS_PER_CYCLE == {"1": 4.0, "1/2": 2.0, "1/4": 1.0, "1/8": 0.5, "1/16": 0.25}

def test_unknown_division_rejected():
    with pytest.raises(RateSyncError):
        division_to_hz(120.0, "1/3")
    with pytest.raises(ValueError): # RateSyncError is a ValueError
        division_to_hz(120.0, "dotted")

def test_parse_rate_sync():
    assert parse_rate_sync("bpm:120,div:1/8") == (120.0, "1/8")
    assert parse_rate_sync(" BPM: 93.5 , div: 1/16 ") == (93.5, "1/16")

@pytest.mark.parametrize("sync", ["", "120,1/8", "bpm:fast,div:1/8", "bpm:120", "div:1/8,bpm:120", "bpm:0,div:1/4", "bpm:-60,div:1/4"])
def test_parse_rate_sync_rejects_bad_format(sync):
    with pytest.raises(RateSyncError):
        parse_rate_sync(sync)

def test_rate_from_sync():
    assert rate_from_sync("bpm:90,div:1/4") == pytest.approx(1.5)
    with pytest.raises(RateSyncError):
        rate_from_sync("bpm:90,div:3/4")
