# tests/test_cli.py

"""
Tests for the smart-tremolo CLI (smart_tremolo.cli.main).
"""

import os

import pytest
import numpy as np
import soundfile as sf
from pathlib import Path
from click.testing import CliRunner
from numpy.testing import assert_allclose

from smart_tremolo.cli.main import cli

# --- Test Fixtures ---

@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    """A CliRunner working in an empty directory without SMART_TREMOLO_* overrides."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("SMART_TREMOLO_"):
            monkeypatch.delenv(key)
    return CliRunner()

@pytest.fixture
def input_wav(tmp_path: Path) -> Path:
    """Two seconds of a stereo 440 Hz tone at 22.05 kHz."""
    sr = 22050
    t = np.arange(2 * sr) / sr
    tone = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    path = tmp_path / "in.wav"
    sf.write(str(path), np.stack([tone, tone], axis=1), sr, subtype="PCM_16")
    return path

# --- Test Cases ---

def test_cli_help(runner: CliRunner):
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "SmartTremolo" in result.output
    assert "process" in result.output
    assert "shapes" in result.output

def test_cli_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "smart-tremolo, version 1.0.0" in result.output.lower()

def test_cli_shapes(runner: CliRunner):
    result = runner.invoke(cli, ["shapes"])
    assert result.exit_code == 0
    assert result.output.split() == ["sine", "triangle", "square", "square-soft"]

def test_process_stereo(runner: CliRunner, input_wav: Path, tmp_path: Path):
    out = tmp_path / "out.wav"
    result = runner.invoke(cli, [
        "process", "--in", str(input_wav), "--out", str(out),
        "--rate", "4", "--depth", "1", "--shape", "TRIANGLE", "--stereophase", "0",
    ])
    assert result.exit_code == 0, result.output
    assert "Processed 'in.wav'" in result.output
    processed, sr = sf.read(str(out), dtype="float64")
    original, _ = sf.read(str(input_wav), dtype="float64")
    assert sr == 22050 and processed.shape == original.shape
    assert_allclose(processed[:, 0], processed[:, 1])
    assert np.max(np.abs(processed)) <= np.max(np.abs(original)) + 1e-4
    assert not np.allclose(processed, original, atol=1e-3)

def test_process_dry_mix_is_transparent(runner: CliRunner, input_wav: Path, tmp_path: Path):
    out = tmp_path / "dry.wav"
    result = runner.invoke(cli, ["process", "-i", str(input_wav), "-o", str(out), "--wet", "0"])
    assert result.exit_code == 0, result.output
    processed, _ = sf.read(str(out), dtype="float64")
    original, _ = sf.read(str(input_wav), dtype="float64")
    assert_allclose(processed, original, atol=1e-4)

def test_process_analyze_prints_table(runner: CliRunner, input_wav: Path, tmp_path: Path):
    result = runner.invoke(cli, [
        "process", "--in", str(input_wav), "--out", str(tmp_path / "a.wav"),
        "--analyze", "--follow-loudness", "--demo",
    ])
    assert result.exit_code == 0, result.output
    assert "Per-second analysis" in result.output
    assert "0s..1s" in result.output

def test_process_rate_sync(runner: CliRunner, input_wav: Path, tmp_path: Path):
    result = runner.invoke(cli, [
        "process", "--in", str(input_wav), "--out", str(tmp_path / "s.wav"),
        "--rate-sync", "bpm:120,div:1/8",
    ])
    assert result.exit_code == 0, result.output

def test_process_bad_rate_sync_keeps_going(runner: CliRunner, input_wav: Path, tmp_path: Path):
    out = tmp_path / "s.wav"
    result = runner.invoke(cli, [
        "process", "--in", str(input_wav), "--out", str(out), "--rate-sync", "bpm:120,div:1/3",
    ])
    assert result.exit_code == 0, result.output
    assert out.exists()

@pytest.mark.parametrize("option, value", [
    ("--depth", "1.5"),
    ("--wet", "-0.1"),
    ("--rate", "0"),
    ("--stereophase", "200"),
    ("--block-size", "0"),
    ("--rate", "inf"),
    ("--rate", "nan"),
    ("--depth", "nan"),
])
def test_process_rejects_out_of_range(runner: CliRunner, input_wav: Path, tmp_path: Path, option, value):
    result = runner.invoke(cli, ["process", "--in", str(input_wav), "--out", str(tmp_path / "x.wav"), option, value])
    assert result.exit_code == 2
    assert not (tmp_path / "x.wav").exists()

def test_process_missing_explicit_input(runner: CliRunner, tmp_path: Path):
    result = runner.invoke(cli, ["process", "--in", str(tmp_path / "nope.wav"), "--out", str(tmp_path / "x.wav")])
    assert result.exit_code == 2

def test_process_malformed_input(runner: CliRunner, tmp_path: Path):
    bad = tmp_path / "bad.wav"
    bad.write_bytes(b"not audio at all")
    out = tmp_path / "x.wav"
    result = runner.invoke(cli, ["process", "--in", str(bad), "--out", str(out)])
    assert result.exit_code == 1
    assert "Could not decode" in result.output
    assert not out.exists()

def test_process_generates_default_input(runner: CliRunner, tmp_path: Path):
    """Without --in, a missing default input is replaced by a generated test pad."""
    config = tmp_path / "cfg.toml"
    config.write_text("[processing]\ntest_pad_seconds = 1.0\ntest_pad_sample_rate = 8000\n")
    result = runner.invoke(cli, ["-c", str(config), "process"])
    assert result.exit_code == 0, result.output
    generated = tmp_path / "assets" / "input.wav"
    output = tmp_path / "assets" / "output.wav"
    assert generated.exists() and output.exists()
    info = sf.info(str(generated))
    assert info.channels == 2 and info.samplerate == 8000
