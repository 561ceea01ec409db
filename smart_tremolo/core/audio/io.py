# smart_tremolo/core/audio/io.py

"""
Loading and saving of audio files with soundfile.

Audio is exchanged with the rest of the package as a flat, interleaved
float32 buffer plus sample rate and channel count (1 or 2).
"""

import logging
import os
from pathlib import Path
from typing import NamedTuple

import numpy as np
import soundfile as sf
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

SUPPORTED_CHANNELS = (1, 2)
TEST_PAD_FREQS = (220.0, 330.0) # gentle dyad, L/R
TEST_PAD_AMPLITUDE = 0.2


class AudioIOError(Exception):
    """Raised when an audio file cannot be read or written."""


class AudioFormatError(AudioIOError):
    """Raised for malformed files or unsupported encodings/channel counts."""


class AudioData(NamedTuple):
    """Interleaved audio buffer with its format."""
    samples: NDArray[np.float32] # (frames * channels,), L then R
    sample_rate: int
    channels: int

    @property
    def frames(self) -> int:
        return self.samples.size // self.channels

    @property
    def duration(self) -> float:
        return self.frames / float(self.sample_rate)


def load_audio(file_path: Path) -> AudioData:
    """
    Loads a mono or stereo audio file into an interleaved float32 buffer.

    Args:
        file_path: Path to the audio file (any format soundfile can read).

    Returns:
        AudioData with samples normalised to [-1, 1].

    Raises:
        FileNotFoundError: If the file does not exist.
        AudioFormatError: If the file cannot be decoded or has more than two
                          channels.
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Audio input file not found: {file_path}")

    logger.info(f"Loading audio from: {file_path}")
    try:
        # always_2d gives (frames, channels) for mono as well
        data, sample_rate = sf.read(str(file_path), dtype="float32", always_2d=True)
    except RuntimeError as e:
        raise AudioFormatError(f"Could not decode audio file {file_path}: {e}") from e

    channels = data.shape[1]
    if channels not in SUPPORTED_CHANNELS:
        raise AudioFormatError(f"Only mono or stereo audio is supported, "
                               f"'{file_path.name}' has {channels} channels.")

    samples = np.ascontiguousarray(data).reshape(-1)
    logger.debug(f"Audio loaded. Frames: {data.shape[0]}, channels: {channels}, SR: {sample_rate}")
    return AudioData(samples, int(sample_rate), channels)


def save_audio(audio: AudioData, output_path: Path, subtype: str = "PCM_16") -> None:
    """
    Writes an interleaved buffer to a WAV file.

    Data is clipped to [-1, 1]. The file is first written next to the target
    and then moved into place, so a failed write never leaves a truncated
    output behind.

    Raises:
        AudioIOError: If writing fails.
    """
    output_path = Path(output_path)
    logger.info(f"Saving audio to: {output_path} (sr={audio.sample_rate}, subtype={subtype})")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = np.clip(audio.samples, -1.0, 1.0).reshape(-1, audio.channels)
    tmp_path = output_path.with_name(f".{output_path.name}.part")
    try:
        sf.write(str(tmp_path), data, audio.sample_rate, subtype=subtype, format="WAV")
        os.replace(tmp_path, output_path)
    except (RuntimeError, ValueError, OSError) as e:
        tmp_path.unlink(missing_ok=True)
        raise AudioIOError(f"Could not write audio file {output_path}: {e}") from e
    logger.info(f"Audio successfully saved to {output_path}")


def make_test_pad(seconds: float = 10.0, sample_rate: int = 44100) -> AudioData:
    """
    Generates a quiet stereo sine dyad (220 Hz left, 330 Hz right).

    A raised-cosine envelope fades the pad in and out over its duration.
    Used when the default input file is missing.
    """
    frames = max(1, int(seconds * sample_rate))
    t = np.arange(frames, dtype=np.float64) / sample_rate
    env = 0.5 * (1.0 - np.cos(2.0 * np.pi * np.minimum(t / seconds, 1.0)))
    left = TEST_PAD_AMPLITUDE * env * np.sin(2.0 * np.pi * TEST_PAD_FREQS[0] * t)
    right = TEST_PAD_AMPLITUDE * env * np.sin(2.0 * np.pi * TEST_PAD_FREQS[1] * t)
    samples = np.stack([left, right], axis=1).astype(np.float32).reshape(-1)
    return AudioData(samples, int(sample_rate), 2)
