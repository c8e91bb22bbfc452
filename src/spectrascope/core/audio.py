"""
Decoded audio container.

The analyzer only ever reads from an AudioBuffer; decoding itself is
delegated to librosa.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import librosa
import numpy as np


@dataclass(frozen=True)
class AudioBuffer:
    """Immutable per-channel samples with duration and sample rate."""

    channels: tuple[np.ndarray, ...]
    duration: float
    sample_rate: int

    @property
    def n_channels(self) -> int:
        return len(self.channels)

    @property
    def n_samples(self) -> int:
        """Number of samples in channel 0."""
        if not self.channels:
            return 0
        return len(self.channels[0])

    def get_channel_data(self, index: int) -> np.ndarray:
        return self.channels[index]

    @classmethod
    def from_samples(cls, y: np.ndarray, sample_rate: int) -> "AudioBuffer":
        """
        Wrap a mono (n,) or multi-channel (c, n) array.

        Duration is derived from the sample count.
        """
        y = np.asarray(y, dtype=np.float32)
        if y.ndim == 1:
            y = y[np.newaxis, :]
        if y.ndim != 2:
            raise ValueError(f"Expected a 1-D or 2-D sample array, got shape {y.shape}")

        channels = []
        for channel in y:
            channel = channel.copy()
            channel.setflags(write=False)
            channels.append(channel)

        duration = y.shape[1] / sample_rate if sample_rate > 0 else 0.0
        return cls(channels=tuple(channels), duration=duration, sample_rate=sample_rate)


def load_audio(audio_path: Union[str, Path], sr: int | None = None) -> AudioBuffer:
    """
    Decode an audio file into an AudioBuffer.

    Args:
        audio_path: Path to audio file (wav, mp3, flac, ogg).
        sr: Target sample rate. None preserves the original.

    Returns:
        AudioBuffer with every channel of the file.
    """
    y, sr_out = librosa.load(audio_path, sr=sr, mono=False)
    return AudioBuffer.from_samples(y, int(sr_out))
