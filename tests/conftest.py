"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import itertools

import numpy as np
import pygame
import pytest

from spectrascope.core.audio import AudioBuffer
from spectrascope.player.scheduler import FrameScheduler

# Default sample rate for test audio
TEST_SR = 22050


class FakeScheduler(FrameScheduler):
    """Deterministic scheduler: frames fire only when tick() is called."""

    def __init__(self):
        self._callbacks = {}
        self._handles = itertools.count(1)
        self.requested = 0
        self.cancelled = 0
        self.time = 0.0

    def request_frame(self, callback):
        handle = next(self._handles)
        self._callbacks[handle] = callback
        self.requested += 1
        return handle

    def cancel_frame(self, handle):
        if self._callbacks.pop(handle, None) is not None:
            self.cancelled += 1

    @property
    def pending(self):
        return len(self._callbacks)

    def tick(self):
        self.time += 1 / 60
        due = self._callbacks
        self._callbacks = {}
        for callback in due.values():
            callback(self.time)
        return len(due)


class RecordingDrawer:
    """Stands in for the preset factory and records draw calls."""

    def __init__(self):
        self.calls = []

    def draw_all(self, buffer, time):
        self.calls.append((buffer, time))


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    """Initialize pygame once against the dummy drivers."""
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def sample_rate() -> int:
    """Default sample rate for tests."""
    return TEST_SR


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def drawer() -> RecordingDrawer:
    return RecordingDrawer()


@pytest.fixture
def pure_sine(sample_rate: int) -> AudioBuffer:
    """
    A 440Hz sine wave (A4 note), 1 second, mono.
    """
    duration = 1.0
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    return AudioBuffer.from_samples(y, sample_rate)


@pytest.fixture
def white_noise(sample_rate: int) -> AudioBuffer:
    """
    One second of reproducible white noise.
    """
    rng = np.random.default_rng(42)
    y = rng.standard_normal(sample_rate) * 0.3
    return AudioBuffer.from_samples(y, sample_rate)


@pytest.fixture
def silent_buffer() -> AudioBuffer:
    """512 zero samples lasting exactly one second."""
    return AudioBuffer(
        channels=(np.zeros(512, dtype=np.float32),),
        duration=1.0,
        sample_rate=512,
    )


@pytest.fixture
def silence_then_tone() -> tuple[AudioBuffer, int]:
    """
    1024 samples: 512 of silence, then a tone that lands exactly on
    bin 8 of a 64-point transform.

    Returns:
        Tuple of (buffer, tone_bin).
    """
    sr = 1024
    size = 64
    tone_bin = 8
    n = np.arange(512)
    tone = 0.5 * np.sin(2 * np.pi * tone_bin * n / size)
    y = np.concatenate([np.zeros(512), tone])
    return AudioBuffer.from_samples(y, sr), tone_bin


@pytest.fixture
def temp_audio_file(tmp_path, pure_sine):
    """Write a short stereo wav for file I/O tests."""
    import soundfile as sf

    y = pure_sine.get_channel_data(0)
    stereo = np.stack([y, y * 0.5], axis=1)
    audio_path = tmp_path / "test_audio.wav"
    sf.write(audio_path, stereo, pure_sine.sample_rate)
    return audio_path
