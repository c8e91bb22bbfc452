"""Tests for the SpectrumAnalyzer module."""

import numpy as np
import pytest

from spectrascope.config import NORMALIZATION_MAX
from spectrascope.core.analyzer import SpectrumAnalyzer
from spectrascope.core.audio import AudioBuffer
from spectrascope.core.transform import InvalidSizeError


class TestSpectrumAnalyzer:
    """Tests for windowing, smoothing and normalization together."""

    @pytest.mark.parametrize("size", [8, 64, 256])
    def test_spectrum_length_and_range(self, white_noise, size):
        """Output has size / 2 + 1 values within [0, NORMALIZATION_MAX]."""
        analyzer = SpectrumAnalyzer(size)

        for time in (0.0, 0.25, 0.5):
            spectrum = analyzer.get_spectrum(white_noise, time)

            assert len(spectrum) == size // 2 + 1
            assert np.all(spectrum >= 0.0)
            assert np.all(spectrum <= NORMALIZATION_MAX)

    def test_update_transform_size_resets_state(self, white_noise):
        """First call after a resize equals the unsmoothed spectrum."""
        analyzer = SpectrumAnalyzer(128)
        analyzer.get_spectrum(white_noise, 0.1)
        analyzer.get_spectrum(white_noise, 0.2)

        analyzer.update_transform_size(64)
        assert analyzer.smoothed is None

        spectrum = analyzer.get_spectrum(white_noise, 0.3)
        window = analyzer.extract_samples(white_noise, 0.3)
        raw = analyzer.engine.magnitudes_db(window)

        assert len(spectrum) == 33
        assert np.allclose(analyzer.smoothed, raw)
        assert np.allclose(spectrum, analyzer.polisher.normalize(raw))

    def test_update_to_invalid_size_keeps_engine(self, white_noise):
        analyzer = SpectrumAnalyzer(32)
        analyzer.get_spectrum(white_noise, 0.0)

        with pytest.raises(InvalidSizeError):
            analyzer.update_transform_size(48)

        assert analyzer.transform_size == 32
        assert analyzer.smoothed is not None

    def test_smoothing_step_is_bounded(self, white_noise):
        """Each step moves at most 20% (rising) or 5% (falling) toward raw."""
        analyzer = SpectrumAnalyzer(64)
        analyzer.get_spectrum(white_noise, 0.0)

        for time in np.linspace(0.05, 0.9, 12):
            previous = analyzer.smoothed
            raw = analyzer.engine.magnitudes_db(analyzer.extract_samples(white_noise, time))
            analyzer.get_spectrum(white_noise, time)
            current = analyzer.smoothed

            step = np.abs(current - previous)
            gap = np.abs(raw - previous)
            assert np.all(step <= 0.2 * gap + 1e-9)

            falling = raw < previous
            assert np.all(step[falling] <= 0.05 * gap[falling] + 1e-9)

    def test_short_window_becomes_silence(self):
        """A window running past the end is all zeros, not the tail."""
        samples = np.ones(1000, dtype=np.float32)
        buffer = AudioBuffer(channels=(samples,), duration=1.0, sample_rate=1000)
        analyzer = SpectrumAnalyzer(64)

        window = analyzer.extract_samples(buffer, 0.95)

        assert len(window) == 64
        assert np.all(window == 0.0)

    def test_full_window_uses_samples(self):
        samples = np.arange(1000, dtype=np.float32)
        buffer = AudioBuffer(channels=(samples,), duration=1.0, sample_rate=1000)
        analyzer = SpectrumAnalyzer(64)

        window = analyzer.extract_samples(buffer, 0.5)

        assert window[0] == 500.0
        assert len(window) == 64

    def test_window_reads_channel_zero(self):
        left = np.zeros(256, dtype=np.float32)
        right = np.ones(256, dtype=np.float32)
        buffer = AudioBuffer(channels=(left, right), duration=1.0, sample_rate=256)

        window = SpectrumAnalyzer(16).extract_samples(buffer, 0.0)

        assert np.all(window == 0.0)

    def test_silent_buffer(self, silent_buffer):
        """All-zero audio gives a flat spectrum, normalized to zeros."""
        analyzer = SpectrumAnalyzer(8)

        spectrum = analyzer.get_spectrum(silent_buffer, 0.0)

        assert len(spectrum) == 5
        assert np.all(spectrum == 0.0)

    def test_degenerate_buffer_returns_none(self):
        analyzer = SpectrumAnalyzer(8)
        empty = AudioBuffer(channels=(), duration=0.0, sample_rate=44100)
        zero_length = AudioBuffer(
            channels=(np.zeros(0, dtype=np.float32),),
            duration=0.0,
            sample_rate=44100,
        )

        assert analyzer.get_spectrum(empty, 0.0) is None
        assert analyzer.get_spectrum(zero_length, 0.0) is None
        assert analyzer.smoothed is None

    def test_tone_converges_upward(self, silence_then_tone):
        """Repeated frames on a tone rise monotonically toward its level."""
        buffer, tone_bin = silence_then_tone
        analyzer = SpectrumAnalyzer(64)

        # Start from silence so the tone has somewhere to rise from
        analyzer.get_spectrum(buffer, 0.0)
        raw = analyzer.engine.magnitudes_db(analyzer.extract_samples(buffer, 0.5))

        levels = []
        for _ in range(30):
            spectrum = analyzer.get_spectrum(buffer, 0.5)
            levels.append(analyzer.smoothed[tone_bin])

        assert all(b > a for a, b in zip(levels, levels[1:]))
        assert all(level < raw[tone_bin] for level in levels)
        assert np.isclose(levels[-1], raw[tone_bin], rtol=0.01)

        assert np.argmax(spectrum) == tone_bin
        assert np.isclose(spectrum[tone_bin], NORMALIZATION_MAX)

    def test_pure_sine_peak_bin(self, pure_sine):
        """440Hz at 22050Hz with a 1024 transform peaks near bin 20."""
        analyzer = SpectrumAnalyzer(1024)

        spectrum = analyzer.get_spectrum(pure_sine, 0.2)
        expected = round(440.0 * 1024 / pure_sine.sample_rate)

        assert abs(int(np.argmax(spectrum)) - expected) <= 1

    def test_reset_clears_state(self, white_noise):
        analyzer = SpectrumAnalyzer(16)
        analyzer.get_spectrum(white_noise, 0.0)

        analyzer.reset()

        assert analyzer.smoothed is None
