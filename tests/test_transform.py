"""Tests for the TransformEngine module."""

import numpy as np
import pytest

from spectrascope.core.transform import InvalidSizeError, TransformEngine


class TestTransformEngine:
    """Tests for the fixed-size real FFT."""

    @pytest.mark.parametrize("size", [2, 8, 64, 1024])
    def test_bin_count(self, size):
        """Half spectrum has size / 2 + 1 bins."""
        engine = TransformEngine(size)
        out = engine.transform(np.zeros(size))

        assert engine.n_bins == size // 2 + 1
        assert len(out) == size // 2 + 1

    @pytest.mark.parametrize("size", [0, 1, 3, 48, 100, -8])
    def test_rejects_non_power_of_two(self, size):
        """Bad sizes fail loudly instead of being rounded."""
        with pytest.raises(InvalidSizeError):
            TransformEngine(size)

    def test_rejects_non_integer(self):
        with pytest.raises(InvalidSizeError):
            TransformEngine(64.0)

    def test_invalid_size_is_value_error(self):
        with pytest.raises(ValueError):
            TransformEngine(12)

    def test_wrong_window_length(self):
        engine = TransformEngine(16)
        with pytest.raises(ValueError):
            engine.transform(np.zeros(15))

    def test_tone_peaks_at_its_bin(self):
        """A tone with k cycles per window peaks at bin k."""
        size = 64
        n = np.arange(size)
        samples = np.sin(2 * np.pi * 5 * n / size)

        magnitude = np.abs(TransformEngine(size).transform(samples))

        assert np.argmax(magnitude) == 5
        assert np.isclose(magnitude[5], size / 2)

    def test_silence_db_is_zero(self):
        """log10(0) is replaced by 0 rather than -inf."""
        db = TransformEngine(8).magnitudes_db(np.zeros(8))

        assert np.all(np.isfinite(db))
        assert np.all(db == 0.0)

    def test_db_of_known_magnitude(self):
        """DC of a constant window is size * value; 20*log10 of that."""
        db = TransformEngine(8).magnitudes_db(np.full(8, 1.25))

        assert np.isclose(db[0], 20 * np.log10(10.0))
