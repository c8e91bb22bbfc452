"""
Per-frame spectrum extraction.

Turns the slice of audio under the playhead into a smoothed,
normalized magnitude spectrum for the visualizers.
"""

import logging
import math

import numpy as np

from spectrascope.core.audio import AudioBuffer
from spectrascope.core.polisher import SpectrumPolisher
from spectrascope.core.transform import TransformEngine

logger = logging.getLogger(__name__)


class SpectrumAnalyzer:
    """
    Extracts a smoothed spectrum from an AudioBuffer at a playback time.

    Owns a TransformEngine and the smoothed state; the state survives
    between calls until the transform size changes.
    """

    def __init__(
        self,
        transform_size: int,
        polisher: SpectrumPolisher | None = None,
    ):
        """
        Initialize the analyzer.

        Args:
            transform_size: FFT size, a power of two.
            polisher: Smoothing/normalization stage. Uses defaults if None.
        """
        self.engine = TransformEngine(transform_size)
        self.polisher = polisher or SpectrumPolisher()
        self._state: np.ndarray | None = None

    @property
    def transform_size(self) -> int:
        return self.engine.size

    @property
    def n_bins(self) -> int:
        return self.engine.n_bins

    @property
    def smoothed(self) -> np.ndarray | None:
        """Copy of the smoothed dB spectrum, or None before the first call."""
        if self._state is None:
            return None
        return self._state.copy()

    def extract_samples(self, buffer: AudioBuffer, time: float) -> np.ndarray:
        """
        Cut the transform window for `time` out of channel 0.

        A window that would run past the end of the buffer is replaced
        by silence rather than padded.
        """
        all_samples = buffer.get_channel_data(0)
        size = self.engine.size

        percentage = time / buffer.duration
        start_index = max(0, math.floor(len(all_samples) * percentage))
        end_index = start_index + size

        samples = all_samples[start_index:end_index]
        if len(samples) < size:
            samples = np.zeros(size, dtype=np.float32)

        return samples

    def get_spectrum(self, buffer: AudioBuffer, time: float) -> np.ndarray | None:
        """
        Smoothed spectrum at a playback time.

        Args:
            buffer: Decoded audio.
            time: Playback position in seconds.

        Returns:
            Array of length transform_size / 2 + 1 with values in
            [0, NORMALIZATION_MAX], or None for a degenerate buffer.
        """
        if buffer is None or buffer.n_samples == 0 or not buffer.duration > 0:
            return None

        samples = self.extract_samples(buffer, time)
        raw = self.engine.magnitudes_db(samples)

        self._state = self.polisher.apply_ballistics(self._state, raw)
        return self.polisher.normalize(self._state)

    def update_transform_size(self, transform_size: int):
        """
        Swap the engine for one of a new size and drop the smoothed state.

        Raises:
            InvalidSizeError: If transform_size is not a power of two.
        """
        self.engine = TransformEngine(transform_size)
        self._state = None
        logger.debug("Transform size set to %d", transform_size)

    def reset(self):
        """Forget the smoothed state."""
        self._state = None
