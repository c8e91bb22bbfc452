"""
Fixed-size real FFT engine.
"""

import numpy as np
from scipy import fft as scipy_fft


class InvalidSizeError(ValueError):
    """Raised when a transform size is not a power of two."""


class TransformEngine:
    """Real-input DFT of a fixed power-of-two size."""

    LOG_MULTIPLIER = 20.0

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise InvalidSizeError(f"Transform size must be an integer, got {size!r}")
        size = int(size)
        if size < 2 or size & (size - 1):
            raise InvalidSizeError(f"Transform size must be a power of two >= 2, got {size}")
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    @property
    def n_bins(self) -> int:
        """Half-spectrum length: size / 2 + 1."""
        return self._size // 2 + 1

    def transform(self, samples: np.ndarray) -> np.ndarray:
        """
        Complex half spectrum of a window.

        Args:
            samples: Exactly `size` real samples.

        Returns:
            Complex array of length n_bins.
        """
        samples = np.asarray(samples, dtype=np.float64)
        if samples.shape != (self._size,):
            raise ValueError(
                f"Expected {self._size} samples, got array of shape {samples.shape}"
            )
        return scipy_fft.rfft(samples)

    def magnitudes_db(self, samples: np.ndarray) -> np.ndarray:
        """
        Per-bin magnitude in dB (20 * log10 |X|).

        Non-finite results (silent bins) are replaced by 0.
        """
        magnitude = np.abs(self.transform(samples))
        with np.errstate(divide="ignore", invalid="ignore"):
            log_mag = self.LOG_MULTIPLIER * np.log10(magnitude)
        log_mag[~np.isfinite(log_mag)] = 0.0
        return log_mag
