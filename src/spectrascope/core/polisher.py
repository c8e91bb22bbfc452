"""
Spectrum smoothing and normalization module.

Applies level-meter style ballistics to raw dB spectra so bars rise
quickly and fall slowly, then rescales them for drawing.
"""

from dataclasses import dataclass

import numpy as np

from spectrascope.config import NORMALIZATION_MAX


@dataclass
class BallisticsParams:
    """Per-frame blend factors for rising and falling bins."""

    attack: float = 0.2  # Fast rise
    release: float = 0.05  # Slow decay


class SpectrumPolisher:
    """
    Applies ballistics smoothing and normalization to spectra.

    Stateless: the caller owns the smoothed state and passes it back in.
    """

    def __init__(
        self,
        ballistics: BallisticsParams | None = None,
        log_offset: float = 20.0,
        normalization_max: float = NORMALIZATION_MAX,
        floor: float = 1e-9,
    ):
        """
        Initialize the polisher.

        Args:
            ballistics: Attack/release factors (default: 0.2 attack, 0.05 release).
            log_offset: Shift added to every dB value before rescaling.
            normalization_max: Upper bound of normalized output.
            floor: Minimum range below which a spectrum counts as flat.
        """
        self.ballistics = ballistics or BallisticsParams()
        self.log_offset = log_offset
        self.normalization_max = normalization_max
        self.floor = floor

    def apply_ballistics(
        self,
        state: np.ndarray | None,
        raw: np.ndarray,
    ) -> np.ndarray:
        """
        Blend a new raw spectrum into the smoothed state.

        If there is no state, or its length differs from the raw spectrum,
        the raw values replace it outright.

        Args:
            state: Previous smoothed spectrum, or None.
            raw: New raw dB spectrum.

        Returns:
            New smoothed spectrum (a fresh array).
        """
        raw = np.asarray(raw, dtype=np.float64)
        if state is None or len(state) != len(raw):
            return raw.copy()

        attack = self.ballistics.attack
        release = self.ballistics.release

        falling = raw < state
        return np.where(
            falling,
            raw * release + state * (1.0 - release),
            raw * attack + state * (1.0 - attack),
        )

    def normalize(self, values: np.ndarray) -> np.ndarray:
        """
        Map a dB spectrum to [0, normalization_max].

        The shifted minimum maps to 0 and the maximum to normalization_max.
        A flat spectrum has no range to stretch and returns all zeros.
        """
        shifted = np.asarray(values, dtype=np.float64) + self.log_offset
        if shifted.size == 0:
            return shifted

        min_val = np.min(shifted)
        max_val = np.max(shifted)
        range_val = max_val - min_val

        if range_val < self.floor:
            return np.zeros_like(shifted)

        scaled = (shifted - min_val) * (self.normalization_max / range_val)
        return np.clip(scaled, 0.0, self.normalization_max)
