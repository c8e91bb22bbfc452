"""Audio buffer, transform, smoothing and spectrum analysis."""

from spectrascope.core.analyzer import SpectrumAnalyzer
from spectrascope.core.audio import AudioBuffer, load_audio
from spectrascope.core.polisher import BallisticsParams, SpectrumPolisher
from spectrascope.core.transform import InvalidSizeError, TransformEngine

__all__ = [
    "AudioBuffer",
    "BallisticsParams",
    "InvalidSizeError",
    "SpectrumAnalyzer",
    "SpectrumPolisher",
    "TransformEngine",
    "load_audio",
]
