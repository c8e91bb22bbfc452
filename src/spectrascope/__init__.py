"""Real-time audio spectrum analysis and playback-synced visualization."""

from spectrascope.core.analyzer import SpectrumAnalyzer
from spectrascope.core.audio import AudioBuffer, load_audio
from spectrascope.core.polisher import BallisticsParams, SpectrumPolisher
from spectrascope.core.transform import InvalidSizeError, TransformEngine
from spectrascope.player.loop import PlaybackRenderLoop
from spectrascope.visualizers import FlatBar, VisualizerFactory

__version__ = "0.1.0"
__all__ = [
    "AudioBuffer",
    "BallisticsParams",
    "FlatBar",
    "InvalidSizeError",
    "PlaybackRenderLoop",
    "SpectrumAnalyzer",
    "SpectrumPolisher",
    "TransformEngine",
    "VisualizerFactory",
    "load_audio",
]
