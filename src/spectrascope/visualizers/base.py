"""
Base class for spectrum visualizer presets.
"""

import abc

from spectrascope.config import DEFAULT_COUNT, DEFAULT_FILL, NORMALIZATION_MAX
from spectrascope.core.analyzer import SpectrumAnalyzer
from spectrascope.core.audio import AudioBuffer
from spectrascope.visualizers.scene import Group


def get_scaled_height(value: float, canvas_height: float, ratio: float) -> float:
    """Map a value in [0, NORMALIZATION_MAX] onto [0, canvas_height * ratio]."""
    return value / NORMALIZATION_MAX * canvas_height * ratio


class BaseVisualizer(abc.ABC):
    """
    Abstract base for all presets.

    A visualizer owns one Group of drawables and one SpectrumAnalyzer
    whose transform size is kept at twice the drawable count.
    """

    preset_name = ""  # Set by register_preset

    def __init__(self, count: int = DEFAULT_COUNT, fill: str = DEFAULT_FILL):
        self.count = count
        self._fill = fill
        self.analyzer = SpectrumAnalyzer(count * 2)
        self.group = Group()

    @property
    def fill(self) -> str:
        return self._fill

    @fill.setter
    def fill(self, value: str):
        self._fill = value
        for obj in self.group.get_objects():
            obj.set(fill=value)

    @abc.abstractmethod
    def init(self, canvas_height: float, canvas_width: float):
        """Lay out `count` drawables for the given canvas geometry."""
        pass

    @abc.abstractmethod
    def draw(self, buffer: AudioBuffer, time: float):
        """Update drawable attributes from the spectrum at `time`."""
        pass

    @abc.abstractmethod
    def update_count(self, count: int):
        """Rebuild with a new drawable count, keeping the on-screen footprint."""
        pass

    def teardown(self):
        """Detach from the canvas and drop the analyzer state."""
        if self.group.canvas is not None:
            self.group.canvas.remove(self.group)
        self.analyzer.reset()
