"""
Preset registry and the factory that owns the active visualizer.
"""

import logging

from spectrascope.config import DEFAULT_COUNT, DEFAULT_FILL
from spectrascope.core.audio import AudioBuffer
from spectrascope.visualizers.base import BaseVisualizer
from spectrascope.visualizers.scene import Canvas

logger = logging.getLogger(__name__)

# Preset name -> visualizer class
PRESETS: dict[str, type[BaseVisualizer]] = {}


def register_preset(name: str):
    """Class decorator adding a visualizer class to PRESETS under `name`."""

    def decorator(cls: type[BaseVisualizer]) -> type[BaseVisualizer]:
        if name in PRESETS and PRESETS[name] is not cls:
            raise ValueError(f"Preset {name!r} is already registered to {PRESETS[name].__name__}")
        PRESETS[name] = cls
        cls.preset_name = name
        return cls

    return decorator


def available_presets() -> list[str]:
    return sorted(PRESETS)


def create_visualizer(
    name: str,
    count: int = DEFAULT_COUNT,
    fill: str = DEFAULT_FILL,
) -> BaseVisualizer:
    """
    Instantiate a preset by name.

    Raises:
        KeyError: If no preset is registered under `name`.
    """
    try:
        cls = PRESETS[name]
    except KeyError:
        raise KeyError(
            f"Unknown preset {name!r}. Available: {', '.join(available_presets())}"
        ) from None
    return cls(count, fill)


class VisualizerFactory:
    """
    Holds the active visualizer and keeps its group on the canvas.

    Selecting a new preset tears the old one down first.
    """

    def __init__(self, canvas: Canvas | None = None):
        self.canvas = canvas
        self.active: BaseVisualizer | None = None

    def attach(self, canvas: Canvas | None):
        """Move the active visualizer (if any) onto another canvas."""
        self.canvas = canvas
        if self.active is None:
            return
        if self.active.group.canvas is not None:
            self.active.group.canvas.remove(self.active.group)
        if canvas is not None:
            canvas.add(self.active.group)
            self.active.init(canvas.get_height(), canvas.get_width())

    def select(
        self,
        name: str,
        count: int | None = None,
        fill: str | None = None,
    ) -> BaseVisualizer:
        """
        Replace the active visualizer with a new preset instance.

        Count and fill default to those of the outgoing visualizer.
        """
        previous = self.active
        if count is None:
            count = previous.count if previous else DEFAULT_COUNT
        if fill is None:
            fill = previous.fill if previous else DEFAULT_FILL

        visualizer = create_visualizer(name, count, fill)
        self.clear()

        self.active = visualizer
        if self.canvas is not None:
            self.canvas.add(visualizer.group)
            visualizer.init(self.canvas.get_height(), self.canvas.get_width())

        logger.info("Selected preset %s (count=%d)", name, count)
        return visualizer

    def clear(self):
        """Tear down the active visualizer."""
        if self.active is not None:
            self.active.teardown()
            self.active = None

    def draw_all(self, buffer: AudioBuffer, time: float):
        if self.active is None:
            return
        self.active.draw(buffer, time)

    def update_count(self, count: int):
        if self.active is None:
            return
        self.active.update_count(count)
