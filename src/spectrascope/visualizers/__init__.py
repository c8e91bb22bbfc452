"""
Spectrum visualizer presets.
"""

from spectrascope.visualizers.base import BaseVisualizer
from spectrascope.visualizers.flat_bar import FlatBar
from spectrascope.visualizers.registry import (
    PRESETS,
    VisualizerFactory,
    available_presets,
    create_visualizer,
    register_preset,
)
from spectrascope.visualizers.scene import Canvas, Group, Rect

__all__ = [
    "BaseVisualizer",
    "Canvas",
    "FlatBar",
    "Group",
    "PRESETS",
    "Rect",
    "VisualizerFactory",
    "available_presets",
    "create_visualizer",
    "register_preset",
]
