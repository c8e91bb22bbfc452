"""
Flat bar preset: a row of bars along the bottom of the canvas.
"""

from spectrascope.config import BAR_GAP, GROUP_HEIGHT_RATIO
from spectrascope.core.audio import AudioBuffer
from spectrascope.visualizers.base import BaseVisualizer, get_scaled_height
from spectrascope.visualizers.registry import register_preset
from spectrascope.visualizers.scene import Rect


@register_preset("flat_bar")
class FlatBar(BaseVisualizer):
    """
    Equal-width bars growing upward from a shared baseline.

    The group spans the canvas width and its bottom quarter.
    """

    def _create_elements(self, group_width: float, group_height: float) -> list[Rect]:
        rects = []

        obj_width = group_width / self.count - BAR_GAP

        x = 0.0
        for _ in range(self.count):
            rects.append(
                Rect(
                    left=x,
                    top=group_height,  # bottom edge sits on the baseline
                    width=obj_width,
                    height=group_height,
                    fill=self.fill,
                    origin_y="bottom",
                )
            )
            x += obj_width + BAR_GAP

        return rects

    def init(self, canvas_height: float, canvas_width: float):
        group_height = canvas_height * GROUP_HEIGHT_RATIO
        elements = self._create_elements(canvas_width, group_height)

        self.group.clear()
        self.group.add(*elements)

        # Bottom of the band flush with the bottom of the canvas
        self.group.set(
            left=0,
            top=canvas_height - group_height,
            width=canvas_width,
            height=group_height,
            scale_x=1,
            scale_y=1,
        )
        self.group.set_coords()

    def draw(self, buffer: AudioBuffer, time: float):
        spectrum = self.analyzer.get_spectrum(buffer, time)
        if spectrum is None:
            return

        canvas = self.group.canvas
        if canvas is None:
            return
        canvas_height = canvas.get_height()

        for i, rect in enumerate(self.group.get_objects()):
            if rect.type == "rect" and i < len(spectrum):
                rect.set(height=get_scaled_height(spectrum[i], canvas_height, GROUP_HEIGHT_RATIO))

    def update_count(self, count: int):
        if self.group.canvas is None:
            return

        self.analyzer.update_transform_size(count * 2)
        self.count = count

        orig_props = self.group.pick(*self.group.TRANSFORM_PROPS)
        elements = self._create_elements(orig_props["width"], orig_props["height"])

        self.group.clear()
        self.group.add(*elements)

        self.group.set(**orig_props)
        self.group.set_coords()
