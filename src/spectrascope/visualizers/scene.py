"""
Retained-mode scene: rects, groups and the canvas that presents them.

Visualizers only mutate drawable attributes; the canvas turns the
scene into pixels on a pygame surface.
"""

from dataclasses import dataclass
from typing import Any

import pygame


@dataclass
class Rect:
    """Axis-aligned rectangle in group-local coordinates."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fill: str = "#ffffff"
    origin_y: str = "top"  # "bottom" makes `top` the bottom edge

    type = "rect"

    def set(self, **props: Any) -> "Rect":
        for key, value in props.items():
            if not hasattr(self, key):
                raise AttributeError(f"Rect has no attribute {key!r}")
            setattr(self, key, value)
        return self

    def bounds(self) -> tuple[float, float, float, float]:
        """(x, y, width, height) with y measured to the top edge."""
        height = max(0.0, self.height)
        y = self.top - height if self.origin_y == "bottom" else self.top
        return (self.left, y, self.width, height)


class Group:
    """
    Ordered collection of drawables positioned and scaled as one unit.

    Owned by a single visualizer; attached to at most one Canvas.
    """

    TRANSFORM_PROPS = ("left", "top", "width", "height", "scale_x", "scale_y")

    def __init__(self):
        self._objects: list[Rect] = []
        self.canvas: "Canvas | None" = None

        self.left = 0.0
        self.top = 0.0
        self.width = 0.0
        self.height = 0.0
        self.scale_x = 1.0
        self.scale_y = 1.0

        self._coords = (0.0, 0.0, 0.0, 0.0)

    def __len__(self) -> int:
        return len(self._objects)

    def add(self, *objects: Rect):
        self._objects.extend(objects)

    def remove(self, *objects: Rect):
        for obj in objects:
            self._objects.remove(obj)

    def clear(self):
        self._objects.clear()

    def get_objects(self) -> list[Rect]:
        return list(self._objects)

    def set(self, **props: Any) -> "Group":
        """Set transform attributes (left, top, width, height, scale_x, scale_y)."""
        for key, value in props.items():
            if key not in self.TRANSFORM_PROPS:
                raise AttributeError(f"Group has no transform attribute {key!r}")
            setattr(self, key, float(value))
        return self

    def pick(self, *names: str) -> dict[str, float]:
        return {name: getattr(self, name) for name in names}

    def set_coords(self):
        """Refresh the cached on-screen bounding box."""
        self._coords = self.bounding_box()

    @property
    def coords(self) -> tuple[float, float, float, float]:
        return self._coords

    def bounding_box(self) -> tuple[float, float, float, float]:
        """(left, top, scaled width, scaled height) in canvas pixels."""
        return (
            self.left,
            self.top,
            self.width * self.scale_x,
            self.height * self.scale_y,
        )

    def to_canvas(self, rect: Rect) -> tuple[float, float, float, float]:
        """Map a child rect into canvas pixel coordinates."""
        x, y, w, h = rect.bounds()
        return (
            self.left + x * self.scale_x,
            self.top + y * self.scale_y,
            w * self.scale_x,
            h * self.scale_y,
        )


class Canvas:
    """
    Rendering surface holding groups and presenting them with pygame.
    """

    def __init__(self, width: int, height: int, background: str = "#000000"):
        self.width = width
        self.height = height
        self.background = background
        self._groups: list[Group] = []

    def get_width(self) -> int:
        return self.width

    def get_height(self) -> int:
        return self.height

    def set_dimensions(self, width: int, height: int):
        self.width = width
        self.height = height

    @property
    def groups(self) -> list[Group]:
        return list(self._groups)

    def add(self, group: Group):
        if group.canvas is not None and group.canvas is not self:
            group.canvas.remove(group)
        if group not in self._groups:
            self._groups.append(group)
        group.canvas = self

    def remove(self, group: Group):
        if group in self._groups:
            self._groups.remove(group)
        if group.canvas is self:
            group.canvas = None

    def render(self, surface: pygame.Surface):
        """Clear to the background color and draw every group."""
        surface.fill(pygame.Color(self.background))

        for group in self._groups:
            for obj in group.get_objects():
                x, y, w, h = group.to_canvas(obj)
                if w <= 0 or h <= 0:
                    continue
                pygame.draw.rect(
                    surface,
                    pygame.Color(obj.fill),
                    pygame.Rect(round(x), round(y), max(1, round(w)), max(1, round(h))),
                )
