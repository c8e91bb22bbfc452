"""
Player configuration and shared constants.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Union

# Upper bound of a normalized spectrum value
NORMALIZATION_MAX = 100.0

DEFAULT_PRESET = "flat_bar"
DEFAULT_COUNT = 64
DEFAULT_FILL = "#10b981"
DEFAULT_BACKGROUND = "#0b0b12"

# Initial layout only; the live canvas size is read at draw time
CANVAS_WIDTH = 1280
CANVAS_HEIGHT = 720

GROUP_HEIGHT_RATIO = 0.25  # Bar band occupies the bottom quarter
BAR_GAP = 2  # Pixels between neighbouring bars

MIN_COUNT = 4
MAX_COUNT = 512


def is_power_of_two(value: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return isinstance(value, int) and value > 0 and (value & (value - 1)) == 0


@dataclass
class PlayerConfig:
    """Configuration for the live spectrum player."""

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    fps: int = 60
    preset: str = DEFAULT_PRESET
    count: int = DEFAULT_COUNT  # Bars; transform size is 2 * count
    fill: str = DEFAULT_FILL
    background: str = DEFAULT_BACKGROUND

    def validate(self) -> "PlayerConfig":
        """
        Check value ranges.

        Raises:
            ValueError: If any value is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if not is_power_of_two(self.count) or not MIN_COUNT <= self.count <= MAX_COUNT:
            raise ValueError(
                f"count must be a power of two in [{MIN_COUNT}, {MAX_COUNT}], got {self.count}"
            )
        return self

    @property
    def transform_size(self) -> int:
        return self.count * 2

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> PlayerConfig:
    """
    Load a player config from a JSON file.

    Args:
        path: JSON file with any subset of PlayerConfig fields.

    Returns:
        Validated PlayerConfig.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return PlayerConfig.from_dict(data).validate()
