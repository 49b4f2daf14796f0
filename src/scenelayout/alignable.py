"""Per-geometry reference points used by stacking containers."""
from __future__ import annotations

import abc
from enum import Enum
from typing import Any, Dict, Tuple

from .box_model import Box
from .errors import ConfigError
from .geometry import Point


class Direction(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    NONE = "none"
    FREEFORM = "freeform"

    @classmethod
    def of(cls, value: Any) -> "Direction":
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigError(f"unknown direction: {value!r}")

    @property
    def is_stack(self) -> bool:
        return self in (Direction.HORIZONTAL, Direction.VERTICAL)


class Alignment(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"

    @classmethod
    def of(cls, value: Any) -> "Alignment":
        if isinstance(value, Alignment):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("start", "left", "top"):
                return cls.START
            if key in ("center", "middle"):
                return cls.CENTER
            if key in ("end", "right", "bottom"):
                return cls.END
        raise ConfigError(f"unknown alignment: {value!r}")

    @property
    def fraction(self) -> float:
        return _FRACTIONS[self]


_FRACTIONS = {Alignment.START: 0.0, Alignment.CENTER: 0.5, Alignment.END: 1.0}

# (direction, cross-axis alignment) -> named point pinned to the slot
_SLOT_POINTS: Dict[Tuple[Direction, Alignment], str] = {
    (Direction.VERTICAL, Alignment.START): "top_left",
    (Direction.VERTICAL, Alignment.CENTER): "center_top",
    (Direction.VERTICAL, Alignment.END): "top_right",
    (Direction.HORIZONTAL, Alignment.START): "top_left",
    (Direction.HORIZONTAL, Alignment.CENTER): "center_left",
    (Direction.HORIZONTAL, Alignment.END): "bottom_left",
}


class Alignable(abc.ABC):
    """Capability of nodes a stacking container can place.

    ``main_axis_reference_point`` returns the world point the container pins
    to the child's slot: for a vertical stack a point on the top edge, for a
    horizontal stack a point on the left edge, chosen by the cross-axis
    alignment.
    """

    @property
    @abc.abstractmethod
    def layout_width(self) -> float:
        ...

    @property
    @abc.abstractmethod
    def layout_height(self) -> float:
        ...

    @abc.abstractmethod
    def _alignment_point(self, name: str) -> Point:
        ...

    def layout_size(self, direction: Any) -> float:
        if Direction.of(direction) is Direction.VERTICAL:
            return self.layout_height
        return self.layout_width

    def cross_size(self, direction: Any) -> float:
        if Direction.of(direction) is Direction.VERTICAL:
            return self.layout_width
        return self.layout_height

    def main_axis_reference_point(self, direction: Any, alignment: Any) -> Point:
        direction = Direction.of(direction)
        if not direction.is_stack:
            direction = Direction.VERTICAL
        return self._alignment_point(_SLOT_POINTS[(direction, Alignment.of(alignment))])

    def cross_axis_offset(self, direction: Any, alignment: Any, available: float) -> float:
        return available * Alignment.of(alignment).fraction

    def start_reference_point(self) -> Point:
        return self.main_axis_reference_point(Direction.VERTICAL, Alignment.START)


class BoxAlignable(Alignable):
    """Aligns on border-box corners and edge midpoints."""

    @property
    def layout_width(self) -> float:
        return self.width

    @property
    def layout_height(self) -> float:
        return self.height

    def _alignment_point(self, name: str) -> Point:
        return self.border_box.point(name)


class RadiusAlignable(Alignable):
    """Aligns on ``center ± radius``, whatever the rotation."""

    @property
    def layout_width(self) -> float:
        return self.radius * 2

    @property
    def layout_height(self) -> float:
        return self.radius * 2

    def _alignment_point(self, name: str) -> Point:
        center = self.center
        frame = Box(center.x - self.radius, center.y - self.radius, self.radius * 2, self.radius * 2)
        return frame.point(name)


class BoundingBoxAlignable(Alignable):
    """Aligns on the axis-aligned bounding box of the node's vertices."""

    @property
    def layout_width(self) -> float:
        return self.bounding_box().width

    @property
    def layout_height(self) -> float:
        return self.bounding_box().height

    def _alignment_point(self, name: str) -> Point:
        bounds = self.bounding_box()
        return Box(bounds.min_x, bounds.min_y, bounds.width, bounds.height).point(name)
