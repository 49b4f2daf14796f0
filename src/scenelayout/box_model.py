"""Border / padding / content boxes."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from .errors import ConfigError, ReferencePointError
from .geometry import ORIGIN, Point
from .units import parse_length

logger = logging.getLogger(__name__)

REFERENCE_POINTS: Tuple[str, ...] = (
    "top_left",
    "center_top",
    "top_right",
    "center_left",
    "center",
    "center_right",
    "bottom_left",
    "center_bottom",
    "bottom_right",
)

# Edge shorthands accepted wherever a reference point name is.
_EDGE_ALIASES = {
    "top": "center_top",
    "bottom": "center_bottom",
    "left": "center_left",
    "right": "center_right",
    "top_center": "center_top",
    "bottom_center": "center_bottom",
    "left_center": "center_left",
    "right_center": "center_right",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_point_name(name: str) -> str:
    """``"topLeft"``, ``"top-left"`` and ``"top_left"`` all map to ``"top_left"``."""
    if not isinstance(name, str) or not name:
        raise ReferencePointError(f"invalid reference point name: {name!r}")
    snake = _CAMEL_RE.sub("_", name.strip()).replace("-", "_").lower()
    return _EDGE_ALIASES.get(snake, snake)


class BoxReference(str, Enum):
    BORDER = "borderBox"
    PADDING = "paddingBox"
    CONTENT = "contentBox"

    @classmethod
    def of(cls, value: Any) -> "BoxReference":
        if isinstance(value, BoxReference):
            return value
        if isinstance(value, str):
            key = normalize_point_name(value)
            for member in cls:
                short = member.value[: -len("Box")].lower()
                if key in (short, short + "_box"):
                    return member
        raise ConfigError(f"unknown box reference: {value!r}")


@dataclass(frozen=True)
class Insets:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def of(cls, value: Any) -> "Insets":
        """Accept a number, unit string, CSS-style tuple or per-side mapping."""
        if value is None:
            return cls()
        if isinstance(value, Insets):
            return value
        if isinstance(value, dict):
            unknown = set(value) - {"top", "right", "bottom", "left"}
            if unknown:
                raise ConfigError(f"unknown inset sides: {sorted(unknown)}")
            sides = [value.get(side, 0) for side in ("top", "right", "bottom", "left")]
        elif isinstance(value, (tuple, list)):
            if len(value) == 2:
                vertical, horizontal = value
                sides = [vertical, horizontal, vertical, horizontal]
            elif len(value) == 4:
                sides = list(value)
            else:
                raise ConfigError(f"insets need 2 or 4 values, got {len(value)}")
        else:
            sides = [value] * 4
        resolved = [parse_length(side, 0.0) for side in sides]
        if any(side < 0 for side in resolved):
            raise ConfigError(f"insets must not be negative: {value!r}")
        return cls(*resolved)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class Box:
    """A rectangle relative to its owner's border-box top-left."""

    x: float
    y: float
    width: float
    height: float

    @property
    def top_left(self) -> Point:
        return Point(self.x, self.y)

    @property
    def top_right(self) -> Point:
        return Point(self.x + self.width, self.y)

    @property
    def bottom_left(self) -> Point:
        return Point(self.x, self.y + self.height)

    @property
    def bottom_right(self) -> Point:
        return Point(self.x + self.width, self.y + self.height)

    @property
    def center_top(self) -> Point:
        return Point(self.x + self.width / 2, self.y)

    @property
    def center_bottom(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height)

    @property
    def center_left(self) -> Point:
        return Point(self.x, self.y + self.height / 2)

    @property
    def center_right(self) -> Point:
        return Point(self.x + self.width, self.y + self.height / 2)

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def point(self, name: str, origin: Optional[Point] = None) -> Point:
        key = normalize_point_name(name)
        if key not in REFERENCE_POINTS:
            raise ReferencePointError(f"unknown reference point: {name!r}")
        local = getattr(self, key)
        base = origin or ORIGIN
        return Point(base.x + local.x, base.y + local.y)

    def points(self, origin: Optional[Point] = None) -> Dict[str, Point]:
        return {name: self.point(name, origin) for name in REFERENCE_POINTS}

    def contains(self, other: "Box", tol: float = 1e-9) -> bool:
        return (
            other.x >= self.x - tol
            and other.y >= self.y - tol
            and other.x + other.width <= self.x + self.width + tol
            and other.y + other.height <= self.y + self.height + tol
        )


class Boxes(NamedTuple):
    border: Box
    padding: Box
    content: Box

    def get(self, reference: Any) -> Box:
        ref = BoxReference.of(reference)
        if ref is BoxReference.BORDER:
            return self.border
        if ref is BoxReference.PADDING:
            return self.padding
        return self.content


class BoxModel:
    """Padding and border insets around a content box."""

    def __init__(self, padding: Any = None, border: Any = None) -> None:
        self.padding = Insets.of(padding)
        self.border = Insets.of(border)

    @classmethod
    def of(cls, value: Any) -> "BoxModel":
        if value is None:
            return cls()
        if isinstance(value, BoxModel):
            return value
        if isinstance(value, dict):
            unknown = set(value) - {"padding", "border"}
            if unknown:
                raise ConfigError(f"unknown box model keys: {sorted(unknown)}")
            return cls(padding=value.get("padding"), border=value.get("border"))
        raise ConfigError(f"invalid box model: {value!r}")

    def __repr__(self) -> str:
        return f"BoxModel(padding={self.padding!r}, border={self.border!r})"

    @property
    def horizontal(self) -> float:
        return self.padding.horizontal + self.border.horizontal

    @property
    def vertical(self) -> float:
        return self.padding.vertical + self.border.vertical

    def outer_size(self, content_width: float, content_height: float) -> Tuple[float, float]:
        return content_width + self.horizontal, content_height + self.vertical

    def box_origin(self, reference: Any) -> Point:
        ref = BoxReference.of(reference)
        if ref is BoxReference.BORDER:
            return ORIGIN
        if ref is BoxReference.PADDING:
            return Point(self.border.left, self.border.top)
        return Point(self.border.left + self.padding.left, self.border.top + self.padding.top)

    def boxes(self, width: float, height: float) -> Boxes:
        border = Box(0.0, 0.0, width, height)
        pad_w = width - self.border.horizontal
        pad_h = height - self.border.vertical
        content_w = pad_w - self.padding.horizontal
        content_h = pad_h - self.padding.vertical
        if content_w < 0 or content_h < 0:
            logger.warning(
                "box model insets exceed outer size %sx%s; clamping content box to zero",
                width,
                height,
            )
        padding_origin = self.box_origin(BoxReference.PADDING)
        content_origin = self.box_origin(BoxReference.CONTENT)
        padding = Box(padding_origin.x, padding_origin.y, max(0.0, pad_w), max(0.0, pad_h))
        content = Box(content_origin.x, content_origin.y, max(0.0, content_w), max(0.0, content_h))
        return Boxes(border, padding, content)
