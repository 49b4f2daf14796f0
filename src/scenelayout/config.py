"""Validated keyword configurations for every node kind.

Each config is a dataclass that checks itself on construction and builds the
node with :meth:`build`. :func:`element_from_config` turns a plain mapping such
as ``{"type": "rect", "width": 100, "height": "2rem"}`` into a node; camelCase
keys are accepted alongside snake_case ones.
"""
from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from .alignable import Alignment, Direction
from .box_model import BoxModel
from .composite import Columns, Grid
from .container import Artboard, Container
from .element import Element
from .errors import ConfigError, ReferencePointError
from .geometry import Point
from .measurement import DEFAULT_FONT_SIZE, Measurement
from .shapes import Circle, Line, Rect, RegularPolygon, Square, Triangle
from .text import Text
from .units import parse_length, parse_size

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass
class _NodeConfig:
    name: Optional[str] = None
    style: Optional[Dict[str, Any]] = None
    z_index: int = 0

    def _common(self) -> Dict[str, Any]:
        if self.style is not None and not isinstance(self.style, dict):
            raise ConfigError("style must be a mapping")
        return {"name": self.name, "style": self.style, "z_index": self.z_index}


@dataclass
class RectConfig(_NodeConfig):
    width: Any = 0
    height: Any = 0
    box_model: Any = None

    def __post_init__(self) -> None:
        for label in ("width", "height"):
            size = parse_size(getattr(self, label))
            if size is None:
                raise ConfigError(f"rect {label} cannot be 'auto'")
        BoxModel.of(self.box_model)

    def build(self) -> Rect:
        return Rect(self.width, self.height, box_model=self.box_model, **self._common())


@dataclass
class SquareConfig(_NodeConfig):
    size: Any = 0
    box_model: Any = None

    def __post_init__(self) -> None:
        if parse_size(self.size) is None:
            raise ConfigError("square size cannot be 'auto'")

    def build(self) -> Square:
        return Square(self.size, box_model=self.box_model, **self._common())


@dataclass
class CircleConfig(_NodeConfig):
    radius: Any = None
    diameter: Any = None

    def __post_init__(self) -> None:
        if (self.radius is None) == (self.diameter is None):
            raise ConfigError("circle needs exactly one of radius or diameter")

    def build(self) -> Circle:
        return Circle(self.radius, diameter=self.diameter, **self._common())


@dataclass
class TriangleConfig(_NodeConfig):
    kind: str = "right"
    a: Any = 100
    b: Any = None
    orientation: str = "bottomLeft"

    def __post_init__(self) -> None:
        if self.kind not in ("right", "equilateral", "isosceles"):
            raise ConfigError(f"unknown triangle kind: {self.kind!r}")

    def build(self) -> Triangle:
        return Triangle(self.kind, self.a, self.b, self.orientation, **self._common())


@dataclass
class RegularPolygonConfig(_NodeConfig):
    sides: int = 6
    radius: Any = 50

    def build(self) -> RegularPolygon:
        return RegularPolygon(self.sides, self.radius, **self._common())


@dataclass
class LineConfig(_NodeConfig):
    start: Any = (0, 0)
    end: Any = (100, 0)

    def __post_init__(self) -> None:
        for label in ("start", "end"):
            try:
                Point.of(getattr(self, label))
            except ReferencePointError as exc:
                raise ConfigError(f"line {label}: {exc}") from exc

    def build(self) -> Line:
        return Line(self.start, self.end, **self._common())


@dataclass
class TextConfig(_NodeConfig):
    content: str = ""
    font_size: Any = DEFAULT_FONT_SIZE
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    box_model: Any = None

    def __post_init__(self) -> None:
        size = parse_length(self.font_size)
        if size is None or size <= 0:
            raise ConfigError(f"font size must be positive, got {self.font_size!r}")

    def build(self, measurement: Optional[Measurement] = None) -> Text:
        return Text(
            self.content,
            font_size=self.font_size,
            font_family=self.font_family,
            font_weight=self.font_weight,
            measurement=measurement,
            box_model=self.box_model,
            **self._common(),
        )


@dataclass
class ContainerConfig(_NodeConfig):
    width: Any = "auto"
    height: Any = "auto"
    direction: Any = "none"
    spacing: Any = 0
    spread: bool = False
    horizontal_alignment: Any = "start"
    vertical_alignment: Any = "start"
    box_model: Any = None

    def __post_init__(self) -> None:
        parse_size(self.width)
        parse_size(self.height)
        Direction.of(self.direction)
        Alignment.of(self.horizontal_alignment)
        Alignment.of(self.vertical_alignment)
        spacing = parse_length(self.spacing, 0.0)
        if spacing < 0:
            raise ConfigError(f"spacing must not be negative: {self.spacing!r}")

    def _container_kwargs(self) -> Dict[str, Any]:
        return dict(
            width=self.width,
            height=self.height,
            direction=self.direction,
            spacing=self.spacing,
            spread=self.spread,
            horizontal_alignment=self.horizontal_alignment,
            vertical_alignment=self.vertical_alignment,
            box_model=self.box_model,
            **self._common(),
        )

    def build(self) -> Container:
        return Container(**self._container_kwargs())


@dataclass
class ArtboardConfig(ContainerConfig):
    direction: Any = "freeform"

    def build(self) -> Artboard:
        return Artboard(**self._container_kwargs())


@dataclass
class GridConfig(_NodeConfig):
    rows: int = 1
    columns: int = 1
    cell_width: Any = 100
    cell_height: Any = 100
    gutter: Any = 0
    box_model: Any = None
    cell_style: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        for label in ("rows", "columns"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{label} must be a positive integer, got {value!r}")
        if parse_size(self.cell_width) is None or parse_size(self.cell_height) is None:
            raise ConfigError("grid cells need a fixed width and height")

    def build(self) -> Grid:
        return Grid(
            self.rows,
            self.columns,
            self.cell_width,
            self.cell_height,
            gutter=self.gutter,
            cell_style=self.cell_style,
            box_model=self.box_model,
            **self._common(),
        )


@dataclass
class ColumnsConfig(_NodeConfig):
    count: int = 1
    column_width: Any = 100
    height: Any = "auto"
    gutter: Any = 0
    vertical_alignment: Any = "top"
    box_model: Any = None
    column_style: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1:
            raise ConfigError(f"count must be a positive integer, got {self.count!r}")
        Alignment.of(self.vertical_alignment)

    def build(self) -> Columns:
        return Columns(
            self.count,
            self.column_width,
            height=self.height,
            gutter=self.gutter,
            vertical_alignment=self.vertical_alignment,
            column_style=self.column_style,
            box_model=self.box_model,
            **self._common(),
        )


CONFIG_TYPES: Dict[str, Type[_NodeConfig]] = {
    "rect": RectConfig,
    "square": SquareConfig,
    "circle": CircleConfig,
    "triangle": TriangleConfig,
    "regular_polygon": RegularPolygonConfig,
    "line": LineConfig,
    "text": TextConfig,
    "container": ContainerConfig,
    "artboard": ArtboardConfig,
    "grid": GridConfig,
    "columns": ColumnsConfig,
}


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).replace("-", "_").lower()


def config_from_mapping(mapping: Dict[str, Any]) -> _NodeConfig:
    if not isinstance(mapping, dict):
        raise ConfigError(f"node configuration must be a mapping, got {type(mapping).__name__}")
    values = {_snake(key): value for key, value in mapping.items()}
    kind = values.pop("type", None)
    config_type = CONFIG_TYPES.get(_snake(kind) if isinstance(kind, str) else "")
    if config_type is None:
        raise ConfigError(f"unknown node type: {kind!r}")
    allowed = {f.name for f in dataclasses.fields(config_type)}
    unknown = set(values) - allowed
    if unknown:
        raise ConfigError(f"unknown {kind} options: {', '.join(sorted(unknown))}")
    return config_type(**values)


def element_from_config(mapping: Dict[str, Any], measurement: Optional[Measurement] = None) -> Element:
    """Build a node (without children) from a ``{"type": ..., ...}`` mapping."""
    config = config_from_mapping(mapping)
    if isinstance(config, TextConfig):
        return config.build(measurement)
    return config.build()
