"""Text node sized by an injected measurement backend."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from .alignable import BoxAlignable
from .box_model import Box
from .element import BoxAccessor, Element
from .errors import BoundsError, ConfigError, MeasurementUnavailableError
from .geometry import Point
from .measurement import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, HeuristicMeasurement, Measurement, TextMetrics
from .units import parse_length

logger = logging.getLogger(__name__)

_FALLBACK = HeuristicMeasurement()


class Text(Element, BoxAlignable):
    """A run of text whose border box wraps the measured content plus insets.

    Size comes from ``measurement`` (any object with a ``measure`` method).
    When none is given, or it raises :class:`MeasurementUnavailableError`,
    the deterministic heuristic estimate is used instead.
    """

    kind = "text"

    def __init__(
        self,
        content: str,
        font_size: Any = DEFAULT_FONT_SIZE,
        font_family: Optional[str] = None,
        font_weight: Optional[str] = None,
        measurement: Optional[Measurement] = None,
        **kwargs: Any,
    ) -> None:
        if not isinstance(content, str):
            raise ConfigError(f"text content must be a string, got {type(content).__name__}")
        size = parse_length(font_size)
        if size is None or size <= 0:
            raise ConfigError(f"font size must be positive, got {font_size!r}")
        super().__init__(**kwargs)
        self.content = content
        self.font_size = size
        self.font_family = font_family or DEFAULT_FONT_FAMILY
        self.font_weight = font_weight
        self.measured_by_fallback = False
        self.metrics = self._measure(measurement)

    def _measure(self, measurement: Optional[Measurement]) -> TextMetrics:
        if measurement is None:
            self.measured_by_fallback = True
            return _FALLBACK.measure(self.content, self.font_size, self.font_family, self.font_weight)
        try:
            return measurement.measure(self.content, self.font_size, self.font_family, self.font_weight)
        except MeasurementUnavailableError as exc:
            logger.warning("text measurement unavailable (%s); using heuristic size for %r", exc, self.content)
            self.measured_by_fallback = True
            return _FALLBACK.measure(self.content, self.font_size, self.font_family, self.font_weight)

    @property
    def width(self) -> float:
        return self.metrics.width + self.box_model.horizontal

    @property
    def height(self) -> float:
        return self.metrics.height + self.box_model.vertical

    @property
    def ascent(self) -> float:
        return self.metrics.ascent

    @property
    def baseline_origin(self) -> Point:
        """World point where the first line's baseline starts."""
        origin = self.box_model.box_origin("contentBox")
        return self.to_absolute_point(origin.x, origin.y + self.metrics.ascent)

    @property
    def parts(self) -> List[str]:
        return self.content.split()

    def part_box(self, index: int) -> BoxAccessor:
        """Absolute box around the ``index``-th whitespace-separated word."""
        parts = self.metrics.parts
        if not -len(parts) <= index < len(parts):
            raise BoundsError(f"text part {index} out of range for {len(parts)} parts")
        part = parts[index]
        origin = self.box_model.box_origin("contentBox")
        return BoxAccessor(self, Box(origin.x + part.x, origin.y + part.y, part.width, part.height))
