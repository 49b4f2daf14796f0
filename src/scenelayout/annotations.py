"""Annotations derived from other shapes.

Annotations copy the world coordinates they are built from. Moving the source
shape afterwards does not move the annotation, so build them once the source
has reached its final position.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional

from .errors import ConfigError, ReferencePointError
from .geometry import EPSILON, Point, Vector, normalize_degrees
from .shapes import Polygon
from .units import parse_length

RIGHT_ANGLE_TOLERANCE = 1.0
DEFAULT_LABEL_DISTANCE = 0.6
_ARC_STEP = 15.0


class AngleMarker(Polygon):
    """Arc (or square for right angles) marking the angle at ``vertex``.

    ``first`` and ``second`` are points on the two rays leaving the vertex;
    the marker always spans the smaller of the two possible angles.
    """

    kind = "angle_marker"

    def __init__(self, vertex: Any, first: Any, second: Any, radius: Any = 20, **kwargs: Any) -> None:
        apex = Point.of(vertex)
        ray_a = Point.of(first) - apex
        ray_b = Point.of(second) - apex
        if ray_a.length < EPSILON or ray_b.length < EPSILON:
            raise ReferencePointError("angle marker rays must not start at the vertex")
        r = parse_length(radius)
        if r is None or r <= 0:
            raise ConfigError(f"angle marker radius must be positive, got {radius!r}")
        start = normalize_degrees(ray_a.angle)
        sweep = normalize_degrees(ray_b.angle - start)
        if sweep > 180.0:
            start = normalize_degrees(ray_b.angle)
            sweep = 360.0 - sweep
        self._start_angle = start
        self._sweep = sweep
        self._radius = r
        outline = [apex] + _arc(apex, r, start, sweep)
        kwargs.setdefault("style", {"stroke": "#000000", "stroke_width": 1.5, "fill": "none"})
        super().__init__(outline, **kwargs)
        self._apex_local = self._local_vertices[0]
        self.position(self.to_absolute_point(self._apex_local), apex)

    @property
    def rotation_center(self) -> Point:
        return self._apex_local

    @property
    def vertex(self) -> Point:
        return self.to_absolute_point(self._apex_local)

    def _extra_reference_points(self) -> Dict[str, Callable[[], Point]]:
        return {"vertex": lambda: self.vertex, "label": self.label_point}

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def start_angle(self) -> float:
        return normalize_degrees(self._start_angle + self.total_rotation)

    @property
    def end_angle(self) -> float:
        return normalize_degrees(self._start_angle + self._sweep + self.total_rotation)

    @property
    def degrees(self) -> float:
        return self._sweep

    @property
    def is_right_angle(self) -> bool:
        return abs(self._sweep - 90.0) < RIGHT_ANGLE_TOLERANCE

    @property
    def arc_start(self) -> Point:
        return self.vertex + Vector(self._radius, 0.0).rotated(self.start_angle)

    @property
    def arc_end(self) -> Point:
        return self.vertex + Vector(self._radius, 0.0).rotated(self.end_angle)

    def label_point(self, distance: Optional[float] = None) -> Point:
        """Point on the bisector, ``distance`` from the vertex (0.6 radius by default)."""
        if distance is None:
            distance = self._radius * DEFAULT_LABEL_DISTANCE
        return self.vertex + Vector(distance, 0.0).rotated(self.start_angle + self._sweep / 2)

    def square_marker(self) -> List[Point]:
        """Corners of the right-angle square: vertex, first ray, diagonal, second ray."""
        size = self._radius * 0.4
        u = Vector(size, 0.0).rotated(self.start_angle)
        v = Vector(size, 0.0).rotated(self.end_angle)
        apex = self.vertex
        return [apex, apex + u, apex + u + v, apex + v]


def _arc(center: Point, radius: float, start: float, sweep: float) -> List[Point]:
    steps = max(2, int(math.ceil(sweep / _ARC_STEP)) + 1)
    return [
        center + Vector(radius, 0.0).rotated(start + sweep * i / (steps - 1))
        for i in range(steps)
    ]
