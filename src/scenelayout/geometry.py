"""Point, vector and bounding-box primitives.

All coordinates are canvas units with y pointing down, so a positive rotation
turns clockwise on screen (the SVG convention).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from .errors import ConfigError, ReferencePointError
from .units import parse_length

EPSILON = 1e-9


@dataclass(frozen=True)
class Vector:
    x: float
    y: float

    @classmethod
    def of(cls, value: Any) -> "Vector":
        if isinstance(value, Vector):
            return value
        if isinstance(value, Point):
            return cls(value.x, value.y)
        x, y = _coerce_pair(value, "vector")
        return cls(x, y)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction in degrees, 0 pointing right and 90 pointing down."""
        return math.degrees(math.atan2(self.y, self.x))

    def normalized(self) -> "Vector":
        length = self.length
        if length < EPSILON:
            raise ConfigError("cannot normalize a zero-length vector")
        return Vector(self.x / length, self.y / length)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def perpendicular(self) -> "Vector":
        return Vector(-self.y, self.x)

    def rotated(self, degrees: float) -> "Vector":
        if not degrees:
            return self
        rad = math.radians(degrees)
        cos_a = math.cos(rad)
        sin_a = math.sin(rad)
        return Vector(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @classmethod
    def of(cls, value: Any) -> "Point":
        """Coerce a Point, ``(x, y)`` pair or ``{"x", "y"}`` mapping.

        Lengths may carry units. Anything else raises ReferencePointError.
        """
        if isinstance(value, Point):
            return value
        x, y = _coerce_pair(value, "point")
        return cls(x, y)

    def __add__(self, other: Vector) -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        return Point(self.x - other.x, self.y - other.y)

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def rotated_about(self, center: "Point", degrees: float) -> "Point":
        if not degrees:
            return self
        return center + (self - center).rotated(degrees)

    def isclose(self, other: "Point", tol: float = 1e-6) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "BoundingBox":
        pts = list(points)
        if not pts:
            raise ReferencePointError("cannot compute a bounding box without points")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def top_left(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def bottom_right(self) -> Point:
        return Point(self.max_x, self.max_y)

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def union(self, other: Optional["BoundingBox"]) -> "BoundingBox":
        if other is None:
            return self
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def shifted(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    def contains(self, other: "BoundingBox", tol: float = 1e-9) -> bool:
        return (
            other.min_x >= self.min_x - tol
            and other.min_y >= self.min_y - tol
            and other.max_x <= self.max_x + tol
            and other.max_y <= self.max_y + tol
        )


class Side:
    """A polygon edge between two absolute points.

    When ``interior`` is given (any point inside the owning shape, usually its
    centroid) the outward normal is guaranteed to point away from it, whatever
    the winding of the vertices.
    """

    def __init__(self, start: Point, end: Point, interior: Optional[Point] = None) -> None:
        self.start = start
        self.end = end
        self.interior = interior

    def __repr__(self) -> str:
        return f"Side(start={self.start!r}, end={self.end!r})"

    @property
    def vector(self) -> Vector:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.vector.length

    @property
    def center(self) -> Point:
        return Point((self.start.x + self.end.x) / 2, (self.start.y + self.end.y) / 2)

    @property
    def direction(self) -> Vector:
        return self.vector.normalized()

    @property
    def angle(self) -> float:
        return self.vector.angle

    @property
    def outward_normal(self) -> Vector:
        normal = self.direction.perpendicular()
        if self.interior is not None and normal.dot(self.interior - self.center) > 0:
            normal = -normal
        return normal

    @property
    def inward_normal(self) -> Vector:
        return -self.outward_normal


def normalize_degrees(degrees: float) -> float:
    """Map an angle into ``[0, 360)``."""
    result = math.fmod(degrees, 360.0)
    if result < 0:
        result += 360.0
    return result


def angle_between(origin: Point, first: Point, second: Point) -> float:
    """Unsigned angle in degrees at ``origin`` between the rays to two points."""
    a = first - origin
    b = second - origin
    if a.length < EPSILON or b.length < EPSILON:
        raise ReferencePointError("angle is undefined for coincident points")
    cross = a.x * b.y - a.y * b.x
    return abs(math.degrees(math.atan2(cross, a.dot(b))))


def _coerce_pair(value: Any, kind: str) -> Tuple[float, float]:
    if value is None:
        raise ReferencePointError(f"{kind} is undefined")
    try:
        if isinstance(value, dict):
            raw_x, raw_y = value["x"], value["y"]
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            raw_x, raw_y = value
        else:
            raw_x, raw_y = value.x, value.y
        x = parse_length(raw_x)
        y = parse_length(raw_y)
    except (KeyError, AttributeError, TypeError, ConfigError) as exc:
        raise ReferencePointError(f"cannot resolve {kind} from {value!r}") from exc
    if x is None or y is None:
        raise ReferencePointError(f"cannot resolve {kind} from {value!r}")
    return x, y
