"""Concrete shapes: rectangles, circles and polygons."""
from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Sequence

from .alignable import BoundingBoxAlignable, BoxAlignable, RadiusAlignable
from .box_model import normalize_point_name
from .element import Element
from .errors import BoundsError, ConfigError
from .geometry import BoundingBox, Point, Side, Vector, angle_between
from .units import parse_length


def _positive(value: Any, label: str) -> float:
    resolved = parse_length(value)
    if resolved is None or resolved <= 0:
        raise ConfigError(f"{label} must be a positive length, got {value!r}")
    return resolved


class Rect(Element, BoxAlignable):
    kind = "rect"

    def __init__(self, width: Any, height: Any, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._width = _non_negative(width, "width")
        self._height = _non_negative(height, "height")

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height


class Square(Rect):
    kind = "square"

    def __init__(self, size: Any, **kwargs: Any) -> None:
        super().__init__(size, size, **kwargs)

    @property
    def size(self) -> float:
        return self._width


class Circle(Element, RadiusAlignable):
    kind = "circle"

    def __init__(self, radius: Any = None, *, diameter: Any = None, **kwargs: Any) -> None:
        if (radius is None) == (diameter is None):
            raise ConfigError("circle needs exactly one of radius or diameter")
        super().__init__(**kwargs)
        if radius is not None:
            self._radius = _positive(radius, "radius")
        else:
            self._radius = _positive(diameter, "diameter") / 2

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def diameter(self) -> float:
        return self._radius * 2

    @property
    def width(self) -> float:
        return self._radius * 2

    @property
    def height(self) -> float:
        return self._radius * 2

    def _bounds_via(self, mapping: Callable[[Point], Point]) -> BoundingBox:
        c = mapping(self.rotation_center)
        r = self._radius
        return BoundingBox(c.x - r, c.y - r, c.x + r, c.y + r)

    def point_at(self, degrees: float) -> Point:
        """World point on the circumference; 0 is right, 90 is down, before rotation."""
        return self.center + Vector(self._radius, 0.0).rotated(degrees + self.total_rotation)

    @property
    def top(self) -> Point:
        return self.center.offset(0.0, -self._radius)

    @property
    def bottom(self) -> Point:
        return self.center.offset(0.0, self._radius)

    @property
    def left(self) -> Point:
        return self.center.offset(-self._radius, 0.0)

    @property
    def right(self) -> Point:
        return self.center.offset(self._radius, 0.0)

    def _extra_reference_points(self) -> Dict[str, Callable[[], Point]]:
        return {
            "center_top": lambda: self.top,
            "center_bottom": lambda: self.bottom,
            "center_left": lambda: self.left,
            "center_right": lambda: self.right,
        }


class Polygon(Element, BoundingBoxAlignable):
    """Closed polygon; vertices are shifted so their bounding box starts at 0,0."""

    kind = "polygon"

    def __init__(self, vertices: Sequence[Any], **kwargs: Any) -> None:
        points = [Point.of(v) for v in vertices]
        if len(points) < 3:
            raise ConfigError("a polygon needs at least three vertices")
        super().__init__(**kwargs)
        bounds = BoundingBox.from_points(points)
        self._local_vertices: List[Point] = [Point(p.x - bounds.min_x, p.y - bounds.min_y) for p in points]
        self._width = bounds.width
        self._height = bounds.height

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def local_vertices(self) -> List[Point]:
        return list(self._local_vertices)

    @property
    def rotation_center(self) -> Point:
        n = len(self._local_vertices)
        return Point(
            sum(p.x for p in self._local_vertices) / n,
            sum(p.y for p in self._local_vertices) / n,
        )

    def _outline_local(self) -> List[Point]:
        return list(self._local_vertices)

    @property
    def vertices(self) -> List[Point]:
        return [self.to_absolute_point(p) for p in self._local_vertices]

    @property
    def centroid(self) -> Point:
        return self.to_absolute_point(self.rotation_center)

    @property
    def sides(self) -> List[Side]:
        """Edges ``v0→v1, v1→v2, ..., vn→v0`` with normals facing away from the centroid."""
        verts = self.vertices
        centroid = self.centroid
        return [Side(verts[i], verts[(i + 1) % len(verts)], centroid) for i in range(len(verts))]

    def _index(self, index: int) -> int:
        count = len(self._local_vertices)
        if not -count <= index < count:
            raise BoundsError(f"vertex index {index} out of range for {count} vertices")
        return index % count

    def vertex(self, index: int) -> Point:
        return self.vertices[self._index(index)]

    def side(self, index: int) -> Side:
        return self.sides[self._index(index)]

    def angle_at(self, index: int) -> float:
        """Interior angle in degrees at vertex ``index``."""
        verts = self.vertices
        i = self._index(index)
        return angle_between(verts[i], verts[i - 1], verts[(i + 1) % len(verts)])

    def angle_marker(self, index: int, radius: Any = 20, **kwargs: Any):
        """Snapshot an :class:`~scenelayout.annotations.AngleMarker` at a vertex.

        The marker records the vertex where it is now; build it after the
        polygon has reached its final position.
        """
        from .annotations import AngleMarker

        verts = self.vertices
        i = self._index(index)
        return AngleMarker(verts[i], verts[i - 1], verts[(i + 1) % len(verts)], radius=radius, **kwargs)

    def _extra_reference_points(self) -> Dict[str, Callable[[], Point]]:
        points: Dict[str, Callable[[], Point]] = {"centroid": lambda: self.centroid}
        for i in range(len(self._local_vertices)):
            points[f"vertex{i}"] = lambda i=i: self.vertex(i)
        return points


_TRIANGLE_ORIENTATIONS = ("bottom_left", "bottom_right", "top_left", "top_right")


class Triangle(Polygon):
    kind = "triangle"

    def __init__(
        self,
        kind: str = "right",
        a: Any = 100,
        b: Any = None,
        orientation: str = "bottomLeft",
        **kwargs: Any,
    ) -> None:
        self.triangle_kind = (kind or "").strip().lower()
        self.orientation = normalize_point_name(orientation)
        if self.orientation not in _TRIANGLE_ORIENTATIONS:
            raise ConfigError(f"unknown triangle orientation: {orientation!r}")
        side_a = _positive(a, "a")
        side_b = _positive(b, "b") if b is not None else None
        super().__init__(_triangle_vertices(self.triangle_kind, side_a, side_b, self.orientation), **kwargs)
        self.a = side_a
        self.b = side_b if side_b is not None else side_a


def _triangle_vertices(kind: str, a: float, b: Optional[float], orientation: str) -> List[Point]:
    if kind == "right":
        leg = b if b is not None else a
        sx = -1.0 if orientation.endswith("right") else 1.0
        sy = -1.0 if orientation.startswith("bottom") else 1.0
        # right angle at the first vertex
        return [Point(0.0, 0.0), Point(sx * a, 0.0), Point(0.0, sy * leg)]
    if kind == "equilateral":
        height = a * math.sqrt(3) / 2
        return [Point(-a / 2, height / 3), Point(a / 2, height / 3), Point(0.0, -2 * height / 3)]
    if kind == "isosceles":
        height = b if b is not None else a
        return [Point(-a / 2, height / 2), Point(a / 2, height / 2), Point(0.0, -height / 2)]
    raise ConfigError(f"unknown triangle kind: {kind!r}")


class RegularPolygon(Polygon):
    kind = "regular_polygon"

    def __init__(self, sides: int, radius: Any, **kwargs: Any) -> None:
        if isinstance(sides, bool) or not isinstance(sides, int) or sides < 3:
            raise ConfigError(f"a regular polygon needs an integer number of sides >= 3, got {sides!r}")
        r = _positive(radius, "radius")
        step = 360.0 / sides
        # first vertex points up
        vertices = [Point(0.0, 0.0) + Vector(0.0, -r).rotated(i * step) for i in range(sides)]
        super().__init__(vertices, **kwargs)
        self.side_count = sides
        self.radius = r


_LABEL_SIDES = ("left", "right", "above", "below")


class Line(Element, BoundingBoxAlignable):
    """Segment between two points, framed by the endpoints' bounding box.

    ``start`` and ``end`` are taken as world points at construction, so
    ``Line(a.center, b.center)`` joins two nodes that are already placed.
    Like annotations the endpoints are copied; later moves of ``a`` or ``b``
    are not followed.
    """

    kind = "line"

    def __init__(self, start: Any, end: Any, **kwargs: Any) -> None:
        first = Point.of(start)
        second = Point.of(end)
        super().__init__(**kwargs)
        bounds = BoundingBox.from_points([first, second])
        self._start_local = Point(first.x - bounds.min_x, first.y - bounds.min_y)
        self._end_local = Point(second.x - bounds.min_x, second.y - bounds.min_y)
        self._width = bounds.width
        self._height = bounds.height
        self.position(self.start, first)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def _outline_local(self) -> List[Point]:
        return [self._start_local, self._end_local]

    @property
    def start(self) -> Point:
        return self.to_absolute_point(self._start_local)

    @property
    def end(self) -> Point:
        return self.to_absolute_point(self._end_local)

    @property
    def vector(self) -> Vector:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self._start_local.distance_to(self._end_local)

    @property
    def angle(self) -> float:
        """World direction of ``start -> end`` in degrees."""
        return self.vector.angle

    @property
    def direction(self) -> Vector:
        return self.vector.normalized()

    def _extra_reference_points(self) -> Dict[str, Callable[[], Point]]:
        return {"start": lambda: self.start, "end": lambda: self.end, "midpoint": lambda: self.center}

    def label(self, content: str, offset: Any = 10, side: str = "right", font_size: Any = 16, **kwargs: Any):
        """Text centered on the midpoint, pushed ``offset`` units to ``side``.

        ``left`` and ``right`` follow the ``start -> end`` direction; ``above``
        and ``below`` are screen directions.
        """
        from .text import Text

        key = (side or "").strip().lower()
        if key not in _LABEL_SIDES:
            raise ConfigError(f"unknown label side: {side!r}")
        distance = parse_length(offset, 0.0)
        if key == "above":
            shift = Vector(0.0, -distance)
        elif key == "below":
            shift = Vector(0.0, distance)
        else:
            d = self.direction
            shift = Vector(d.y, -d.x) * distance if key == "right" else Vector(-d.y, d.x) * distance
        text = Text(content, font_size=font_size, **kwargs)
        text.position(text.center, self.center + shift)
        return text


def _non_negative(value: Any, label: str) -> float:
    resolved = parse_length(value)
    if resolved is None or resolved < 0:
        raise ConfigError(f"{label} must be a non-negative length, got {value!r}")
    return resolved
