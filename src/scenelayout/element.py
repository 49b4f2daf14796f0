"""Scene-graph nodes: local frames, transforms and the positioning protocol.

Every node has a local frame whose origin is the top-left of its border box
(or, for polygons, of its vertex bounding box). A local point reaches world
space by, at each level:

1. rotating about the node's rotation center by its rotation,
2. adding its translation and its parent-relative offset,
3. adding the origin of the parent box named by ``box_reference``,

and then continuing with the parent.
"""
from __future__ import annotations

import abc
import logging
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from .box_model import REFERENCE_POINTS, Box, BoxModel, BoxReference, normalize_point_name
from .errors import ConfigError, ReferencePointError
from .geometry import ORIGIN, BoundingBox, Point, Vector
from .units import parse_length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transform:
    rotation: float = 0.0
    translation: Vector = field(default_factory=lambda: Vector(0.0, 0.0))


@dataclass(frozen=True)
class PositionRequest:
    """One-shot placement command, fully validated on construction."""

    relative_from: Union[Point, str]
    relative_to: Point
    x: float = 0.0
    y: float = 0.0
    box_reference: BoxReference = BoxReference.CONTENT

    @classmethod
    def build(
        cls,
        relative_from: Any,
        relative_to: Any,
        x: Any = 0,
        y: Any = 0,
        box_reference: Any = BoxReference.CONTENT,
    ) -> "PositionRequest":
        if isinstance(relative_from, str):
            source: Union[Point, str] = normalize_point_name(relative_from)
        else:
            source = Point.of(relative_from)
        target = Point.of(relative_to)
        return cls(
            relative_from=source,
            relative_to=target,
            x=parse_length(x, 0.0),
            y=parse_length(y, 0.0),
            box_reference=BoxReference.of(box_reference),
        )

    @property
    def target(self) -> Point:
        return self.relative_to.offset(self.x, self.y)


class BoxAccessor:
    """Absolute reference points of one of an element's boxes."""

    def __init__(self, element: "Element", box: Box) -> None:
        self._element = element
        self._box = box

    def __repr__(self) -> str:
        return f"BoxAccessor({self._element!r}, {self._box!r})"

    @property
    def width(self) -> float:
        return self._box.width

    @property
    def height(self) -> float:
        return self._box.height

    @property
    def local(self) -> Box:
        return self._box

    def point(self, name: str) -> Point:
        return self._element.to_absolute_point(self._box.point(name))

    def points(self) -> Dict[str, Point]:
        return {name: self.point(name) for name in REFERENCE_POINTS}

    def __getattr__(self, name: str) -> Point:
        if name in REFERENCE_POINTS:
            return self.point(name)
        raise AttributeError(name)


class Element(abc.ABC):
    """Base scene node.

    Subclasses provide ``width`` and ``height`` (the border-box size, or the
    vertex bounding-box size for polygons).
    """

    kind = "element"

    def __init__(
        self,
        *,
        name: Optional[str] = None,
        style: Optional[Dict[str, Any]] = None,
        box_model: Any = None,
        z_index: int = 0,
    ) -> None:
        if style is not None and not isinstance(style, dict):
            raise ConfigError(f"style must be a mapping, got {type(style).__name__}")
        self.name = name
        self.style: Dict[str, Any] = dict(style or {})
        self.box_model = BoxModel.of(box_model)
        self.z_index = int(z_index)
        self._parent: Optional["weakref.ReferenceType[Element]"] = None
        self._offset = Vector(0.0, 0.0)
        self._box_reference = BoxReference.CONTENT
        self._rotation = 0.0
        self._translation = Vector(0.0, 0.0)
        self._has_explicit_position = False

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label} {self.width:g}x{self.height:g}>"

    # -- size -------------------------------------------------------------

    @property
    @abc.abstractmethod
    def width(self) -> float:
        ...

    @property
    @abc.abstractmethod
    def height(self) -> float:
        ...

    def boxes(self):
        return self.box_model.boxes(self.width, self.height)

    def box_origin(self, reference: Any) -> Point:
        return self.box_model.box_origin(reference)

    @property
    def rotation_center(self) -> Point:
        """Local point the node rotates about."""
        return Point(self.width / 2, self.height / 2)

    # -- tree -------------------------------------------------------------

    @property
    def parent(self) -> Optional["Element"]:
        return self._parent() if self._parent is not None else None

    def _attach(self, parent: Optional["Element"]) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    def ancestors(self) -> Iterable["Element"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def children_in_paint_order(self) -> List["Element"]:
        return []

    # -- transform state ----------------------------------------------------

    @property
    def offset(self) -> Vector:
        return self._offset

    @property
    def box_reference(self) -> BoxReference:
        return self._box_reference

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def translation(self) -> Vector:
        return self._translation

    @property
    def transform(self) -> Transform:
        return Transform(self._rotation, self._translation)

    @property
    def total_rotation(self) -> float:
        return self._rotation + sum(node._rotation for node in self.ancestors())

    @property
    def has_explicit_position(self) -> bool:
        return self._has_explicit_position

    def rotate(self, degrees: Any) -> "Element":
        """Add ``degrees`` (clockwise on screen) to the node's rotation."""
        amount = parse_length(degrees)
        if amount is None:
            raise ConfigError("rotate needs an angle")
        self._rotation += amount
        return self

    def translate(self, along: Any, distance: Any) -> "Element":
        """Move ``distance`` units along the direction vector ``along``."""
        amount = parse_length(distance)
        if amount is None:
            raise ConfigError("translate needs a distance")
        direction = Vector.of(along)
        if direction.length == 0:
            if amount == 0:
                return self
            raise ConfigError("translate direction must be non-zero")
        self._translation = self._translation + direction.normalized() * amount
        return self

    # -- coordinate resolution ------------------------------------------

    def _transform_local(self, point: Point) -> Point:
        rotated = point.rotated_about(self.rotation_center, self._rotation)
        return rotated + self._translation + self._offset

    def _inverse_transform_local(self, point: Point) -> Point:
        unshifted = point - self._translation - self._offset
        return unshifted.rotated_about(self.rotation_center, -self._rotation)

    def to_absolute_point(self, x: Any, y: Optional[float] = None) -> Point:
        local = Point.of(x) if y is None else Point(float(x), float(y))
        point = self._transform_local(local)
        parent = self.parent
        if parent is None:
            return point
        origin = parent.box_origin(self._box_reference)
        return parent.to_absolute_point(point.x + origin.x, point.y + origin.y)

    def to_local_point(self, x: Any, y: Optional[float] = None) -> Point:
        world = Point.of(x) if y is None else Point(float(x), float(y))
        parent = self.parent
        if parent is None:
            in_parent = world
        else:
            origin = parent.box_origin(self._box_reference)
            local = parent.to_local_point(world)
            in_parent = Point(local.x - origin.x, local.y - origin.y)
        return self._inverse_transform_local(in_parent)

    def _to_parent_content(self, point: Point) -> Point:
        """Local point expressed in the parent's content-box frame."""
        moved = self._transform_local(point)
        parent = self.parent
        if parent is None:
            return moved
        shift = parent.box_origin(self._box_reference) - parent.box_origin(BoxReference.CONTENT)
        return moved + shift

    def _outline_local(self) -> List[Point]:
        """Local points whose hull is the node's visible extent."""
        return [Point(0.0, 0.0), Point(self.width, 0.0), Point(self.width, self.height), Point(0.0, self.height)]

    def _bounds_via(self, mapping: Callable[[Point], Point]) -> BoundingBox:
        return BoundingBox.from_points(mapping(p) for p in self._outline_local())

    def bounding_box(self) -> BoundingBox:
        """Axis-aligned world bounds after every transform."""
        return self._bounds_via(self.to_absolute_point)

    def extent_in_parent(self) -> BoundingBox:
        """Axis-aligned bounds in the parent's content-box frame."""
        return self._bounds_via(self._to_parent_content)

    # -- reference points ---------------------------------------------------

    @property
    def border_box(self) -> BoxAccessor:
        return BoxAccessor(self, self.boxes().border)

    @property
    def padding_box(self) -> BoxAccessor:
        return BoxAccessor(self, self.boxes().padding)

    @property
    def content_box(self) -> BoxAccessor:
        return BoxAccessor(self, self.boxes().content)

    def box(self, reference: Any) -> BoxAccessor:
        return BoxAccessor(self, self.boxes().get(reference))

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """World corners of the border box, clockwise from the top-left."""
        box = self.border_box
        return (box.top_left, box.top_right, box.bottom_right, box.bottom_left)

    @property
    def top_left(self) -> Point:
        return self.border_box.top_left

    @property
    def top_right(self) -> Point:
        return self.border_box.top_right

    @property
    def bottom_left(self) -> Point:
        return self.border_box.bottom_left

    @property
    def bottom_right(self) -> Point:
        return self.border_box.bottom_right

    @property
    def center_top(self) -> Point:
        return self.border_box.center_top

    @property
    def center_bottom(self) -> Point:
        return self.border_box.center_bottom

    @property
    def center_left(self) -> Point:
        return self.border_box.center_left

    @property
    def center_right(self) -> Point:
        return self.border_box.center_right

    @property
    def center(self) -> Point:
        return self.border_box.center

    def _extra_reference_points(self) -> Dict[str, Callable[[], Point]]:
        return {}

    def reference_point(self, name: str) -> Point:
        """World point for a named reference (``"center"``, ``"topLeft"``, ...)."""
        key = normalize_point_name(name)
        extra = self._extra_reference_points()
        if key in extra:
            return extra[key]()
        if key in REFERENCE_POINTS:
            return self.border_box.point(key)
        raise ReferencePointError(f"{type(self).__name__} has no reference point {name!r}")

    # -- positioning --------------------------------------------------------

    def position(
        self,
        relative_from: Any,
        relative_to: Any = None,
        x: Any = 0,
        y: Any = 0,
        box_reference: Any = BoxReference.CONTENT,
    ) -> "Element":
        """Move the node so ``relative_from`` lands on ``relative_to + (x, y)``.

        ``relative_from`` is a world point on this node (or one of its reference
        point names) and is frozen at call time. The offset is stored against
        the parent box named by ``box_reference``. Nothing is changed when a
        point cannot be resolved.
        """
        if isinstance(relative_from, PositionRequest):
            request = relative_from
        else:
            request = PositionRequest.build(relative_from, relative_to, x, y, box_reference)
        if isinstance(request.relative_from, str):
            source = self.reference_point(request.relative_from)
        else:
            source = request.relative_from
        self._apply_position(source, request.target, request.box_reference)
        self._has_explicit_position = True
        return self

    def _apply_position(self, source: Point, target: Point, box_reference: Any = BoxReference.CONTENT) -> None:
        reference = BoxReference.of(box_reference)
        parent = self.parent
        delta = target - source
        if parent is not None:
            delta = delta.rotated(-parent.total_rotation)
        offset = self._offset + delta
        if parent is not None and reference is not self._box_reference:
            offset = offset + (parent.box_origin(self._box_reference) - parent.box_origin(reference))
        self._offset = offset
        self._box_reference = reference
