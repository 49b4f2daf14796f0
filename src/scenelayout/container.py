"""Containers: stacking, free placement and bounds normalization."""
from __future__ import annotations

import logging
from typing import Any, List, Tuple

from .alignable import Alignable, Alignment, BoxAlignable, Direction
from .box_model import BoxReference
from .element import Element
from .errors import ConfigError
from .geometry import Point, Vector
from .units import parse_length, parse_size

logger = logging.getLogger(__name__)


class Container(Element, BoxAlignable):
    """Element that owns children and places them along ``direction``.

    ``horizontal`` and ``vertical`` stack children with ``spacing`` (or spread
    them over a fixed main axis); ``none`` drops unpositioned children at the
    content-box top-left; ``freeform`` leaves placement to the caller. A
    ``"auto"`` width or height follows the children.
    """

    kind = "container"

    def __init__(
        self,
        width: Any = "auto",
        height: Any = "auto",
        direction: Any = Direction.NONE,
        spacing: Any = 0,
        spread: bool = False,
        horizontal_alignment: Any = Alignment.START,
        vertical_alignment: Any = Alignment.START,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.direction = Direction.of(direction)
        gap = parse_length(spacing, 0.0)
        if gap < 0:
            raise ConfigError(f"spacing must not be negative: {spacing!r}")
        self.spacing = gap
        self.spread = bool(spread)
        self.horizontal_alignment = Alignment.of(horizontal_alignment)
        self.vertical_alignment = Alignment.of(vertical_alignment)
        fixed_width = parse_size(width)
        fixed_height = parse_size(height)
        self.auto_width = fixed_width is None
        self.auto_height = fixed_height is None
        self._width = self.box_model.horizontal if fixed_width is None else fixed_width
        self._height = self.box_model.vertical if fixed_height is None else fixed_height
        self.children: List[Element] = []

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def is_auto_sized(self) -> bool:
        return self.auto_width or self.auto_height

    def children_in_paint_order(self) -> List[Element]:
        return sorted(self.children, key=lambda child: child.z_index)

    # -- tree mutation ------------------------------------------------------

    def add_element(self, child: Element) -> Element:
        """Adopt ``child`` and run this container's layout pass."""
        if not isinstance(child, Element) or not isinstance(child, Alignable):
            raise ConfigError(f"{type(child).__name__} cannot be placed in a container")
        if child is self or any(node is child for node in self.ancestors()):
            raise ConfigError("adding this element would create a cycle")
        if child.parent is self:
            return child
        before = self._size()
        previous = child.parent
        if previous is not None:
            anchor = child.to_absolute_point(0.0, 0.0)
            previous.remove_element(child)
            child._attach(self)
            child._apply_position(child.to_absolute_point(0.0, 0.0), anchor, child.box_reference)
            child._has_explicit_position = True
        else:
            child._attach(self)
        self.children.append(child)
        logger.debug("%r adopted %r (%s pass)", self, child, self.direction.value)

        if self.direction is Direction.NONE:
            if not child.has_explicit_position:
                self._place_at_content_origin(child)
            if self.is_auto_sized:
                self.normalize_bounds()
        elif self.direction is Direction.FREEFORM:
            if self.is_auto_sized:
                self.normalize_bounds()
        else:
            self._stack_child_added(child)
        self._cascade(before)
        return child

    def remove_element(self, child: Element) -> Element:
        """Detach ``child``, keeping it where it is in world space."""
        if child.parent is not self:
            raise ConfigError(f"{child!r} is not a child of {self!r}")
        before = self._size()
        anchor = child.to_absolute_point(0.0, 0.0)
        self.children = [c for c in self.children if c is not child]
        child._attach(None)
        child._apply_position(child.to_absolute_point(0.0, 0.0), anchor, child.box_reference)
        self._relayout()
        self._cascade(before)
        return child

    def layout(self) -> None:
        """Re-run this container's pass, e.g. after children were moved by hand."""
        before = self._size()
        if self.direction is Direction.NONE:
            for child in self.children:
                if not child.has_explicit_position:
                    self._place_at_content_origin(child)
        self._relayout()
        self._cascade(before)

    def _relayout(self) -> None:
        if self.direction.is_stack:
            self._update_stack_size()
            self._layout_stack()
        elif self.is_auto_sized:
            self.normalize_bounds()

    # -- none / freeform ----------------------------------------------------

    def _place_at_content_origin(self, child: Element) -> None:
        target = self.to_absolute_point(self.box_origin(BoxReference.CONTENT))
        child._apply_position(child.start_reference_point(), target, BoxReference.CONTENT)

    def normalize_bounds(self) -> None:
        """Shift children out of negative content space and fit auto axes.

        Calling it again right away changes nothing.
        """
        if not self.children:
            self._set_auto_size(0.0, 0.0)
            return
        bounds = None
        for child in self.children:
            bounds = child.extent_in_parent().union(bounds)
        shift_x = -bounds.min_x if bounds.min_x < 0 else 0.0
        shift_y = -bounds.min_y if bounds.min_y < 0 else 0.0
        if shift_x or shift_y:
            logger.debug("%r normalizing children by (%s, %s)", self, shift_x, shift_y)
            shift = Vector(shift_x, shift_y)
            for child in self.children:
                child._offset = child._offset + shift
        self._set_auto_size(max(0.0, bounds.max_x + shift_x), max(0.0, bounds.max_y + shift_y))

    def _set_auto_size(self, content_width: float, content_height: float) -> None:
        if self.auto_width:
            self._width = content_width + self.box_model.horizontal
        if self.auto_height:
            self._height = content_height + self.box_model.vertical

    # -- stacks -------------------------------------------------------------

    @property
    def _main_alignment(self) -> Alignment:
        if self.direction is Direction.VERTICAL:
            return self.vertical_alignment
        return self.horizontal_alignment

    @property
    def _cross_alignment(self) -> Alignment:
        if self.direction is Direction.VERTICAL:
            return self.horizontal_alignment
        return self.vertical_alignment

    @property
    def _auto_main(self) -> bool:
        return self.auto_height if self.direction is Direction.VERTICAL else self.auto_width

    def _stack_child_added(self, child: Element) -> None:
        if self.is_auto_sized:
            self._update_stack_size()
        if self.is_auto_sized or self.spread or self._main_alignment is not Alignment.START:
            self._layout_stack()
            return
        cursor = sum(c.layout_size(self.direction) + self.spacing for c in self.children[:-1])
        self._place_in_stack(child, cursor)

    def _update_stack_size(self) -> None:
        main = [c.layout_size(self.direction) for c in self.children]
        cross = [c.cross_size(self.direction) for c in self.children]
        main_total = sum(main) + self.spacing * max(0, len(main) - 1)
        cross_max = max(cross) if cross else 0.0
        if self.direction is Direction.VERTICAL:
            self._set_auto_size(cross_max, main_total)
        else:
            self._set_auto_size(main_total, cross_max)

    def _available(self) -> Tuple[float, float]:
        content = self.boxes().content
        if self.direction is Direction.VERTICAL:
            return content.height, content.width
        return content.width, content.height

    def _layout_stack(self) -> None:
        if not self.children:
            return
        available_main, _ = self._available()
        sizes = [c.layout_size(self.direction) for c in self.children]
        total = sum(sizes)
        count = len(sizes)
        if self.spread and not self._auto_main and count > 1:
            gap = max(0.0, (available_main - total) / (count - 1))
            cursor = 0.0
        else:
            gap = self.spacing
            remainder = available_main - total - gap * (count - 1)
            cursor = 0.0 if self.spread else max(0.0, remainder) * self._main_alignment.fraction
        logger.debug("%r stacking %d children, gap %s, start %s", self, count, gap, cursor)
        for child, size in zip(self.children, sizes):
            self._place_in_stack(child, cursor)
            cursor += size + gap

    def _place_in_stack(self, child: Element, main_offset: float) -> None:
        _, available_cross = self._available()
        cross_offset = child.cross_axis_offset(self.direction, self._cross_alignment, available_cross)
        origin = self.box_origin(BoxReference.CONTENT)
        if self.direction is Direction.VERTICAL:
            local = Point(origin.x + cross_offset, origin.y + main_offset)
        else:
            local = Point(origin.x + main_offset, origin.y + cross_offset)
        source = child.main_axis_reference_point(self.direction, self._cross_alignment)
        child._apply_position(source, self.to_absolute_point(local), BoxReference.CONTENT)

    # -- size propagation ---------------------------------------------------

    def _size(self) -> Tuple[float, float]:
        return (self._width, self._height)

    def _cascade(self, before: Tuple[float, float]) -> None:
        if self._size() == before:
            return
        parent = self.parent
        if isinstance(parent, Container):
            logger.debug("%r resized from %s to %s; notifying %r", self, before, self._size(), parent)
            parent._child_resized()

    def _child_resized(self) -> None:
        before = self._size()
        self._relayout()
        self._cascade(before)


class Artboard(Container):
    """Root canvas; children are placed freely and the board grows to fit."""

    kind = "artboard"

    def __init__(self, width: Any = "auto", height: Any = "auto", direction: Any = Direction.FREEFORM, **kwargs: Any) -> None:
        super().__init__(width=width, height=height, direction=direction, **kwargs)
