from __future__ import annotations

import sys
import unittest
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from scenelayout import (
    Alignment,
    Artboard,
    Circle,
    ConfigError,
    Container,
    Direction,
    Element,
    Point,
    Rect,
    Triangle,
)


class _Bare(Element):
    @property
    def width(self) -> float:
        return 1.0

    @property
    def height(self) -> float:
        return 1.0


class ContainerTestCase(unittest.TestCase):
    def assertPointAlmostEqual(self, actual: Point, expected, places: int = 6) -> None:
        expected = Point.of(expected)
        self.assertAlmostEqual(actual.x, expected.x, places=places, msg=f"{actual} != {expected}")
        self.assertAlmostEqual(actual.y, expected.y, places=places, msg=f"{actual} != {expected}")


class StackTests(ContainerTestCase):
    def test_horizontal_auto_width(self) -> None:
        row = Container(direction="horizontal", spacing=20)
        children = [row.add_element(Rect(100, 40)) for _ in range(3)]
        self.assertEqual(row.content_box.width, 340)
        self.assertEqual(row.width, 340)
        self.assertEqual(row.height, 40)
        self.assertEqual([c.top_left.x for c in children], [0, 120, 240])

    def test_vertical_auto_size_includes_insets(self) -> None:
        column = Container(direction="vertical", spacing=10, box_model={"padding": 5})
        first = column.add_element(Rect(60, 30))
        second = column.add_element(Rect(80, 40))
        self.assertEqual(column.height, 30 + 10 + 40 + 10)
        self.assertEqual(column.width, 80 + 10)
        self.assertPointAlmostEqual(first.top_left, (5, 5))
        self.assertPointAlmostEqual(second.top_left, (5, 45))

    def test_spread_distribution(self) -> None:
        row = Container(width=900, height=100, direction="horizontal", spread=True)
        children = [row.add_element(Rect(60, 20)) for _ in range(5)]
        for i, child in enumerate(children):
            self.assertAlmostEqual(child.top_left.x, i * 60 + i * ((900 - 300) / 4))
        self.assertAlmostEqual(children[-1].top_right.x, row.content_box.top_right.x)

    def test_spread_never_goes_negative(self) -> None:
        row = Container(width=100, height=20, direction="horizontal", spread=True)
        children = [row.add_element(Rect(60, 20)) for _ in range(3)]
        self.assertEqual([c.top_left.x for c in children], [0, 60, 120])

    def test_fixed_start_places_new_child_after_previous(self) -> None:
        row = Container(width=500, height=100, direction="horizontal", spacing=10)
        children = [row.add_element(Rect(50, 50)) for _ in range(3)]
        self.assertEqual([c.top_left.x for c in children], [0, 60, 120])
        self.assertEqual(row.width, 500)

    def test_main_axis_alignment(self) -> None:
        for alignment, expected in (("center", [100, 150]), ("end", [200, 250]), ("start", [0, 50])):
            with self.subTest(alignment=alignment):
                row = Container(width=300, height=50, direction="horizontal", horizontal_alignment=alignment)
                children = [row.add_element(Rect(50, 50)) for _ in range(2)]
                self.assertEqual([c.top_left.x for c in children], expected)

    def test_main_axis_alignment_overflow_starts_at_origin(self) -> None:
        row = Container(width=80, height=50, direction="horizontal", horizontal_alignment="center")
        children = [row.add_element(Rect(50, 50)) for _ in range(2)]
        self.assertEqual(children[0].top_left.x, 0)

    def test_cross_axis_alignment_dispatch(self) -> None:
        column = Container(width=300, direction="vertical", horizontal_alignment="center", spacing=10)
        rect = column.add_element(Rect(100, 40))
        circle = column.add_element(Circle(radius=50))
        self.assertAlmostEqual(rect.center_top.x, 150)
        self.assertAlmostEqual(circle.main_axis_reference_point(Direction.VERTICAL, Alignment.CENTER).x, 150)
        self.assertAlmostEqual(
            rect.main_axis_reference_point("vertical", "center").x,
            circle.main_axis_reference_point("vertical", "center").x,
        )
        self.assertPointAlmostEqual(circle.top, (150, 50))
        self.assertEqual(column.height, 40 + 10 + 100)

    def test_cross_axis_end_alignment(self) -> None:
        column = Container(width=300, direction="vertical", horizontal_alignment="right")
        rect = column.add_element(Rect(100, 40))
        tri = column.add_element(Triangle("right", a=30, b=40))
        self.assertAlmostEqual(rect.top_right.x, 300)
        self.assertAlmostEqual(tri.bounding_box().max_x, 300)
        self.assertAlmostEqual(tri.bounding_box().min_y, 40)

    def test_horizontal_cross_alignment_bottom(self) -> None:
        row = Container(height=100, direction="horizontal", vertical_alignment="bottom")
        small = row.add_element(Rect(10, 20))
        big = row.add_element(Circle(radius=15))
        self.assertAlmostEqual(small.bottom_left.y, 100)
        self.assertAlmostEqual(big.bottom.y, 100)
        self.assertEqual(row.width, 40)

    def test_layout_restores_manually_moved_children(self) -> None:
        row = Container(direction="horizontal", spacing=5)
        first = row.add_element(Rect(10, 10))
        second = row.add_element(Rect(10, 10))
        second.position(second.top_left, (300, 300))
        row.layout()
        self.assertPointAlmostEqual(first.top_left, (0, 0))
        self.assertPointAlmostEqual(second.top_left, (15, 0))


class NoneAndFreeformTests(ContainerTestCase):
    def test_none_places_unpositioned_children_at_content_origin(self) -> None:
        board = Container(box_model={"padding": 5})
        rect = board.add_element(Rect(50, 50))
        circle = board.add_element(Circle(radius=5))
        self.assertPointAlmostEqual(rect.top_left, (5, 5))
        self.assertPointAlmostEqual(circle.top_left, (5, 5))

    def test_none_keeps_explicit_parentless_position_relative_to_content(self) -> None:
        board = Container(box_model={"padding": 5})
        board.add_element(Rect(50, 50))
        placed = Rect(10, 10).position("topLeft", (100, 40))
        board.add_element(placed)
        self.assertPointAlmostEqual(placed.top_left, (105, 45))
        self.assertEqual(board.width, 110 + 10)
        self.assertEqual(board.height, 50 + 10)

    def test_freeform_normalizes_negative_children(self) -> None:
        board = Artboard()
        left = Rect(20, 20).position("topLeft", (-30, -10))
        right = Rect(20, 20).position("topLeft", (50, 60))
        board.add_element(right)
        self.assertPointAlmostEqual(right.top_left, (50, 60))
        board.add_element(left)
        self.assertPointAlmostEqual(left.top_left, (0, 0))
        self.assertPointAlmostEqual(right.top_left, (80, 70))
        self.assertEqual((board.width, board.height), (100, 90))

    def test_normalization_is_idempotent(self) -> None:
        board = Artboard()
        a = board.add_element(Rect(20, 20))
        b = board.add_element(Circle(radius=10))
        a.position(a.top_left, (-40, 15))
        b.position(b.center, (30, -25))
        board.normalize_bounds()
        once = ([a.offset, b.offset], board.width, board.height)
        board.normalize_bounds()
        twice = ([a.offset, b.offset], board.width, board.height)
        self.assertEqual(once, twice)
        self.assertAlmostEqual(min(a.bounding_box().min_x, b.bounding_box().min_x), 0)
        self.assertAlmostEqual(min(a.bounding_box().min_y, b.bounding_box().min_y), 0)

    def test_freeform_does_not_renormalize_on_child_position(self) -> None:
        board = Artboard()
        rect = board.add_element(Rect(20, 20))
        rect.position(rect.top_left, (-30, -10))
        self.assertPointAlmostEqual(rect.top_left, (-30, -10))
        board.layout()
        self.assertPointAlmostEqual(rect.top_left, (0, 0))

    def test_fixed_freeform_is_not_normalized(self) -> None:
        board = Artboard(width=100, height=100)
        rect = Rect(20, 20).position("topLeft", (-30, -10))
        board.add_element(rect)
        self.assertPointAlmostEqual(rect.top_left, (-30, -10))
        self.assertEqual(board.width, 100)

    def test_empty_auto_container_sizes_to_insets(self) -> None:
        box = Container(box_model={"padding": 4, "border": 1})
        self.assertEqual((box.width, box.height), (10, 10))
        row = Container(direction="horizontal", box_model={"padding": 2})
        self.assertEqual((row.width, row.height), (4, 4))


class TreeTests(ContainerTestCase):
    def test_rejects_cycles(self) -> None:
        outer = Container()
        inner = outer.add_element(Container())
        with self.assertRaises(ConfigError):
            outer.add_element(outer)
        with self.assertRaises(ConfigError):
            inner.add_element(outer)

    def test_rejects_non_alignable_children(self) -> None:
        box = Container()
        for bad in (object(), _Bare(), "rect"):
            with self.subTest(child=bad):
                with self.assertRaises(ConfigError):
                    box.add_element(bad)
        self.assertEqual(box.children, [])

    def test_auto_size_cascades_to_parent(self) -> None:
        outer = Container(direction="vertical", spacing=10)
        inner = outer.add_element(Container(direction="horizontal"))
        below = outer.add_element(Rect(50, 50))
        self.assertAlmostEqual(below.top_left.y, 10)
        inner.add_element(Rect(100, 30))
        self.assertEqual((inner.width, inner.height), (100, 30))
        self.assertEqual((outer.width, outer.height), (100, 90))
        self.assertAlmostEqual(below.top_left.y, 40)

    def test_cascade_through_none_parent(self) -> None:
        board = Artboard()
        group = board.add_element(Container(direction="vertical"))
        group.add_element(Rect(30, 70))
        self.assertEqual((board.width, board.height), (30, 70))

    def test_remove_element_keeps_world_position_and_relayouts(self) -> None:
        row = Container(direction="horizontal")
        first = row.add_element(Rect(40, 10))
        second = row.add_element(Rect(30, 10))
        row.remove_element(first)
        self.assertIsNone(first.parent)
        self.assertPointAlmostEqual(first.top_left, (0, 0))
        self.assertPointAlmostEqual(second.top_left, (0, 0))
        self.assertEqual(row.width, 30)
        with self.assertRaises(ConfigError):
            row.remove_element(first)

    def test_reparent_preserves_world_anchor(self) -> None:
        source = Container()
        rect = source.add_element(Rect(10, 10))
        rect.position(rect.top_left, (30, 30))
        target = Container(width=500, height=500).position("topLeft", (100, 100))
        target.add_element(rect)
        self.assertIs(rect.parent, target)
        self.assertNotIn(rect, source.children)
        self.assertPointAlmostEqual(rect.top_left, (30, 30))

    def test_paint_order_uses_z_index_then_insertion(self) -> None:
        board = Artboard()
        a = board.add_element(Rect(1, 1, z_index=2))
        b = board.add_element(Rect(1, 1))
        c = board.add_element(Rect(1, 1, z_index=2))
        self.assertEqual(board.children_in_paint_order(), [b, a, c])
        self.assertEqual(board.children, [a, b, c])

    def test_invalid_configuration(self) -> None:
        with self.assertRaises(ConfigError):
            Container(direction="diagonal")
        with self.assertRaises(ConfigError):
            Container(horizontal_alignment="justify")
        with self.assertRaises(ConfigError):
            Container(spacing=-1)
        with self.assertRaises(ConfigError):
            Container(width=-5)


if __name__ == "__main__":
    unittest.main()
