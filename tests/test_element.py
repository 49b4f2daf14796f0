from __future__ import annotations

import math
import sys
import unittest
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from scenelayout import (
    BoxReference,
    Circle,
    ConfigError,
    Container,
    Element,
    Point,
    PositionRequest,
    Rect,
    ReferencePointError,
    Square,
    Vector,
)


class PointAssertions(unittest.TestCase):
    def assertPointAlmostEqual(self, actual: Point, expected, places: int = 6) -> None:
        expected = Point.of(expected)
        self.assertAlmostEqual(actual.x, expected.x, places=places, msg=f"{actual} != {expected}")
        self.assertAlmostEqual(actual.y, expected.y, places=places, msg=f"{actual} != {expected}")


class AbstractElementTests(unittest.TestCase):
    def test_base_element_needs_a_size(self) -> None:
        with self.assertRaises(TypeError):
            Element()

        class WidthOnly(Element):
            @property
            def width(self) -> float:
                return 1.0

        with self.assertRaises(TypeError):
            WidthOnly()

        class Sized(WidthOnly):
            @property
            def height(self) -> float:
                return 2.0

        self.assertEqual(Sized().bottom_right, Point(1, 2))


class ReferencePointTests(PointAssertions):
    def test_parentless_rect_points(self) -> None:
        rect = Rect(100, 50)
        self.assertEqual(rect.top_left, Point(0, 0))
        self.assertEqual(rect.center, Point(50, 25))
        self.assertEqual(rect.bottom_right, Point(100, 50))
        self.assertEqual(rect.reference_point("centerRight"), Point(100, 25))
        self.assertEqual(len(rect.corners()), 4)

    def test_box_accessors_follow_box_model(self) -> None:
        rect = Rect(100, 60, box_model={"padding": 10, "border": 2})
        self.assertEqual(rect.content_box.top_left, Point(12, 12))
        self.assertEqual(rect.content_box.width, 76)
        self.assertEqual(rect.padding_box.bottom_right, Point(98, 58))
        self.assertEqual(rect.border_box.center, rect.center)
        self.assertEqual(rect.box("paddingBox").top_left, Point(2, 2))

    def test_unknown_reference_point(self) -> None:
        with self.assertRaises(ReferencePointError):
            Rect(10, 10).reference_point("nowhere")

    def test_circle_reference_points(self) -> None:
        circle = Circle(radius=10)
        self.assertEqual(circle.center, Point(10, 10))
        self.assertEqual(circle.top, Point(10, 0))
        self.assertEqual(circle.right, Point(20, 10))
        self.assertPointAlmostEqual(circle.point_at(90), (10, 20))
        with self.assertRaises(ConfigError):
            Circle()
        with self.assertRaises(ConfigError):
            Circle(radius=5, diameter=10)
        self.assertEqual(Circle(diameter=10).radius, 5)


class TransformTests(PointAssertions):
    def test_rotation_is_about_center_and_cumulative(self) -> None:
        rect = Rect(100, 50)
        rect.rotate(90)
        self.assertPointAlmostEqual(rect.top_left, (75, -25))
        self.assertPointAlmostEqual(rect.center, (50, 25))
        rect.rotate(10).rotate(10)
        self.assertAlmostEqual(rect.rotation, 110)
        self.assertAlmostEqual(rect.total_rotation, 110)

    def test_translate_is_normalized_and_cumulative(self) -> None:
        rect = Rect(10, 10)
        rect.translate((3, 4), 5)
        self.assertPointAlmostEqual(rect.top_left, (3, 4))
        rect.translate(Vector(3, 4), 5)
        self.assertPointAlmostEqual(rect.top_left, (6, 8))
        self.assertEqual(rect.transform.translation, rect.translation)

    def test_translate_zero_direction(self) -> None:
        rect = Rect(10, 10)
        rect.translate((0, 0), 0)
        self.assertEqual(rect.translation, Vector(0, 0))
        with self.assertRaises(ConfigError):
            rect.translate((0, 0), 5)

    def test_bounding_box_after_rotation(self) -> None:
        square = Square(10)
        square.rotate(45)
        bounds = square.bounding_box()
        self.assertAlmostEqual(bounds.width, 10 * math.sqrt(2))
        self.assertPointAlmostEqual(bounds.center, (5, 5))

    def test_total_rotation_includes_ancestors(self) -> None:
        outer = Container(width=200, height=200)
        inner = Rect(20, 20)
        outer.add_element(inner)
        outer.rotate(30)
        inner.rotate(15)
        self.assertAlmostEqual(inner.total_rotation, 45)


class PositionTests(PointAssertions):
    def test_round_trip_on_every_reference_point(self) -> None:
        for name in ("top_left", "center", "bottom_right", "center_left"):
            with self.subTest(name=name):
                rect = Rect(30, 20)
                rect.rotate(25)
                rect.position(rect.reference_point(name), (200, 300))
                self.assertPointAlmostEqual(rect.reference_point(name), (200, 300))

    def test_position_by_name_with_offset(self) -> None:
        rect = Rect(10, 10)
        rect.position("topLeft", (10, 20), x=5, y="1rem")
        self.assertPointAlmostEqual(rect.top_left, (15, 36))
        self.assertTrue(rect.has_explicit_position)

    def test_position_accepts_request_object(self) -> None:
        rect = Rect(10, 10)
        request = PositionRequest.build("center", {"x": 0, "y": 0})
        rect.position(request)
        self.assertPointAlmostEqual(rect.center, (0, 0))

    def test_failures_leave_offset_untouched(self) -> None:
        rect = Rect(10, 10)
        rect.position(rect.center, (40, 40))
        before = rect.offset
        for args in ((None, (0, 0)), ("nowhere", (0, 0)), (rect.center, "here"), (rect.center, (1, 2, 3))):
            with self.subTest(args=args):
                with self.assertRaises(ReferencePointError):
                    rect.position(*args)
                self.assertEqual(rect.offset, before)
        with self.assertRaises(ConfigError):
            rect.position(rect.center, (0, 0), box_reference="marginBox")
        self.assertEqual(rect.offset, before)

    def test_position_under_rotated_parent(self) -> None:
        parent = Container(width=200, height=100)
        child = Rect(20, 20)
        parent.add_element(child)
        parent.rotate(90)
        self.assertPointAlmostEqual(child.center, (140, -40))
        child.position(child.center, (500, 500))
        self.assertPointAlmostEqual(child.center, (500, 500))

    def test_box_reference_change_keeps_world_position(self) -> None:
        parent = Container(width=100, height=100, box_model={"padding": 10, "border": 5})
        child = Rect(10, 10)
        parent.add_element(child)
        self.assertPointAlmostEqual(child.top_left, (15, 15))
        child.position(child.top_left, child.top_left, box_reference="borderBox")
        self.assertIs(child.box_reference, BoxReference.BORDER)
        self.assertEqual(child.offset, Vector(15, 15))
        self.assertPointAlmostEqual(child.top_left, (15, 15))


class LocalPointTests(PointAssertions):
    def test_to_local_inverts_to_absolute(self) -> None:
        outer = Container(width=200, height=100, box_model={"padding": 10})
        inner = Container(width=80, height=60, box_model={"border": 3})
        leaf = Rect(20, 30)
        outer.add_element(inner)
        inner.add_element(leaf)
        inner.position(inner.top_left, (40, 25))
        outer.rotate(30)
        inner.rotate(-50)
        leaf.rotate(15)
        leaf.translate((1, 1), 7)
        world = leaf.to_absolute_point(3, 4)
        self.assertPointAlmostEqual(leaf.to_local_point(world), (3, 4))
        self.assertPointAlmostEqual(leaf.to_absolute_point(leaf.to_local_point(12, -8)), (12, -8))


if __name__ == "__main__":
    unittest.main()
