from __future__ import annotations

import itertools
import sys
import unittest
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from scenelayout import Box, BoxModel, BoxReference, ConfigError, Insets, Point, ReferencePointError


class InsetsTests(unittest.TestCase):
    def test_shorthands(self) -> None:
        self.assertEqual(Insets.of(4), Insets(4, 4, 4, 4))
        self.assertEqual(Insets.of("1rem"), Insets(16, 16, 16, 16))
        self.assertEqual(Insets.of((1, 2)), Insets(1, 2, 1, 2))
        self.assertEqual(Insets.of((1, 2, 3, 4)), Insets(1, 2, 3, 4))
        self.assertEqual(Insets.of({"top": 3, "left": "2px"}), Insets(3, 0, 0, 2))
        self.assertEqual(Insets.of(None), Insets())

    def test_invalid_insets(self) -> None:
        for bad in (-1, (1, 2, 3), {"middle": 2}, "thick"):
            with self.subTest(value=bad):
                with self.assertRaises(ConfigError):
                    Insets.of(bad)


class BoxModelTests(unittest.TestCase):
    def test_content_size_and_origins(self) -> None:
        model = BoxModel(padding=10, border=2)
        boxes = model.boxes(100, 80)
        self.assertEqual(boxes.border, Box(0, 0, 100, 80))
        self.assertEqual(boxes.padding, Box(2, 2, 96, 76))
        self.assertEqual(boxes.content, Box(12, 12, 76, 56))
        self.assertEqual(model.box_origin("contentBox"), Point(12, 12))
        self.assertEqual(model.box_origin("padding"), Point(2, 2))
        self.assertEqual(model.box_origin(BoxReference.BORDER), Point(0, 0))

    def test_content_size_formula_and_nesting(self) -> None:
        for outer, padding, border in itertools.product((0, 30, 100), (0, 5, 20), (0, 1, 8)):
            with self.subTest(outer=outer, padding=padding, border=border):
                boxes = BoxModel(padding=padding, border=border).boxes(outer, outer)
                expected = max(0, outer - padding * 2 - border * 2)
                self.assertEqual(boxes.content.width, expected)
                self.assertEqual(boxes.content.height, expected)
                if outer - padding * 2 - border * 2 >= 0:
                    self.assertTrue(boxes.border.contains(boxes.padding))
                    self.assertTrue(boxes.padding.contains(boxes.content))

    def test_oversized_insets_clamp_and_warn(self) -> None:
        with self.assertLogs("scenelayout.box_model", level="WARNING"):
            boxes = BoxModel(padding=60).boxes(100, 100)
        self.assertEqual(boxes.content.width, 0)
        self.assertEqual(boxes.content.height, 0)

    def test_of_mapping(self) -> None:
        model = BoxModel.of({"padding": (4, 8), "border": 1})
        self.assertEqual(model.horizontal, 18)
        self.assertEqual(model.vertical, 10)
        self.assertEqual(model.outer_size(10, 10), (28, 20))
        with self.assertRaises(ConfigError):
            BoxModel.of({"margin": 4})
        with self.assertRaises(ConfigError):
            BoxModel.of(12)


class BoxTests(unittest.TestCase):
    def test_named_points(self) -> None:
        box = Box(10, 20, 100, 50)
        self.assertEqual(box.top_left, Point(10, 20))
        self.assertEqual(box.bottom_right, Point(110, 70))
        self.assertEqual(box.center, Point(60, 45))
        self.assertEqual(box.point("centerTop"), Point(60, 20))
        self.assertEqual(box.point("center-bottom"), Point(60, 70))
        self.assertEqual(box.point("right"), Point(110, 45))
        self.assertEqual(box.point("top_left", origin=Point(1, 1)), Point(11, 21))
        self.assertEqual(len(box.points()), 9)

    def test_unknown_point(self) -> None:
        with self.assertRaises(ReferencePointError) as ctx:
            Box(0, 0, 1, 1).point("middle_earth")
        self.assertEqual(ctx.exception.code, "E_REFERENCE")

    def test_box_reference_aliases(self) -> None:
        self.assertIs(BoxReference.of("contentBox"), BoxReference.CONTENT)
        self.assertIs(BoxReference.of("border_box"), BoxReference.BORDER)
        self.assertIs(BoxReference.of("padding"), BoxReference.PADDING)
        with self.assertRaises(ConfigError):
            BoxReference.of("marginBox")


if __name__ == "__main__":
    unittest.main()
