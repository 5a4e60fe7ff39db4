"""Unit tests for tracer_lib.utils.rendering.

Tests canvas-style text placement (align and baseline), letter spacing and
the agreement between rendered glyphs and their layout boxes.
"""

import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tracer_lib.domain import Point
from tracer_lib.utils.rendering import (
    TextRenderParams,
    layout_glyph_boxes,
    load_font,
    render_text_alpha,
)


class TestTextRenderParams(unittest.TestCase):
    """Tests for TextRenderParams."""

    def test_invalid_align(self):
        with self.assertRaises(ValueError):
            TextRenderParams(align='justify')

    def test_invalid_baseline(self):
        with self.assertRaises(ValueError):
            TextRenderParams(baseline='hanging')

    def test_scaled(self):
        params = TextRenderParams(font_size=50, letter_spacing=2).scaled(2)
        self.assertEqual(params.font_size, 100)
        self.assertEqual(params.letter_spacing, 4)


class TestLoadFont(unittest.TestCase):
    """Tests for load_font()."""

    def test_unknown_family_falls_back(self):
        """A family that is not installed still yields a usable font."""
        font = load_font('No Such Family', 40)
        self.assertGreater(font.getlength('a'), 0)

    def test_cached(self):
        self.assertIs(load_font('No Such Family', 41), load_font('No Such Family', 41))

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            load_font('Andika', 0)


class TestLayoutGlyphBoxes(unittest.TestCase):
    """Tests for layout_glyph_boxes()."""

    def test_left_aligned_boxes_are_adjacent(self):
        params = TextRenderParams(font_size=80, align='left', baseline='top')
        boxes = layout_glyph_boxes('cat', params, Point(10, 20))
        self.assertEqual(len(boxes), 3)
        self.assertAlmostEqual(boxes[0].x_min, 10)
        for left, right in zip(boxes, boxes[1:]):
            self.assertAlmostEqual(left.x_max, right.x_min)

    def test_spaces_have_no_box(self):
        params = TextRenderParams(font_size=80, align='left')
        self.assertEqual(len(layout_glyph_boxes('a b', params, Point(0, 100))), 2)
        self.assertEqual(layout_glyph_boxes('', params, Point(0, 100)), [])

    def test_alignment(self):
        anchor = Point(400, 200)
        for align in ('left', 'center', 'right'):
            params = TextRenderParams(font_size=80, align=align)
            boxes = layout_glyph_boxes('dog', params, anchor)
            start, end = boxes[0].x_min, boxes[-1].x_max
            if align == 'left':
                self.assertAlmostEqual(start, anchor.x)
            elif align == 'center':
                self.assertAlmostEqual((start + end) / 2, anchor.x)
            else:
                self.assertAlmostEqual(end, anchor.x)

    def test_baselines(self):
        """Top, middle and bottom place the line box relative to the anchor."""
        anchor = Point(100, 200)
        top = layout_glyph_boxes('b', TextRenderParams(font_size=80, baseline='top'), anchor)[0]
        mid = layout_glyph_boxes('b', TextRenderParams(font_size=80, baseline='middle'), anchor)[0]
        bottom = layout_glyph_boxes('b', TextRenderParams(font_size=80, baseline='bottom'), anchor)[0]

        self.assertAlmostEqual(top.y_min, anchor.y)
        self.assertAlmostEqual(mid.center.y, anchor.y)
        self.assertAlmostEqual(bottom.y_max, anchor.y)

    def test_letter_spacing_widens_word(self):
        plain = layout_glyph_boxes('ball', TextRenderParams(font_size=80, align='left'), Point(0, 100))
        spaced = layout_glyph_boxes('ball', TextRenderParams(font_size=80, align='left',
                                                             letter_spacing=10), Point(0, 100))
        self.assertAlmostEqual(spaced[-1].x_max - plain[-1].x_max, 40)


class TestRenderTextAlpha(unittest.TestCase):
    """Tests for render_text_alpha()."""

    def test_shape_and_ink(self):
        params = TextRenderParams(font_size=60, align='center', baseline='middle')
        alpha = render_text_alpha('o', params, Point(100, 50), (200, 100))
        self.assertEqual(alpha.shape, (100, 200))
        self.assertEqual(alpha.dtype, np.uint8)
        self.assertGreater(int((alpha > 100).sum()), 0)

    def test_empty_text(self):
        alpha = render_text_alpha('', TextRenderParams(), Point(0, 0), (20, 10))
        self.assertFalse(alpha.any())

    def test_glyphs_fall_inside_their_boxes(self):
        """Nearly all rendered ink lies inside the layout boxes."""
        params = TextRenderParams(font_size=80, align='center', baseline='middle')
        anchor = Point(200, 100)
        alpha = render_text_alpha('cat', params, anchor, (400, 200))

        inside = np.zeros(alpha.shape, dtype=bool)
        for box in layout_glyph_boxes('cat', params, anchor):
            x0, y0, x1, y1 = box.to_int_tuple()
            inside[max(0, y0 - 1):y1 + 1, max(0, x0 - 1):x1 + 1] = True

        ink = alpha > 100
        self.assertGreater(int(ink.sum()), 0)
        self.assertGreaterEqual((ink & inside).sum() / ink.sum(), 0.95)


if __name__ == '__main__':
    unittest.main()
