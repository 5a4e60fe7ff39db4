"""Unit tests for tracer_lib.scoring.regions.

Tests mapping of DOM client rectangles into raster pixels under a device
pixel ratio, and the layouts built from DOM measurements or font metrics.
"""

import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tracer_lib.domain import BBox, InkSnapshot, Point
from tracer_lib.errors import DimensionMismatch, NotReady
from tracer_lib.scoring.regions import (
    CoordinateMapper,
    TargetLayout,
    layout_from_dom,
    layout_from_font,
)
from tracer_lib.utils.rendering import TextRenderParams

# 800x600 CSS canvas placed 80px below the top of the viewport, DPR 2
CANVAS = BBox(0, 80, 800, 680)
RASTER = (1600, 1200)


class TestCoordinateMapper(unittest.TestCase):
    """Tests for CoordinateMapper."""

    def setUp(self):
        self.mapper = CoordinateMapper(CANVAS, *RASTER)

    def test_scale(self):
        self.assertAlmostEqual(self.mapper.scale_x, 2.0)
        self.assertAlmostEqual(self.mapper.scale_y, 2.0)

    def test_rect_offset_and_scaled(self):
        """Client rects are made canvas-local, then scaled by the DPR."""
        box = self.mapper.rect_to_raster(BBox(200, 300, 330, 520))
        self.assertEqual(box, BBox(400, 440, 660, 880))

    def test_rect_edges_floored(self):
        box = self.mapper.rect_to_raster(BBox(10.7, 80.3, 20.2, 90.9))
        self.assertEqual(box.to_tuple(), (21, 0, 40, 21))

    def test_rect_clipped_to_raster(self):
        """Glyphs hanging off the canvas keep only their visible part."""
        box = self.mapper.rect_to_raster(BBox(-50, 40, 100, 200))
        self.assertEqual(box, BBox(0, 0, 200, 240))
        box = self.mapper.rect_to_raster(BBox(750, 600, 900, 900))
        self.assertEqual(box, BBox(1500, 1040, 1600, 1200))

    def test_point_to_raster(self):
        self.assertEqual(self.mapper.point_to_raster(Point(400, 380)), Point(800, 600))

    def test_non_uniform_ratio(self):
        """Stretched canvases scale each axis separately."""
        mapper = CoordinateMapper(BBox(0, 0, 400, 300), 1600, 600)
        self.assertEqual(mapper.rect_to_raster(BBox(100, 100, 200, 200)),
                         BBox(400, 200, 800, 400))

    def test_zero_size_canvas_not_ready(self):
        with self.assertRaises(NotReady):
            CoordinateMapper(BBox(0, 0, 0, 100), 100, 100)


class TestTargetLayout(unittest.TestCase):
    """Tests for TargetLayout."""

    def test_check_snapshot_accepts_matching_raster(self):
        layout = TargetLayout(raster_size=(40, 30))
        snap = InkSnapshot.from_alpha(np.zeros((30, 40), dtype=np.uint8))
        layout.check_snapshot(snap)

    def test_check_snapshot_rejects_other_size(self):
        layout = TargetLayout(raster_size=(1600, 1200))
        snap = InkSnapshot.from_alpha(np.zeros((1200, 2000), dtype=np.uint8))
        with self.assertRaises(DimensionMismatch) as ctx:
            layout.check_snapshot(snap)
        self.assertEqual(ctx.exception.expected, (1600, 1200))
        self.assertEqual(ctx.exception.actual, (2000, 1200))

    def test_has_reference(self):
        self.assertFalse(TargetLayout(raster_size=(1, 1)).has_reference)
        layout = TargetLayout((1, 1), text='a', render=TextRenderParams(), anchor=Point(0, 0))
        self.assertTrue(layout.has_reference)


class TestLayoutFromDom(unittest.TestCase):
    """Tests for layout_from_dom()."""

    def test_boxes_mapped(self):
        layout = layout_from_dom(CANVAS, [BBox(200, 300, 330, 520), BBox(330, 300, 460, 520)], RASTER)
        self.assertEqual(layout.raster_size, RASTER)
        self.assertEqual(layout.boxes, (BBox(400, 440, 660, 880), BBox(660, 440, 920, 880)))
        self.assertFalse(layout.has_reference)

    def test_unmounted_canvas_not_ready(self):
        with self.assertRaises(NotReady):
            layout_from_dom(None, [BBox(0, 0, 1, 1)], RASTER)

    def test_unmounted_glyphs_skipped(self):
        layout = layout_from_dom(CANVAS, [None, BBox(200, 300, 330, 520), None], RASTER)
        self.assertEqual(len(layout.boxes), 1)

    def test_reference_scaled_to_raster(self):
        """Font size follows the DPR and the anchor is made canvas-local."""
        params = TextRenderParams(font_size=120, letter_spacing=4)
        layout = layout_from_dom(CANVAS, [], RASTER, text='cat', render=params,
                                 anchor=Point(400, 380))
        self.assertTrue(layout.has_reference)
        self.assertAlmostEqual(layout.render.font_size, 240)
        self.assertAlmostEqual(layout.render.letter_spacing, 8)
        self.assertEqual(layout.anchor, Point(800, 600))

    def test_partial_reference_rejected(self):
        with self.assertRaises(ValueError):
            layout_from_dom(CANVAS, [], RASTER, text='cat')


class TestLayoutFromFont(unittest.TestCase):
    """Tests for layout_from_font()."""

    def setUp(self):
        self.params = TextRenderParams(font_size=100, align='center', baseline='middle')

    def test_one_box_per_letter(self):
        layout = layout_from_font('cat', self.params, Point(400, 300), RASTER, (800, 600))
        self.assertEqual(len(layout.boxes), 3)
        self.assertEqual(layout.text, 'cat')
        self.assertAlmostEqual(layout.render.font_size, 200)
        self.assertEqual(layout.anchor, Point(800, 600))

    def test_boxes_inside_raster_and_ordered(self):
        layout = layout_from_font('ball', self.params, Point(400, 300), RASTER, (800, 600))
        for box in layout.boxes:
            self.assertGreaterEqual(box.x_min, 0)
            self.assertLessEqual(box.x_max, RASTER[0])
            self.assertGreater(box.area, 0)
        lefts = [b.x_min for b in layout.boxes]
        self.assertEqual(lefts, sorted(lefts))

    def test_word_centred_on_anchor(self):
        layout = layout_from_font('dog', self.params, Point(400, 300), RASTER, (800, 600))
        mid = (layout.boxes[0].x_min + layout.boxes[-1].x_max) / 2
        self.assertAlmostEqual(mid, 800, delta=2)

    def test_zero_size_canvas_not_ready(self):
        with self.assertRaises(NotReady):
            layout_from_font('cat', self.params, Point(0, 0), (0, 0), (0, 0))


if __name__ == '__main__':
    unittest.main()
