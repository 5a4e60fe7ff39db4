"""Target regions and coordinate mapping.

Glyph placement is known in layout (CSS) coordinates, while ink lives in a
raster whose physical size is the CSS size times the device pixel ratio.
This module reconciles the two: every DOM-derived rectangle or anchor is
offset by the canvas origin and multiplied by the ratio of raster size to
canvas CSS size before it is used to index pixels.

The result is a TargetLayout, the target region set for one word. It
remembers the raster size it was built for; scoring a snapshot of any other
size raises DimensionMismatch.

Example usage:
    From DOM measurements::

        layout = layout_from_dom(
            canvas_rect=BBox(0, 80, 800, 680),
            glyph_rects=[BBox(200, 300, 330, 520), BBox(330, 300, 460, 520)],
            raster_size=(1600, 1200),
        )

    From font metrics, without a DOM::

        layout = layout_from_font('cat', params, Point(400, 300),
                                  raster_size=(1600, 1200), css_size=(800, 600))
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Tuple

from ..domain.geometry import BBox, Point
from ..domain.raster import InkSnapshot
from ..errors import DimensionMismatch, NotReady
from ..utils.rendering import TextRenderParams, layout_glyph_boxes


def _pixel_box(box: BBox, width: int, height: int) -> BBox:
    """Floor a raster-space box to whole pixels and clip it to the raster."""
    x0, y0, x1, y1 = box.to_int_tuple()
    return BBox(x0, y0, x1, y1).clamped(width, height)


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps client-space CSS coordinates into raster pixels.

    Attributes:
        canvas_rect: The canvas' bounding rectangle in client CSS pixels.
        raster_width: Physical raster width.
        raster_height: Physical raster height.
    """
    canvas_rect: BBox
    raster_width: int
    raster_height: int

    def __post_init__(self):
        if self.canvas_rect.width <= 0 or self.canvas_rect.height <= 0:
            raise NotReady("canvas has no layout size yet")

    @property
    def scale_x(self) -> float:
        return self.raster_width / self.canvas_rect.width

    @property
    def scale_y(self) -> float:
        return self.raster_height / self.canvas_rect.height

    def rect_to_raster(self, rect: BBox) -> BBox:
        """Map a client rectangle to a whole-pixel box inside the raster.

        Edges are floored after scaling, then clipped to the raster, so a
        glyph hanging off the canvas keeps only its visible part.
        """
        local = rect.translated(-self.canvas_rect.x_min, -self.canvas_rect.y_min)
        return _pixel_box(local.scaled(self.scale_x, self.scale_y),
                          self.raster_width, self.raster_height)

    def point_to_raster(self, point: Point) -> Point:
        """Map a client point to raster coordinates (not rounded)."""
        return Point(
            (point.x - self.canvas_rect.x_min) * self.scale_x,
            (point.y - self.canvas_rect.y_min) * self.scale_y,
        )


@dataclass(frozen=True)
class TargetLayout:
    """Where the target word should appear, in raster pixels.

    Density scoring reads ``boxes``; overlap scoring reads ``text``,
    ``render`` and ``anchor``. A layout may carry both.

    Attributes:
        raster_size: ``(width, height)`` of the raster this layout maps to.
        boxes: One box per glyph.
        text: Target word for reference rendering.
        render: Font and placement in raster pixels.
        anchor: Text anchor in raster pixels.
    """
    raster_size: Tuple[int, int]
    boxes: Tuple[BBox, ...] = ()
    text: Optional[str] = None
    render: Optional[TextRenderParams] = None
    anchor: Optional[Point] = None

    @property
    def has_reference(self) -> bool:
        """True if the layout can be rendered for overlap scoring."""
        return self.text is not None and self.render is not None and self.anchor is not None

    def check_snapshot(self, snapshot: InkSnapshot) -> None:
        """Raise DimensionMismatch unless ``snapshot`` matches this layout."""
        if tuple(self.raster_size) != snapshot.size:
            raise DimensionMismatch(tuple(self.raster_size), snapshot.size)


def layout_from_dom(canvas_rect: Optional[BBox],
                    glyph_rects: Iterable[Optional[BBox]],
                    raster_size: Tuple[int, int],
                    text: Optional[str] = None,
                    render: Optional[TextRenderParams] = None,
                    anchor: Optional[Point] = None) -> TargetLayout:
    """Build a target layout from DOM measurements.

    Args:
        canvas_rect: Client rectangle of the canvas, None if not mounted.
        glyph_rects: Client rectangle of each glyph element. None entries
            (elements not mounted) are skipped.
        raster_size: Physical raster size the boxes are mapped into.
        text: Optional word for reference rendering.
        render: Font and placement in CSS pixels; scaled here.
        anchor: Text anchor in client CSS coordinates.

    Raises:
        NotReady: If the canvas is not mounted or has no size.
        ValueError: If only some of text, render and anchor are given.
    """
    if canvas_rect is None:
        raise NotReady("canvas is not mounted")
    reference = (text, render, anchor)
    if any(v is not None for v in reference) and any(v is None for v in reference):
        raise ValueError("text, render and anchor must be given together")

    mapper = CoordinateMapper(canvas_rect, raster_size[0], raster_size[1])
    boxes = tuple(mapper.rect_to_raster(r) for r in glyph_rects if r is not None)

    if text is None:
        return TargetLayout(raster_size=tuple(raster_size), boxes=boxes)

    # Canvas text is scaled uniformly; font metrics follow the vertical ratio
    return TargetLayout(
        raster_size=tuple(raster_size),
        boxes=boxes,
        text=text,
        render=render.scaled(mapper.scale_y),
        anchor=mapper.point_to_raster(anchor),
    )


def layout_from_font(text: str, render: TextRenderParams, anchor: Point,
                     raster_size: Tuple[int, int],
                     css_size: Tuple[float, float]) -> TargetLayout:
    """Build a target layout from font metrics alone.

    ``render`` and ``anchor`` are in canvas-local CSS pixels. Glyph boxes
    are laid out at raster scale so they line up with the reference
    rendering pixel for pixel.

    Raises:
        NotReady: If the canvas has no CSS size.
    """
    css_w, css_h = css_size
    mapper = CoordinateMapper(BBox(0, 0, css_w, css_h), raster_size[0], raster_size[1])
    raster_render = render.scaled(mapper.scale_y)
    raster_anchor = mapper.point_to_raster(anchor)

    boxes = tuple(
        _pixel_box(box, raster_size[0], raster_size[1])
        for box in layout_glyph_boxes(text, raster_render, raster_anchor)
    )
    return TargetLayout(
        raster_size=tuple(raster_size),
        boxes=boxes,
        text=text,
        render=raster_render,
        anchor=raster_anchor,
    )

