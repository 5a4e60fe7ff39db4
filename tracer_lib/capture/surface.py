"""Raster stroke capture surface.

This module provides the StrokeCaptureSurface, the single writer of the ink
raster. Pointer gestures arrive as CSS coordinates relative to the canvas
origin; the surface scales them by the device pixel ratio and rasterizes one
segment at a time so the child sees ink while the finger is still moving.

The model is immediate-mode: stroke geometry is not retained, only the
resulting pixels. There is no undo-by-stroke.

Typical usage:
    from tracer_lib.capture import StrokeCaptureSurface
    from tracer_lib.domain import DrawingMode, Point

    surface = StrokeCaptureSurface()
    surface.resize(800, 600, device_pixel_ratio=2.0)   # raster is 1600x1200

    surface.begin_stroke(Point(10, 10), '#1F2937', 16, DrawingMode.DRAW)
    surface.extend_stroke(Point(60, 40))
    surface.end_stroke()

    snapshot = surface.snapshot()
"""

from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from ..domain.geometry import Point
from ..domain.raster import DrawingMode, InkSnapshot
from ..errors import NotReady

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class StrokeCaptureSurface:
    """Owns the ink raster and turns pointer gestures into pixels.

    Only one stroke is active at a time. All calls happen on the UI thread,
    so a snapshot never observes a half-drawn segment.

    Attributes:
        generation: Incremented on every resize. Layouts and snapshots taken
            under an older generation describe a raster that no longer exists.
    """

    def __init__(self):
        self._image: Image.Image | None = None
        self._draw: ImageDraw.ImageDraw | None = None
        self._css_size = (0.0, 0.0)
        self._dpr = 1.0
        self.generation = 0

        # Active stroke state, in raster pixels
        self._last: Point | None = None
        self._fill = (0, 0, 0, 255)
        self._width_px = 1.0
        self._mode = DrawingMode.DRAW

    # -- sizing ------------------------------------------------------------

    def resize(self, css_width: float, css_height: float,
               device_pixel_ratio: float = 1.0) -> None:
        """Reallocate the raster for a new layout size.

        The raster becomes ``round(css * dpr)`` pixels on each axis and all
        later drawing is scaled by ``dpr``. Existing ink and any active
        stroke are discarded; this is the documented cost of a viewport or
        orientation change.

        Raises:
            ValueError: If a size is negative or the ratio is not positive.
        """
        if device_pixel_ratio <= 0:
            raise ValueError(f"device pixel ratio must be positive, got {device_pixel_ratio}")
        if css_width < 0 or css_height < 0:
            raise ValueError(f"canvas size must be non-negative, got {css_width}x{css_height}")

        if self._last is not None:
            logger.info("Resize during an active stroke, stroke and ink discarded")

        width = int(round(css_width * device_pixel_ratio))
        height = int(round(css_height * device_pixel_ratio))
        self._image = Image.new('RGBA', (width, height), TRANSPARENT)
        self._draw = ImageDraw.Draw(self._image)
        self._css_size = (float(css_width), float(css_height))
        self._dpr = float(device_pixel_ratio)
        self._last = None
        self.generation += 1
        logger.debug("Surface resized to %dx%d (css %sx%s @ %s)",
                     width, height, css_width, css_height, device_pixel_ratio)

    @property
    def is_ready(self) -> bool:
        """True once the surface has a non-empty raster."""
        return self._image is not None and self.width > 0 and self.height > 0

    @property
    def width(self) -> int:
        return self._image.width if self._image is not None else 0

    @property
    def height(self) -> int:
        return self._image.height if self._image is not None else 0

    @property
    def css_size(self) -> tuple[float, float]:
        return self._css_size

    @property
    def device_pixel_ratio(self) -> float:
        return self._dpr

    # -- strokes -----------------------------------------------------------

    @property
    def is_drawing(self) -> bool:
        return self._last is not None

    @property
    def mode(self) -> DrawingMode:
        return self._mode

    def begin_stroke(self, point: Point, color: str, line_width: float,
                     mode: DrawingMode = DrawingMode.DRAW) -> None:
        """Start a new stroke at ``point`` (CSS coordinates).

        Ends any active stroke first. The compositing mode applies to every
        segment until the next ``begin_stroke``.

        Raises:
            NotReady: If the surface has not been sized yet.
            ValueError: If ``line_width`` is not positive, ``mode`` is not a
                DrawingMode or ``color`` cannot be parsed.
        """
        if not self.is_ready:
            raise NotReady("surface has no raster, call resize() first")
        if line_width <= 0:
            raise ValueError(f"line width must be positive, got {line_width}")
        if not isinstance(mode, DrawingMode):
            raise ValueError(f"unknown drawing mode: {mode!r}")

        if self._last is not None:
            self.end_stroke()

        self._fill = ImageColor.getcolor(color, 'RGBA')
        self._width_px = line_width * self._dpr
        self._mode = mode
        self._last = self._to_raster(point)

    def extend_stroke(self, point: Point) -> None:
        """Rasterize one segment from the last point to ``point``.

        Round caps at both ends make consecutive segments join smoothly.
        Only pixels near the segment are touched. No-op without an active
        stroke.
        """
        if self._last is None:
            return

        end = self._to_raster(point)
        fill = self._fill if self._mode is DrawingMode.DRAW else TRANSPARENT
        r = self._width_px / 2

        self._draw.line(
            [self._last.to_tuple(), end.to_tuple()],
            fill=fill,
            width=max(1, int(round(self._width_px))),
        )
        for c in (self._last, end):
            self._draw.ellipse([c.x - r, c.y - r, c.x + r, c.y + r], fill=fill)

        self._last = end

    def end_stroke(self) -> None:
        """Finish the active stroke. Idempotent."""
        self._last = None

    # -- whole raster ------------------------------------------------------

    def clear(self) -> None:
        """Reset every pixel to fully transparent."""
        if self._image is None:
            return
        self._draw.rectangle([0, 0, self._image.width, self._image.height], fill=TRANSPARENT)

    def snapshot(self) -> InkSnapshot:
        """Return a read-only copy of the current raster.

        Raises:
            NotReady: If the surface has not been sized yet.
        """
        if not self.is_ready:
            raise NotReady("surface has no raster, call resize() first")
        css_w, css_h = self._css_size
        return InkSnapshot(
            pixels=np.asarray(self._image),
            css_width=css_w,
            css_height=css_h,
            generation=self.generation,
        )

    def to_png_bytes(self) -> bytes:
        """Encode the current ink as PNG bytes.

        Raises:
            NotReady: If the surface has not been sized yet.
        """
        if not self.is_ready:
            raise NotReady("surface has no raster, call resize() first")
        buf = io.BytesIO()
        self._image.save(buf, format='PNG')
        return buf.getvalue()

    def _to_raster(self, point: Point) -> Point:
        return point * self._dpr
