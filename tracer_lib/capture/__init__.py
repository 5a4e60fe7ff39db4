"""Stroke capture.

The module exports:
    StrokeCaptureSurface: Owner of the ink raster; rasterizes strokes in
        draw or erase mode and hands out read-only snapshots.
    PointerRouter: Maps pointer down/move/up/leave events to the surface
        and implements pointer capture.
    PointerEvent: A pointer sample in client coordinates.
    Brush: Colour, width and mode for the next stroke.

Example usage::

    from tracer_lib.capture import PointerEvent, PointerRouter, StrokeCaptureSurface

    surface = StrokeCaptureSurface()
    surface.resize(400, 300, device_pixel_ratio=2.0)
    router = PointerRouter(surface)
    router.pointer_down(PointerEvent(20, 20))
    router.pointer_move(PointerEvent(120, 40))
    router.pointer_up(PointerEvent(120, 40))
"""

from .pointer import Brush, PointerEvent, PointerRouter
from .surface import StrokeCaptureSurface

__all__ = ['StrokeCaptureSurface', 'PointerRouter', 'PointerEvent', 'Brush']
