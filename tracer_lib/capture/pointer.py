"""Pointer event routing with pointer capture.

The windowing layer forwards raw pointer events here. The router converts
client coordinates to canvas-local CSS coordinates, holds the current brush,
and captures the pointer that started a stroke so that moves keep extending
the stroke even after the finger slides off the drawable area.

Example:
    Wire a host's event loop to the surface::

        router = PointerRouter(surface, canvas_origin=(0, 120))
        router.on_stroke_end.append(lambda: print("lifted"))

        router.pointer_down(PointerEvent(40, 160, pointer_id=7))
        router.pointer_move(PointerEvent(90, 170, pointer_id=7))
        router.pointer_up(PointerEvent(90, 170, pointer_id=7))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..config import BRUSH_COLOR, DEFAULT_LINE_WIDTH
from ..domain.geometry import Point
from ..domain.raster import DrawingMode
from .surface import StrokeCaptureSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointerEvent:
    """A pointer sample in client (viewport) CSS coordinates."""
    x: float
    y: float
    pointer_id: int = 1


@dataclass
class Brush:
    """Ink settings applied when a stroke begins."""
    color: str = BRUSH_COLOR
    line_width: float = DEFAULT_LINE_WIDTH
    mode: DrawingMode = DrawingMode.DRAW


@dataclass
class PointerRouter:
    """Routes pointer events to a StrokeCaptureSurface.

    Attributes:
        surface: The surface receiving strokes.
        canvas_origin: Client coordinates of the canvas' top-left corner.
        brush: Settings used for the next stroke.
        on_stroke_begin: Callbacks run after a stroke starts.
        on_stroke_end: Callbacks run after a stroke ends.
    """
    surface: StrokeCaptureSurface
    canvas_origin: tuple[float, float] = (0.0, 0.0)
    brush: Brush = field(default_factory=Brush)
    on_stroke_begin: list[Callable[[], None]] = field(default_factory=list)
    on_stroke_end: list[Callable[[], None]] = field(default_factory=list)
    _captured: int | None = field(default=None, init=False, repr=False)

    @property
    def captured_pointer(self) -> int | None:
        """Pointer id currently holding capture, if any."""
        return self._captured

    def set_canvas_origin(self, x: float, y: float) -> None:
        self.canvas_origin = (float(x), float(y))

    def set_brush(self, color: str | None = None, line_width: float | None = None,
                  mode: DrawingMode | None = None) -> None:
        """Update the brush. Takes effect from the next stroke."""
        if line_width is not None and line_width <= 0:
            raise ValueError(f"line width must be positive, got {line_width}")
        if color is not None:
            self.brush.color = color
        if line_width is not None:
            self.brush.line_width = line_width
        if mode is not None:
            self.brush.mode = mode

    def pointer_down(self, event: PointerEvent) -> bool:
        """Start a stroke and capture the pointer.

        Returns:
            True if a stroke started. A second pointer while another one
            holds capture is ignored, as is any pointer before the surface
            has been sized.
        """
        if self._captured is not None:
            logger.debug("Ignoring pointer %d, pointer %d holds capture",
                         event.pointer_id, self._captured)
            return False
        if not self.surface.is_ready:
            return False

        self.surface.begin_stroke(
            self._to_canvas(event), self.brush.color, self.brush.line_width, self.brush.mode
        )
        self._captured = event.pointer_id
        for callback in self.on_stroke_begin:
            callback()
        return True

    def pointer_move(self, event: PointerEvent) -> None:
        """Extend the stroke if ``event`` comes from the captured pointer."""
        if event.pointer_id != self._captured:
            return
        self.surface.extend_stroke(self._to_canvas(event))

    def pointer_up(self, event: PointerEvent) -> None:
        """End the stroke and release capture."""
        if event.pointer_id != self._captured:
            return
        self.surface.end_stroke()
        self._captured = None
        for callback in self.on_stroke_end:
            callback()

    # A captured pointer leaving the canvas ends the stroke the same way
    pointer_leave = pointer_up

    def cancel(self) -> None:
        """Drop capture and the active stroke without stroke-end callbacks."""
        self.surface.end_stroke()
        self._captured = None

    def _to_canvas(self, event: PointerEvent) -> Point:
        ox, oy = self.canvas_origin
        return Point(event.x - ox, event.y - oy)
