"""Domain objects for stroke capture and scoring.

The module exports the following classes:

Geometry classes:
    Point: Immutable 2D point.
    BBox: Immutable half-open rectangle used for glyph boxes.

Raster classes:
    DrawingMode: Draw or erase compositing.
    InkSnapshot: Read-only copy of the ink raster.

Word classes:
    WordEntry: A word to trace with optional imagery.

Example usage::

    from tracer_lib.domain import BBox, Point

    box = BBox(100, 100, 200, 300)
    box.area          # 20000
    box.contains(Point(150, 120))
"""

from .geometry import BBox, Point
from .raster import DrawingMode, InkSnapshot
from .words import WordEntry

__all__ = [
    'Point', 'BBox',
    'DrawingMode', 'InkSnapshot',
    'WordEntry',
]
