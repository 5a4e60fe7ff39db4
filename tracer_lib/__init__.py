"""TinyTracer tracing library.

Children trace a word over a canvas with a finger, pen or mouse. This
package captures the strokes into a device-pixel ink raster and scores how
well the ink covers the target word.

Architecture Overview:
    - tracer_lib.domain provides the value objects (Point, BBox,
      InkSnapshot, WordEntry)
    - tracer_lib.capture owns the ink raster and routes pointer events
    - tracer_lib.scoring maps target regions into raster space and scores
      the ink with a density or overlap strategy
    - tracer_lib.words holds the default words, persistence and the
      word-match mini game
    - tracer_lib.api ties everything into a TracingSession a UI host drives

The package is organized into the following modules:
    domain: Geometry, raster snapshot and word value objects.
    capture: StrokeCaptureSurface and PointerRouter.
    scoring: Target layouts, scoring strategies and the AccuracyScorer.
    words: Word library, key-value persistence and the match game.
    utils: Text rendering and picture helpers.
    api: TracingSession and its Debouncer.
    config: Constants, ScoringConfig and logging setup.
    errors: Exceptions raised by the core.

Example usage:
    Score a traced word::

        from tracer_lib import PointerEvent, TracingSession

        session = TracingSession()
        session.resize(800, 600, device_pixel_ratio=2.0)
        session.update_dom_layout(canvas_rect, glyph_rects)
        session.pointer_down(PointerEvent(210, 300))
        session.pointer_move(PointerEvent(260, 330))
        session.pointer_up(PointerEvent(260, 330))
        outcome = session.check()
        print(outcome.status, outcome.score)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import Debouncer, TracingSession
from .capture import Brush, PointerEvent, PointerRouter, StrokeCaptureSurface
from .domain import BBox, DrawingMode, InkSnapshot, Point, WordEntry
from .errors import DimensionMismatch, EmptyTarget, NotReady, TracerError
from .scoring import AccuracyScorer, ScoreOutcome, ScoreStatus, TargetLayout

__all__ = [
    # Domain objects
    'Point', 'BBox', 'DrawingMode', 'InkSnapshot', 'WordEntry',
    # Capture
    'StrokeCaptureSurface', 'PointerRouter', 'PointerEvent', 'Brush',
    # Scoring
    'AccuracyScorer', 'ScoreOutcome', 'ScoreStatus', 'TargetLayout',
    # Services
    'TracingSession', 'Debouncer',
    # Errors
    'TracerError', 'NotReady', 'EmptyTarget', 'DimensionMismatch',
]

__version__ = '1.0.0'
