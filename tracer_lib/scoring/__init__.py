"""Tracing accuracy scoring.

This module judges how well the ink raster matches the target word. Two
strategies implement the same ScoringStrategy protocol and are selected by
configuration:

Strategy classes:
    ScoringStrategy: Protocol defining the strategy interface.
    DensityStrategy: Percentage of glyph boxes holding enough ink.
    OverlapStrategy: Coverage of a rendered reference mask minus a stray
        ink penalty.
    ScoreResult: Raw strategy output.

Layout:
    CoordinateMapper: Client CSS coordinates to raster pixels.
    TargetLayout: Target region set for one word in raster pixels.
    layout_from_dom: Build a layout from DOM rectangles.
    layout_from_font: Build a layout from font metrics.

Facade:
    AccuracyScorer: Runs a strategy and recovers from its failures.
    ScoreOutcome, ScoreStatus: What the presentation layer receives.
    create_strategy: Strategy factory driven by ScoringConfig.

Example usage::

    from tracer_lib.scoring import AccuracyScorer, layout_from_dom

    layout = layout_from_dom(canvas_rect, glyph_rects, surface_size)
    outcome = AccuracyScorer().score(surface.snapshot(), layout)
    if outcome.round_complete:
        celebrate()
"""

from .regions import CoordinateMapper, TargetLayout, layout_from_dom, layout_from_font
from .scorer import AccuracyScorer, ScoreOutcome, ScoreStatus, create_strategy
from .strategies import DensityStrategy, OverlapStrategy, ScoreResult, ScoringStrategy

__all__ = [
    'ScoringStrategy', 'DensityStrategy', 'OverlapStrategy', 'ScoreResult',
    'CoordinateMapper', 'TargetLayout', 'layout_from_dom', 'layout_from_font',
    'AccuracyScorer', 'ScoreOutcome', 'ScoreStatus', 'create_strategy',
]
