"""Scoring strategy implementations.

This module provides the two interchangeable ways of judging a tracing
attempt. They answer different questions and neither replaces the other:

    DensityStrategy: "did the child put enough ink inside every letter?"
        Per-glyph box coverage, robust to wobble and to differences between
        text rendering engines.
    OverlapStrategy: "how much of the word did the ink cover, and how much
        ink landed elsewhere?" Renders the reference word offscreen and
        compares masks across the whole canvas.

Both read an InkSnapshot and a TargetLayout in raster pixels and never
modify the snapshot.

Example usage:
    Scoring with the density strategy::

        from tracer_lib.scoring.strategies import DensityStrategy

        strategy = DensityStrategy(density_threshold=0.03, stride=4)
        result = strategy.score(snapshot, layout)
        print(result.score, result.completed)

    Scoring two masks directly::

        result = OverlapStrategy().score_masks(target_mask, ink_mask)
        print(f"coverage={result.coverage:.2f} stray={result.stray_ratio:.2f}")
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import ClassVar, Optional, Protocol, Tuple

import numpy as np

from ..config import (
    DENSITY_ROUNDING,
    DENSITY_THRESHOLD,
    OPACITY_CUTOFF,
    SAMPLE_STRIDE,
    SCORE_BOOST,
    STRAY_PENALTY,
    TARGET_ALPHA_CUTOFF,
)
from ..domain.raster import InkSnapshot
from ..errors import DimensionMismatch, EmptyTarget, NotReady
from ..utils.rendering import render_text_alpha
from .regions import TargetLayout

logger = logging.getLogger(__name__)

ROUNDING_MODES = ('round', 'truncate')


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoreResult:
    """Result of one strategy run.

    Attributes:
        score: Integer in [0, 100].
        completed: Per-glyph completion flags (density scoring only).
        coverage: Fraction of target pixels inked (overlap scoring only).
        stray_ratio: Ink outside the target per target pixel (overlap only).
    """
    score: int
    completed: Tuple[bool, ...] = ()
    coverage: Optional[float] = None
    stray_ratio: Optional[float] = None


class ScoringStrategy(Protocol):
    """Protocol for scoring strategies.

    Implementations raise DimensionMismatch when the layout was built for a
    different raster size, NotReady when the geometry they need is missing
    and EmptyTarget when there is nothing to trace.
    """

    name: str

    def score(self, snapshot: InkSnapshot, layout: TargetLayout) -> ScoreResult:
        """Score ``snapshot`` against ``layout``."""
        ...


@dataclass
class DensityStrategy:
    """Per-glyph ink coverage scoring.

    Each glyph box is sampled on a sparse grid, every ``stride``-th pixel in
    each axis starting at the box's top-left corner, and the hit count is
    multiplied by ``stride ** 2`` to estimate the inked area. This trades
    precision for speed on large canvases; the estimate carries
    quantization noise of up to ``stride ** 2`` pixels per hit, so tests
    comparing ratios need an epsilon. ``stride=1`` scans every pixel.

    A glyph is complete when ``estimated_ink / box_area >=
    density_threshold``. The score is the percentage of complete glyphs.

    Attributes:
        density_threshold: Coverage ratio for a complete glyph.
        opacity_cutoff: Alpha above which a pixel counts as ink.
        stride: Sampling step in pixels.
        rounding: 'round' (half up) or 'truncate' for the percentage.
    """
    density_threshold: float = DENSITY_THRESHOLD
    opacity_cutoff: int = OPACITY_CUTOFF
    stride: int = SAMPLE_STRIDE
    rounding: str = DENSITY_ROUNDING

    name: ClassVar[str] = 'density'

    def __post_init__(self):
        if self.stride < 1:
            raise ValueError(f"stride must be at least 1, got {self.stride}")
        if self.rounding not in ROUNDING_MODES:
            raise ValueError(f"rounding must be one of {ROUNDING_MODES}, got {self.rounding!r}")

    def region_ratios(self, snapshot: InkSnapshot, layout: TargetLayout) -> list[float]:
        """Estimated ink coverage ratio of every glyph box.

        Boxes with no area inside the raster get 0.0.
        """
        layout.check_snapshot(snapshot)
        alpha = snapshot.alpha
        step = self.stride
        ratios = []

        for box in layout.boxes:
            x0, y0, x1, y1 = box.clamped(snapshot.width, snapshot.height).to_int_tuple()
            area = max(0, x1 - x0) * max(0, y1 - y0)
            if area == 0:
                ratios.append(0.0)
                continue
            sampled = alpha[y0:y1:step, x0:x1:step]
            hits = int(np.count_nonzero(sampled > self.opacity_cutoff))
            ratios.append(hits * step * step / area)

        return ratios

    def score(self, snapshot: InkSnapshot, layout: TargetLayout) -> ScoreResult:
        """Score the percentage of glyph boxes with enough ink.

        Raises:
            DimensionMismatch: If the layout does not match the snapshot.
            EmptyTarget: If the layout has no glyph boxes.
        """
        layout.check_snapshot(snapshot)
        if not layout.boxes:
            raise EmptyTarget("layout has no glyph boxes")

        ratios = self.region_ratios(snapshot, layout)
        completed = tuple(r >= self.density_threshold for r in ratios)
        percent = 100 * sum(completed) / len(completed)

        if self.rounding == 'round':
            score = round_half_up(percent)
        else:
            score = int(percent)

        logger.debug("Density ratios %s -> %d/%d complete, score %d",
                     ['%.3f' % r for r in ratios], sum(completed), len(completed), score)
        return ScoreResult(score=score, completed=completed)


@dataclass
class OverlapStrategy:
    """Reference-mask overlap scoring.

    The target word is rendered into an offscreen raster the size of the
    ink raster; pixels with alpha above ``target_alpha_cutoff`` form the
    target mask T and inked pixels form the user mask U. Then::

        coverage = |T & U| / |T|
        stray    = |~T & U| / |T|
        raw      = coverage - stray_penalty * stray
        score    = round(clamp(raw * boost, 0, 1) * 100)

    The boost makes the score forgiving: 77% effective coverage already
    scores 100.

    Attributes:
        target_alpha_cutoff: Alpha above which a reference pixel is target.
        ink_alpha_cutoff: Alpha above which an ink pixel counts.
        stray_penalty: Weight of the stray ratio.
        boost: Multiplier applied before clamping.
    """
    target_alpha_cutoff: int = TARGET_ALPHA_CUTOFF
    ink_alpha_cutoff: int = OPACITY_CUTOFF
    stray_penalty: float = STRAY_PENALTY
    boost: float = SCORE_BOOST

    name: ClassVar[str] = 'overlap'

    def target_mask(self, layout: TargetLayout, size: Tuple[int, int]) -> np.ndarray:
        """Render the layout's reference word as a boolean mask."""
        alpha = render_text_alpha(layout.text, layout.render, layout.anchor, size)
        return alpha > self.target_alpha_cutoff

    def score_masks(self, target: np.ndarray, ink: np.ndarray) -> ScoreResult:
        """Score a boolean ink mask against a boolean target mask.

        Raises:
            DimensionMismatch: If the masks differ in shape.
            EmptyTarget: If the target mask is empty.
        """
        if target.shape != ink.shape:
            raise DimensionMismatch(target.shape[::-1], ink.shape[::-1])

        n_target = int(np.count_nonzero(target))
        if n_target == 0:
            raise EmptyTarget("reference rendering has no target pixels")

        intersection = int(np.count_nonzero(target & ink))
        stray = int(np.count_nonzero(ink & ~target))

        coverage = intersection / n_target
        stray_ratio = stray / n_target
        raw = coverage - self.stray_penalty * stray_ratio
        boosted = min(1.0, max(0.0, raw * self.boost))
        score = round_half_up(boosted * 100)

        logger.debug("Overlap target=%d hit=%d stray=%d -> coverage %.3f stray %.3f score %d",
                     n_target, intersection, stray, coverage, stray_ratio, score)
        return ScoreResult(score=score, coverage=coverage, stray_ratio=stray_ratio)

    def score(self, snapshot: InkSnapshot, layout: TargetLayout) -> ScoreResult:
        """Render the reference word and score the snapshot against it.

        Raises:
            DimensionMismatch: If the layout does not match the snapshot.
            NotReady: If the layout carries no reference text placement.
            EmptyTarget: If the word is empty or renders to no pixels.
        """
        layout.check_snapshot(snapshot)
        if not layout.has_reference:
            raise NotReady("layout has no reference text placement")
        if not layout.text:
            raise EmptyTarget("target word is empty")

        target = self.target_mask(layout, snapshot.size)
        return self.score_masks(target, snapshot.alpha > self.ink_alpha_cutoff)
