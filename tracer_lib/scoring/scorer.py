"""Accuracy scorer facade.

AccuracyScorer runs the configured strategy and turns every failure into a
ScoreOutcome, so the presentation layer always receives a well-defined
state:

    SCORED              score in [0, 100]
    NOT_READY           score is None; retry after layout settles
    EMPTY_TARGET        score 0; logged as a usage anomaly
    DIMENSION_MISMATCH  score 0; the raster changed size, caller resets

Example usage::

    from tracer_lib.config import ScoringConfig
    from tracer_lib.scoring import AccuracyScorer, create_strategy

    scorer = AccuracyScorer(create_strategy(ScoringConfig(strategy='overlap')))
    outcome = scorer.score(surface.snapshot(), layout)
    if outcome.ready:
        print(outcome.score)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..config import ScoringConfig
from ..domain.raster import InkSnapshot
from ..errors import DimensionMismatch, EmptyTarget, NotReady
from .regions import TargetLayout
from .strategies import DensityStrategy, OverlapStrategy, ScoreResult, ScoringStrategy

logger = logging.getLogger(__name__)


class ScoreStatus(Enum):
    SCORED = 'scored'
    NOT_READY = 'not_ready'
    EMPTY_TARGET = 'empty_target'
    DIMENSION_MISMATCH = 'dimension_mismatch'


@dataclass(frozen=True)
class ScoreOutcome:
    """What the presentation layer receives for one scoring request.

    Attributes:
        status: How scoring went.
        score: Integer in [0, 100], or None when not ready.
        strategy: Name of the strategy that ran.
        result: Full strategy result when scored.
    """
    status: ScoreStatus
    score: Optional[int]
    strategy: str
    result: Optional[ScoreResult] = None

    @property
    def ready(self) -> bool:
        """False only when scoring was refused for missing geometry."""
        return self.status is not ScoreStatus.NOT_READY

    @property
    def completed(self) -> Tuple[bool, ...]:
        return self.result.completed if self.result is not None else ()

    @property
    def round_complete(self) -> bool:
        """True when density scoring found every glyph traced.

        An overlap score of 100 is not a completed round: overlap scoring
        has no per-glyph notion of done.
        """
        return (self.status is ScoreStatus.SCORED and self.score == 100
                and self.strategy == DensityStrategy.name)


def create_strategy(config: ScoringConfig | None = None) -> ScoringStrategy:
    """Build the strategy selected by ``config``.

    Args:
        config: Scoring configuration. Defaults to density scoring with the
            stock constants.
    """
    if config is None:
        config = ScoringConfig()

    if config.strategy == 'overlap':
        return OverlapStrategy(
            target_alpha_cutoff=config.target_alpha_cutoff,
            ink_alpha_cutoff=config.opacity_cutoff,
            stray_penalty=config.stray_penalty,
            boost=config.boost,
        )
    return DensityStrategy(
        density_threshold=config.density_threshold,
        opacity_cutoff=config.opacity_cutoff,
        stride=config.sample_stride,
        rounding=config.rounding,
    )


class AccuracyScorer:
    """Runs a scoring strategy and recovers from its failures.

    Attributes:
        strategy: The strategy in use. May be swapped between calls.
    """

    def __init__(self, strategy: ScoringStrategy | None = None):
        self.strategy = strategy if strategy is not None else create_strategy()

    def score(self, snapshot: InkSnapshot | None,
              layout: TargetLayout | None) -> ScoreOutcome:
        """Score ``snapshot`` against ``layout``.

        A missing snapshot or layout yields NOT_READY rather than a zero
        score, so callers can tell "not ready" from "scored zero".
        """
        name = self.strategy.name
        if snapshot is None or layout is None:
            logger.debug("Scoring refused: %s missing",
                         'snapshot' if snapshot is None else 'layout')
            return ScoreOutcome(ScoreStatus.NOT_READY, None, name)

        try:
            result = self.strategy.score(snapshot, layout)
        except NotReady as e:
            logger.debug("Scoring refused: %s", e)
            return ScoreOutcome(ScoreStatus.NOT_READY, None, name)
        except EmptyTarget as e:
            logger.warning("Empty scoring target: %s", e)
            return ScoreOutcome(ScoreStatus.EMPTY_TARGET, 0, name)
        except DimensionMismatch as e:
            logger.info("Raster changed size before scoring: %s", e)
            return ScoreOutcome(ScoreStatus.DIMENSION_MISMATCH, 0, name)

        return ScoreOutcome(ScoreStatus.SCORED, result.score, name, result)
