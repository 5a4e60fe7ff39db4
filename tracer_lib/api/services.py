"""Tracing session service.

This module provides the service layer a UI host drives. TracingSession
ties together one capture surface, its pointer router, the accuracy scorer
and the word library, and implements the round lifecycle:

    - pointer events become ink
    - a stroke end (re)starts a short debounce; when it expires without a
      new stroke, the ink is scored automatically
    - an explicit check scores immediately
    - clear, navigation and resize reset the round

Everything runs on the host's UI thread. There are no background timers:
the host calls ``tick()`` from its event loop (or after a short sleep) and
the session scores when the debounce is due.

Example usage:
    Driving a session from a host loop::

        from tracer_lib.api import TracingSession
        from tracer_lib.capture import PointerEvent

        session = TracingSession()
        session.resize(800, 600, device_pixel_ratio=2.0)
        session.layout_current_word(params, anchor)
        session.on_round_complete.append(lambda outcome: celebrate())

        session.pointer_down(PointerEvent(300, 320))
        session.pointer_move(PointerEvent(340, 380))
        session.pointer_up(PointerEvent(340, 380))

        # later, in the event loop
        session.tick()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import List, Optional

from ..capture.pointer import PointerEvent, PointerRouter
from ..capture.surface import StrokeCaptureSurface
from ..config import AUTO_CHECK_DELAY, NEW_WORD_EMOJI, ScoringConfig
from ..domain.geometry import BBox, Point
from ..domain.raster import DrawingMode
from ..domain.words import WordEntry
from ..errors import NotReady
from ..scoring.regions import TargetLayout, layout_from_dom, layout_from_font
from ..scoring.scorer import AccuracyScorer, ScoreOutcome, create_strategy
from ..utils.rendering import TextRenderParams
from ..words.repository import WordLibrary, WordRepository

logger = logging.getLogger(__name__)


@dataclass
class Debouncer:
    """Cooperative one-shot timer.

    ``schedule()`` (re)arms the timer, ``cancel()`` disarms it and
    ``poll()`` returns True exactly once after the delay has elapsed.

    Attributes:
        delay: Seconds of inactivity before the timer fires.
        clock: Monotonic time source, injectable for tests.
    """
    delay: float = AUTO_CHECK_DELAY
    clock: Callable[[], float] = time.monotonic
    _deadline: Optional[float] = field(default=None, init=False, repr=False)

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def schedule(self) -> None:
        self._deadline = self.clock() + self.delay

    def cancel(self) -> None:
        self._deadline = None

    def due(self) -> bool:
        """True if armed and the delay has elapsed."""
        return self._deadline is not None and self.clock() >= self._deadline

    def poll(self) -> bool:
        """Fire and disarm if due."""
        if not self.due():
            return False
        self._deadline = None
        return True


class TracingSession:
    """One child tracing words on one canvas.

    Attributes:
        surface: The ink raster owner.
        router: Pointer event router bound to ``surface``.
        scorer: Accuracy scorer.
        words: Word repository.
        debouncer: Auto-check timer.
        index: Index of the active word.
        layout: Target layout of the active word, None until supplied.
        round_complete: Set once a check reaches 100; cleared on reset.
        last_outcome: Most recent score outcome.
        on_score: Callbacks run with every ScoreOutcome.
        on_round_complete: Callbacks run once per completed round.
    """

    def __init__(self, words: WordRepository | None = None,
                 scorer: AccuracyScorer | None = None,
                 config: ScoringConfig | None = None,
                 clock: Callable[[], float] = time.monotonic,
                 auto_check_delay: float = AUTO_CHECK_DELAY):
        self.surface = StrokeCaptureSurface()
        self.router = PointerRouter(self.surface)
        self.router.on_stroke_begin.append(self._stroke_began)
        self.router.on_stroke_end.append(self._stroke_ended)

        self.scorer = scorer if scorer is not None else AccuracyScorer(create_strategy(config))
        self.words = words if words is not None else WordLibrary()
        self.debouncer = Debouncer(auto_check_delay, clock)

        self.index = 0
        self.layout: Optional[TargetLayout] = None
        self.round_complete = False
        self.last_outcome: Optional[ScoreOutcome] = None
        self.on_score: List[Callable[[ScoreOutcome], None]] = []
        self.on_round_complete: List[Callable[[ScoreOutcome], None]] = []

        self._word_list = self.words.list()
        self._font_layout: Optional[tuple[TextRenderParams, Point]] = None

    # -- words -------------------------------------------------------------

    @property
    def word_list(self) -> List[WordEntry]:
        return list(self._word_list)

    @property
    def current_word(self) -> Optional[WordEntry]:
        if not self._word_list:
            return None
        return self._word_list[self.index % len(self._word_list)]

    def next_word(self) -> Optional[WordEntry]:
        """Advance to the next word, wrapping around."""
        return self.go_to(self.index + 1)

    def previous_word(self) -> Optional[WordEntry]:
        """Go back one word, wrapping around."""
        return self.go_to(self.index - 1)

    def go_to(self, index: int) -> Optional[WordEntry]:
        """Make word ``index`` active and start a fresh round."""
        self.clear()
        if self._word_list:
            self.index = index % len(self._word_list)
        self.layout = None
        self._relayout()
        return self.current_word

    def add_word(self, text: str, image_url: str | None = None) -> Optional[WordEntry]:
        """Store a custom word and make it active.

        The text is trimmed and lowercased; words without a picture get the
        note emoji.

        Returns:
            The stored entry, or None for blank text or a storage failure.
        """
        text = text.strip()
        if not text:
            return None

        entry = WordEntry(
            text=text.lower(),
            image_url=image_url or None,
            emoji=None if image_url else NEW_WORD_EMOJI,
            id=str(int(time.time() * 1000)),
        )
        if not self.words.append(entry):
            logger.warning("Could not store custom word %r", entry.text)
            return None

        self._word_list = self.words.list()
        self.go_to(len(self._word_list) - 1)
        return entry

    # -- layout ------------------------------------------------------------

    def resize(self, css_width: float, css_height: float,
               device_pixel_ratio: float = 1.0) -> None:
        """Resize the canvas. Ink and any active stroke are discarded.

        A font-metric layout is recomputed for the new raster. A DOM layout
        still describes the old raster, so a check before the host supplies
        a new one reports DIMENSION_MISMATCH with score 0.
        """
        self.router.cancel()
        self.surface.resize(css_width, css_height, device_pixel_ratio)
        self._reset_round()
        self._relayout()

    def set_layout(self, layout: Optional[TargetLayout]) -> None:
        self.layout = layout
        self._font_layout = None

    def update_dom_layout(self, canvas_rect: Optional[BBox],
                          glyph_rects: Iterable[Optional[BBox]],
                          render: TextRenderParams | None = None,
                          anchor: Point | None = None) -> Optional[TargetLayout]:
        """Rebuild the layout from DOM measurements.

        Also moves the pointer router's canvas origin to the canvas' top-left
        corner. Returns None (and leaves no layout) while the canvas is not
        mounted or sized.
        """
        word = self.current_word
        text = word.text if (word is not None and render is not None) else None
        try:
            layout = layout_from_dom(
                canvas_rect, glyph_rects, (self.surface.width, self.surface.height),
                text=text, render=render if text is not None else None,
                anchor=anchor if text is not None else None,
            )
        except NotReady as e:
            logger.debug("DOM layout not ready: %s", e)
            self.set_layout(None)
            return None

        self.router.set_canvas_origin(canvas_rect.x_min, canvas_rect.y_min)
        self.set_layout(layout)
        return layout

    def layout_current_word(self, render: TextRenderParams,
                            anchor: Point) -> Optional[TargetLayout]:
        """Lay out the active word from font metrics.

        ``render`` and ``anchor`` are canvas-local CSS values. They are
        remembered and reused for every word navigated to afterwards.
        """
        self._font_layout = (render, anchor)
        self._relayout()
        return self.layout

    def _relayout(self) -> None:
        word = self.current_word
        if self._font_layout is None or word is None:
            return
        render, anchor = self._font_layout
        try:
            self.layout = layout_from_font(
                word.text, render, anchor,
                (self.surface.width, self.surface.height), self.surface.css_size,
            )
        except NotReady as e:
            logger.debug("Font layout not ready: %s", e)
            self.layout = None

    # -- input -------------------------------------------------------------

    def set_eraser(self, enabled: bool) -> None:
        self.router.set_brush(mode=DrawingMode.ERASE if enabled else DrawingMode.DRAW)

    def pointer_down(self, event: PointerEvent) -> bool:
        return self.router.pointer_down(event)

    def pointer_move(self, event: PointerEvent) -> None:
        self.router.pointer_move(event)

    def pointer_up(self, event: PointerEvent) -> None:
        self.router.pointer_up(event)

    def pointer_leave(self, event: PointerEvent) -> None:
        self.router.pointer_leave(event)

    def _stroke_began(self) -> None:
        self.debouncer.cancel()

    def _stroke_ended(self) -> None:
        if not self.round_complete:
            self.debouncer.schedule()

    # -- scoring -----------------------------------------------------------

    def tick(self) -> Optional[ScoreOutcome]:
        """Run the auto check if its debounce is due."""
        if self.debouncer.poll():
            return self.check()
        return None

    def check(self) -> ScoreOutcome:
        """Score the current ink against the current layout now."""
        self.debouncer.cancel()
        snapshot = self.surface.snapshot() if self.surface.is_ready else None
        outcome = self.scorer.score(snapshot, self.layout)
        self.last_outcome = outcome

        for callback in self.on_score:
            callback(outcome)

        if outcome.round_complete and not self.round_complete:
            self.round_complete = True
            logger.info("Round complete for %r", self.current_word.text if self.current_word else None)
            for callback in self.on_round_complete:
                callback(outcome)

        return outcome

    def clear(self) -> None:
        """Erase all ink and reset the round."""
        self.surface.clear()
        self._reset_round()

    def _reset_round(self) -> None:
        self.debouncer.cancel()
        self.round_complete = False
        self.last_outcome = None
