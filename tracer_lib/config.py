"""Shared configuration for the tracing core.

This module centralizes the tunable constants used by the capture surface,
the scoring strategies and the tracing session, and provides the logging
setup used by host applications.

The scoring constants (density threshold, stray penalty, boost factor) were
tuned by hand to be encouraging for three-year-olds. Keep them as
configuration; change them only together with the product owner.

Example:
    Select the overlap strategy with a softer penalty::

        from tracer_lib.config import ScoringConfig
        from tracer_lib.scoring import create_strategy

        config = ScoringConfig.from_dict({'strategy': 'overlap', 'stray_penalty': 0.2})
        strategy = create_strategy(config)

Attributes:
    BRUSH_COLOR (str): Ink colour used by the tracing game.
    DEFAULT_LINE_WIDTH (float): Brush width in CSS pixels.
    DENSITY_THRESHOLD (float): Fraction of a glyph box that must be inked.
    OPACITY_CUTOFF (int): Alpha above which a pixel counts as ink.
    SAMPLE_STRIDE (int): Sampling step of the density scan, in pixels.
    TARGET_ALPHA_CUTOFF (int): Alpha above which a rendered pixel is target.
    STRAY_PENALTY (float): Weight of ink drawn outside the target.
    SCORE_BOOST (float): Forgiving multiplier applied to the overlap score.
    AUTO_CHECK_DELAY (float): Seconds of inactivity before auto-scoring.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'
LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}
QUIET_LOGGERS = ('PIL',)


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Route tracer logs to stderr and optionally to a file.

    Replaces whatever handlers the root logger had, so calling it twice does
    not duplicate output. Unknown level names fall back to INFO.

    Args:
        level: Level name, case-insensitive.
        log_file: Extra destination for the same records.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    # Pillow logs every plugin it tries at DEBUG
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# --- Brush ---
BRUSH_COLOR = '#1F2937'
DEFAULT_LINE_WIDTH = 16.0

BRUSH_COLORS = {
    'red': '#EF4444',
    'blue': '#3B82F6',
    'green': '#22C55E',
    'yellow': '#EAB308',
    'purple': '#A855F7',
    'pink': '#EC4899',
    'black': BRUSH_COLOR,
}

# --- Density scoring ---
DENSITY_THRESHOLD = 0.03   # 3% of a letter box is roughly one solid stroke across it
OPACITY_CUTOFF = 50
SAMPLE_STRIDE = 4
DENSITY_ROUNDING = 'round'

# --- Overlap scoring ---
TARGET_ALPHA_CUTOFF = 100
STRAY_PENALTY = 0.3
SCORE_BOOST = 1.3

# --- Session ---
AUTO_CHECK_DELAY = 0.5
NEW_WORD_EMOJI = '\U0001F4DD'

# --- Storage keys ---
CUSTOM_WORDS_KEY = 'tinytracer_custom_words'
BG_COLOR_KEY = 'tinytracer_bg_color'
FONT_KEY = 'tinytracer_font'

# --- Appearance ---
BACKGROUND_COLORS = [
    '#FFFFFF', '#F1F5F9', '#FECACA', '#FED7AA', '#FEF08A', '#BBF7D0',
    '#BAE6FD', '#BFDBFE', '#DDD6FE', '#F5D0FE', '#FBCFE8',
]
DEFAULT_BACKGROUND = BACKGROUND_COLORS[1]

# label -> font family name
FONT_PRESETS = {
    'School': 'Andika',
    'Bubbly': 'Fredoka',
    'Friendly': 'Comic Neue',
    'Marker': 'Patrick Hand',
}
DEFAULT_FONT_FAMILY = FONT_PRESETS['School']

# --- Uploaded photos ---
IMAGE_MAX_SIZE = 1024
IMAGE_JPEG_QUALITY = 60

STRATEGIES = ('density', 'overlap')


@dataclass
class ScoringConfig:
    """Selects and tunes the scoring strategy.

    Attributes:
        strategy: 'density' (per-glyph ink coverage) or 'overlap'
            (rendered reference mask intersection).
        density_threshold: Coverage ratio at which a glyph is complete.
        opacity_cutoff: Alpha above which a pixel counts as ink.
        sample_stride: Sampling step of the density scan.
        rounding: 'round' (half up) or 'truncate' for the density score.
        target_alpha_cutoff: Alpha above which a reference pixel is target.
        stray_penalty: Weight of the stray ink ratio in the overlap score.
        boost: Multiplier applied to the raw overlap score before clamping.
    """
    strategy: str = 'density'
    density_threshold: float = DENSITY_THRESHOLD
    opacity_cutoff: int = OPACITY_CUTOFF
    sample_stride: int = SAMPLE_STRIDE
    rounding: str = DENSITY_ROUNDING
    target_alpha_cutoff: int = TARGET_ALPHA_CUTOFF
    stray_penalty: float = STRAY_PENALTY
    boost: float = SCORE_BOOST

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(f"unknown scoring strategy: {self.strategy!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoringConfig:
        """Create a config from a plain dictionary.

        Raises:
            ValueError: On unknown keys or an unknown strategy name.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown scoring options: {', '.join(sorted(unknown))}")
        return cls(**data)
