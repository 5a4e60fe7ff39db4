"""Reference text rendering and glyph layout.

This module renders the target word into an offscreen raster for overlap
scoring and lays out one box per glyph for density scoring when the host
has no DOM to measure. Both use the same pen positions, so a box always
contains the glyph drawn for it.

Text placement follows the HTML canvas model: an anchor point, a
horizontal ``align`` ('left', 'center', 'right') and a vertical
``baseline`` ('top', 'middle', 'alphabetic', 'bottom'). Letter spacing is
added after every character, as CSS tracking does, which is why characters
are drawn one at a time instead of with a single ``draw.text`` call.

Example usage:
    Rendering a target mask::

        from tracer_lib.domain import Point
        from tracer_lib.utils.rendering import TextRenderParams, render_text_alpha

        params = TextRenderParams(font_family='Andika', font_size=240,
                                  align='center', baseline='middle')
        alpha = render_text_alpha('cat', params, Point(800, 600), (1600, 1200))
        target = alpha > 100

    Laying out glyph boxes::

        boxes = layout_glyph_boxes('cat', params, Point(800, 600))
        for box in boxes:
            print(box.to_int_tuple())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import List, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from ..config import DEFAULT_FONT_FAMILY
from ..domain.geometry import BBox, Point

logger = logging.getLogger(__name__)

ALIGNMENTS = ('left', 'center', 'right')
BASELINES = ('top', 'middle', 'alphabetic', 'bottom')

# LRU cache size for font objects; one session renders few families and sizes
FONT_CACHE_SIZE = 64


@dataclass(frozen=True)
class TextRenderParams:
    """How the target word is drawn.

    Attributes:
        font_family: Font file path, or a family name looked up in the
            system font directories.
        font_size: Pixel size of the em square.
        align: Horizontal placement relative to the anchor.
        baseline: Vertical placement relative to the anchor.
        letter_spacing: Extra pixels after every character.
    """
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = 100.0
    align: str = 'center'
    baseline: str = 'alphabetic'
    letter_spacing: float = 0.0

    def __post_init__(self):
        if self.align not in ALIGNMENTS:
            raise ValueError(f"align must be one of {ALIGNMENTS}, got {self.align!r}")
        if self.baseline not in BASELINES:
            raise ValueError(f"baseline must be one of {BASELINES}, got {self.baseline!r}")

    def scaled(self, factor: float) -> TextRenderParams:
        """Scale size and spacing, e.g. from CSS to raster pixels."""
        return replace(self, font_size=self.font_size * factor,
                       letter_spacing=self.letter_spacing * factor)


def _font_candidates(font_family: str) -> List[str]:
    compact = font_family.replace(' ', '')
    return [
        font_family,
        f'{font_family}.ttf',
        f'{compact}.ttf',
        f'{compact}-Regular.ttf',
    ]


@lru_cache(maxsize=FONT_CACHE_SIZE)
def load_font(font_family: str, size: float) -> FreeTypeFont:
    """Load a scalable font, falling back to Pillow's bundled face.

    Args:
        font_family: Font file path or family name.
        size: Pixel size, must be positive.

    Returns:
        A FreeTypeFont. If no candidate file can be opened, Pillow's
        default scalable font at ``size``.

    Raises:
        ValueError: If ``size`` is not positive.
    """
    if size <= 0:
        raise ValueError(f"font size must be positive, got {size}")

    for candidate in _font_candidates(font_family):
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue

    logger.debug("Font %r not found, using Pillow default face", font_family)
    return ImageFont.load_default(size)


def _pen_layout(text: str, font: FreeTypeFont, params: TextRenderParams,
                anchor: Point) -> Tuple[List[Tuple[str, float, float]], float]:
    """Compute per-character pen positions.

    Returns:
        Tuple of (cells, baseline_y) where cells holds one
        ``(char, x, advance)`` per character.
    """
    advances = [font.getlength(ch) + params.letter_spacing for ch in text]
    total = sum(advances)

    if params.align == 'left':
        x = anchor.x
    elif params.align == 'center':
        x = anchor.x - total / 2
    else:
        x = anchor.x - total

    ascent, descent = font.getmetrics()
    if params.baseline == 'top':
        baseline_y = anchor.y + ascent
    elif params.baseline == 'middle':
        baseline_y = anchor.y + (ascent - descent) / 2
    elif params.baseline == 'bottom':
        baseline_y = anchor.y - descent
    else:
        baseline_y = anchor.y

    cells = []
    for ch, advance in zip(text, advances):
        cells.append((ch, x, advance))
        x += advance
    return cells, baseline_y


def render_text_alpha(text: str, params: TextRenderParams, anchor: Point,
                      size: Tuple[int, int]) -> np.ndarray:
    """Render ``text`` into an offscreen alpha raster.

    Args:
        text: Word to render.
        params: Font and placement, in raster pixels.
        anchor: Anchor point in raster pixels.
        size: Raster size as ``(width, height)``.

    Returns:
        uint8 array of shape (height, width); 255 where the glyphs are
        solid, intermediate values on anti-aliased edges. All zeros for an
        empty string or a non-positive font size.
    """
    width, height = size
    img = Image.new('L', (width, height), 0)
    if not text or params.font_size <= 0:
        return np.array(img)

    font = load_font(params.font_family, params.font_size)
    draw = ImageDraw.Draw(img)
    cells, baseline_y = _pen_layout(text, font, params, anchor)
    for ch, x, _ in cells:
        draw.text((x, baseline_y), ch, font=font, fill=255, anchor='ls')

    return np.array(img)


def layout_glyph_boxes(text: str, params: TextRenderParams, anchor: Point) -> List[BBox]:
    """Lay out one span-like box per non-space character.

    Each box spans the character's advance (plus letter spacing)
    horizontally and the font's ascent to descent vertically, the way an
    inline-block span with ``line-height: 1`` would.

    Returns:
        Boxes in the same coordinate space as ``anchor``. Empty for an
        empty or whitespace-only string or a non-positive font size.
    """
    if not text or params.font_size <= 0:
        return []

    font = load_font(params.font_family, params.font_size)
    ascent, descent = font.getmetrics()
    cells, baseline_y = _pen_layout(text, font, params, anchor)
    return [
        BBox(x, baseline_y - ascent, x + advance, baseline_y + descent)
        for ch, x, advance in cells
        if not ch.isspace()
    ]

