"""Utility functions for rendering and pictures.

Rendering utilities:
    TextRenderParams: Font, size, alignment, baseline and letter spacing.
    load_font: Load a scalable font with a bundled fallback.
    render_text_alpha: Render a word into an offscreen alpha raster.
    layout_glyph_boxes: One span-like box per character.

Picture utilities:
    compress_image: Downscale and JPEG-encode an uploaded photo.
    resolve_image_source: Map a stored image reference to a loadable source.
    fallback_image_source: Next source to try after a load failure.

Example usage::

    from tracer_lib.domain import Point
    from tracer_lib.utils import TextRenderParams, layout_glyph_boxes

    params = TextRenderParams(font_size=120, align='left', baseline='top')
    boxes = layout_glyph_boxes('dog', params, Point(10, 10))
"""

from .images import compress_image, fallback_image_source, resolve_image_source
from .rendering import (
    TextRenderParams,
    layout_glyph_boxes,
    load_font,
    render_text_alpha,
)

__all__ = [
    'TextRenderParams', 'load_font', 'render_text_alpha', 'layout_glyph_boxes',
    'compress_image', 'resolve_image_source', 'fallback_image_source',
]
