"""Word picture helpers.

Pictures are never scored; these helpers only prepare them for the
presentation layer and the word store.

Functions:
    compress_image: Downscale and JPEG-encode an uploaded photo into a data
        URL small enough for key-value storage.
    resolve_image_source: Turn a stored image reference into a loadable
        source.
    fallback_image_source: Next source to try after a load failure.
"""

from __future__ import annotations

import base64
import io
import logging

from PIL import Image, UnidentifiedImageError

from ..config import IMAGE_JPEG_QUALITY, IMAGE_MAX_SIZE

logger = logging.getLogger(__name__)


def compress_image(data: bytes, max_size: int = IMAGE_MAX_SIZE,
                   quality: int = IMAGE_JPEG_QUALITY) -> str:
    """Compress an uploaded photo into a JPEG data URL.

    The long edge is capped at ``max_size`` with the aspect ratio kept;
    smaller images keep their size. Transparency is flattened onto white.

    Args:
        data: Encoded image bytes in any format Pillow can read.
        max_size: Maximum width or height in pixels.
        quality: JPEG quality (1-95).

    Returns:
        A ``data:image/jpeg;base64,...`` string.

    Raises:
        ValueError: If the bytes are not a readable image.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"unreadable image: {e}") from e

    width, height = img.size
    if width > height and width > max_size:
        height = round(height * max_size / width)
        width = max_size
    elif height >= width and height > max_size:
        width = round(width * max_size / height)
        height = max_size

    if img.size != (width, height):
        img = img.resize((max(1, width), max(1, height)), Image.Resampling.LANCZOS)

    if img.mode in ('RGBA', 'LA', 'P'):
        rgba = img.convert('RGBA')
        flat = Image.new('RGB', rgba.size, (255, 255, 255))
        flat.paste(rgba, mask=rgba.getchannel('A'))
        img = flat
    elif img.mode != 'RGB':
        img = img.convert('RGB')

    buf = io.BytesIO()
    img.save(buf, format='JPEG', quality=quality)
    logger.debug("Compressed image to %dx%d, %d bytes", img.width, img.height, buf.tell())
    return 'data:image/jpeg;base64,' + base64.b64encode(buf.getvalue()).decode('ascii')


def resolve_image_source(image_url: str | None) -> str | None:
    """Map a stored image reference to the source to load.

    - data URLs are used as-is
    - http(s) URLs are used as-is, except GitHub ``blob`` pages which are
      rewritten to their raw content URL
    - anything else is treated as a bundled asset and served from
      ``/assets/<filename>``
    """
    if not image_url:
        return None
    if image_url.startswith('data:'):
        return image_url
    if image_url.startswith('http'):
        if 'github.com' in image_url and '/blob/' in image_url:
            return (image_url.replace('github.com', 'raw.githubusercontent.com', 1)
                    .replace('/blob/', '/', 1))
        return image_url
    filename = image_url.rstrip('/').split('/')[-1]
    return f'/assets/{filename}'


def fallback_image_source(src: str | None) -> str | None:
    """Source to try after ``src`` failed to load, or None to give up.

    An absolute asset path falls back to the same file relative to the
    page; every other source has no fallback.
    """
    if src and src.startswith('/assets/'):
        return f'.{src}'
    return None
