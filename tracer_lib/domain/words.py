"""Word entries supplied by the word library."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# dataclass field -> key in the persisted JSON list
_JSON_KEYS = {
    'id': 'id',
    'text': 'text',
    'image_url': 'imageUrl',
    'emoji': 'emoji',
    'category': 'category',
}


@dataclass(frozen=True)
class WordEntry:
    """A word to trace.

    The tracing core only reads ``text``; the imagery fields are for the
    presentation layer.

    Attributes:
        text: Word to trace, lowercase.
        image_url: Optional picture (data URL, http URL or local asset path).
        emoji: Optional emoji shown when there is no picture.
        category: Optional grouping such as 'Animals'.
        id: Optional identifier, set for user-added words.
    """
    text: str
    image_url: Optional[str] = None
    emoji: Optional[str] = None
    category: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON shape, omitting unset fields."""
        return {
            _JSON_KEYS[k]: v for k, v in asdict(self).items() if v is not None
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> WordEntry:
        """Create from the persisted JSON shape.

        Raises:
            ValueError: If ``text`` is missing or not a string.
        """
        text = d.get('text')
        if not isinstance(text, str):
            raise ValueError(f"word entry without text: {d!r}")
        return cls(
            text=text,
            image_url=d.get('imageUrl'),
            emoji=d.get('emoji'),
            category=d.get('category'),
            id=d.get('id'),
        )
