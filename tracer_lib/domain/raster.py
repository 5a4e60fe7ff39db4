"""Ink raster value objects.

The capture surface owns the live raster; everything else only ever sees an
``InkSnapshot``, a frozen copy of the pixels together with the physical and
CSS dimensions needed to map layout coordinates into raster space.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class DrawingMode(Enum):
    """Pixel compositing for new stroke segments."""
    DRAW = 'draw'     # new ink replaces existing pixels
    ERASE = 'erase'   # new ink removes existing alpha


@dataclass(frozen=True)
class InkSnapshot:
    """Read-only view of the ink raster at one moment.

    Attributes:
        pixels: RGBA array of shape (height, width, 4), dtype uint8, not
            writeable.
        css_width: Layout width of the canvas in CSS pixels.
        css_height: Layout height of the canvas in CSS pixels.
        generation: Surface generation the snapshot was taken from. Bumped
            on every resize, so two snapshots with different generations
            never describe the same ink.
    """
    pixels: np.ndarray
    css_width: float
    css_height: float
    generation: int = 0

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"expected RGBA pixels, got shape {self.pixels.shape}")
        if self.pixels.flags.writeable:
            frozen = self.pixels.copy()
            frozen.flags.writeable = False
            object.__setattr__(self, 'pixels', frozen)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """Physical raster size as ``(width, height)``."""
        return (self.width, self.height)

    @property
    def alpha(self) -> np.ndarray:
        """Alpha channel, shape (height, width)."""
        return self.pixels[:, :, 3]

    @property
    def scale_x(self) -> float:
        """Physical pixels per CSS pixel along x."""
        return self.width / self.css_width if self.css_width else 0.0

    @property
    def scale_y(self) -> float:
        return self.height / self.css_height if self.css_height else 0.0

    @classmethod
    def from_alpha(cls, alpha: np.ndarray, css_width: float | None = None,
                   css_height: float | None = None, generation: int = 0) -> InkSnapshot:
        """Build a black-ink snapshot from an alpha array.

        Handy for hosts that keep their own coverage buffer and for tests.
        CSS size defaults to the physical size (DPR 1).
        """
        h, w = alpha.shape
        pixels = np.zeros((h, w, 4), dtype=np.uint8)
        pixels[:, :, 3] = alpha
        return cls(
            pixels=pixels,
            css_width=w if css_width is None else css_width,
            css_height=h if css_height is None else css_height,
            generation=generation,
        )
