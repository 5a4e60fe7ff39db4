"""Geometric value objects for stroke capture and scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def scaled(self, sx: float, sy: float) -> Point:
        """Scale each axis independently."""
        return Point(self.x * sx, self.y * sy)

    def translated(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_int_tuple(self) -> Tuple[int, int]:
        """Convert to integer tuple for pixel operations."""
        return (int(round(self.x)), int(round(self.y)))

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Point:
        """Create from tuple."""
        return cls(t[0], t[1])


@dataclass(frozen=True)
class BBox:
    """Immutable axis-aligned rectangle.

    On rasters the box is half-open: it covers columns ``x_min`` up to but
    excluding ``x_max``, and likewise for rows, which matches how DOM client
    rectangles map onto pixel grids.
    """
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def area(self) -> float:
        """Area, zero for empty or inverted boxes."""
        return max(0.0, self.width) * max(0.0, self.height)

    @property
    def center(self) -> Point:
        return Point(
            (self.x_min + self.x_max) / 2,
            (self.y_min + self.y_max) / 2
        )

    @property
    def top_left(self) -> Point:
        return Point(self.x_min, self.y_min)

    def contains(self, point: Point) -> bool:
        """Check if point lies inside the half-open box."""
        return (self.x_min <= point.x < self.x_max and
                self.y_min <= point.y < self.y_max)

    def scaled(self, sx: float, sy: float) -> BBox:
        """Scale all edges about the origin."""
        return BBox(self.x_min * sx, self.y_min * sy, self.x_max * sx, self.y_max * sy)

    def translated(self, dx: float, dy: float) -> BBox:
        return BBox(self.x_min + dx, self.y_min + dy, self.x_max + dx, self.y_max + dy)

    def clamped(self, width: float, height: float) -> BBox:
        """Clip the box to ``[0, width) x [0, height)``."""
        return BBox(
            max(0, self.x_min), max(0, self.y_min),
            min(width, self.x_max), min(height, self.y_max),
        )

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to tuple for compatibility."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def to_int_tuple(self) -> Tuple[int, int, int, int]:
        """Floor every edge for pixel indexing."""
        return (
            math.floor(self.x_min), math.floor(self.y_min),
            math.floor(self.x_max), math.floor(self.y_max),
        )

    @classmethod
    def from_tuple(cls, t: Tuple[float, float, float, float]) -> BBox:
        """Create from tuple."""
        return cls(t[0], t[1], t[2], t[3])

    @classmethod
    def from_xywh(cls, x: float, y: float, w: float, h: float) -> BBox:
        """Create from a DOM-style ``(left, top, width, height)``."""
        return cls(x, y, x + w, y + h)
