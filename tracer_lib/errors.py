"""Exception types for the tracing core.

The capture surface and the scoring strategies raise these exceptions; the
scorer facade (``tracer_lib.scoring.scorer``) and the tracing session recover
from all of them into well-defined score outcomes, so none of them reach the
presentation layer.

Exceptions:
    TracerError: Base class for all tracing core errors.
    NotReady: The ink raster or the target geometry is not available yet.
    EmptyTarget: The target has no glyphs or renders to zero pixels.
    DimensionMismatch: The raster was resized between layout and scoring.
"""


class TracerError(Exception):
    """Base class for tracing core errors."""


class NotReady(TracerError):
    """Raster or target layout metrics are unavailable.

    Recoverable: the caller should retry once layout has settled (canvas
    mounted and sized, glyph elements mounted).
    """


class EmptyTarget(TracerError):
    """Target has zero glyphs or zero target pixels.

    Scored as 0 and logged as a usage anomaly, never fatal.
    """


class DimensionMismatch(TracerError):
    """Target layout and ink snapshot disagree on raster dimensions.

    Attributes:
        expected: Raster size ``(width, height)`` the layout was built for.
        actual: Raster size ``(width, height)`` of the snapshot.
    """

    def __init__(self, expected: tuple[int, int], actual: tuple[int, int]):
        super().__init__(
            f"layout built for raster {expected[0]}x{expected[1]}, "
            f"snapshot is {actual[0]}x{actual[1]}"
        )
        self.expected = expected
        self.actual = actual
