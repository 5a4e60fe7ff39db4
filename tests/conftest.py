"""Shared pytest fixtures for the tracer_lib test suite.

Fixtures:
    surface: StrokeCaptureSurface sized 800x600 CSS at DPR 2 (1600x1200 raster)
    blank_snapshot: Empty 1600x1200 snapshot of an 800x600 canvas
    kv_store: In-memory KeyValueStore, closed after the test
    fake_clock: Manually advanced monotonic clock

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracer_lib.capture import StrokeCaptureSurface
from tracer_lib.domain import InkSnapshot
from tracer_lib.words import KeyValueStore


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Capture Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def surface():
    """Return a surface for an 800x600 canvas on a DPR 2 display.

    Returns:
        StrokeCaptureSurface: Sized surface with a 1600x1200 raster.
    """
    s = StrokeCaptureSurface()
    s.resize(800, 600, device_pixel_ratio=2.0)
    return s


@pytest.fixture
def blank_snapshot():
    """Return an empty snapshot matching the ``surface`` fixture.

    Returns:
        InkSnapshot: 1600x1200 raster with no ink, CSS size 800x600.
    """
    return InkSnapshot.from_alpha(np.zeros((1200, 1600), dtype=np.uint8), 800, 600)


# -----------------------------------------------------------------------------
# Storage Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def kv_store():
    """Yield an in-memory key-value store."""
    store = KeyValueStore(':memory:')
    yield store
    store.close()


# -----------------------------------------------------------------------------
# Clock Fixture
# -----------------------------------------------------------------------------

class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Return a FakeClock starting at t=100s."""
    return FakeClock()
