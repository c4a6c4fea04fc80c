"""Shared pytest fixtures for the signature_lib test suite.

This module provides common fixtures used across unit and integration
tests.

Fixtures:
    recorder: Listener that records every outline event it receives
    straight_stroke: Five evenly spaced points along the x axis
    sample_strokes: Two strokes forming a small signature
    canvas_size: Standard (width, height) canvas used by model tests
    saved_signature: Small RGBA image with an opaque square, as a PNG file

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from signature_lib.domain.events import FinalizedOutline, TemporaryOutline


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
# Event Recorder Fixture
# -----------------------------------------------------------------------------

class EventRecorder:
    """Callable listener that keeps every event in order."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    @property
    def finalized(self):
        return [e for e in self.events if isinstance(e, FinalizedOutline)]

    @property
    def temporary(self):
        return [e for e in self.events if isinstance(e, TemporaryOutline)]

    def clear(self):
        self.events.clear()


@pytest.fixture
def recorder():
    """Return an EventRecorder to use as a SegmentController listener."""
    return EventRecorder()


# -----------------------------------------------------------------------------
# Sample Stroke Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def straight_stroke():
    """Return five points along y=0 that finalize exactly one segment.

    Returns:
        list: (x, y) tuples. The last gap is 30 so the finalized segment's
        adjusted end point lands at x=40.
    """
    return [(0, 0), (10, 0), (20, 0), (30, 0), (60, 0)]


@pytest.fixture
def sample_strokes():
    """Return two strokes resembling a short handwritten signature.

    Returns:
        list: Two lists of (x, y) tuples inside a 200x80 canvas.
    """
    first = [(10, 50), (18, 30), (26, 22), (34, 30), (40, 48),
             (48, 56), (58, 44), (66, 28), (76, 24), (86, 36)]
    second = [(100, 60), (112, 40), (128, 30), (146, 34), (160, 46), (178, 52)]
    return [first, second]


@pytest.fixture
def canvas_size():
    """Return the (width, height) used by model-level tests."""
    return (200, 80)


# -----------------------------------------------------------------------------
# Image Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def saved_signature(tmp_path):
    """Write a 20x10 RGBA PNG with an opaque red block on its left half.

    Returns:
        Path: Location of the PNG file.
    """
    image = Image.new('RGBA', (20, 10), (0, 0, 0, 0))
    image.paste((255, 0, 0, 255), (0, 0, 10, 10))
    path = tmp_path / "saved_signature.png"
    image.save(path, format='PNG')
    return path
