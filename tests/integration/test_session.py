"""Integration tests for SignatureSession.

Tests the UI-facing service in signature_lib.api.services with a
recording sink in place of a real toolkit:
    - touch phases map onto the model
    - the sink only hears about layers that changed
    - the empty-state callback fires on transitions only
    - preset images are applied on the first positive resize
    - PNG export and saving
"""

import pytest
from PIL import Image

from signature_lib.api.services import SignatureSession

pytestmark = pytest.mark.integration

TIMEOUT = 5


class RecordingSink:
    """OutputSink that records every call."""

    def __init__(self):
        self.images = []
        self.outlines = []

    def show_image(self, image):
        self.images.append(image)

    def show_outline(self, outline):
        self.outlines.append(outline)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def empty_changes():
    return []


@pytest.fixture
def session(sink, empty_changes):
    s = SignatureSession(
        canvas_size=(200, 80),
        sink=sink,
        on_empty_change=lambda session, is_empty: empty_changes.append(is_empty),
    )
    yield s
    s.close()


def settle(session):
    session.refresh().result(TIMEOUT)


class TestTouchPhases:
    """Tests for touch_began, touch_moved and touch_ended."""

    def test_starts_empty(self, session):
        assert session.is_empty
        assert session.full_image() is None
        assert session.export_png() is None

    def test_touch_began_shows_dot(self, session, sink):
        session.touch_began((100, 40))
        settle(session)

        assert not session.is_empty
        assert len(sink.outlines) == 1
        assert sink.outlines[0] is not None
        assert sink.images == []

    def test_stroke_commits_segments(self, session, sink, straight_stroke):
        first, *rest = [(x + 10, y + 40) for x, y in straight_stroke]
        session.touch_began(first)
        for p in rest:
            session.touch_moved(p)
        session.touch_ended()
        settle(session)

        assert len(sink.images) == 1
        assert sink.images[0].getpixel((30, 40))[3] == 255
        # Last segment stays pending after the finger lifts
        assert sink.outlines[-1] is not None

    def test_next_touch_ends_previous_line(self, session, sink):
        session.touch_began((20, 40))
        session.touch_moved((40, 40))
        session.touch_ended()
        session.touch_began((120, 40))
        settle(session)

        committed = sink.images[-1]
        assert committed.getpixel((30, 40))[3] == 255
        assert committed.getpixel((120, 40))[3] == 0
        assert session.full_image().getpixel((120, 40))[3] == 255

    def test_unchanged_layers_not_resent(self, session, sink):
        session.touch_began((100, 40))
        settle(session)
        calls = (len(sink.images), len(sink.outlines))

        session.touch_moved((100.5, 40))
        settle(session)
        settle(session)

        assert (len(sink.images), len(sink.outlines)) == calls

    def test_dispatch_used_for_sink(self, sink):
        scheduled = []
        with SignatureSession(canvas_size=(50, 50), sink=sink,
                              dispatch=scheduled.append) as session:
            session.touch_began((25, 25))
            settle(session)
            assert sink.outlines == []
            for fn in scheduled:
                fn()
            assert len(sink.outlines) == 1


class TestEmptyState:
    """Tests for the empty-state callback."""

    def test_fires_on_first_point(self, session, empty_changes):
        session.touch_began((100, 40))
        session.touch_moved((120, 40))
        session.touch_moved((140, 40))
        settle(session)
        assert empty_changes == [False]

    def test_fires_on_reset(self, session, empty_changes, sink):
        session.touch_began((100, 40))
        settle(session)
        session.reset()
        settle(session)

        assert empty_changes == [False, True]
        assert session.is_empty
        assert sink.outlines[-1] is None

    def test_reset_when_empty_is_silent(self, session, empty_changes):
        session.reset()
        settle(session)
        assert empty_changes == []


class TestResizeAndPreset:
    """Tests for resize and preset images."""

    def test_resize_keeps_signature(self, session):
        session.touch_began((20, 20))
        session.resize((300, 120))
        settle(session)

        assert session.canvas_size == (300, 120)
        image = session.full_image()
        assert image.size == (300, 120)
        assert image.getpixel((20, 20))[3] == 255

    def test_preset_applied_on_first_positive_resize(self, saved_signature, empty_changes):
        with SignatureSession(
            image=saved_signature,
            on_empty_change=lambda s, is_empty: empty_changes.append(is_empty),
        ) as session:
            assert session.is_empty

            session.resize((40, 20))
            settle(session)

            assert not session.is_empty
            assert empty_changes == [False]
            assert session.full_image().getpixel((5, 10)) == (255, 0, 0, 255)

    def test_preset_applied_once(self, saved_signature):
        with SignatureSession(image=saved_signature) as session:
            session.resize((40, 20))
            session.reset()
            session.resize((80, 40))
            settle(session)
            assert session.is_empty

    def test_preset_with_initial_size(self, saved_signature):
        with SignatureSession(canvas_size=(40, 20), image=saved_signature) as session:
            settle(session)
            assert not session.is_empty

    def test_preset_from_image_object(self):
        preset = Image.new('RGBA', (10, 10), (0, 0, 255, 255))
        with SignatureSession(canvas_size=(10, 10), image=preset) as session:
            assert session.full_image().getpixel((5, 5)) == (0, 0, 255, 255)

    def test_color(self, session):
        session.set_color('green')
        assert session.color == (0, 128, 0, 255)


class TestExport:
    """Tests for export_png and save_png."""

    def test_export_png(self, session):
        session.touch_began((100, 40))
        data = session.export_png()
        assert data.startswith(b'\x89PNG')

    def test_save_png(self, session, tmp_path):
        session.touch_began((100, 40))
        path = tmp_path / "signature.png"

        assert session.save_png(path)
        with Image.open(path) as img:
            assert img.size == (200, 80)
            assert img.mode == 'RGBA'

    def test_save_empty(self, session, tmp_path):
        path = tmp_path / "signature.png"
        assert not session.save_png(path)
        assert not path.exists()
