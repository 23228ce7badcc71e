"""Tests for the PyQt6 pointer event filter."""

import pytest

QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtCore import QEvent, QPointF, Qt  # noqa: E402

from pagebuilder.core import Handle  # noqa: E402
from pagebuilder.viewer import PointerEventFilter  # noqa: E402


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def pointer_down(self, el, handle, x, y):
        self.calls.append(("down", el, handle, x, y))

    def pointer_move(self, x, y):
        self.calls.append(("move", x, y))

    def pointer_up(self):
        self.calls.append(("up",))

    def pointer_leave(self):
        self.calls.append(("leave",))


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def surface(app):
    widget = QtWidgets.QWidget()
    widget.resize(400, 300)
    yield widget
    widget.deleteLater()


def mouse_event(kind, x, y, button=Qt.MouseButton.LeftButton):
    from PyQt6.QtGui import QMouseEvent

    point = QPointF(x, y)
    return QMouseEvent(kind, point, point, button, button, Qt.KeyboardModifier.NoModifier)


def hit_bottom_right(x, y):
    """Everything in the lower-right quarter hits the RB handle of el_1."""
    return ("el_1", Handle.RB) if x > 200 and y > 150 else None


def test_press_on_handle_starts_gesture(surface):
    sink = RecordingSink()
    event_filter = PointerEventFilter(surface, sink, lambda x, y: ("el_1", Handle.RB))

    consumed = event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseButtonPress, 300, 200))

    assert consumed
    assert event_filter.active
    assert sink.calls[0][:3] == ("down", "el_1", Handle.RB)


def test_press_elsewhere_is_ignored(surface):
    sink = RecordingSink()
    event_filter = PointerEventFilter(surface, sink, lambda x, y: None)

    consumed = event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseButtonPress, 10, 10))

    assert not consumed
    assert sink.calls == []
    assert not event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseMove, 20, 20))
    assert sink.calls == []


def test_right_button_is_ignored(surface):
    sink = RecordingSink()
    event_filter = PointerEventFilter(surface, sink, lambda x, y: ("el_1", Handle.RB))

    event_filter.eventFilter(
        surface, mouse_event(QEvent.Type.MouseButtonPress, 300, 200, Qt.MouseButton.RightButton)
    )

    assert sink.calls == []


def test_move_and_release_anywhere(surface, app):
    sink = RecordingSink()
    other = QtWidgets.QWidget()
    event_filter = PointerEventFilter(surface, sink, lambda x, y: ("el_1", Handle.RB))

    event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseButtonPress, 300, 200))
    event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseMove, 320, 210))
    event_filter.eventFilter(other, mouse_event(QEvent.Type.MouseButtonRelease, 0, 0))

    down, move, up = sink.calls
    # Deltas are consistent regardless of where the widget sits on screen
    assert (move[1] - down[3], move[2] - down[4]) == (20, 10)
    assert up == ("up",)
    assert not event_filter.active
    other.deleteLater()


def test_leaving_surface_ends_gesture(surface):
    sink = RecordingSink()
    event_filter = PointerEventFilter(surface, sink, lambda x, y: ("el_1", Handle.MM))

    event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseButtonPress, 300, 200))
    event_filter.eventFilter(surface, QEvent(QEvent.Type.Leave))
    event_filter.eventFilter(surface, mouse_event(QEvent.Type.MouseButtonRelease, 0, 0))

    assert [call[0] for call in sink.calls] == ["down", "leave"]
    assert not event_filter.active


def test_install_on_application(surface, app):
    event_filter = PointerEventFilter(surface, RecordingSink(), hit_bottom_right)
    event_filter.install()
    event_filter.uninstall()
