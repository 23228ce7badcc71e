"""PyQt6 event filter feeding mouse events into the gesture state machine."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtWidgets import QApplication, QWidget

from ..core.handles import Handle

logger = logging.getLogger(__name__)

HitTest = Callable[[float, float], "tuple[str, Handle] | None"]


class PointerSink(Protocol):
    """Receiver of pointer gestures, implemented by EditorSession."""

    def pointer_down(self, el: str, handle: Handle | str, x: float, y: float) -> None: ...

    def pointer_move(self, x: float, y: float) -> None: ...

    def pointer_up(self) -> None: ...

    def pointer_leave(self) -> None: ...


class PointerEventFilter(QObject):
    """Application-wide event filter for resize/move gestures on a page surface.

    A left-button press on the surface is hit-tested against the overlay
    handles; a hit starts a gesture. Moves and releases are taken from any
    widget so a release outside the surface still ends the gesture, and
    leaving the surface ends it too.

    Example:
        event_filter = PointerEventFilter(page_widget, session, overlay_hit_test)
        event_filter.install()
    """

    def __init__(self, surface: QWidget, sink: PointerSink, hit_test: HitTest) -> None:
        super().__init__(surface)
        self._surface = surface
        self._sink = sink
        self._hit_test = hit_test
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def install(self) -> None:
        """Install on the running QApplication."""
        app = QApplication.instance()
        if app is None:
            raise RuntimeError("PointerEventFilter needs a QApplication")
        app.installEventFilter(self)

    def uninstall(self) -> None:
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)

    def _on_surface(self, obj: QObject) -> bool:
        return obj is self._surface or (
            isinstance(obj, QWidget) and self._surface.isAncestorOf(obj)
        )

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        """Route mouse events to the sink. Consumes presses that hit a handle."""
        # Window-level duplicates of widget events are skipped
        if not isinstance(obj, QWidget):
            return False

        kind = event.type()
        if kind == QEvent.Type.MouseButtonPress:
            if event.button() != Qt.MouseButton.LeftButton or not self._on_surface(obj):
                return False
            local = self._surface.mapFromGlobal(event.globalPosition())
            hit = self._hit_test(local.x(), local.y())
            if hit is None:
                return False
            el, handle = hit
            self._sink.pointer_down(el, handle, local.x(), local.y())
            self._active = True
            return True

        if not self._active:
            return False

        if kind == QEvent.Type.MouseMove:
            local = self._surface.mapFromGlobal(event.globalPosition())
            self._sink.pointer_move(local.x(), local.y())
            return obj is self._surface
        if kind == QEvent.Type.MouseButtonRelease:
            self._active = False
            self._sink.pointer_up()
            return False
        if kind == QEvent.Type.Leave and obj is self._surface:
            logger.debug("Pointer left the page surface during a gesture")
            self._active = False
            self._sink.pointer_leave()
        return False
