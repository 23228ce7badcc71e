"""PyQt6 plumbing for hosting the editor in a desktop window."""

from .qt_events import PointerEventFilter, PointerSink

__all__ = ["PointerEventFilter", "PointerSink"]
