"""Compilation, scheduling, history and gesture engine."""

from .compiler import EditHandlers, LoggingEditHandlers, TreeCompiler, merge_style
from .scheduler import CompilationScheduler
from .history import HistoryRecorder, Snapshot
from .gesture import (
    EDIT_COMP_BOX,
    GestureController,
    GesturePhase,
    GestureState,
    PointerEvent,
    PointerKind,
    resize_box,
)

__all__ = [
    "EditHandlers",
    "LoggingEditHandlers",
    "TreeCompiler",
    "merge_style",
    "CompilationScheduler",
    "HistoryRecorder",
    "Snapshot",
    "EDIT_COMP_BOX",
    "GestureController",
    "GesturePhase",
    "GestureState",
    "PointerEvent",
    "PointerKind",
    "resize_box",
]
