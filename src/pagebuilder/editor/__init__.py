"""Editor state store and session wiring."""

from .store import REMOVE_NODE, SELECT, SET_TREE, UPDATE_NODE, EditorState, EditorStore
from .session import EditorSession, pointer_position

__all__ = [
    "REMOVE_NODE",
    "SELECT",
    "SET_TREE",
    "UPDATE_NODE",
    "EditorState",
    "EditorStore",
    "EditorSession",
    "pointer_position",
]
