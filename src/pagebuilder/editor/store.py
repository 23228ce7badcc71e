"""Editor state store: the layout tree, the selection and the actions that change them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from ..core.box import Box
from ..core.node import LayoutNode, LayoutTree, copy_tree, find_in_tree
from ..engine.gesture import EDIT_COMP_BOX
from ..errors import LayoutError

logger = logging.getLogger(__name__)

SET_TREE = "SET_TREE"
SELECT = "SELECT"
UPDATE_NODE = "UPDATE_NODE"
REMOVE_NODE = "REMOVE_NODE"

Listener = Callable[["EditorState"], None]


@dataclass(frozen=True)
class EditorState:
    """Snapshot of the editor state.

    ``from_history`` is set when the tree came from undo/redo navigation.
    """

    tree: LayoutTree = field(default_factory=list)
    selection: str | None = None
    from_history: bool = False


def _require(tree: LayoutTree, el: str) -> LayoutNode:
    node = find_in_tree(tree, el)
    if node is None:
        raise LayoutError(f"No layout node with id '{el}'")
    return node


def _remove(nodes: list[LayoutNode], el: str) -> bool:
    for node in nodes:
        if node.el == el:
            nodes.remove(node)
            return True
        if _remove(node.children, el):
            return True
    return False


class EditorStore:
    """Central state store with subscriber notification.

    Every change replaces the tree wholesale: reducers work on a copy and
    the previous state's tree is never mutated.
    """

    def __init__(self, tree: LayoutTree | None = None, selection: str | None = None) -> None:
        self._state = EditorState(tree=copy_tree(tree or []), selection=selection)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> EditorState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new state.

        Returns:
            A callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: dict[str, Any]) -> EditorState:
        """Apply an action and notify listeners if the state changed.

        Raises:
            ValueError: If the action type is unknown
            LayoutError: If the action names a node that does not exist
        """
        action_type = action.get("type")
        payload = action.get("payload") or {}

        reducer = self._reducers().get(action_type)
        if reducer is None:
            raise ValueError(f"Unknown action type: {action_type!r}")

        new_state = reducer(self._state, payload)
        if new_state == self._state:
            return self._state

        self._state = new_state
        logger.debug("Dispatched %s", action_type)
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def _reducers(self) -> dict[str, Callable[[EditorState, dict[str, Any]], EditorState]]:
        return {
            SET_TREE: self._set_tree,
            SELECT: self._select,
            EDIT_COMP_BOX: self._edit_box,
            UPDATE_NODE: self._update_node,
            REMOVE_NODE: self._remove_node,
        }

    @staticmethod
    def _set_tree(state: EditorState, payload: dict[str, Any]) -> EditorState:
        tree = copy_tree(payload["tree"])
        selection = state.selection
        if selection is not None and find_in_tree(tree, selection) is None:
            selection = None
        return EditorState(tree=tree, selection=selection, from_history=bool(payload.get("from_history")))

    @staticmethod
    def _select(state: EditorState, payload: dict[str, Any]) -> EditorState:
        el = payload.get("el")
        if el is not None:
            _require(state.tree, el)
        return replace(state, selection=el)

    @staticmethod
    def _edit_box(state: EditorState, payload: dict[str, Any]) -> EditorState:
        box = Box.from_payload(payload["current"])
        tree = copy_tree(state.tree)
        _require(tree, payload["el"]).style.update(box.to_style())
        return EditorState(tree=tree, selection=state.selection)

    @staticmethod
    def _update_node(state: EditorState, payload: dict[str, Any]) -> EditorState:
        tree = copy_tree(state.tree)
        node = _require(tree, payload["el"])
        if "style" in payload:
            node.style.update(payload["style"])
        if "props" in payload:
            node.props.update(payload["props"])
        if "hide" in payload:
            node.hide = bool(payload["hide"])
        return EditorState(tree=tree, selection=state.selection)

    @staticmethod
    def _remove_node(state: EditorState, payload: dict[str, Any]) -> EditorState:
        el = payload["el"]
        tree = copy_tree(state.tree)
        if not _remove(tree, el):
            raise LayoutError(f"No layout node with id '{el}'")
        selection = None if state.selection == el else state.selection
        if selection is not None and find_in_tree(tree, selection) is None:
            selection = None
        return EditorState(tree=tree, selection=selection)
