"""Editor session wiring the store to the compiler, history and gestures."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..components.loader import ComponentLoader
from ..config import EditorConfig
from ..core.box import Box
from ..core.compiled import CompiledNode
from ..core.handles import Handle
from ..core.node import LayoutTree, find_in_tree
from ..engine.compiler import TreeCompiler
from ..engine.gesture import GestureController
from ..engine.history import HistoryRecorder, Snapshot
from ..engine.scheduler import CompilationScheduler
from ..errors import LayoutError
from .store import SELECT, SET_TREE, EditorState, EditorStore

logger = logging.getLogger(__name__)

CompileRequest = tuple[LayoutTree, Optional[str]]
Measure = Callable[[str], Box]


def pointer_position(event: Any) -> tuple[float, float]:
    """Extract client coordinates from a host event (mapping or object)."""
    if isinstance(event, dict):
        return float(event["clientX"]), float(event["clientY"])
    return float(event.x), float(event.y)


class EditorSession:
    """One open page in the editor.

    The store holds the layout tree and selection. Each state change
    triggers the compilation scheduler and is offered to the history
    recorder; gestures dispatch box edits back into the store.

    start() must be called from within a running event loop.

    Example:
        store = EditorStore(LayoutLoader().load("page.yaml"))
        session = EditorSession(store, on_publish=window.show_tree)
        session.start()
    """

    def __init__(
        self,
        store: EditorStore,
        loader: ComponentLoader | None = None,
        config: EditorConfig | None = None,
        measure: Measure | None = None,
        on_publish: Callable[[list[CompiledNode]], None] | None = None,
        on_drop: Callable[[str, Any], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            store: Store owning the layout tree
            loader: Component loader, defaults to one with the config's components
            config: Editor configuration
            measure: Returns the rendered box of a node id; defaults to its style
            on_publish: Called with every published compiled tree
            on_drop: Called with the node id and event when something is dropped on a node
        """
        self.config = config or EditorConfig()
        self.store = store
        self.loader = loader or ComponentLoader(dict(self.config.components))
        self._measure = measure or self._measure_from_style
        self._on_publish = on_publish
        self._on_drop = on_drop

        self.compiler = TreeCompiler(self.loader, handlers=self,
                                     overlay_positions=self.config.overlay_positions)
        self.scheduler: CompilationScheduler[CompileRequest, list[CompiledNode]] = CompilationScheduler(
            self._compile_pass, self._publish
        )
        self.history = HistoryRecorder(limit=self.config.history_limit)
        self.gesture = GestureController(store.dispatch)

        self.compiled: list[CompiledNode] | None = None
        self.input_focused = False
        self.hovered: str | None = None
        self.drop_target: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

    def start(self) -> None:
        """Subscribe to the store and compile/record the initial tree."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.store.subscribe(self._on_state)
        self._on_state(self.store.state)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def wait_idle(self) -> None:
        """Wait for pending compilation passes to finish."""
        await self.scheduler.wait_idle()

    def _on_state(self, state: EditorState) -> None:
        self.scheduler.trigger((state.tree, state.selection))
        # Gesture moves are committed once, when the gesture ends
        self.history.record(state.tree, from_history=state.from_history,
                            input_focused=self.input_focused or self.gesture.active)

    async def _compile_pass(self, request: CompileRequest) -> list[CompiledNode]:
        tree, selection = request
        return await self.compiler.compile(tree, self.config.environment, selection)

    def _publish(self, compiled: list[CompiledNode]) -> None:
        self.compiled = compiled
        if self._on_publish is not None:
            self._on_publish(compiled)

    # History

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False at the start of history."""
        return self._restore(self.history.navigate(-1))

    def redo(self) -> bool:
        """Restore the next snapshot. Returns False at the end of history."""
        return self._restore(self.history.navigate(1))

    def _restore(self, snapshot: Snapshot | None) -> bool:
        if snapshot is None:
            return False
        self.store.dispatch({"type": SET_TREE, "payload": {"tree": snapshot.tree, "from_history": True}})
        return True

    def focus_input(self) -> None:
        """An editable field took focus; keystroke-level changes are not recorded."""
        self.input_focused = True

    def release_input(self) -> bool:
        """The editable field lost focus; commit the current tree to history."""
        self.input_focused = False
        return self._commit()

    def _commit(self) -> bool:
        state = self.store.state
        return self.history.record(state.tree, from_history=state.from_history)

    # Pointer plumbing

    def pointer_down(self, el: str, handle: Handle | str, x: float, y: float) -> None:
        """Start a gesture on one of the overlay handles of a node."""
        if self.gesture.active:
            # The release of the previous gesture was lost; keep its edits
            self._commit()
        self.gesture.press(el, handle, x, y, self._measure(el))

    def pointer_move(self, x: float, y: float) -> None:
        self.gesture.move(x, y)

    def pointer_up(self) -> None:
        if self.gesture.active:
            self.gesture.release()
            self._commit()

    def pointer_leave(self) -> None:
        if self.gesture.active:
            self.gesture.leave()
            self._commit()

    # EditHandlers

    def handle_event(self, kind: str, el: str, event: Any) -> None:
        if kind == "dragover":
            self.drop_target = el
        elif kind == "dragout":
            if self.drop_target == el:
                self.drop_target = None
        elif kind == "drop":
            self.drop_target = None
            if self._on_drop is not None:
                self._on_drop(el, event)
        else:
            logger.warning("Ignoring unknown edit event %r on %s", kind, el)

    def handle_hover(self, kind: str, el: str, event: Any) -> None:
        if kind == "mouseover":
            self.hovered = el
        elif self.hovered == el:
            self.hovered = None

    def handle_click(self, el: str, event: Any) -> None:
        self.store.dispatch({"type": SELECT, "payload": {"el": el}})

    def handle_pointer_down(self, el: str, handle: Handle, event: Any) -> None:
        x, y = pointer_position(event)
        self.pointer_down(el, handle, x, y)

    def _measure_from_style(self, el: str) -> Box:
        node = find_in_tree(self.store.state.tree, el)
        if node is None:
            raise LayoutError(f"No layout node with id '{el}'")
        return Box.from_style(node.style)
