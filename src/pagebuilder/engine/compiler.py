"""Asynchronous compiler from layout trees to compiled component trees."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Protocol

from ..components.loader import ComponentLoader
from ..config import EDIT_ENVIRONMENT, EditorConfig
from ..core.compiled import CompiledNode, EditBindings, OverlayHandle, ResizeOverlay
from ..core.handles import HANDLE_ORDER, Handle
from ..core.node import LayoutNode
from ..errors import LayoutError

logger = logging.getLogger(__name__)


class EditHandlers(Protocol):
    """Receiver of the interaction callbacks bound in the edit environment."""

    def handle_event(self, kind: str, el: str, event: Any) -> None:
        """Drag-and-drop events: ``dragover``, ``dragout`` and ``drop``."""
        ...

    def handle_hover(self, kind: str, el: str, event: Any) -> None:
        """Hover events: ``mouseover`` and ``mouseleave``."""
        ...

    def handle_click(self, el: str, event: Any) -> None:
        ...

    def handle_pointer_down(self, el: str, handle: Handle, event: Any) -> None:
        """Pointer-down on a resize overlay cell."""
        ...


class LoggingEditHandlers:
    """EditHandlers that only log what happened."""

    def handle_event(self, kind: str, el: str, event: Any) -> None:
        logger.debug("%s on %s", kind, el)

    def handle_hover(self, kind: str, el: str, event: Any) -> None:
        logger.debug("%s on %s", kind, el)

    def handle_click(self, el: str, event: Any) -> None:
        logger.debug("click on %s", el)

    def handle_pointer_down(self, el: str, handle: Handle, event: Any) -> None:
        logger.debug("pointer down on %s handle %s", el, handle.value)


def merge_style(style: dict[str, Any]) -> dict[str, Any]:
    """Merge a node's style with the editor's computed overrides.

    A background image reference becomes a displayable ``url(...)`` value and
    the pointer cursor is reset to the default one.
    """
    merged = dict(style)
    merged["cursor"] = "default"

    background = style.get("backgroundImage")
    if background and not str(background).startswith("url("):
        merged["backgroundImage"] = f"url({background})"
    return merged


class TreeCompiler:
    """Compiles layout trees into CompiledNode trees.

    Sibling components are resolved concurrently and reassembled in source
    order, so differing loader latencies never reorder the output. Hidden
    nodes are skipped along with their whole subtree. Any resolution failure
    fails the whole pass.

    Example:
        compiler = TreeCompiler(ComponentLoader())
        compiled = await compiler.compile(tree, "edit", selection="el_3")
    """

    def __init__(
        self,
        loader: ComponentLoader,
        handlers: EditHandlers | None = None,
        overlay_positions: Iterable[str] | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            loader: Component loader used for every visible node
            handlers: Receiver for edit-environment callbacks
            overlay_positions: ``style.position`` values that get a resize overlay
        """
        self._loader = loader
        self._handlers: EditHandlers = handlers if handlers is not None else LoggingEditHandlers()
        if overlay_positions is None:
            overlay_positions = EditorConfig().overlay_positions
        self._overlay_positions = frozenset(overlay_positions)

    async def compile(
        self,
        tree: Iterable[LayoutNode],
        environment: str,
        selection: str | None = None,
    ) -> list[CompiledNode]:
        """Compile a layout tree.

        Args:
            tree: Top-level layout nodes
            environment: Environment flag; "edit" adds bindings and overlays
            selection: Id of the selected node, if any

        Returns:
            Compiled top-level nodes, hidden ones pruned

        Raises:
            ComponentResolutionError: If any visible node fails to resolve
            LayoutError: If a node is missing its id or component name
        """
        compiled = await self._compile_children(list(tree), environment, selection)
        logger.debug("Compiled %d top-level nodes (env=%s, selection=%s)",
                     len(compiled), environment, selection)
        return compiled

    async def _compile_children(
        self, nodes: list[LayoutNode], environment: str, selection: str | None
    ) -> list[CompiledNode]:
        """Compile visible siblings concurrently, keeping source order."""
        visible = [node for node in nodes if not node.hide]
        if not visible:
            return []

        tasks = [
            asyncio.ensure_future(self._compile_node(node, environment, selection))
            for node in visible
        ]
        try:
            # gather() returns results in argument order, not completion order
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def _compile_node(
        self, node: LayoutNode, environment: str, selection: str | None
    ) -> CompiledNode:
        """Resolve one visible node and compile its subtree."""
        if not node.el or not node.name:
            raise LayoutError(f"Layout node {node!r} is missing its id or component name")

        component = await self._loader.resolve(node.name, node.hook)
        children = await self._compile_children(node.children, environment, selection)

        is_edit = environment == EDIT_ENVIRONMENT
        return CompiledNode(
            key=node.el,
            name=node.name,
            hook=node.hook,
            component=component,
            style=merge_style(node.style),
            props=dict(node.props),
            environment=environment,
            children=children,
            bindings=self._bindings(node.el) if is_edit else None,
            overlay=self._overlay(node, selection) if is_edit else None,
        )

    def _bindings(self, el: str) -> EditBindings:
        """Bind the edit-environment callbacks to one node id."""
        handlers = self._handlers
        return EditBindings(
            el=el,
            on_drag_over=lambda event: handlers.handle_event("dragover", el, event),
            on_drag_leave=lambda event: handlers.handle_event("dragout", el, event),
            on_drop=lambda event: handlers.handle_event("drop", el, event),
            on_click=lambda event: handlers.handle_click(el, event),
            on_mouse_over=lambda event: handlers.handle_hover("mouseover", el, event),
            on_mouse_leave=lambda event: handlers.handle_hover("mouseleave", el, event),
        )

    def _overlay(self, node: LayoutNode, selection: str | None) -> ResizeOverlay | None:
        """Build the resize overlay for the selected, positioned node."""
        if selection != node.el:
            return None
        if node.style.get("position") not in self._overlay_positions:
            return None

        handlers = self._handlers
        el = node.el
        return ResizeOverlay(
            el=el,
            handles=tuple(
                OverlayHandle(
                    handle=handle,
                    on_pointer_down=lambda event, handle=handle: handlers.handle_pointer_down(el, handle, event),
                )
                for handle in HANDLE_ORDER
            ),
        )
