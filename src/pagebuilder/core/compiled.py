"""Compiled, renderable mirror of the layout tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator

from .handles import Handle

if TYPE_CHECKING:
    from ..components.base import Component

EventCallback = Callable[[Any], None]


@dataclass(frozen=True)
class EditBindings:
    """Interaction callbacks attached to a compiled node in the edit environment.

    Each callback takes the host's event object and is already bound to the
    node id it was compiled for.
    """

    el: str
    on_drag_over: EventCallback
    on_drag_leave: EventCallback
    on_drop: EventCallback
    on_click: EventCallback
    on_mouse_over: EventCallback
    on_mouse_leave: EventCallback


@dataclass(frozen=True)
class OverlayHandle:
    """One cell of the resize overlay."""

    handle: Handle
    on_pointer_down: EventCallback

    @property
    def key(self) -> str:
        return self.handle.value


@dataclass(frozen=True)
class ResizeOverlay:
    """Nine-handle overlay appended to the selected, positioned node."""

    el: str
    handles: tuple[OverlayHandle, ...]

    def get(self, handle: Handle | str) -> OverlayHandle:
        """Get the overlay cell for a handle."""
        if isinstance(handle, str):
            handle = Handle(handle)
        for cell in self.handles:
            if cell.handle is handle:
                return cell
        raise KeyError(handle)


@dataclass
class CompiledNode:
    """A visible layout node bound to its resolved component.

    ``bindings`` and ``overlay`` are None outside the edit environment.
    """

    key: str
    name: str
    hook: str
    component: Component
    style: dict[str, Any]
    props: dict[str, Any]
    environment: str
    children: list[CompiledNode] = field(default_factory=list)
    bindings: EditBindings | None = None
    overlay: ResizeOverlay | None = None

    def iter_nodes(self, include_self: bool = True) -> Iterator[CompiledNode]:
        """Iterate over this node and all compiled descendants (depth-first)."""
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_nodes(include_self=True)

    def find(self, key: str) -> CompiledNode | None:
        """Find a compiled descendant by key."""
        for node in self.iter_nodes():
            if node.key == key:
                return node
        return None

    def render(self) -> Any:
        """Render this node and its children through the resolved component."""
        children = [child.render() for child in self.children]
        return self.component.render(self.props, children, self.environment)

    def __repr__(self) -> str:
        extras = ""
        if self.bindings is not None:
            extras += ", bindings"
        if self.overlay is not None:
            extras += ", overlay"
        children_str = f", children={len(self.children)}" if self.children else ""
        return f"CompiledNode({self.key!r}, {self.name!r}{extras}{children_str})"
