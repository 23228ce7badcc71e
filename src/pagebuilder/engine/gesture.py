"""Pointer-driven resize/move gestures over the resize overlay."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import numpy as np

from ..core.box import Box
from ..core.handles import Handle, handle_factors

logger = logging.getLogger(__name__)

EDIT_COMP_BOX = "EDIT_COMP_BOX"

Dispatch = Callable[[dict[str, Any]], Any]


class GesturePhase(Enum):
    IDLE = "idle"
    ACTIVE = "active"


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event as seen by the gesture controller.

    ``target_id``, ``handle`` and ``box`` are only meaningful for DOWN events
    over an overlay handle.
    """

    kind: PointerKind
    x: float = 0.0
    y: float = 0.0
    target_id: str | None = None
    handle: Handle | None = None
    box: Box | None = None


@dataclass(frozen=True)
class GestureState:
    """Data captured when a gesture starts."""

    target_id: str
    handle: Handle
    origin_x: float
    origin_y: float
    origin_box: Box


def resize_box(box: Box, handle: Handle | str, dx: float, dy: float) -> Box:
    """Apply a pointer delta to a box for one handle.

    Edge handles change one dimension, corners change two and the move
    handle only shifts the box. Left/top handles keep the opposite edge
    fixed. Sizes clamp at zero.

    Args:
        box: The box captured at gesture start
        handle: The handle that started the gesture
        dx: Horizontal pointer delta since gesture start
        dy: Vertical pointer delta since gesture start

    Returns:
        The new box
    """
    size_sign, move_sign = handle_factors(handle)
    delta = np.array([dx, dy], dtype=np.float64)

    size = np.maximum(box.size + delta * size_sign, 0.0)
    # Shrinking from the left/top edge moves the offset by what the size lost
    anchored = np.where(size_sign < 0, box.size - size, 0.0)
    position = box.position + delta * move_sign + anchored

    return Box.from_arrays(size, position)


class GestureController:
    """IDLE/ACTIVE state machine turning pointer events into box edits.

    A DOWN over a handle activates the controller and captures the target's
    box and the pointer origin. Each MOVE while active dispatches an
    ``EDIT_COMP_BOX`` action with the recomputed box. UP or LEAVE always
    returns to IDLE; extra UP/LEAVE events while idle are ignored.

    The controller never mutates layout state itself; the dispatch callable
    owns that.
    """

    def __init__(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch
        self._state: GestureState | None = None

    @property
    def phase(self) -> GesturePhase:
        return GesturePhase.IDLE if self._state is None else GesturePhase.ACTIVE

    @property
    def state(self) -> GestureState | None:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is not None

    def handle(self, event: PointerEvent) -> dict[str, Any] | None:
        """Feed one pointer event through the state machine.

        Returns:
            The dispatched action for a MOVE while active, otherwise None
        """
        if event.kind is PointerKind.DOWN:
            if event.target_id is None or event.handle is None or event.box is None:
                raise ValueError("DOWN events need target_id, handle and box")
            if self._state is not None:
                logger.debug("Pointer down while active on %s, restarting gesture",
                             self._state.target_id)
            self._state = GestureState(
                target_id=event.target_id,
                handle=event.handle,
                origin_x=event.x,
                origin_y=event.y,
                origin_box=event.box,
            )
            return None

        if event.kind is PointerKind.MOVE:
            if self._state is None:
                return None
            return self._emit(event.x, event.y)

        # UP and LEAVE end the gesture
        if self._state is not None:
            logger.debug("Gesture on %s ended by %s", self._state.target_id, event.kind.value)
        self._state = None
        return None

    def press(self, target_id: str, handle: Handle | str, x: float, y: float, box: Box) -> None:
        if isinstance(handle, str):
            handle = Handle(handle)
        self.handle(PointerEvent(PointerKind.DOWN, x, y, target_id=target_id, handle=handle, box=box))

    def move(self, x: float, y: float) -> dict[str, Any] | None:
        return self.handle(PointerEvent(PointerKind.MOVE, x, y))

    def release(self) -> None:
        self.handle(PointerEvent(PointerKind.UP))

    def leave(self) -> None:
        self.handle(PointerEvent(PointerKind.LEAVE))

    def _emit(self, x: float, y: float) -> dict[str, Any]:
        """Compute the box for the current pointer and dispatch it."""
        state = self._state
        assert state is not None
        box = resize_box(state.origin_box, state.handle, x - state.origin_x, y - state.origin_y)
        action = {
            "type": EDIT_COMP_BOX,
            "payload": {
                "el": state.target_id,
                "handle": state.handle.value,
                "clientX": x,
                "clientY": y,
                "current": box.to_payload(),
            },
        }
        self._dispatch(action)
        return action
