"""Tests for resize math and the gesture state machine."""

import pytest

from pagebuilder.core import Box, Handle
from pagebuilder.engine import (
    EDIT_COMP_BOX,
    GestureController,
    GesturePhase,
    PointerEvent,
    PointerKind,
    resize_box,
)

START = Box(width=100, height=50, left=10, top=10)


@pytest.mark.parametrize(
    "handle,dx,dy,expected",
    [
        ("RB", 20, 10, Box(120, 60, 10, 10)),
        ("LT", 20, 10, Box(80, 40, 30, 20)),
        ("RT", 20, 10, Box(120, 40, 10, 20)),
        ("LB", 20, 10, Box(80, 60, 30, 10)),
        ("RM", 20, 10, Box(120, 50, 10, 10)),
        ("LM", -20, 10, Box(120, 50, -10, 10)),
        ("MB", 20, 10, Box(100, 60, 10, 10)),
        ("MT", 20, -10, Box(100, 60, 10, 0)),
        ("MM", 20, 10, Box(100, 50, 30, 20)),
    ],
)
def test_resize_box(handle, dx, dy, expected):
    assert resize_box(START, handle, dx, dy) == expected


def test_negative_dimensions_clamp_to_zero():
    assert resize_box(START, Handle.RB, -150, -80) == Box(0, 0, 10, 10)


def test_clamped_left_top_keep_opposite_edge():
    box = resize_box(START, Handle.LT, 150, 80)
    assert (box.width, box.height) == (0, 0)
    # Right and bottom edges stay where they were
    assert (box.left, box.top) == (110, 60)


@pytest.fixture
def dispatched():
    return []


@pytest.fixture
def controller(dispatched):
    return GestureController(dispatched.append)


def test_starts_idle(controller):
    assert controller.phase is GesturePhase.IDLE
    assert controller.state is None


def test_press_move_release(controller, dispatched):
    controller.press("el_1", "RB", 200, 100, START)

    assert controller.phase is GesturePhase.ACTIVE
    assert controller.state.origin_box == START
    assert controller.state.handle is Handle.RB
    assert dispatched == []

    controller.move(220, 110)
    controller.move(230, 120)
    controller.release()

    assert controller.phase is GesturePhase.IDLE
    assert controller.state is None
    assert dispatched[0] == {
        "type": EDIT_COMP_BOX,
        "payload": {
            "el": "el_1",
            "handle": "RB",
            "clientX": 220,
            "clientY": 110,
            "current": {"width": 120.0, "height": 60.0, "position": {"left": 10.0, "top": 10.0}},
        },
    }
    # Deltas are always measured from the gesture origin
    assert dispatched[1]["payload"]["current"]["width"] == 130.0


def test_move_while_idle_dispatches_nothing(controller, dispatched):
    assert controller.move(10, 10) is None
    assert dispatched == []


def test_leave_ends_gesture(controller, dispatched):
    controller.press("el_1", Handle.MM, 0, 0, START)
    controller.leave()

    assert controller.phase is GesturePhase.IDLE
    controller.move(50, 50)
    assert dispatched == []


def test_repeated_release_is_harmless(controller):
    controller.press("el_1", Handle.MM, 0, 0, START)
    controller.release()
    controller.release()
    controller.leave()
    assert controller.phase is GesturePhase.IDLE


def test_press_while_active_restarts(controller, dispatched):
    controller.press("el_1", Handle.RB, 0, 0, START)
    other = Box(10, 10, 0, 0)
    controller.press("el_2", Handle.MM, 100, 100, other)

    controller.move(105, 100)

    assert dispatched[-1]["payload"]["el"] == "el_2"
    assert dispatched[-1]["payload"]["current"]["position"] == {"left": 5.0, "top": 0.0}


def test_down_event_requires_target(controller):
    with pytest.raises(ValueError):
        controller.handle(PointerEvent(PointerKind.DOWN, 0, 0))
    assert controller.phase is GesturePhase.IDLE
