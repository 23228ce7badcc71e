"""Shared fixtures for pagebuilder tests."""

import asyncio
import os
from pathlib import Path

import pytest

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pagebuilder.components import View
from pagebuilder.core import LayoutNode
from pagebuilder.errors import ComponentResolutionError

ASSETS_DIR = Path(__file__).parent.parent / "assets"


class FakeLoader:
    """Component loader with per-name latency and failures, recording every call."""

    def __init__(self, delays: dict[str, float] | None = None, fail: tuple[str, ...] = ()) -> None:
        self.delays = delays or {}
        self.fail = set(fail)
        self.calls: list[str] = []
        self.completed: list[str] = []

    async def resolve(self, name: str, hook: str = ""):
        self.calls.append(name)
        await asyncio.sleep(self.delays.get(name, 0))
        if name in self.fail:
            raise ComponentResolutionError(name, hook, "loader failure")
        self.completed.append(name)
        return View(hook)


class RecordingHandlers:
    """EditHandlers that record each callback as a tuple."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def handle_event(self, kind, el, event):
        self.events.append(("event", kind, el))

    def handle_hover(self, kind, el, event):
        self.events.append(("hover", kind, el))

    def handle_click(self, el, event):
        self.events.append(("click", el))

    def handle_pointer_down(self, el, handle, event):
        self.events.append(("pointer_down", el, handle))


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def handlers():
    return RecordingHandlers()


@pytest.fixture
def page_tree():
    """A small page: positioned banner with an image and a hidden block, plus a footer."""
    banner = LayoutNode(
        "el_banner",
        "View",
        style={"position": "relative", "width": "100px", "height": "50px", "left": "10px", "top": "10px"},
    )
    banner.add_child(LayoutNode("el_logo", "Image", hook="default", props={"src": "logo.png"}))
    hidden = banner.add_child(LayoutNode("el_hidden", "View", hide=True))
    hidden.add_child(LayoutNode("el_hidden_child", "Image"))
    footer = LayoutNode("el_footer", "View", style={"height": "40px"})
    return [banner, footer]
