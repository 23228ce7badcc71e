"""Leaf components available to every page."""

from __future__ import annotations

from typing import Any

from ..config import EDIT_ENVIRONMENT
from .base import BaseComponent


class View(BaseComponent):
    """Plain container that renders its children."""

    def render(self, props: dict[str, Any], children: list[Any], env: str) -> dict[str, Any]:
        return {"type": "div", "className": "wp-view", "children": children}


class Image(BaseComponent):
    """Image that opens its link when clicked, except while editing."""

    def render(self, props: dict[str, Any], children: list[Any], env: str) -> dict[str, Any]:
        rendered = {"type": "img", "className": "wp-img", "src": props.get("src", "")}
        link = self.open_link(props, env)
        if link:
            rendered["onClick"] = {"open": link}
        return rendered

    def open_link(self, props: dict[str, Any], env: str) -> str | None:
        """Return the link to open for a click, or None inside the editor."""
        if env == EDIT_ENVIRONMENT:
            return None
        return props.get("link")


# Components registered with every loader
BUILTIN_COMPONENTS: dict[str, type[BaseComponent]] = {
    "View": View,
    "Image": Image,
}
