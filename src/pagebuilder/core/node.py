"""LayoutNode class for the JSON page layout hierarchy."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

LayoutTree = list["LayoutNode"]


@dataclass
class LayoutNode:
    """A node in the page layout hierarchy.

    Each node names a component and its variant key, carries the style and
    props edited in the editor, and can have children rendered inside the
    component. Hidden nodes stay in the tree but are never compiled.

    Example:
        page = LayoutNode("el_1", "View", style={"position": "relative"})
        page.add_child(LayoutNode("el_2", "Image", props={"src": "a.png"}))
    """

    el: str
    name: str
    hook: str = ""
    hide: bool = False
    style: dict[str, Any] = field(default_factory=dict)
    props: dict[str, Any] = field(default_factory=dict)
    children: list[LayoutNode] = field(default_factory=list)

    def add_child(self, node: LayoutNode) -> LayoutNode:
        """Add a child node.

        Args:
            node: The node to add as a child

        Returns:
            The added node (for chaining)
        """
        self.children.append(node)
        return node

    def remove_child(self, node: LayoutNode) -> bool:
        """Remove a child node.

        Args:
            node: The node to remove

        Returns:
            True if the node was found and removed
        """
        for i, child in enumerate(self.children):
            if child is node:
                del self.children[i]
                return True
        return False

    def iter_nodes(self, include_self: bool = True) -> Iterator[LayoutNode]:
        """Iterate over this node and all descendants (depth-first).

        Args:
            include_self: Whether to include this node in the iteration

        Yields:
            LayoutNode instances
        """
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_nodes(include_self=True)

    def find(self, el: str) -> LayoutNode | None:
        """Find a descendant node by id.

        Args:
            el: The node id to search for

        Returns:
            The matching node, or None
        """
        for node in self.iter_nodes():
            if node.el == el:
                return node
        return None

    def copy(self, deep: bool = True) -> LayoutNode:
        """Create a copy of this node.

        Args:
            deep: If True, recursively copy children

        Returns:
            New LayoutNode with copied style and props
        """
        return LayoutNode(
            el=self.el,
            name=self.name,
            hook=self.hook,
            hide=self.hide,
            style=copy.deepcopy(self.style),
            props=copy.deepcopy(self.props),
            children=[child.copy(deep=True) for child in self.children] if deep else [],
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LayoutNode:
        """Build a node (and its children) from wire-format data.

        No validation is done here; see LayoutLoader for checked parsing.
        """
        return cls(
            el=data["el"],
            name=data["name"],
            hook=data.get("hook") or "",
            hide=bool(data.get("hide", False)),
            style=dict(data.get("style") or {}),
            props=dict(data.get("props") or {}),
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to wire format (``hide, el, name, hook, style, props, children``)."""
        data: dict[str, Any] = {
            "hide": self.hide,
            "el": self.el,
            "name": self.name,
            "hook": self.hook,
            "style": copy.deepcopy(self.style),
            "props": copy.deepcopy(self.props),
        }
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def __repr__(self) -> str:
        hidden_str = ", hidden" if self.hide else ""
        children_str = f", children={len(self.children)}" if self.children else ""
        return f"LayoutNode({self.el!r}, {self.name!r}{hidden_str}{children_str})"


def iter_tree(tree: Iterable[LayoutNode]) -> Iterator[LayoutNode]:
    """Iterate over every node of a layout tree, hidden ones included."""
    for node in tree:
        yield from node.iter_nodes()


def find_in_tree(tree: Iterable[LayoutNode], el: str) -> LayoutNode | None:
    """Find a node by id anywhere in a layout tree."""
    for node in iter_tree(tree):
        if node.el == el:
            return node
    return None


def copy_tree(tree: Iterable[LayoutNode]) -> LayoutTree:
    """Deep copy a layout tree."""
    return [node.copy(deep=True) for node in tree]
