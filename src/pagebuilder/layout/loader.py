"""YAML/JSON loader for page layout documents."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.node import LayoutNode, LayoutTree
from ..errors import LayoutError, PageResponseError

REQUIRED_FIELDS = ("el", "name")


@dataclass
class PageDocument:
    """A page as served by the editor backend: layout tree plus component hooks."""

    tree: LayoutTree
    hooks: dict[str, Any] = field(default_factory=dict)


class LayoutLoader:
    """Loads page layout trees from YAML or JSON documents.

    A document is either a list of top-level nodes or a mapping with a
    ``tree`` key holding that list. Each node uses the wire field names:

        - el: el_1              # unique id within the tree
          name: View            # component identifier
          hook: default         # variant key (optional)
          hide: false           # optional
          style: {position: relative, width: 100px}
          props: {}
          children:             # optional
            - el: el_2
              name: Image
              props: {src: banner.png}

    Malformed nodes raise LayoutError naming the offending node path.
    """

    def load(self, path: str | Path) -> LayoutTree:
        """Load a layout tree from a YAML or JSON file.

        Args:
            path: Path to the document

        Returns:
            List of top-level LayoutNodes
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        return self.load_data(data)

    def load_string(self, text: str) -> LayoutTree:
        """Load a layout tree from a YAML or JSON string."""
        data = yaml.safe_load(text)
        return self.load_data(data)

    def load_data(self, data: Any) -> LayoutTree:
        """Validate parsed document data and build the layout tree."""
        if isinstance(data, dict):
            if "tree" not in data:
                raise LayoutError("Layout document mapping has no 'tree' key")
            data = data["tree"]
        if not isinstance(data, list):
            raise LayoutError(f"Layout tree must be a list of nodes, got {type(data).__name__}")

        seen: set[str] = set()
        return [self._parse_node(item, f"tree[{i}]", seen) for i, item in enumerate(data)]

    def load_response(self, payload: dict[str, Any]) -> PageDocument:
        """Load a page from the backend's ``{error, msg, data}`` envelope.

        Raises:
            PageResponseError: If the envelope reports an error
            LayoutError: If the tree is malformed
        """
        code = payload.get("error", 0)
        if code != 0:
            raise PageResponseError(code, payload.get("msg", ""))

        data = payload.get("data") or {}
        tree = self.load_data(data.get("tree", []))
        return PageDocument(tree=tree, hooks=dict(data.get("hook") or {}))

    def dump(self, tree: LayoutTree) -> list[dict[str, Any]]:
        """Serialize a layout tree to wire-format data."""
        return [node.to_dict() for node in tree]

    def save(self, tree: LayoutTree, path: str | Path) -> None:
        """Write a layout tree to a file (JSON for ``.json``, YAML otherwise)."""
        path = Path(path)
        data = self.dump(tree)
        with open(path, "w") as f:
            if path.suffix == ".json":
                json.dump(data, f, ensure_ascii=False, indent=2)
            else:
                yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)

    def _parse_node(self, data: Any, where: str, seen: set[str]) -> LayoutNode:
        """Check one node definition and build it with its children."""
        if not isinstance(data, dict):
            raise LayoutError(f"{where}: node must be a mapping, got {type(data).__name__}")

        for key in REQUIRED_FIELDS:
            value = data.get(key)
            if not isinstance(value, str) or not value:
                raise LayoutError(f"{where}: missing or empty required field '{key}'")

        el = data["el"]
        where = f"{where}({el})"
        if el in seen:
            raise LayoutError(f"{where}: duplicate node id '{el}'")
        seen.add(el)

        hook = data.get("hook")
        if hook is not None and not isinstance(hook, str):
            raise LayoutError(f"{where}: 'hook' must be a string")
        for key in ("style", "props"):
            value = data.get(key)
            if value is not None and not isinstance(value, dict):
                raise LayoutError(f"{where}: '{key}' must be a mapping")

        children = data.get("children")
        if children is not None and not isinstance(children, list):
            raise LayoutError(f"{where}: 'children' must be a list")

        return LayoutNode(
            el=el,
            name=data["name"],
            hook=hook or "",
            hide=bool(data.get("hide", False)),
            style=dict(data.get("style") or {}),
            props=dict(data.get("props") or {}),
            children=[
                self._parse_node(child, f"{where}.children[{i}]", seen)
                for i, child in enumerate(children or [])
            ],
        )
