"""Core data model: layout nodes, boxes, handles and compiled nodes."""

from .node import LayoutNode, LayoutTree, copy_tree, find_in_tree, iter_tree
from .box import Box
from .handles import Handle, HANDLE_ORDER
from .compiled import CompiledNode, EditBindings, OverlayHandle, ResizeOverlay

__all__ = [
    "LayoutNode",
    "LayoutTree",
    "copy_tree",
    "find_in_tree",
    "iter_tree",
    "Box",
    "Handle",
    "HANDLE_ORDER",
    "CompiledNode",
    "EditBindings",
    "OverlayHandle",
    "ResizeOverlay",
]
