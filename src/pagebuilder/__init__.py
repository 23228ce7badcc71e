"""Page builder editor core: layout compilation, scheduling, history and gestures."""

from .config import EditorConfig, load_config
from .core import Box, CompiledNode, LayoutNode
from .editor import EditorSession, EditorStore
from .errors import ComponentResolutionError, LayoutError, PageBuilderError, PageResponseError

__all__ = [
    "Box",
    "CompiledNode",
    "ComponentResolutionError",
    "EditorConfig",
    "EditorSession",
    "EditorStore",
    "LayoutError",
    "LayoutNode",
    "PageBuilderError",
    "PageResponseError",
    "load_config",
]
