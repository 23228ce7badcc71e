"""Page components and the loader that resolves them."""

from .base import BaseComponent, Component
from .builtin import BUILTIN_COMPONENTS, Image, View
from .loader import ComponentLoader

__all__ = [
    "BaseComponent",
    "Component",
    "BUILTIN_COMPONENTS",
    "Image",
    "View",
    "ComponentLoader",
]
