"""Layout documents: loading, validating and saving page trees."""

from .loader import LayoutLoader, PageDocument

__all__ = ["LayoutLoader", "PageDocument"]
