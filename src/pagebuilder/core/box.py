"""Box class for rendered component geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self

import numpy as np
from numpy.typing import NDArray

BOX_KEYS = ("width", "height", "left", "top")


def parse_length(value: Any) -> float:
    """Parse a style length (``12``, ``12.5``, ``"12px"``) into a float.

    Missing values and ``"auto"`` count as 0.

    Raises:
        ValueError: If the value is not an absolute length
    """
    if value is None or value == "" or value == "auto":
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"Not a length: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if text.endswith("px"):
        text = text[:-2]
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Not an absolute length: {value!r}") from None


def format_length(value: float) -> str:
    """Format a float as a pixel length (``120.0`` -> ``"120px"``)."""
    return f"{value:g}px"


@dataclass(frozen=True)
class Box:
    """The rendered box of a component: size plus left/top offset.

    numpy views are provided for vector arithmetic; the stored fields are
    plain floats so boxes compare and hash by value.
    """

    width: float = 0.0
    height: float = 0.0
    left: float = 0.0
    top: float = 0.0

    @property
    def size(self) -> NDArray[np.float64]:
        """Size as ``[width, height]``."""
        return np.array([self.width, self.height], dtype=np.float64)

    @property
    def position(self) -> NDArray[np.float64]:
        """Offset as ``[left, top]``."""
        return np.array([self.left, self.top], dtype=np.float64)

    @classmethod
    def from_arrays(cls, size: NDArray[np.float64], position: NDArray[np.float64]) -> Self:
        """Create a Box from ``[width, height]`` and ``[left, top]`` arrays."""
        return cls(
            width=float(size[0]),
            height=float(size[1]),
            left=float(position[0]),
            top=float(position[1]),
        )

    @classmethod
    def from_style(cls, style: dict[str, Any]) -> Self:
        """Measure a box from a node's style mapping."""
        return cls(**{key: parse_length(style.get(key)) for key in BOX_KEYS})

    @classmethod
    def from_payload(cls, current: dict[str, Any]) -> Self:
        """Create a Box from the ``current`` field of an EDIT_COMP_BOX action."""
        position = current.get("position", {})
        return cls(
            width=float(current["width"]),
            height=float(current["height"]),
            left=float(position.get("left", 0.0)),
            top=float(position.get("top", 0.0)),
        )

    def to_style(self) -> dict[str, str]:
        """Style entries for this box, as pixel strings."""
        return {key: format_length(getattr(self, key)) for key in BOX_KEYS}

    def to_payload(self) -> dict[str, Any]:
        """The ``current`` field of an EDIT_COMP_BOX action."""
        return {
            "width": self.width,
            "height": self.height,
            "position": {"left": self.left, "top": self.top},
        }
