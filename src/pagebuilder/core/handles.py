"""Resize handle system for the nine-cell overlay on a selected component."""

from enum import Enum

import numpy as np


class Handle(Enum):
    """Named handles of the resize overlay.

    The first letter is the column (L = left, M = middle, R = right), the
    second the row (T = top, M = middle, B = bottom). MM is the move handle.
    """
    LT = "LT"
    MT = "MT"
    RT = "RT"
    LM = "LM"
    MM = "MM"
    RM = "RM"
    LB = "LB"
    MB = "MB"
    RB = "RB"


# Overlay render order, row by row
HANDLE_ORDER: tuple[Handle, ...] = (
    Handle.LT, Handle.MT, Handle.RT,
    Handle.LM, Handle.MM, Handle.RM,
    Handle.LB, Handle.MB, Handle.RB,
)

# Per-axis factors (x, y) applied to the pointer delta:
# size sign: +1 grows with the delta, -1 shrinks with it, 0 leaves the size alone
# move sign: +1 shifts left/top by the delta (move handle only)
# Handles with a negative size sign keep the opposite edge fixed.
HANDLE_FACTORS: dict[Handle, tuple[tuple[float, float], tuple[float, float]]] = {
    # Corners
    Handle.LT: ((-1.0, -1.0), (0.0, 0.0)),
    Handle.RT: ((1.0, -1.0), (0.0, 0.0)),
    Handle.LB: ((-1.0, 1.0), (0.0, 0.0)),
    Handle.RB: ((1.0, 1.0), (0.0, 0.0)),

    # Edges
    Handle.MT: ((0.0, -1.0), (0.0, 0.0)),
    Handle.MB: ((0.0, 1.0), (0.0, 0.0)),
    Handle.LM: ((-1.0, 0.0), (0.0, 0.0)),
    Handle.RM: ((1.0, 0.0), (0.0, 0.0)),

    # Move
    Handle.MM: ((0.0, 0.0), (1.0, 1.0)),
}


def handle_factors(handle: Handle | str) -> tuple[np.ndarray, np.ndarray]:
    """Look up the size and move factor vectors for a handle.

    Args:
        handle: The handle (enum or its two-letter code)

    Returns:
        Tuple of (size_sign, move_sign) arrays of shape (2,)
    """
    if isinstance(handle, str):
        handle = Handle(handle)

    size_sign, move_sign = HANDLE_FACTORS[handle]
    return np.array(size_sign, dtype=np.float64), np.array(move_sign, dtype=np.float64)
