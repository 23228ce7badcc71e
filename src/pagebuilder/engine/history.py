"""Undo/redo history of committed layout trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..core.node import LayoutNode, LayoutTree, copy_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of a layout tree.

    ``is_point`` marks snapshots handed out by history navigation; trees
    derived from them must not be recorded again.
    """

    nodes: tuple[LayoutNode, ...]
    is_point: bool = False

    @classmethod
    def of(cls, tree: Iterable[LayoutNode], is_point: bool = False) -> Snapshot:
        return cls(nodes=tuple(copy_tree(tree)), is_point=is_point)

    @property
    def tree(self) -> LayoutTree:
        """A fresh, mutable copy of the snapshot's tree."""
        return copy_tree(self.nodes)


class HistoryRecorder:
    """Records committed layout trees and navigates between them.

    The cursor points at the snapshot matching the current tree. Recording
    after an undo discards the snapshots ahead of the cursor.
    """

    def __init__(self, limit: int = 0) -> None:
        """Initialize the recorder.

        Args:
            limit: Maximum number of snapshots to keep, 0 for unlimited
        """
        self._limit = limit
        self._snapshots: list[Snapshot] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def current(self) -> Snapshot | None:
        if self._cursor < 0:
            return None
        return self._snapshots[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def record(
        self,
        tree: Iterable[LayoutNode],
        from_history: bool = False,
        input_focused: bool = False,
    ) -> bool:
        """Append a snapshot of a committed tree.

        Args:
            tree: The committed layout tree
            from_history: The tree was produced by undo/redo
            input_focused: An editable field holds input focus

        Returns:
            True if a snapshot was appended
        """
        if from_history or input_focused:
            return False

        snapshot = Snapshot.of(tree)
        current = self.current
        if current is not None and current.nodes == snapshot.nodes:
            return False

        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(snapshot)
        if self._limit and len(self._snapshots) > self._limit:
            del self._snapshots[: len(self._snapshots) - self._limit]
        self._cursor = len(self._snapshots) - 1
        logger.debug("Recorded history snapshot %d", self._cursor)
        return True

    def navigate(self, direction: int) -> Snapshot | None:
        """Step through history.

        Args:
            direction: -1 to undo, +1 to redo

        Returns:
            The adjacent snapshot flagged as a history point, or None at a boundary
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")

        target = self._cursor + direction
        if target < 0 or target >= len(self._snapshots):
            return None

        self._cursor = target
        return Snapshot(nodes=self._snapshots[target].nodes, is_point=True)

    def undo(self) -> Snapshot | None:
        return self.navigate(-1)

    def redo(self) -> Snapshot | None:
        return self.navigate(1)

    def clear(self) -> None:
        """Forget all snapshots."""
        self._snapshots.clear()
        self._cursor = -1
