"""Undo/redo stacks of shape-collection snapshots."""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .logger import get_logger
from .shapes import Shape

Snapshot = Tuple[Shape, ...]

HISTORY_LIMIT = 50

log = get_logger("history")


def freeze(shapes: Iterable[Shape]) -> Snapshot:
    """Copy ``shapes`` into an immutable snapshot."""
    return tuple(shape.copy() for shape in shapes)


class History:
    """Capped ``past``/``future`` stacks around an externally owned present.

    ``past[-1]`` is the most recent checkpoint and ``future[0]`` the most
    recently undone state. Both stacks drop their oldest entry on overflow.
    """

    def __init__(self, limit: int = HISTORY_LIMIT):
        self.limit = max(int(limit), 1)
        self._past: List[Snapshot] = []
        self._future: List[Snapshot] = []

    @property
    def past(self) -> Tuple[Snapshot, ...]:
        return tuple(self._past)

    @property
    def future(self) -> Tuple[Snapshot, ...]:
        return tuple(self._future)

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()

    def _push_past(self, snapshot: Snapshot) -> None:
        self._past.append(snapshot)
        if len(self._past) > self.limit:
            self._past.pop(0)

    def checkpoint(self, present: Iterable[Shape]) -> None:
        self._push_past(freeze(present))
        self._future.clear()
        log.debug("checkpoint (past=%d)", len(self._past))

    def undo(self, present: Iterable[Shape]) -> Optional[Snapshot]:
        """Return the snapshot to restore, or ``None`` when there is none."""
        if not self._past:
            return None
        previous = self._past.pop()
        self._future.insert(0, freeze(present))
        if len(self._future) > self.limit:
            self._future.pop()
        log.debug("undo (past=%d, future=%d)", len(self._past), len(self._future))
        return previous

    def redo(self, present: Iterable[Shape]) -> Optional[Snapshot]:
        if not self._future:
            return None
        following = self._future.pop(0)
        self._push_past(freeze(present))
        log.debug("redo (past=%d, future=%d)", len(self._past), len(self._future))
        return following
