"""Authoritative collection of authored shapes, selection and history.

:class:`ShapeStore` is the explicit state object the editor passes around. It
owns the ordered shapes (one per placement, keyed by id), the selection, the
global symmetry configuration and a :class:`~.history.History`. Discrete edits
checkpoint before they mutate; :meth:`ShapeStore.update` does not, so a drag
gesture can stream centers through it under a single checkpoint.

Listeners registered with :meth:`ShapeStore.add_listener` are called with a
short reason string after every committed change, and :attr:`dirty` stays set
until a renderer calls :meth:`consume_dirty`.
"""
from __future__ import annotations

import uuid
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .geometry import CANVAS_SIZE
from .history import HISTORY_LIMIT, History, Snapshot, freeze
from .logger import get_logger
from .shapes import Shape, ShapeDraft
from .symmetry import InstanceTransform, SymmetryConfig, expand

Listener = Callable[[str], None]

log = get_logger("store")


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class ShapeStore:
    def __init__(
        self,
        symmetry: Optional[SymmetryConfig] = None,
        history: Optional[History] = None,
        *,
        canvas_size: float = CANVAS_SIZE,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._shapes: Dict[str, Shape] = {}
        self._selection: List[str] = []
        self._symmetry = symmetry or SymmetryConfig()
        self.history = history or History(HISTORY_LIMIT)
        self.canvas_size = float(canvas_size)
        self._id_factory = id_factory or _new_id
        self._listeners: List[Listener] = []
        self.dirty = False

    # ------------------------------------------------------------------
    # Read access
    @property
    def shapes(self) -> Tuple[Shape, ...]:
        return tuple(self._shapes.values())

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(self._shapes.keys())

    @property
    def selected_ids(self) -> Tuple[str, ...]:
        return tuple(self._selection)

    @property
    def symmetry(self) -> SymmetryConfig:
        return self._symmetry

    def __len__(self) -> int:
        return len(self._shapes)

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes

    def shape(self, shape_id: str) -> Optional[Shape]:
        return self._shapes.get(shape_id)

    def index_of(self, shape_id: str) -> int:
        for idx, sid in enumerate(self._shapes):
            if sid == shape_id:
                return idx
        return -1

    def selected_shapes(self) -> List[Shape]:
        return [self._shapes[sid] for sid in self._selection]

    def snapshot(self) -> Snapshot:
        return freeze(self._shapes.values())

    def instances(self, shape_id: str) -> List[InstanceTransform]:
        shape = self._shapes.get(shape_id)
        if shape is None:
            return []
        return expand(shape, self._symmetry, self.canvas_size)

    def render_list(self) -> List[Tuple[Shape, List[InstanceTransform]]]:
        """Every shape in layer order with its instance transforms."""
        return [(shape, expand(shape, self._symmetry, self.canvas_size)) for shape in self._shapes.values()]

    # ------------------------------------------------------------------
    # Change notification
    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def consume_dirty(self) -> bool:
        was_dirty = self.dirty
        self.dirty = False
        return was_dirty

    def _changed(self, reason: str) -> None:
        self.dirty = True
        for listener in list(self._listeners):
            listener(reason)

    # ------------------------------------------------------------------
    # History
    def checkpoint(self) -> None:
        self.history.checkpoint(self._shapes.values())

    def _restore(self, snapshot: Snapshot) -> None:
        self._shapes = {shape.id: shape.copy() for shape in snapshot}
        self._selection = []

    def undo(self) -> bool:
        previous = self.history.undo(self._shapes.values())
        if previous is None:
            return False
        self._restore(previous)
        self._changed("undo")
        return True

    def redo(self) -> bool:
        following = self.history.redo(self._shapes.values())
        if following is None:
            return False
        self._restore(following)
        self._changed("redo")
        return True

    # ------------------------------------------------------------------
    # Mutations
    def place(self, draft: ShapeDraft) -> str:
        self.checkpoint()
        shape_id = self._id_factory()
        while shape_id in self._shapes:
            shape_id = self._id_factory()
        shape = Shape.from_draft(shape_id, draft)
        self._shapes[shape_id] = shape
        self._selection = [shape_id]
        log.debug("placed %s %s at (%.1f, %.1f)", shape.kind.value, shape_id, *shape.center)
        self._changed("place")
        return shape_id

    def update(self, shape_id: str, patch: Optional[Mapping[str, Any]] = None, **fields: Any) -> bool:
        """Merge fields into one shape without checkpointing."""
        shape = self._shapes.get(shape_id)
        if shape is None:
            return False
        merged = dict(patch or {}, **fields)
        self._shapes[shape_id] = shape.patched(merged)
        self._changed("update")
        return True

    def update_many(self, ids: Iterable[str], patch: Optional[Mapping[str, Any]] = None, **fields: Any) -> int:
        targets = [sid for sid in dict.fromkeys(ids) if sid in self._shapes]
        if not targets:
            return 0
        merged = dict(patch or {}, **fields)
        self.checkpoint()
        for sid in targets:
            self._shapes[sid] = self._shapes[sid].patched(merged)
        self._changed("update")
        return len(targets)

    def update_selected(self, patch: Optional[Mapping[str, Any]] = None, **fields: Any) -> int:
        return self.update_many(list(self._selection), patch, **fields)

    def remove(self, shape_id: str) -> bool:
        if shape_id not in self._shapes:
            return False
        self.checkpoint()
        del self._shapes[shape_id]
        self._selection = [sid for sid in self._selection if sid != shape_id]
        log.debug("removed %s", shape_id)
        self._changed("remove")
        return True

    def remove_selected(self) -> int:
        if not self._selection:
            return 0
        self.checkpoint()
        doomed = set(self._selection)
        self._shapes = {sid: shape for sid, shape in self._shapes.items() if sid not in doomed}
        self._selection = []
        log.debug("removed %d selected shapes", len(doomed))
        self._changed("remove")
        return len(doomed)

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move one entry in layer order; invalid indices are ignored."""
        order = list(self._shapes.keys())
        if not (0 <= from_index < len(order)) or not (0 <= to_index < len(order)):
            return False
        self.checkpoint()
        moved = order.pop(from_index)
        order.insert(to_index, moved)
        self._shapes = {sid: self._shapes[sid] for sid in order}
        self._changed("reorder")
        return True

    def toggle_visibility(self, shape_id: str) -> bool:
        shape = self._shapes.get(shape_id)
        if shape is None:
            return False
        self.checkpoint()
        self._shapes[shape_id] = shape.patched({"visible": not shape.visible})
        self._changed("update")
        return True

    def toggle_lock(self, shape_id: str) -> bool:
        shape = self._shapes.get(shape_id)
        if shape is None:
            return False
        self.checkpoint()
        self._shapes[shape_id] = shape.patched({"locked": not shape.locked})
        self._changed("update")
        return True

    # ------------------------------------------------------------------
    # Selection
    def select(self, shape_id: str, additive: bool = False) -> None:
        if shape_id not in self._shapes:
            return
        if additive:
            if shape_id in self._selection:
                self._selection = [sid for sid in self._selection if sid != shape_id]
            else:
                self._selection = self._selection + [shape_id]
        else:
            self._selection = [shape_id]
        self._changed("select")

    def set_selection(self, ids: Sequence[str]) -> None:
        filtered = [sid for sid in dict.fromkeys(ids) if sid in self._shapes]
        if filtered == self._selection:
            return
        self._selection = filtered
        self._changed("select")

    def deselect_all(self) -> None:
        if not self._selection:
            return
        self._selection = []
        self._changed("select")

    # ------------------------------------------------------------------
    # Symmetry
    def set_symmetry(self, config: Optional[SymmetryConfig] = None, **patch: Any) -> SymmetryConfig:
        """Replace or patch the global symmetry; not recorded in history."""
        updated = (config or self._symmetry).patched(**patch) if patch else (config or self._symmetry)
        if updated != self._symmetry:
            self._symmetry = updated
            self._changed("symmetry")
        return self._symmetry
