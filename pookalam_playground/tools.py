"""Pointer interaction for the Pookalam canvas.

The controller works in canvas coordinates and knows nothing about Qt; the
canvas widget maps its mouse events to :meth:`InteractionController.pointer_down`,
:meth:`~InteractionController.pointer_move` and
:meth:`~InteractionController.pointer_up`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .geometry import path_for_shape
from .logger import get_logger
from .shapes import ToolDefaults
from .store import ShapeStore

Point = Tuple[float, float]

GRID_STEP = 10.0

log = get_logger("tools")


def quantize(point: Sequence[float], step: float = GRID_STEP) -> Point:
    """Round each coordinate to the nearest multiple of ``step``."""
    if step <= 0:
        return (float(point[0]), float(point[1]))
    return (round(float(point[0]) / step) * step, round(float(point[1]) / step) * step)


@dataclass
class _Drag:
    shape_id: str
    start: Point
    origin: Point


class InteractionController:
    """Place-on-empty, drag-on-shape pointer handling."""

    def __init__(self, store: ShapeStore, defaults: Optional[ToolDefaults] = None, grid_step: float = GRID_STEP):
        self.store = store
        self.defaults = defaults or ToolDefaults()
        self.grid_step = float(grid_step)
        self._drag: Optional[_Drag] = None

    @property
    def dragging(self) -> bool:
        return self._drag is not None

    @property
    def drag_target(self) -> Optional[str]:
        return None if self._drag is None else self._drag.shape_id

    def snap(self, point: Sequence[float]) -> Point:
        if self.defaults.snap:
            return quantize(point, self.grid_step)
        return (float(point[0]), float(point[1]))

    def hit_test(self, point: Sequence[float]) -> Optional[str]:
        """Topmost shape whose primary outline contains ``point``."""
        for shape in reversed(self.store.shapes):
            if path_for_shape(shape).contains(point):
                return shape.id
        return None

    def pointer_down(self, point: Sequence[float], additive: bool = False) -> Optional[str]:
        """Grab the shape under ``point`` or place a new one there."""
        coords = self.snap(point)
        hit = self.hit_test(point)
        if hit is None:
            self._drag = None
            return self.store.place(self.defaults.draft_at(coords))

        if hit not in self.store.selected_ids:
            self.store.select(hit, additive)
        shape = self.store.shape(hit)
        if shape is None or shape.locked:
            self._drag = None
            return hit
        self.store.checkpoint()
        self._drag = _Drag(hit, coords, shape.center)
        log.debug("drag start %s", hit)
        return hit

    def pointer_move(self, point: Sequence[float]) -> None:
        if self._drag is None:
            return
        coords = self.snap(point)
        dx = coords[0] - self._drag.start[0]
        dy = coords[1] - self._drag.start[1]
        ox, oy = self._drag.origin
        self.store.update(self._drag.shape_id, center=(ox + dx, oy + dy))

    def pointer_up(self) -> None:
        if self._drag is not None:
            log.debug("drag end %s", self._drag.shape_id)
        self._drag = None
