"""Radial and mirror replication of authored shapes.

:func:`expand` turns one shape into the ordered list of instance transforms the
renderer draws: the primary instance, its mirrors, then every radial copy
followed by that copy's own mirrors. The mirror-of-radial formula reflects the
already rotated copy; that composition is what the editor has always drawn and
is kept exactly, even where a dihedral-group derivation would differ.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .geometry import CANVAS_SIZE, rotate_point

Point = Tuple[float, float]

MIN_RADIAL = 1
MAX_RADIAL = 64


def clamp_radial(value) -> int:
    """Floor and clamp a radial count into ``[1, 64]``; junk becomes 1."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MIN_RADIAL
    if math.isnan(number):
        return MIN_RADIAL
    if math.isinf(number):
        return MAX_RADIAL if number > 0 else MIN_RADIAL
    return int(max(MIN_RADIAL, min(MAX_RADIAL, math.floor(number))))


@dataclass(frozen=True)
class SymmetryConfig:
    radial: int = 8
    mirror_vertical: bool = False
    mirror_horizontal: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "radial", clamp_radial(self.radial))
        object.__setattr__(self, "mirror_vertical", bool(self.mirror_vertical))
        object.__setattr__(self, "mirror_horizontal", bool(self.mirror_horizontal))

    @property
    def mirror_count(self) -> int:
        if self.mirror_vertical and self.mirror_horizontal:
            return 3
        return int(self.mirror_vertical) + int(self.mirror_horizontal)

    @property
    def instance_count(self) -> int:
        return self.radial * (1 + self.mirror_count)

    def patched(self, **patch) -> "SymmetryConfig":
        return replace(self, **patch)


@dataclass(frozen=True)
class InstanceTransform:
    """Placement of one rendered copy of an authored shape."""

    center: Point
    rotation: float
    role: str = "primary"
    key: str = ""
    radial_index: int = 0
    mirror_index: Optional[int] = None

    @property
    def is_primary(self) -> bool:
        return self.role == "primary"


def mirror_variants(
    center: Sequence[float],
    rotation: float,
    config: SymmetryConfig,
    canvas_size: float = CANVAS_SIZE,
) -> List[Tuple[Point, float]]:
    """Mirror images of one placement, in vertical, horizontal, point order."""
    x, y = float(center[0]), float(center[1])
    r = float(rotation or 0.0)
    variants: List[Tuple[Point, float]] = []
    if config.mirror_vertical:
        variants.append(((canvas_size - x, y), 360.0 - r if r else 0.0))
    if config.mirror_horizontal:
        variants.append(((x, canvas_size - y), 180.0 - r if r else 0.0))
    if config.mirror_vertical and config.mirror_horizontal:
        # point reflection turns an unrotated shape by 180 as well
        variants.append(((canvas_size - x, canvas_size - y), (r + 180.0) % 360.0))
    return variants


def expand(shape, config: SymmetryConfig, canvas_size: float = CANVAS_SIZE) -> List[InstanceTransform]:
    """Return every instance of ``shape`` under ``config``, primary first.

    ``shape`` only needs ``center`` and ``rotation`` (and optionally ``id``,
    used for the instance keys). The result has
    ``config.radial * (1 + config.mirror_count)`` entries.
    """
    base_id = str(getattr(shape, "id", "") or "")
    cx, cy = float(shape.center[0]), float(shape.center[1])
    rotation = float(getattr(shape, "rotation", 0.0) or 0.0)
    pivot = (canvas_size / 2.0, canvas_size / 2.0)

    instances = [InstanceTransform((cx, cy), rotation, "primary", base_id)]
    for j, (center, rot) in enumerate(mirror_variants((cx, cy), rotation, config, canvas_size)):
        instances.append(InstanceTransform(center, rot, "mirror", f"{base_id}-m{j}", 0, j))

    count = config.radial
    for i in range(1, count):
        angle = i * 360.0 / count
        center = rotate_point((cx, cy), pivot, angle)
        rot = rotation + angle
        instances.append(InstanceTransform(center, rot, "radial", f"{base_id}-r{i}", i))
        for j, (m_center, m_rot) in enumerate(mirror_variants(center, rot, config, canvas_size)):
            instances.append(InstanceTransform(m_center, m_rot, "radial-mirror", f"{base_id}-rm{i}-{j}", i, j))
    return instances


def expand_all(shapes: Iterable, config: SymmetryConfig, canvas_size: float = CANVAS_SIZE) -> List[Tuple[object, List[InstanceTransform]]]:
    """Expand every shape, preserving collection (layer) order."""
    return [(shape, expand(shape, config, canvas_size)) for shape in shapes]


def radial_guides(config: SymmetryConfig, canvas_size: float = CANVAS_SIZE) -> List[Tuple[Point, Point]]:
    """Spokes from the canvas center marking each radial sector boundary."""
    c = canvas_size / 2.0
    guides: List[Tuple[Point, Point]] = []
    for i in range(config.radial):
        a = i / config.radial * 2.0 * math.pi
        guides.append(((c, c), (c + c * math.cos(a), c + c * math.sin(a))))
    return guides
