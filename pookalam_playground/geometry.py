"""Geometry generators for the Pookalam Playground.

Every generator is a pure function of ``(center, size, kind parameters,
rotation)`` returning a :class:`PathDescription`. Polygonal kinds carry their
vertices, curved kinds carry a short list of path segments, and the circle is
kept analytic so renderers can draw it exactly. Nothing here reads global
state, so the symmetry expander and any exporter can call these repeatedly and
get identical output.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

CANVAS_SIZE = 800.0
CANVAS_CENTER = CANVAS_SIZE / 2.0

DEFAULT_SIDES = 5
DEFAULT_STAR_RATIO = 0.5
DEFAULT_RING_RATIO = 0.8
RING_SEGMENTS = 96
MIN_RING_SEGMENTS = 64

PETAL_ASPECT = 1.6
LOTUS_WIDTH = 0.8
LOTUS_HEIGHT = 1.5
LEAF_LENGTH = 1.2
LEAF_WIDTH = 0.5
MARIGOLD_SEGMENTS = 64
MARIGOLD_LOBES = 12


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def rotate_point(point: Sequence[float], pivot: Sequence[float], angle_deg: float) -> Point:
    """Rotate ``point`` about ``pivot`` by ``angle_deg`` degrees."""
    a = float(angle_deg) * math.pi / 180.0
    c = math.cos(a)
    s = math.sin(a)
    px, py = float(pivot[0]), float(pivot[1])
    dx = float(point[0]) - px
    dy = float(point[1]) - py
    return (dx * c - dy * s + px, dx * s + dy * c + py)


def rotate_points(points: Iterable[Sequence[float]] | np.ndarray, pivot: Sequence[float], angle_deg: float) -> np.ndarray:
    """Vectorised :func:`rotate_point` over an ``(N, 2)`` array."""
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    a = float(angle_deg) * math.pi / 180.0
    c = math.cos(a)
    s = math.sin(a)
    px, py = float(pivot[0]), float(pivot[1])
    dx = pts[:, 0] - px
    dy = pts[:, 1] - py
    return np.column_stack((dx * c - dy * s + px, dx * s + dy * c + py))


@dataclass(frozen=True)
class PathSegment:
    """One SVG-style path command: ``M``, ``L``, ``Q``, ``C`` or ``Z``."""

    op: str
    points: Tuple[Point, ...] = ()


@dataclass(frozen=True, eq=False)
class PathDescription:
    """Renderable outline produced by a generator.

    ``kind`` is ``"polygon"`` (closed ``vertices``), ``"curve"`` (``segments``,
    with ``vertices`` holding the anchor/control points) or ``"circle"``
    (``vertices`` holds the single center, ``radius`` is set).
    """

    kind: str
    vertices: np.ndarray
    segments: Tuple[PathSegment, ...] = ()
    radius: Optional[float] = None
    even_odd: bool = False

    def sample(self, samples: int = 16) -> np.ndarray:
        """Flatten the outline into a closed polyline (last point not repeated)."""
        if self.kind == "polygon":
            return np.asarray(self.vertices, dtype=float).reshape(-1, 2).copy()
        if self.kind == "circle":
            cx, cy = self.vertices[0]
            angle = np.linspace(0.0, 2.0 * math.pi, 64, endpoint=False)
            r = float(self.radius or 0.0)
            return np.column_stack((cx + r * np.cos(angle), cy + r * np.sin(angle)))

        pts: List[Point] = []
        current: Optional[Point] = None
        t = np.linspace(0.0, 1.0, max(int(samples), 1) + 1)[1:]
        for seg in self.segments:
            if seg.op == "M":
                current = seg.points[0]
                pts.append(current)
            elif seg.op == "L":
                current = seg.points[-1]
                pts.append(current)
            elif seg.op in ("Q", "C") and current is not None:
                control = np.asarray((current,) + seg.points, dtype=float)
                pts.extend((float(x), float(y)) for x, y in _bezier_sample(control, t))
                current = seg.points[-1]
        if len(pts) > 1 and np.allclose(pts[0], pts[-1]):
            pts.pop()
        return np.asarray(pts, dtype=float).reshape(-1, 2)

    def contains(self, point: Sequence[float]) -> bool:
        """Even-odd point-in-path test against the flattened outline."""
        x, y = float(point[0]), float(point[1])
        if self.kind == "circle":
            cx, cy = self.vertices[0]
            return math.hypot(x - cx, y - cy) <= float(self.radius or 0.0)
        poly = self.sample()
        if poly.shape[0] < 3:
            return False
        xs = poly[:, 0]
        ys = poly[:, 1]
        xj = np.roll(xs, 1)
        yj = np.roll(ys, 1)
        crosses = (ys > y) != (yj > y)
        with np.errstate(divide="ignore", invalid="ignore"):
            x_hit = (xj - xs) * (y - ys) / (yj - ys) + xs
        hits = crosses & (x < x_hit)
        return bool(np.count_nonzero(hits) % 2)

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)``."""
        if self.kind == "circle":
            cx, cy = self.vertices[0]
            r = float(self.radius or 0.0)
            return (float(cx - r), float(cy - r), float(cx + r), float(cy + r))
        pts = self.sample()
        if pts.size == 0:
            return (0.0, 0.0, 0.0, 0.0)
        mn = pts.min(axis=0)
        mx = pts.max(axis=0)
        return (float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1]))

    def to_svg(self, precision: int = 3) -> str:
        """Serialise the outline as SVG path data."""

        def fmt(pt: Sequence[float]) -> str:
            return f"{_fmt(pt[0], precision)} {_fmt(pt[1], precision)}"

        if self.kind == "circle":
            cx, cy = self.vertices[0]
            r = float(self.radius or 0.0)
            rr = _fmt(r, precision)
            left = fmt((cx - r, cy))
            right = fmt((cx + r, cy))
            return f"M {left} A {rr} {rr} 0 1 0 {right} A {rr} {rr} 0 1 0 {left} Z"
        if self.kind == "polygon":
            if len(self.vertices) == 0:
                return ""
            head, *tail = [fmt(p) for p in self.vertices]
            parts = [f"M {head}"] + [f"L {p}" for p in tail] + ["Z"]
            return " ".join(parts)
        parts = []
        for seg in self.segments:
            if seg.points:
                parts.append(seg.op + " " + " ".join(fmt(p) for p in seg.points))
            else:
                parts.append(seg.op)
        return " ".join(parts)


def _fmt(value: float, precision: int) -> str:
    text = f"{float(value):.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _bezier_sample(control_points: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Evaluate a Bezier curve of arbitrary degree at parameter values ``t``."""
    if control_points.shape[0] == 0:
        return np.zeros((len(t), 2))
    if control_points.shape[0] == 1:
        return np.repeat(control_points, len(t), axis=0)
    pts = np.broadcast_to(control_points, (len(t),) + control_points.shape).copy()
    for _ in range(1, control_points.shape[0]):
        pts = (1.0 - t)[:, None, None] * pts[:, :-1, :] + t[:, None, None] * pts[:, 1:, :]
    return pts[:, 0, :]


def _regular_vertices(center: Sequence[float], radii: np.ndarray | float, count: int, rotation: float) -> np.ndarray:
    count = max(int(count), 0)
    cx, cy = float(center[0]), float(center[1])
    angle = np.arange(count, dtype=float) / max(count, 1) * 2.0 * math.pi + math.radians(rotation)
    return np.column_stack((cx + np.cos(angle) * radii, cy + np.sin(angle) * radii))


def _placed(center: Sequence[float], offsets: Sequence[Point], rotation: float) -> List[Point]:
    cx, cy = float(center[0]), float(center[1])
    pts = rotate_points([(cx + dx, cy + dy) for dx, dy in offsets], (cx, cy), rotation)
    return [(float(x), float(y)) for x, y in pts]


# ---------------------------------------------------------------------------
# Generators


def circle_path(center: Sequence[float], radius: float, rotation: float = 0.0) -> PathDescription:
    return PathDescription("circle", np.array([[float(center[0]), float(center[1])]]), radius=float(radius))


def square_path(center: Sequence[float], half_side: float, rotation: float = 0.0) -> PathDescription:
    s = float(half_side)
    corners = _placed(center, [(-s, -s), (s, -s), (s, s), (-s, s)], rotation)
    return PathDescription("polygon", np.asarray(corners, dtype=float))


def polygon_path(
    center: Sequence[float], radius: float, sides: Optional[int] = None, rotation: float = 0.0
) -> PathDescription:
    """Regular polygon with vertex ``i`` at ``i/N*360 + rotation`` degrees."""
    n = DEFAULT_SIDES if sides is None else int(sides)
    return PathDescription("polygon", _regular_vertices(center, float(radius), n, rotation))


def star_path(
    center: Sequence[float],
    radius: float,
    sides: Optional[int] = None,
    inner_ratio: Optional[float] = None,
    rotation: float = 0.0,
) -> PathDescription:
    """Star with ``2N`` vertices alternating outer and inner radius."""
    n = DEFAULT_SIDES if sides is None else int(sides)
    ratio = DEFAULT_STAR_RATIO if inner_ratio is None else float(inner_ratio)
    total = max(2 * n, 0)
    radii = np.where(np.arange(total) % 2 == 0, float(radius), float(radius) * ratio)
    return PathDescription("polygon", _regular_vertices(center, radii, total, rotation))


def ring_path(
    center: Sequence[float],
    radius: float,
    inner_ratio: Optional[float] = None,
    rotation: float = 0.0,
    segments: int = RING_SEGMENTS,
) -> PathDescription:
    """Annulus as one contour: outer vertices, then inner vertices reversed."""
    ratio = DEFAULT_RING_RATIO if inner_ratio is None else float(inner_ratio)
    count = max(int(segments), MIN_RING_SEGMENTS)
    outer = _regular_vertices(center, float(radius), count, rotation)
    inner = _regular_vertices(center, float(radius) * ratio, count, rotation)[::-1]
    return PathDescription("polygon", np.vstack((outer, inner)), even_odd=True)


def petal_path(center: Sequence[float], size: float, rotation: float = 0.0) -> PathDescription:
    """Lens from two quadratic arcs; ``size`` wide, ``1.6 * size`` tall."""
    rx = float(size) / 2.0
    ry = float(size) * PETAL_ASPECT / 2.0
    top, right, bottom, left = _placed(center, [(0.0, -ry), (rx, 0.0), (0.0, ry), (-rx, 0.0)], rotation)
    segments = (
        PathSegment("M", (top,)),
        PathSegment("Q", (right, bottom)),
        PathSegment("Q", (left, top)),
        PathSegment("Z"),
    )
    return PathDescription("curve", np.asarray([top, right, bottom, left]), segments)


def marigold_path(center: Sequence[float], size: float, rotation: float = 0.0) -> PathDescription:
    """Scalloped disc ``r = size * (0.9 + 0.1 cos 12θ)``."""
    cx, cy = float(center[0]), float(center[1])
    theta = np.arange(MARIGOLD_SEGMENTS, dtype=float) / MARIGOLD_SEGMENTS * 2.0 * math.pi
    r = float(size) * (0.9 + 0.1 * np.cos(MARIGOLD_LOBES * theta))
    a = theta + math.radians(rotation)
    return PathDescription("polygon", np.column_stack((cx + r * np.cos(a), cy + r * np.sin(a))))


def lotus_path(center: Sequence[float], size: float, rotation: float = 0.0) -> PathDescription:
    """Lotus bud: two cubic arcs through a pointed top and a full bottom."""
    w = float(size) * LOTUS_WIDTH
    h = float(size) * LOTUS_HEIGHT
    top, right, bottom, left = _placed(center, [(0.0, -h / 2), (w / 2, 0.0), (0.0, h / 2), (-w / 2, 0.0)], rotation)
    segments = (
        PathSegment("M", (top,)),
        PathSegment("C", (right, right, bottom)),
        PathSegment("C", (left, left, top)),
        PathSegment("Z"),
    )
    return PathDescription("curve", np.asarray([top, right, bottom, left]), segments)


def leaf_path(center: Sequence[float], size: float, rotation: float = 0.0) -> PathDescription:
    """Mango leaf: asymmetric quadratic bulges on opposite sides."""
    length = float(size) * LEAF_LENGTH
    width = float(size) * LEAF_WIDTH
    base, tip, right, left = _placed(
        center,
        [(0.0, length / 2), (0.0, -length / 2), (width, length / 4), (-width, -length / 4)],
        rotation,
    )
    segments = (
        PathSegment("M", (base,)),
        PathSegment("Q", (right, tip)),
        PathSegment("Q", (left, base)),
        PathSegment("Z"),
    )
    return PathDescription("curve", np.asarray([base, right, tip, left]), segments)


def shape_path(
    kind: str,
    center: Sequence[float],
    size: float,
    *,
    sides: Optional[int] = None,
    inner_ratio: Optional[float] = None,
    rotation: float = 0.0,
    ring_segments: int = RING_SEGMENTS,
) -> PathDescription:
    """Dispatch to the generator for ``kind``; unused parameters are ignored."""
    kind = str(getattr(kind, "value", kind))
    if kind == "circle":
        return circle_path(center, size, rotation)
    if kind == "square":
        return square_path(center, size, rotation)
    if kind == "polygon":
        return polygon_path(center, size, sides, rotation)
    if kind == "star":
        return star_path(center, size, sides, inner_ratio, rotation)
    if kind == "ring":
        return ring_path(center, size, inner_ratio, rotation, ring_segments)
    if kind == "petal":
        return petal_path(center, size, rotation)
    if kind == "marigold":
        return marigold_path(center, size, rotation)
    if kind == "lotus":
        return lotus_path(center, size, rotation)
    if kind == "leaf":
        return leaf_path(center, size, rotation)
    raise ValueError(f"Unknown shape kind '{kind}'")


def path_for_shape(
    shape,
    center: Optional[Sequence[float]] = None,
    rotation: Optional[float] = None,
    ring_segments: int = RING_SEGMENTS,
) -> PathDescription:
    """Outline of ``shape``, optionally placed at an instance's center/rotation."""
    return shape_path(
        shape.kind,
        shape.center if center is None else center,
        shape.size,
        sides=shape.sides,
        inner_ratio=shape.inner_ratio,
        rotation=(shape.rotation or 0.0) if rotation is None else rotation,
        ring_segments=ring_segments,
    )
