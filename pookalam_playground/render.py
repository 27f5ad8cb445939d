"""QPainter rendering and PNG/SVG export of a pookalam composition.

The renderer consumes the store's authored shapes plus a symmetry
configuration, expands them with :func:`~.symmetry.expand_all` and draws every
instance. Editor overlays (grid, guides, center marker, selection rings) are
opt-in through :class:`RenderOptions` and are never part of an export.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional

from PySide6.QtCore import QPointF, QRectF, QSize, Qt
from PySide6.QtGui import QBrush, QColor, QGuiApplication, QImage, QPainter, QPainterPath, QPen, QPolygonF, QTransform
from PySide6.QtSvg import QSvgGenerator
from PySide6.QtWidgets import QApplication

from .config import get_config
from .geometry import CANVAS_SIZE, RING_SEGMENTS, PathDescription, path_for_shape
from .logger import get_logger
from .shapes import Shape
from .symmetry import InstanceTransform, SymmetryConfig, expand_all, radial_guides

log = get_logger("render")

TEXTURE_TILE = 100
SELECTION_COLOR = "#3b82f6"
GUIDE_COLOR = "#f59e0b"
GRID_COLOR = "#e2e8f0"
CENTER_COLOR = "#10b981"
TEXTURE_ROOT = Path(__file__).resolve().parent


@dataclass
class RenderOptions:
    ghost_opacity: float = 1.0
    hidden_opacity: float = 0.1
    show_grid: bool = False
    grid_spacing: float = 20.0
    show_guides: bool = False
    show_center: bool = False
    selected_ids: FrozenSet[str] = field(default_factory=frozenset)
    background: Optional[str] = None
    ring_segments: int = RING_SEGMENTS
    texture_root: Optional[Path] = TEXTURE_ROOT


def to_qpainterpath(desc: PathDescription) -> QPainterPath:
    path = QPainterPath()
    if desc.kind == "circle":
        cx, cy = desc.vertices[0]
        r = float(desc.radius or 0.0)
        path.addEllipse(QPointF(float(cx), float(cy)), r, r)
    elif desc.kind == "polygon":
        path.addPolygon(QPolygonF([QPointF(float(x), float(y)) for x, y in desc.vertices]))
        path.closeSubpath()
    else:
        for seg in desc.segments:
            pts = [QPointF(float(x), float(y)) for x, y in seg.points]
            if seg.op == "M":
                path.moveTo(pts[0])
            elif seg.op == "L":
                path.lineTo(pts[-1])
            elif seg.op == "Q":
                path.quadTo(pts[0], pts[1])
            elif seg.op == "C":
                path.cubicTo(pts[0], pts[1], pts[2])
            elif seg.op == "Z":
                path.closeSubpath()
    path.setFillRule(Qt.OddEvenFill if desc.even_odd else Qt.WindingFill)
    return path


class DesignPainter:
    """Draw a composition onto any active :class:`QPainter`."""

    def __init__(self, canvas_size: float = CANVAS_SIZE, options: Optional[RenderOptions] = None):
        self.canvas_size = float(canvas_size)
        self.options = options or RenderOptions()
        self._textures: Dict[str, Optional[QImage]] = {}

    def paint(self, painter: QPainter, shapes: Iterable[Shape], symmetry: SymmetryConfig, target_size: float) -> None:
        opts = self.options
        cs = self.canvas_size
        painter.save()
        painter.setRenderHint(QPainter.Antialiasing, True)
        scale = float(target_size) / cs if cs > 0 else 1.0
        painter.scale(scale, scale)

        if opts.background:
            painter.fillRect(QRectF(0.0, 0.0, cs, cs), QColor(opts.background))
        if opts.show_grid:
            self._draw_grid(painter)
        if opts.show_guides:
            self._draw_guides(painter, symmetry)
        if opts.show_center:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(CENTER_COLOR))
            painter.drawEllipse(QPointF(cs / 2.0, cs / 2.0), 3.0, 3.0)

        for shape, instances in expand_all(shapes, symmetry, cs):
            for instance in instances:
                self._draw_instance(painter, shape, instance)
            if shape.id in opts.selected_ids:
                self._draw_selection(painter, shape)
        painter.restore()

    def _draw_instance(self, painter: QPainter, shape: Shape, instance: InstanceTransform) -> None:
        opts = self.options
        desc = path_for_shape(shape, instance.center, instance.rotation, opts.ring_segments)
        opacity = 1.0 if shape.visible else opts.hidden_opacity
        if not instance.is_primary:
            opacity *= opts.ghost_opacity
        painter.save()
        painter.setOpacity(opacity)
        painter.setBrush(self._brush(shape))
        if shape.stroke and shape.stroke_width > 0:
            pen = QPen(QColor(shape.stroke))
            pen.setWidthF(float(shape.stroke_width))
            painter.setPen(pen)
        else:
            painter.setPen(Qt.NoPen)
        painter.drawPath(to_qpainterpath(desc))
        painter.restore()

    def _brush(self, shape: Shape) -> QBrush:
        if shape.texture:
            image = self._texture(shape.texture)
            if image is None:
                return QBrush(Qt.NoBrush)
            brush = QBrush(image)
            density = float(shape.texture_density or 1.0)
            brush.setTransform(QTransform.fromScale(density, density))
            return brush
        if shape.fill and shape.fill != "transparent":
            return QBrush(QColor(shape.fill))
        return QBrush(Qt.NoBrush)

    def _texture(self, reference: str) -> Optional[QImage]:
        if reference in self._textures:
            return self._textures[reference]
        path = Path(reference)
        if not path.is_absolute() and self.options.texture_root is not None:
            path = self.options.texture_root / path
        image = QImage(str(path))
        if image.isNull():
            log.warning("Texture %s could not be loaded; drawing without fill", path)
            self._textures[reference] = None
            return None
        tile = image.scaled(TEXTURE_TILE, TEXTURE_TILE, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)
        self._textures[reference] = tile
        return tile

    def _draw_selection(self, painter: QPainter, shape: Shape) -> None:
        pen = QPen(QColor(SELECTION_COLOR), 2, Qt.DashLine)
        painter.save()
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        r = float(shape.size) + 4.0
        painter.drawEllipse(QPointF(shape.center[0], shape.center[1]), r, r)
        painter.restore()

    def _draw_guides(self, painter: QPainter, symmetry: SymmetryConfig) -> None:
        pen = QPen(QColor(GUIDE_COLOR), 1, Qt.DashLine)
        painter.save()
        painter.setOpacity(0.2)
        painter.setPen(pen)
        for start, end in radial_guides(symmetry, self.canvas_size):
            painter.drawLine(QPointF(*start), QPointF(*end))
        painter.restore()

    def _draw_grid(self, painter: QPainter) -> None:
        step = float(self.options.grid_spacing)
        if step <= 0.0:
            return
        painter.save()
        pen = QPen(QColor(GRID_COLOR), 1)
        pen.setCosmetic(True)
        painter.setPen(pen)
        cs = self.canvas_size
        value = 0.0
        while value <= cs:
            painter.drawLine(QPointF(value, 0.0), QPointF(value, cs))
            painter.drawLine(QPointF(0.0, value), QPointF(cs, value))
            value += step
        painter.restore()


# ---------------------------------------------------------------------------
# Export helpers

_app: Optional[QApplication] = None


def ensure_gui_application() -> QGuiApplication:
    """Create a headless ``QApplication`` when none is running."""
    global _app
    app = QGuiApplication.instance()
    if app is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _app = QApplication([])
        app = _app
    return app


def render_image(
    shapes: Iterable[Shape],
    symmetry: SymmetryConfig,
    size: Optional[int] = None,
    *,
    canvas_size: Optional[float] = None,
    options: Optional[RenderOptions] = None,
) -> QImage:
    config = get_config()
    size = int(size or config.export_size)
    canvas_size = float(canvas_size or config.canvas_size)
    ensure_gui_application()
    image = QImage(size, size, QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)
    painter = QPainter(image)
    try:
        DesignPainter(canvas_size, options).paint(painter, shapes, symmetry, size)
    finally:
        painter.end()
    return image


def export_png(
    path: Path | str,
    shapes: Iterable[Shape],
    symmetry: SymmetryConfig,
    size: Optional[int] = None,
    *,
    canvas_size: Optional[float] = None,
    options: Optional[RenderOptions] = None,
) -> Path:
    shapes = list(shapes)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    image = render_image(shapes, symmetry, size, canvas_size=canvas_size, options=options)
    if not image.save(str(out), "PNG"):
        raise OSError(f"Could not write PNG to {out}")
    log.info("Exported %d shapes (%d px) to %s", len(shapes), image.width(), out)
    return out


def export_svg(
    path: Path | str,
    shapes: Iterable[Shape],
    symmetry: SymmetryConfig,
    size: Optional[int] = None,
    *,
    canvas_size: Optional[float] = None,
    options: Optional[RenderOptions] = None,
) -> Path:
    config = get_config()
    shapes = list(shapes)
    canvas_size = float(canvas_size or config.canvas_size)
    size = int(size or canvas_size)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    ensure_gui_application()
    generator = QSvgGenerator()
    generator.setFileName(str(out))
    generator.setSize(QSize(size, size))
    generator.setViewBox(QRectF(0.0, 0.0, size, size))
    generator.setTitle("Pookalam")
    painter = QPainter()
    if not painter.begin(generator):
        raise OSError(f"Could not write SVG to {out}")
    try:
        DesignPainter(canvas_size, options).paint(painter, shapes, symmetry, size)
    finally:
        painter.end()
    log.info("Exported %d shapes as SVG to %s", len(shapes), out)
    return out
