"""Qt widgets for the Pookalam Playground UI."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QComboBox,
    QDockWidget,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .config import PlaygroundConfig, get_config
from .history import History
from .logger import get_logger
from .render import DesignPainter, RenderOptions, export_png, export_svg
from .shapes import RECENT_COLOR_LIMIT, TEXTURE_LIBRARY, ShapeKind, ToolDefaults
from .store import ShapeStore
from .symmetry import SymmetryConfig
from .tools import InteractionController

Point = Tuple[float, float]

log = get_logger("widgets")


class Canvas(QWidget):
    """Square pookalam canvas; owns the store and pointer controller."""

    status_changed = Signal(str)
    selection_changed = Signal()
    store_changed = Signal(str)

    def __init__(self, config: Optional[PlaygroundConfig] = None):
        super().__init__()
        self.config = config or get_config()
        self.setObjectName("PookalamCanvas")
        self.setMinimumSize(QSize(480, 480))
        self.setFocusPolicy(Qt.StrongFocus)
        self.setToolTip(
            "Canvas: click empty space to place the current shape.\n"
            "Drag a shape to move it; Shift/Ctrl-click to multi-select."
        )

        self.defaults = ToolDefaults(size=self.config.default_size)
        self.store = ShapeStore(
            SymmetryConfig(radial=self.config.default_radial),
            History(self.config.history_limit),
            canvas_size=self.config.canvas_size,
        )
        self.controller = InteractionController(self.store, self.defaults, self.config.grid_step)
        self._painter = DesignPainter(self.config.canvas_size, RenderOptions(ghost_opacity=0.5, show_center=True))
        self.store.add_listener(self._on_store_changed)

    # ------------------------------------------------------------------
    # Coordinate mapping
    def _view_rect(self) -> QRectF:
        side = float(min(self.width(), self.height()))
        return QRectF((self.width() - side) / 2.0, (self.height() - side) / 2.0, side, side)

    def canvas_from_widget(self, x: float, y: float) -> Point:
        rect = self._view_rect()
        scale = self.config.canvas_size / max(rect.width(), 1e-9)
        return ((x - rect.left()) * scale, (y - rect.top()) * scale)

    # ------------------------------------------------------------------
    # Store wiring
    def _on_store_changed(self, reason: str) -> None:
        self.store_changed.emit(reason)
        if reason in ("select", "undo", "redo", "place", "remove"):
            self.selection_changed.emit()
        self.update()

    def set_symmetry(self, **patch) -> None:
        self.store.set_symmetry(**patch)

    def set_show_guides(self, enabled: bool) -> None:
        self.defaults.show_guides = bool(enabled)
        self.update()

    def set_show_grid(self, enabled: bool) -> None:
        self.defaults.grid = bool(enabled)
        self.update()

    def set_snap(self, enabled: bool) -> None:
        self.defaults.snap = bool(enabled)

    def undo(self) -> None:
        if self.store.undo():
            self.status_changed.emit("Undo")

    def redo(self) -> None:
        if self.store.redo():
            self.status_changed.emit("Redo")

    def delete_selected(self) -> None:
        removed = self.store.remove_selected()
        if removed:
            self.status_changed.emit(f"Deleted {removed} {'shape' if removed == 1 else 'shapes'}")

    # ------------------------------------------------------------------
    # Painting
    def paintEvent(self, event):  # pragma: no cover - GUI entry point
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#f1f5f9"))
        rect = self._view_rect()
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor("#ffffff"))
        painter.drawEllipse(rect)
        painter.translate(rect.topLeft())
        opts = self._painter.options
        opts.show_grid = self.defaults.grid
        opts.show_guides = self.defaults.show_guides
        opts.selected_ids = frozenset(self.store.selected_ids)
        self._painter.paint(painter, self.store.shapes, self.store.symmetry, rect.width())
        if not len(self.store):
            c = rect.width() / 2.0
            painter.setPen(QColor("#fcd34d"))
            painter.setBrush(Qt.NoBrush)
            painter.drawEllipse(QPointF(c, c), c / 4.0, c / 4.0)
        painter.end()
        self.store.consume_dirty()

    # ------------------------------------------------------------------
    # Event forwarding to the controller
    def mousePressEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return
        point = self.canvas_from_widget(event.position().x(), event.position().y())
        additive = bool(event.modifiers() & (Qt.ShiftModifier | Qt.ControlModifier))
        self.controller.pointer_down(point, additive=additive)

    def mouseMoveEvent(self, event):  # pragma: no cover - GUI entry point
        if not self.controller.dragging:
            return
        self.controller.pointer_move(self.canvas_from_widget(event.position().x(), event.position().y()))

    def mouseReleaseEvent(self, event):  # pragma: no cover - GUI entry point
        self.controller.pointer_up()

    def leaveEvent(self, event):  # pragma: no cover - GUI entry point
        self.controller.pointer_up()
        super().leaveEvent(event)

    def keyPressEvent(self, event):  # pragma: no cover - GUI entry point
        key = event.key()
        if key in (Qt.Key_Delete, Qt.Key_Backspace):
            self.delete_selected()
        elif key == Qt.Key_Escape:
            self.store.deselect_all()
        else:
            super().keyPressEvent(event)

    # ------------------------------------------------------------------
    # Export helpers
    def export_png(self, parent=None) -> None:  # pragma: no cover - GUI entry point
        path, _ = QFileDialog.getSaveFileName(parent or self, "Export PNG", "pookalam.png", "PNG Files (*.png)")
        if not path:
            return
        try:
            export_png(path, self.store.shapes, self.store.symmetry, self.config.export_size)
        except OSError as exc:
            log.warning("PNG export failed: %s", exc)
            self.status_changed.emit(str(exc))
            return
        self.status_changed.emit(f"Exported {path}")

    def export_svg(self, parent=None) -> None:  # pragma: no cover - GUI entry point
        path, _ = QFileDialog.getSaveFileName(parent or self, "Export SVG", "pookalam.svg", "SVG Files (*.svg)")
        if not path:
            return
        try:
            export_svg(path, self.store.shapes, self.store.symmetry)
        except OSError as exc:
            log.warning("SVG export failed: %s", exc)
            self.status_changed.emit(str(exc))
            return
        self.status_changed.emit(f"Exported {path}")


class SymmetryControls:
    """Docked radial/mirror settings that feed the canvas."""

    def __init__(self, canvas: Canvas):
        self._canvas = canvas
        self.dock = QDockWidget("Symmetry")
        self.dock.setObjectName("PookalamSymmetryDock")
        self.dock.setFeatures(QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable)
        host = QWidget()
        layout = QVBoxLayout(host)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        symmetry = canvas.store.symmetry
        self._radial_label = QLabel(f"Radial: {symmetry.radial}")
        self._radial = QSlider(Qt.Horizontal)
        self._radial.setRange(1, 32)
        self._radial.setValue(symmetry.radial)
        self._radial.setToolTip("Number of copies repeated around the canvas center.")
        self._radial.valueChanged.connect(self._on_radial)
        layout.addWidget(self._radial_label)
        layout.addWidget(self._radial)

        self._mirror_v = QCheckBox("Mirror vertical axis")
        self._mirror_v.setChecked(symmetry.mirror_vertical)
        self._mirror_v.toggled.connect(lambda checked: canvas.set_symmetry(mirror_vertical=bool(checked)))
        self._mirror_h = QCheckBox("Mirror horizontal axis")
        self._mirror_h.setChecked(symmetry.mirror_horizontal)
        self._mirror_h.toggled.connect(lambda checked: canvas.set_symmetry(mirror_horizontal=bool(checked)))
        self._guides = QCheckBox("Show guides")
        self._guides.setChecked(canvas.defaults.show_guides)
        self._guides.toggled.connect(canvas.set_show_guides)
        for widget in (self._mirror_v, self._mirror_h, self._guides):
            layout.addWidget(widget)
        layout.addStretch(1)
        self.dock.setWidget(host)

    def _on_radial(self, value: int) -> None:
        self._radial_label.setText(f"Radial: {value}")
        self._canvas.set_symmetry(radial=value)


class PropertyControls:
    """Docked style/transform editor for the current selection and tool."""

    _SLIDERS = (
        ("size", "Size", 5, 400, 1.0),
        ("rotation", "Rotation", 0, 360, 1.0),
        ("sides", "Sides", 3, 20, 1.0),
        ("stroke_width", "Stroke", 0, 20, 0.5),
        ("texture_density", "Texture density", 2, 30, 0.1),
    )

    def __init__(self, canvas: Canvas):
        self._canvas = canvas
        self._syncing = False
        self.dock = QDockWidget("Properties")
        self.dock.setObjectName("PookalamPropertiesDock")
        self.dock.setFeatures(QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable)
        host = QWidget()
        layout = QVBoxLayout(host)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self._fill_button = QPushButton("Fill colour…")
        self._fill_button.clicked.connect(self._pick_fill)
        layout.addWidget(self._fill_button)
        self._stroke_button = QPushButton("Stroke colour…")
        self._stroke_button.clicked.connect(self._pick_stroke)
        layout.addWidget(self._stroke_button)

        recent_row = QHBoxLayout()
        recent_row.setSpacing(4)
        self._swatches: List[QPushButton] = []
        for idx in range(RECENT_COLOR_LIMIT):
            swatch = QPushButton()
            swatch.setFixedSize(QSize(22, 22))
            swatch.clicked.connect(lambda _checked=False, i=idx: self._apply_recent(i))
            recent_row.addWidget(swatch)
            self._swatches.append(swatch)
        recent_row.addStretch(1)
        layout.addLayout(recent_row)
        self._refresh_swatches()

        texture_box = QGroupBox("Texture")
        texture_layout = QVBoxLayout(texture_box)
        self._texture_combo = QComboBox()
        self._texture_combo.addItem("None", None)
        for texture in TEXTURE_LIBRARY:
            chip = QPixmap(14, 14)
            chip.fill(QColor(texture.swatch))
            self._texture_combo.addItem(QIcon(chip), texture.name, texture.path)
        self._texture_combo.currentIndexChanged.connect(self._on_texture)
        texture_layout.addWidget(self._texture_combo)
        layout.addWidget(texture_box)

        self._titles = {key: text for key, text, *_ in self._SLIDERS}
        self._labels: Dict[str, QLabel] = {}
        self._sliders: Dict[str, QSlider] = {}
        for key, text, mn, mx, step in self._SLIDERS:
            label = QLabel(text)
            slider = QSlider(Qt.Horizontal)
            slider.setRange(mn, mx)
            slider.valueChanged.connect(lambda v, k=key, s=step: self._on_slider(k, v * s))
            slider.sliderPressed.connect(self._begin_slider_edit)
            layout.addWidget(label)
            layout.addWidget(slider)
            self._labels[key] = label
            self._sliders[key] = slider

        delete = QPushButton("Delete selected")
        delete.clicked.connect(canvas.delete_selected)
        layout.addWidget(delete)
        layout.addStretch(1)
        self.dock.setWidget(host)

        canvas.selection_changed.connect(self.sync)
        self.sync()

    def sync(self) -> None:
        """Load slider values from the first selected shape or the tool defaults."""
        selected = self._canvas.store.selected_shapes()
        source = selected[0] if selected else self._canvas.defaults
        values = {
            "size": float(getattr(source, "size", 40.0)),
            "rotation": float(getattr(source, "rotation", 0.0) or 0.0) % 360.0,
            "sides": float(getattr(source, "sides", None) or 5),
            "stroke_width": float(getattr(source, "stroke_width", 1.0)),
            "texture_density": float(getattr(source, "texture_density", 1.0)),
        }
        self._syncing = True
        try:
            for key, _text, _mn, _mx, step in self._SLIDERS:
                self._sliders[key].setValue(int(round(values[key] / step)))
                self._labels[key].setText(f"{self._titles[key]}: {values[key]:g}")
        finally:
            self._syncing = False

    def _begin_slider_edit(self) -> None:
        if self._canvas.store.selected_ids:
            self._canvas.store.checkpoint()

    def _on_slider(self, key: str, value: float) -> None:
        self._labels[key].setText(f"{self._titles[key]}: {value:g}")
        if self._syncing:
            return
        if key == "sides":
            value = int(value)
        store = self._canvas.store
        if store.selected_ids:
            if self._sliders[key].isSliderDown():
                # handle drags stream values; the checkpoint was taken on press
                for sid in store.selected_ids:
                    store.update(sid, {key: value})
            else:
                store.update_selected({key: value})
            return
        defaults = self._canvas.defaults
        if key == "size":
            defaults.size = float(value)
        elif key == "stroke_width":
            defaults.stroke_width = float(value)
        elif key == "texture_density":
            defaults.set_texture_density(value)

    def _refresh_swatches(self) -> None:
        colors = self._canvas.defaults.recent_colors
        for idx, swatch in enumerate(self._swatches):
            if idx < len(colors):
                swatch.setStyleSheet(f"background-color: {colors[idx]}; border: 1px solid #94a3b8;")
                swatch.setToolTip(colors[idx])
                swatch.setEnabled(True)
            else:
                swatch.setStyleSheet("")
                swatch.setToolTip("")
                swatch.setEnabled(False)

    def apply_fill(self, color: str) -> None:
        """Use ``color`` for new shapes and fill the selection with it."""
        self._canvas.defaults.set_fill(color)
        self._canvas.store.update_selected(fill=color)
        self._refresh_swatches()

    def apply_stroke(self, color: str) -> None:
        self._canvas.defaults.set_stroke(color)
        self._canvas.store.update_selected(stroke=color)

    def _apply_recent(self, index: int) -> None:
        colors = self._canvas.defaults.recent_colors
        if 0 <= index < len(colors):
            self.apply_fill(colors[index])

    def _pick_fill(self) -> None:  # pragma: no cover - GUI entry point
        color = QColorDialog.getColor(parent=self.dock)
        if color.isValid():
            self.apply_fill(color.name())

    def _pick_stroke(self) -> None:  # pragma: no cover - GUI entry point
        color = QColorDialog.getColor(QColor(self._canvas.defaults.stroke), self.dock)
        if color.isValid():
            self.apply_stroke(color.name())

    def _on_texture(self, _index: int) -> None:
        texture = self._texture_combo.currentData()
        self._canvas.defaults.set_texture(texture)
        if texture is not None:
            self._canvas.store.update_selected(texture=texture)
        elif self._canvas.store.selected_ids:
            self._canvas.store.update_selected(texture=None, fill=self._canvas.defaults.fill)


def tool_label(kind: ShapeKind) -> str:
    return kind.value.replace("-", " ").title()
