"""Application bootstrap for the Pookalam Playground."""
from __future__ import annotations

import sys
from typing import Dict

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QStatusBar, QToolBar

from .logger import setup_logger
from .shapes import ShapeKind
from .widgets import Canvas, PropertyControls, SymmetryControls, tool_label


class Main(QMainWindow):
    """Top-level window wiring together the canvas, docks, and chrome."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Pookalam Designer")

        self.canvas = Canvas()
        self.symmetry_controls = SymmetryControls(self.canvas)
        self.property_controls = PropertyControls(self.canvas)
        self.setCentralWidget(self.canvas)
        self.addDockWidget(Qt.RightDockWidgetArea, self.symmetry_controls.dock)
        self.addDockWidget(Qt.RightDockWidgetArea, self.property_controls.dock)

        self._tool_actions: Dict[ShapeKind, QAction] = {}
        self._setup_status_bar()
        self._make_toolbar()
        self._make_menu()

        self.canvas.status_changed.connect(self._on_status_changed)
        self.canvas.store_changed.connect(self._on_store_changed)
        self.resize(1200, 860)
        self._on_store_changed("init")

    # ------------------------------------------------------------------
    # UI scaffolding
    def _setup_status_bar(self) -> None:
        bar = QStatusBar()
        bar.setSizeGripEnabled(False)
        self.setStatusBar(bar)
        self._tool_label = QLabel(f"Tool: {tool_label(self.canvas.defaults.tool)}")
        self._count_label = QLabel("shapes: 0")
        self._instance_label = QLabel("instances: 0")
        for label in (self._tool_label, self._count_label, self._instance_label):
            bar.addPermanentWidget(label)

    def _make_toolbar(self) -> None:
        toolbar = QToolBar("Shapes")
        toolbar.setMovable(False)
        self.addToolBar(Qt.LeftToolBarArea, toolbar)
        group = QActionGroup(self)
        group.setExclusive(True)
        for kind in ShapeKind:
            action = QAction(tool_label(kind), self)
            action.setCheckable(True)
            action.setActionGroup(group)
            action.setChecked(kind is self.canvas.defaults.tool)
            action.triggered.connect(lambda checked, k=kind: self._activate_tool(k, checked))
            action.setToolTip(f"{tool_label(kind)}: click the canvas to place.")
            toolbar.addAction(action)
            self._tool_actions[kind] = action

    def _make_menu(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")
        export_png_action = file_menu.addAction("Export PNG")
        export_png_action.triggered.connect(lambda: self.canvas.export_png(self))
        export_png_action.setStatusTip("Export a PNG snapshot of the composition.")
        export_svg_action = file_menu.addAction("Export SVG")
        export_svg_action.triggered.connect(lambda: self.canvas.export_svg(self))
        export_svg_action.setStatusTip("Export the composition as vector SVG.")

        edit_menu = menu_bar.addMenu("&Edit")
        undo_action = edit_menu.addAction("Undo")
        undo_action.setShortcut(QKeySequence.Undo)
        undo_action.triggered.connect(self.canvas.undo)
        redo_action = edit_menu.addAction("Redo")
        redo_action.setShortcut("Ctrl+Y")
        redo_action.triggered.connect(self.canvas.redo)
        edit_menu.addSeparator()
        delete_action = edit_menu.addAction("Delete Selected")
        delete_action.triggered.connect(self.canvas.delete_selected)
        deselect_action = edit_menu.addAction("Deselect All")
        deselect_action.triggered.connect(self.canvas.store.deselect_all)

        view_menu = menu_bar.addMenu("&View")
        for text, getter, setter in (
            ("Snap to Grid", lambda: self.canvas.defaults.snap, self.canvas.set_snap),
            ("Show Grid", lambda: self.canvas.defaults.grid, self.canvas.set_show_grid),
            ("Show Guides", lambda: self.canvas.defaults.show_guides, self.canvas.set_show_guides),
        ):
            action = view_menu.addAction(text)
            action.setCheckable(True)
            action.setChecked(bool(getter()))
            action.triggered.connect(lambda checked, fn=setter: fn(bool(checked)))

    # ------------------------------------------------------------------
    # Event handlers
    def _activate_tool(self, kind: ShapeKind, checked: bool) -> None:
        if not checked:
            return
        self.canvas.defaults.set_tool(kind)
        self._tool_label.setText(f"Tool: {tool_label(kind)}")

    def _on_status_changed(self, message: str) -> None:
        if message:
            self.statusBar().showMessage(message, 4000)
        else:
            self.statusBar().clearMessage()

    def _on_store_changed(self, _reason: str) -> None:
        store = self.canvas.store
        self._count_label.setText(f"shapes: {len(store)}")
        self._instance_label.setText(f"instances: {len(store) * store.symmetry.instance_count}")


def main() -> int:
    setup_logger()
    app = QApplication(sys.argv)
    window = Main()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
