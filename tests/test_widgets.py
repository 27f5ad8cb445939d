"""
Tests for the property dock on a headless canvas.
"""

import unittest

from PySide6.QtWidgets import QAbstractSlider

from pookalam_playground.config import PlaygroundConfig
from pookalam_playground.render import ensure_gui_application
from pookalam_playground.shapes import ShapeDraft, ShapeKind
from pookalam_playground.widgets import Canvas, PropertyControls


class TestPropertyControls(unittest.TestCase):
    """Slider, colour and texture edits against the canvas store."""

    @classmethod
    def setUpClass(cls):
        ensure_gui_application()

    def setUp(self):
        self.canvas = Canvas(PlaygroundConfig())
        self.controls = PropertyControls(self.canvas)
        self.store = self.canvas.store
        self.shape_id = self.store.place(ShapeDraft(kind=ShapeKind.CIRCLE, center=(400.0, 400.0), size=40.0))

    def tearDown(self):
        self.controls.dock.deleteLater()
        self.canvas.deleteLater()

    def test_sliders_follow_selection(self):
        self.assertEqual(self.controls._sliders["size"].value(), 40)

    def test_page_step_edit_is_undoable(self):
        self.controls._sliders["size"].triggerAction(QAbstractSlider.SliderPageStepAdd)
        self.assertEqual(self.store.shape(self.shape_id).size, 50.0)
        self.assertTrue(self.store.undo())
        self.assertEqual(self.store.shape(self.shape_id).size, 40.0)

    def test_single_step_edit_is_undoable(self):
        self.controls._sliders["rotation"].triggerAction(QAbstractSlider.SliderSingleStepAdd)
        self.assertEqual(self.store.shape(self.shape_id).rotation, 1.0)
        self.store.undo()
        self.assertEqual(self.store.shape(self.shape_id).rotation, 0.0)

    def test_handle_drag_records_one_checkpoint(self):
        slider = self.controls._sliders["size"]
        depth = len(self.store.history.past)
        slider.setSliderDown(True)
        slider.setValue(60)
        slider.setValue(75)
        slider.setSliderDown(False)
        self.assertEqual(self.store.shape(self.shape_id).size, 75.0)
        self.assertEqual(len(self.store.history.past), depth + 1)
        self.store.undo()
        self.assertEqual(self.store.shape(self.shape_id).size, 40.0)

    def test_recent_swatch_fills_selection(self):
        color = self.canvas.defaults.recent_colors[2]
        self.controls._swatches[2].click()
        self.assertEqual(self.store.shape(self.shape_id).fill, color)
        self.assertEqual(self.canvas.defaults.recent_colors[0], color)
        self.assertEqual(self.controls._swatches[0].toolTip(), color)

    def test_stroke_colour(self):
        self.controls.apply_stroke("#ff0000")
        self.assertEqual(self.store.shape(self.shape_id).stroke, "#ff0000")
        self.assertEqual(self.canvas.defaults.stroke, "#ff0000")
        self.store.undo()
        self.assertEqual(self.store.shape(self.shape_id).stroke, "#111827")

    def test_texture_choices_show_swatches(self):
        combo = self.controls._texture_combo
        self.assertEqual(combo.count(), 4)
        self.assertTrue(combo.itemIcon(0).isNull())
        self.assertFalse(combo.itemIcon(1).isNull())


if __name__ == "__main__":
    unittest.main()
