"""
Tests for the shape store.
"""

import itertools
import unittest

from pookalam_playground.history import History
from pookalam_playground.shapes import ShapeDraft, ShapeKind
from pookalam_playground.store import ShapeStore
from pookalam_playground.symmetry import SymmetryConfig


def _store(**kwargs):
    counter = itertools.count(1)
    return ShapeStore(id_factory=lambda: f"s{next(counter)}", **kwargs)


def _draft(kind="circle", center=(400.0, 300.0), **fields):
    return ShapeDraft(kind=kind, center=center, **fields)


class TestShapeStore(unittest.TestCase):
    """Mutations, selection and history integration."""

    def setUp(self):
        self.store = _store()
        self.reasons = []
        self.store.add_listener(self.reasons.append)

    def test_place_selects_and_checkpoints(self):
        shape_id = self.store.place(_draft())
        self.assertEqual(shape_id, "s1")
        self.assertEqual(self.store.selected_ids, ("s1",))
        self.assertEqual(len(self.store), 1)
        self.assertEqual(len(self.store.history.past), 1)
        self.assertEqual(self.reasons, ["place"])
        self.assertTrue(self.store.consume_dirty())
        self.assertFalse(self.store.dirty)

    def test_undo_and_redo_place(self):
        self.store.place(_draft())
        self.assertTrue(self.store.undo())
        self.assertEqual(len(self.store), 0)
        self.assertTrue(self.store.redo())
        self.assertEqual(self.store.ids, ("s1",))
        self.assertEqual(self.store.selected_ids, ())
        self.assertFalse(self.store.redo())

    def test_undo_on_empty_history(self):
        self.assertFalse(self.store.undo())
        self.assertEqual(self.reasons, [])

    def test_update_does_not_checkpoint(self):
        shape_id = self.store.place(_draft())
        self.assertTrue(self.store.update(shape_id, center=(10, 20)))
        self.assertEqual(self.store.shape(shape_id).center, (10.0, 20.0))
        self.assertEqual(len(self.store.history.past), 1)
        self.assertFalse(self.store.update("missing", size=3))

    def test_update_many_checkpoints_once(self):
        a = self.store.place(_draft())
        b = self.store.place(_draft(center=(100, 100)))
        self.assertEqual(self.store.update_many([a, b, "missing"], {"fill": "#ffffff"}), 2)
        self.assertEqual(len(self.store.history.past), 3)
        self.assertEqual({s.fill for s in self.store.shapes}, {"#ffffff"})
        self.assertEqual(self.store.update_many(["missing"], size=1), 0)
        self.assertEqual(len(self.store.history.past), 3)

    def test_undo_restores_exact_values(self):
        shape_id = self.store.place(_draft(size=40))
        before = self.store.snapshot()
        self.store.update_selected(size=80, rotation=15)
        self.store.undo()
        self.assertEqual(self.store.snapshot(), before)
        self.assertEqual(self.store.shape(shape_id).size, 40.0)

    def test_texture_patch_clears_fill(self):
        shape_id = self.store.place(_draft())
        self.store.update_selected(texture="textures/marigold_texture.svg")
        self.assertIsNone(self.store.shape(shape_id).fill)

    def test_remove(self):
        a = self.store.place(_draft())
        self.assertTrue(self.store.remove(a))
        self.assertEqual(self.store.selected_ids, ())
        self.assertFalse(self.store.remove(a))
        self.assertEqual(len(self.store.history.past), 2)

    def test_remove_selected(self):
        a = self.store.place(_draft())
        b = self.store.place(_draft(center=(10, 10)))
        self.store.place(_draft(center=(20, 20)))
        self.store.set_selection([a, b])
        self.assertEqual(self.store.remove_selected(), 2)
        self.assertEqual(self.store.ids, ("s3",))
        self.store.deselect_all()
        self.assertEqual(self.store.remove_selected(), 0)

    def test_reorder(self):
        for idx in range(3):
            self.store.place(_draft(center=(idx, idx)))
        self.assertTrue(self.store.reorder(0, 2))
        self.assertEqual(self.store.ids, ("s2", "s3", "s1"))
        self.assertEqual(self.store.index_of("s1"), 2)
        depth = len(self.store.history.past)
        self.assertFalse(self.store.reorder(0, 5))
        self.assertEqual(len(self.store.history.past), depth)

    def test_toggles(self):
        shape_id = self.store.place(_draft())
        self.store.toggle_visibility(shape_id)
        self.store.toggle_lock(shape_id)
        shape = self.store.shape(shape_id)
        self.assertFalse(shape.visible)
        self.assertTrue(shape.locked)
        self.store.undo()
        self.assertFalse(self.store.shape(shape_id).locked)

    def test_additive_selection_toggles(self):
        a = self.store.place(_draft())
        b = self.store.place(_draft(center=(0, 0)))
        self.store.select(a, additive=True)
        self.assertEqual(self.store.selected_ids, (b, a))
        self.store.select(b, additive=True)
        self.assertEqual(self.store.selected_ids, (a,))
        self.store.select("missing")
        self.assertEqual(self.store.selected_ids, (a,))

    def test_symmetry_is_not_recorded(self):
        self.store.place(_draft())
        self.store.set_symmetry(radial=4, mirror_vertical=True)
        self.assertEqual(self.store.symmetry, SymmetryConfig(radial=4, mirror_vertical=True))
        self.assertEqual(len(self.store.history.past), 1)
        self.assertEqual(len(self.store.instances("s1")), 8)
        self.store.undo()
        self.assertEqual(self.store.symmetry.radial, 4)
        self.assertIn("symmetry", self.reasons)

    def test_render_list_follows_layer_order(self):
        self.store.place(_draft(kind=ShapeKind.STAR))
        self.store.place(_draft(kind="petal"))
        self.store.set_symmetry(SymmetryConfig(radial=3))
        kinds = [shape.kind for shape, _ in self.store.render_list()]
        self.assertEqual(kinds, [ShapeKind.STAR, ShapeKind.PETAL])
        self.assertTrue(all(len(instances) == 3 for _, instances in self.store.render_list()))

    def test_history_limit(self):
        store = _store(history=History(limit=5))
        for idx in range(8):
            store.place(_draft(center=(idx, idx)))
        self.assertEqual(len(store.history.past), 5)
        while store.undo():
            pass
        self.assertEqual(len(store), 3)


if __name__ == "__main__":
    unittest.main()
