"""
Tests for the undo/redo history engine.
"""

import unittest

from pookalam_playground.history import HISTORY_LIMIT, History
from pookalam_playground.shapes import Shape, ShapeKind


def _state(*sizes):
    return [Shape(id=f"s{i}", kind=ShapeKind.CIRCLE, center=(0.0, 0.0), size=float(size)) for i, size in enumerate(sizes)]


class TestHistory(unittest.TestCase):

    def setUp(self):
        self.history = History()

    def test_empty_stacks_are_noops(self):
        self.assertIsNone(self.history.undo(_state(1)))
        self.assertIsNone(self.history.redo(_state(1)))
        self.assertFalse(self.history.can_undo())
        self.assertFalse(self.history.can_redo())

    def test_undo_then_redo(self):
        before = _state(1)
        after = _state(1, 2)
        self.history.checkpoint(before)
        restored = self.history.undo(after)
        self.assertEqual(list(restored), before)
        self.assertEqual(list(self.history.future[0]), after)
        redone = self.history.redo(restored)
        self.assertEqual(list(redone), after)
        self.assertEqual(len(self.history.past), 1)
        self.assertFalse(self.history.can_redo())

    def test_checkpoint_clears_future(self):
        self.history.checkpoint(_state(1))
        self.history.undo(_state(2))
        self.assertTrue(self.history.can_redo())
        self.history.checkpoint(_state(3))
        self.assertFalse(self.history.can_redo())

    def test_snapshots_are_copies(self):
        present = _state(1)
        self.history.checkpoint(present)
        present[0].size = 99.0
        self.assertEqual(self.history.past[0][0].size, 1.0)

    def test_past_is_capped(self):
        for size in range(HISTORY_LIMIT + 10):
            self.history.checkpoint(_state(size))
        self.assertEqual(len(self.history.past), HISTORY_LIMIT)
        self.assertEqual(self.history.past[0][0].size, 10.0)
        self.assertEqual(self.history.past[-1][0].size, float(HISTORY_LIMIT + 9))

    def test_future_is_capped(self):
        history = History(limit=3)
        for size in range(3):
            history.checkpoint(_state(size))
        history.limit = 2
        for size in range(3):
            history.undo(_state(100 + size))
        self.assertEqual(len(history.future), 2)
        self.assertEqual(history.future[0][0].size, 102.0)


if __name__ == "__main__":
    unittest.main()
