"""
Tests for radial and mirror replication.
"""

import math
import unittest

from pookalam_playground.geometry import rotate_point
from pookalam_playground.shapes import Shape, ShapeKind
from pookalam_playground.symmetry import SymmetryConfig, clamp_radial, expand, expand_all, mirror_variants, radial_guides


def _shape(center=(400.0, 300.0), rotation=0.0, shape_id="s"):
    return Shape(id=shape_id, kind=ShapeKind.PETAL, center=center, size=40.0, rotation=rotation)


class TestSymmetryConfig(unittest.TestCase):

    def test_radial_is_clamped(self):
        self.assertEqual(clamp_radial(0), 1)
        self.assertEqual(clamp_radial(-5), 1)
        self.assertEqual(clamp_radial(100), 64)
        self.assertEqual(clamp_radial(7.9), 7)
        self.assertEqual(clamp_radial("many"), 1)
        self.assertEqual(clamp_radial(None), 1)
        self.assertEqual(clamp_radial(float("nan")), 1)
        self.assertEqual(clamp_radial(float("inf")), 64)
        self.assertEqual(clamp_radial(float("-inf")), 1)
        self.assertEqual(SymmetryConfig(radial=0).radial, 1)

    def test_instance_counts(self):
        self.assertEqual(SymmetryConfig(radial=8).instance_count, 8)
        self.assertEqual(SymmetryConfig(radial=8, mirror_vertical=True).instance_count, 16)
        self.assertEqual(SymmetryConfig(radial=8, mirror_horizontal=True).instance_count, 16)
        self.assertEqual(SymmetryConfig(radial=8, mirror_vertical=True, mirror_horizontal=True).instance_count, 32)

    def test_patched_keeps_other_fields(self):
        config = SymmetryConfig(radial=6, mirror_vertical=True).patched(radial=200)
        self.assertEqual(config.radial, 64)
        self.assertTrue(config.mirror_vertical)


class TestExpand(unittest.TestCase):
    """Instance placement, count and ordering."""

    def test_count_matches_config(self):
        for radial in (1, 3, 8, 64):
            for v in (False, True):
                for h in (False, True):
                    config = SymmetryConfig(radial=radial, mirror_vertical=v, mirror_horizontal=h)
                    self.assertEqual(len(expand(_shape(), config)), config.instance_count)

    def test_primary_first_and_unchanged(self):
        instances = expand(_shape(rotation=12.0), SymmetryConfig(radial=5))
        self.assertTrue(instances[0].is_primary)
        self.assertEqual(instances[0].center, (400.0, 300.0))
        self.assertEqual(instances[0].rotation, 12.0)
        self.assertEqual(sum(1 for inst in instances if inst.is_primary), 1)

    def test_radial_copy_rotates_about_canvas_center(self):
        instances = expand(_shape(), SymmetryConfig(radial=4))
        quarter = instances[1]
        self.assertEqual(quarter.key, "s-r1")
        self.assertAlmostEqual(quarter.center[0], 500.0)
        self.assertAlmostEqual(quarter.center[1], 400.0)
        self.assertAlmostEqual(quarter.rotation, 90.0)

    def test_radial_copies_keep_distance_from_center(self):
        for inst in expand(_shape(center=(250.0, 330.0)), SymmetryConfig(radial=7)):
            self.assertAlmostEqual(math.hypot(inst.center[0] - 400.0, inst.center[1] - 400.0), math.hypot(150.0, 70.0))

    def test_mirror_formulas(self):
        config = SymmetryConfig(radial=1, mirror_vertical=True, mirror_horizontal=True)
        primary, vertical, horizontal, point = expand(_shape(center=(300.0, 200.0), rotation=30.0), config)
        self.assertEqual(vertical.center, (500.0, 200.0))
        self.assertEqual(vertical.rotation, 330.0)
        self.assertEqual(horizontal.center, (300.0, 600.0))
        self.assertEqual(horizontal.rotation, 150.0)
        self.assertEqual(point.center, (500.0, 600.0))
        self.assertEqual(point.rotation, 210.0)

    def test_unrotated_mirrors_stay_unrotated(self):
        config = SymmetryConfig(radial=1, mirror_vertical=True, mirror_horizontal=True)
        _, vertical, horizontal, point = expand(_shape(rotation=0.0), config)
        self.assertEqual(vertical.rotation, 0.0)
        self.assertEqual(horizontal.rotation, 0.0)
        self.assertEqual(point.rotation, 180.0)

    def test_interleaved_order_and_keys(self):
        config = SymmetryConfig(radial=2, mirror_vertical=True)
        keys = [inst.key for inst in expand(_shape(), config)]
        self.assertEqual(keys, ["s", "s-m0", "s-r1", "s-rm1-0"])
        roles = [inst.role for inst in expand(_shape(), config)]
        self.assertEqual(roles, ["primary", "mirror", "radial", "radial-mirror"])

    def test_mirror_of_radial_copy_matches_direct_composition(self):
        config = SymmetryConfig(radial=6, mirror_vertical=True, mirror_horizontal=True)
        shape = _shape(center=(310.0, 220.0), rotation=25.0)
        instances = expand(shape, config)
        for i in range(1, config.radial):
            angle = i * 360.0 / config.radial
            rotated = rotate_point(shape.center, (400.0, 400.0), angle)
            expected = mirror_variants(rotated, shape.rotation + angle, config)
            actual = [inst for inst in instances if inst.role == "radial-mirror" and inst.radial_index == i]
            self.assertEqual(len(actual), len(expected))
            for inst, (center, rotation) in zip(actual, expected):
                self.assertAlmostEqual(inst.center[0], center[0])
                self.assertAlmostEqual(inst.center[1], center[1])
                self.assertAlmostEqual(inst.rotation, rotation)

    def test_expand_is_pure(self):
        shape = _shape(center=(123.0, 456.0), rotation=10.0)
        config = SymmetryConfig(radial=9, mirror_horizontal=True)
        self.assertEqual(expand(shape, config), expand(shape, config))
        self.assertEqual(shape.center, (123.0, 456.0))

    def test_single_radial_without_mirrors_is_the_primary(self):
        instances = expand(_shape(center=(123.0, 45.0), rotation=33.0), SymmetryConfig(radial=1))
        self.assertEqual(len(instances), 1)
        self.assertEqual((instances[0].center, instances[0].rotation), ((123.0, 45.0), 33.0))

    def test_centered_circle_with_vertical_mirror(self):
        shape = Shape(id="c", kind=ShapeKind.CIRCLE, center=(400.0, 400.0), size=40.0)
        instances = expand(shape, SymmetryConfig(radial=4, mirror_vertical=True))
        self.assertEqual(len(instances), 8)
        for inst in instances:
            self.assertAlmostEqual(inst.center[0], 400.0)
            self.assertAlmostEqual(inst.center[1], 400.0)
        rotations = sorted(round(inst.rotation % 360.0, 6) for inst in instances)
        self.assertEqual(rotations, [0.0, 0.0, 90.0, 90.0, 180.0, 180.0, 270.0, 270.0])

    def test_petal_three_way_radial(self):
        shape = Shape(id="p", kind=ShapeKind.PETAL, center=(300.0, 400.0), size=30.0)
        instances = expand(shape, SymmetryConfig(radial=3))
        self.assertEqual(len(instances), 3)
        self.assertEqual(instances[0].center, (300.0, 400.0))
        offset = 100.0 * math.sin(math.radians(120.0))
        expected = [(450.0, 400.0 - offset), (450.0, 400.0 + offset)]
        for inst, (x, y) in zip(instances[1:], expected):
            self.assertAlmostEqual(inst.center[0], x)
            self.assertAlmostEqual(inst.center[1], y)
        self.assertAlmostEqual(instances[1].rotation, 120.0)
        self.assertAlmostEqual(instances[2].rotation, 240.0)

    def test_expand_all_preserves_layer_order(self):
        shapes = [_shape(shape_id="a"), _shape(shape_id="b")]
        result = expand_all(shapes, SymmetryConfig(radial=3))
        self.assertEqual([shape.id for shape, _ in result], ["a", "b"])
        self.assertEqual([len(instances) for _, instances in result], [3, 3])

    def test_guides(self):
        guides = radial_guides(SymmetryConfig(radial=4))
        self.assertEqual(len(guides), 4)
        start, end = guides[0]
        self.assertEqual(start, (400.0, 400.0))
        self.assertAlmostEqual(end[0], 800.0)
        self.assertAlmostEqual(end[1], 400.0)


if __name__ == "__main__":
    unittest.main()
