"""
Tests for the command line interface.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from pookalam_playground.cli import main, parse_shape_arg
from pookalam_playground.shapes import ShapeKind


def _run(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        code = main(argv)
    return code, out.getvalue()


class TestCli(unittest.TestCase):

    def test_kinds(self):
        code, output = _run(["kinds"])
        self.assertEqual(code, 0)
        for kind in ShapeKind:
            self.assertIn(kind.value, output)

    def test_expand_counts_instances(self):
        code, output = _run(["expand", "--kind", "circle", "--radial", "4", "--mirror-vertical"])
        data = json.loads(output)
        self.assertEqual(code, 0)
        self.assertEqual(data["count"], 8)
        self.assertEqual(data["instances"][0]["role"], "primary")
        self.assertNotIn("path", data["instances"][0])

    def test_expand_clamps_radial(self):
        _, output = _run(["expand", "--radial", "500"])
        self.assertEqual(json.loads(output)["count"], 64)

    def test_expand_with_paths(self):
        _, output = _run(["expand", "--kind", "star", "--radial", "2", "--paths"])
        instances = json.loads(output)["instances"]
        self.assertTrue(all(item["path"].startswith("M ") for item in instances))

    def test_path(self):
        _, output = _run(["path", "--kind", "petal", "--x", "400", "--y", "300", "--size", "40"])
        self.assertEqual(output.strip(), "M 400 268 Q 420 300 400 332 Q 380 300 400 268 Z")

    def test_unknown_kind_is_a_usage_error(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            _run(["path", "--kind", "hexagon"])
        self.assertEqual(ctx.exception.code, 2)

    def test_parse_shape_arg(self):
        shape = parse_shape_arg("flower-2:100,200,30,45", 3)
        self.assertIs(shape.kind, ShapeKind.LOTUS)
        self.assertEqual(shape.center, (100.0, 200.0))
        self.assertEqual((shape.size, shape.rotation, shape.id), (30.0, 45.0, "shape-3"))
        for bad in ("circle", "circle:1,2", "circle:a,b,c"):
            with self.assertRaises(ValueError):
                parse_shape_arg(bad)

    def test_parse_shape_arg_inner_ratio(self):
        self.assertEqual(parse_shape_arg("ring:400,400,60").inner_ratio, 0.5)
        self.assertEqual(parse_shape_arg("star:400,400,60").inner_ratio, 0.5)
        self.assertIsNone(parse_shape_arg("circle:400,400,60").inner_ratio)

    def test_export_requires_known_format(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out.gif"
            with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
                _run(["export", "--shape", "circle:400,300,40", "--output", str(target)])
            self.assertFalse(target.exists())

    def test_export_png(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "design.png"
            code, output = _run(
                ["export", "--shape", "petal:400,300,40", "--shape", "circle:400,400,20", "--radial", "6",
                 "--size", "160", "--output", str(target)]
            )
            self.assertEqual(code, 0)
            self.assertTrue(target.exists())
            self.assertIn("instances=12", output)


if __name__ == "__main__":
    unittest.main()
