"""Command line interface for headless pookalam workflows."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable, List, Optional

from .config import get_config
from .geometry import path_for_shape
from .logger import setup_logger
from .render import export_png, export_svg
from .shapes import Shape, ShapeDraft, ShapeKind
from .symmetry import SymmetryConfig, expand


def parse_shape_arg(text: str, index: int = 0) -> Shape:
    """Parse ``kind:x,y,size[,rotation]`` into a :class:`Shape`."""
    kind_text, sep, numbers = str(text).partition(":")
    if not sep:
        raise ValueError(f"Shape '{text}' must look like kind:x,y,size[,rotation]")
    kind = ShapeKind.coerce(kind_text)
    try:
        values = [float(v) for v in numbers.split(",") if v.strip()]
    except ValueError as exc:
        raise ValueError(f"Shape '{text}' has a non-numeric coordinate") from exc
    if len(values) not in (3, 4):
        raise ValueError(f"Shape '{text}' needs x,y,size and an optional rotation")
    rotation = values[3] if len(values) == 4 else 0.0
    draft = ShapeDraft(
        kind=kind,
        center=(values[0], values[1]),
        size=values[2],
        sides=5 if kind.uses_sides else None,
        inner_ratio=0.5 if kind.uses_inner_ratio else None,
        rotation=rotation,
    )
    return Shape.from_draft(f"shape-{index}", draft)


def _symmetry_from_args(args: argparse.Namespace) -> SymmetryConfig:
    return SymmetryConfig(
        radial=args.radial,
        mirror_vertical=args.mirror_vertical,
        mirror_horizontal=args.mirror_horizontal,
    )


def _shape_from_args(args: argparse.Namespace) -> Shape:
    draft = ShapeDraft(
        kind=args.kind,
        center=(args.x, args.y),
        size=args.size,
        sides=args.sides,
        inner_ratio=args.inner_ratio,
        rotation=args.rotation,
    )
    return Shape.from_draft(args.id, draft)


def _cmd_kinds(_args: argparse.Namespace) -> None:
    print("Available shape kinds:")
    for kind in ShapeKind:
        extras = [name for name, used in (("sides", kind.uses_sides), ("inner-ratio", kind.uses_inner_ratio)) if used]
        suffix = f" ({', '.join(extras)})" if extras else ""
        print(f"  - {kind.value}{suffix}")


def _cmd_expand(args: argparse.Namespace) -> None:
    shape = _shape_from_args(args)
    symmetry = _symmetry_from_args(args)
    segments = get_config().ring_segments
    rows = []
    for instance in expand(shape, symmetry, get_config().canvas_size):
        row = {
            "key": instance.key,
            "role": instance.role,
            "center": [round(instance.center[0], 6), round(instance.center[1], 6)],
            "rotation": round(instance.rotation, 6),
        }
        if args.paths:
            row["path"] = path_for_shape(shape, instance.center, instance.rotation, segments).to_svg()
        rows.append(row)
    print(json.dumps({"count": len(rows), "instances": rows}, indent=2))


def _cmd_path(args: argparse.Namespace) -> None:
    shape = _shape_from_args(args)
    print(path_for_shape(shape, ring_segments=get_config().ring_segments).to_svg(args.precision))


def _cmd_export(args: argparse.Namespace) -> None:
    if not args.shape:
        raise ValueError("At least one --shape is required for export.")
    shapes: List[Shape] = [parse_shape_arg(text, idx) for idx, text in enumerate(args.shape)]
    symmetry = _symmetry_from_args(args)
    out_path = Path(args.output)
    suffix = out_path.suffix.lower()
    if suffix == ".png":
        export_png(out_path, shapes, symmetry, args.size)
    elif suffix == ".svg":
        export_svg(out_path, shapes, symmetry, args.size)
    else:
        raise ValueError(f"Unsupported export format '{suffix or out_path.name}'; use .png or .svg")
    print(f"Wrote {out_path} | shapes={len(shapes)} instances={len(shapes) * symmetry.instance_count}")


def _add_symmetry_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--radial", type=float, default=get_config().default_radial, help="Radial copies (1-64)")
    parser.add_argument("--mirror-vertical", action="store_true", help="Mirror across the vertical center line")
    parser.add_argument("--mirror-horizontal", action="store_true", help="Mirror across the horizontal center line")


def _add_shape_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--kind", default="petal", help="Shape kind (see 'kinds')")
    parser.add_argument("--x", type=float, default=get_config().canvas_center, help="Center x")
    parser.add_argument("--y", type=float, default=get_config().canvas_center - 100.0, help="Center y")
    parser.add_argument("--size", type=float, default=get_config().default_size, help="Shape size")
    parser.add_argument("--rotation", type=float, default=0.0, help="Rotation in degrees")
    parser.add_argument("--sides", type=int, help="Polygon/star vertex count")
    parser.add_argument("--inner-ratio", dest="inner_ratio", type=float, help="Star/ring inner radius ratio")
    parser.add_argument("--id", default="shape", help="Id used for instance keys")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pookalam",
        description="Pookalam designer command line interface",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    kinds_parser = sub.add_parser("kinds", help="List the available shape kinds")
    kinds_parser.set_defaults(func=_cmd_kinds)

    expander = sub.add_parser("expand", help="Print the symmetry instances of one shape as JSON")
    _add_shape_args(expander)
    _add_symmetry_args(expander)
    expander.add_argument("--paths", action="store_true", help="Include SVG path data per instance")
    expander.set_defaults(func=_cmd_expand)

    path_parser = sub.add_parser("path", help="Print SVG path data for one shape")
    _add_shape_args(path_parser)
    path_parser.add_argument("--precision", type=int, default=3, help="Decimal places in the path data")
    path_parser.set_defaults(func=_cmd_path)

    exporter = sub.add_parser("export", help="Render shapes with symmetry to PNG or SVG")
    exporter.add_argument("--shape", action="append", help="kind:x,y,size[,rotation]; repeatable")
    exporter.add_argument("--output", default="pookalam.png", help="Output .png or .svg path")
    exporter.add_argument("--size", type=int, help="Output edge length in pixels")
    _add_symmetry_args(exporter)
    exporter.set_defaults(func=_cmd_export)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logger()
    try:
        args.func(args)
    except (ValueError, OSError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
