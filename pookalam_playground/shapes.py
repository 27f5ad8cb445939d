"""Authored shape records and the tool defaults used to place them."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

Point = Tuple[float, float]

RECENT_COLOR_LIMIT = 6
TEXTURE_DENSITY_RANGE = (0.2, 3.0)


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    POLYGON = "polygon"
    STAR = "star"
    RING = "ring"
    PETAL = "petal"
    MARIGOLD = "marigold"
    LOTUS = "lotus"
    LEAF = "leaf"

    @property
    def uses_sides(self) -> bool:
        return self in (ShapeKind.POLYGON, ShapeKind.STAR)

    @property
    def uses_inner_ratio(self) -> bool:
        return self in (ShapeKind.STAR, ShapeKind.RING)

    @classmethod
    def coerce(cls, value: "str | ShapeKind") -> "ShapeKind":
        if isinstance(value, ShapeKind):
            return value
        key = str(value).strip().lower()
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            raise ValueError(f"Unknown shape kind '{value}'") from exc


_KIND_ALIASES = {
    "flower-1": "marigold",
    "flower-2": "lotus",
    "leaf-1": "leaf",
    "stylized-flower-a": "marigold",
    "stylized-flower-b": "lotus",
    "stylized-leaf": "leaf",
}


@dataclass(frozen=True)
class Texture:
    name: str
    path: str
    swatch: str


TEXTURE_LIBRARY: Tuple[Texture, ...] = (
    Texture("Marigold", "textures/marigold_texture.svg", "#f97316"),
    Texture("Jasmine", "textures/jasmine_texture.svg", "#f1f5f9"),
    Texture("Leaf", "textures/leaf_texture.svg", "#22c55e"),
)


def texture_by_name(name: str) -> Optional[Texture]:
    for texture in TEXTURE_LIBRARY:
        if texture.name.lower() == str(name).lower():
            return texture
    return None


@dataclass
class ShapeDraft:
    """Everything needed to place a shape except its identity and flags."""

    kind: ShapeKind
    center: Point
    size: float = 40.0
    sides: Optional[int] = None
    inner_ratio: Optional[float] = None
    rotation: float = 0.0
    fill: Optional[str] = "#ff9f1c"
    texture: Optional[str] = None
    texture_density: float = 1.0
    stroke: str = "#111827"
    stroke_width: float = 1.0

    def __post_init__(self) -> None:
        self.kind = ShapeKind.coerce(self.kind)
        self.center = (float(self.center[0]), float(self.center[1]))


@dataclass
class Shape:
    """One user-placed shape; symmetry copies are derived, never stored."""

    id: str
    kind: ShapeKind
    center: Point
    size: float
    sides: Optional[int] = None
    inner_ratio: Optional[float] = None
    rotation: float = 0.0
    fill: Optional[str] = None
    texture: Optional[str] = None
    texture_density: float = 1.0
    stroke: str = "#111827"
    stroke_width: float = 1.0
    visible: bool = True
    locked: bool = False

    @classmethod
    def from_draft(cls, shape_id: str, draft: ShapeDraft) -> "Shape":
        fill = None if draft.texture else draft.fill
        return cls(
            id=shape_id,
            kind=draft.kind,
            center=draft.center,
            size=float(draft.size),
            sides=draft.sides,
            inner_ratio=draft.inner_ratio,
            rotation=float(draft.rotation or 0.0),
            fill=fill,
            texture=draft.texture,
            texture_density=float(draft.texture_density),
            stroke=draft.stroke,
            stroke_width=float(draft.stroke_width),
        )

    def copy(self) -> "Shape":
        return replace(self)

    def patched(self, patch: Mapping[str, Any]) -> "Shape":
        """Return a copy with ``patch`` merged; unknown keys are ignored."""
        return replace(self, **normalize_patch(patch))

    def asdict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        data["center"] = [float(self.center[0]), float(self.center[1])]
        return data


_PATCHABLE = {
    "kind",
    "center",
    "size",
    "sides",
    "inner_ratio",
    "rotation",
    "fill",
    "texture",
    "texture_density",
    "stroke",
    "stroke_width",
    "visible",
    "locked",
}


def normalize_patch(patch: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop unknown/identity keys and enforce fill XOR texture."""
    data = {key: value for key, value in patch.items() if key in _PATCHABLE}
    if "kind" in data:
        data["kind"] = ShapeKind.coerce(data["kind"])
    if "center" in data:
        data["center"] = (float(data["center"][0]), float(data["center"][1]))
    if data.get("texture") is not None:
        data["fill"] = None
    elif data.get("fill") is not None:
        data["texture"] = None
    return data


@dataclass
class ToolDefaults:
    """Current tool and style applied to the next placed shape."""

    tool: ShapeKind = ShapeKind.PETAL
    fill: Optional[str] = "#ff9f1c"
    texture: Optional[str] = None
    texture_density: float = 1.0
    stroke: str = "#111827"
    stroke_width: float = 1.0
    size: float = 40.0
    snap: bool = True
    grid: bool = True
    show_guides: bool = True
    recent_colors: List[str] = field(
        default_factory=lambda: ["#ff9f1c", "#e71d36", "#2ec4b6", "#ffbf69", "#ffffff", "#000000"]
    )

    def set_tool(self, kind: "str | ShapeKind") -> None:
        self.tool = ShapeKind.coerce(kind)

    def set_fill(self, color: str) -> None:
        self.add_recent_color(color)
        self.fill = color
        self.texture = None

    def set_stroke(self, color: str) -> None:
        self.stroke = color

    def set_texture(self, texture: Optional[str]) -> None:
        self.texture = texture

    def set_texture_density(self, density: float) -> None:
        lo, hi = TEXTURE_DENSITY_RANGE
        self.texture_density = max(lo, min(hi, float(density)))

    def add_recent_color(self, color: str) -> None:
        distinct = [c for c in self.recent_colors if c != color]
        self.recent_colors = [color] + distinct[: RECENT_COLOR_LIMIT - 1]

    def draft_at(self, point: Sequence[float]) -> ShapeDraft:
        kind = self.tool
        return ShapeDraft(
            kind=kind,
            center=(float(point[0]), float(point[1])),
            size=self.size,
            sides=5 if kind.uses_sides else None,
            inner_ratio=0.5 if kind.uses_inner_ratio else None,
            rotation=0.0,
            fill=self.fill,
            texture=self.texture,
            texture_density=self.texture_density,
            stroke=self.stroke,
            stroke_width=self.stroke_width,
        )
