"""Pydantic schemas for the Pookalam geometry API."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from pookalam_playground.symmetry import clamp_radial


class ShapeModel(BaseModel):
    kind: str = Field("petal", description="Shape kind, e.g. circle, star, petal or an alias such as flower-1.")
    center: tuple[float, float] = Field((400.0, 300.0), description="Center in canvas coordinates (x, y).")
    size: float = Field(40.0, description="Radius, half-side or length scale depending on the kind.")
    sides: Optional[int] = Field(None, description="Vertex count for polygon and star kinds.")
    inner_ratio: Optional[float] = Field(None, description="Inner radius ratio for star and ring kinds.")
    rotation: float = Field(0.0, description="Rotation in degrees, clockwise on screen.")
    id: str = Field("shape", description="Identifier used to derive instance keys.")


class SymmetryModel(BaseModel):
    radial: int = Field(8, description="Radial copies; clamped into 1..64 rather than rejected.")
    mirror_vertical: bool = Field(False, description="Mirror across the vertical center line.")
    mirror_horizontal: bool = Field(False, description="Mirror across the horizontal center line.")

    @field_validator("radial", mode="before")
    @classmethod
    def _clamp_radial(cls, value: Any) -> int:
        return clamp_radial(value)


class ExpandRequest(BaseModel):
    shape: ShapeModel = Field(default_factory=ShapeModel, description="The authored shape to replicate.")
    symmetry: SymmetryModel = Field(default_factory=SymmetryModel, description="Global symmetry configuration.")
    include_paths: bool = Field(False, description="Attach SVG path data to every instance.")


class InstanceModel(BaseModel):
    key: str = Field(..., description="Stable key of the instance, derived from the shape id.")
    role: str = Field(..., description="primary, mirror, radial or radial-mirror.")
    center: tuple[float, float] = Field(..., description="Instance center in canvas coordinates.")
    rotation: float = Field(..., description="Instance rotation in degrees.")
    path: Optional[str] = Field(None, description="SVG path data when requested.")


class ExpandResponse(BaseModel):
    count: int = Field(..., ge=1, description="Number of instances; radial * (1 + mirror count).")
    instances: list[InstanceModel] = Field(..., description="Instances in render order, primary first.")


class PathRequest(BaseModel):
    shape: ShapeModel = Field(default_factory=ShapeModel, description="Shape whose outline is generated.")
    precision: int = Field(3, ge=0, le=8, description="Decimal places in the emitted path data.")


class PathResponse(BaseModel):
    kind: str = Field(..., description="Canonical kind the outline was generated for.")
    path: str = Field(..., description="SVG path data of the outline.")
    bounds: tuple[float, float, float, float] = Field(..., description="Bounding box (min_x, min_y, max_x, max_y).")
