from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

from pookalam_playground.config import get_config
from pookalam_playground.geometry import path_for_shape
from pookalam_playground.shapes import Shape, ShapeDraft, ShapeKind
from pookalam_playground.symmetry import SymmetryConfig, expand

from ..schemas import ExpandRequest, ExpandResponse, InstanceModel, PathRequest, PathResponse, ShapeModel

router = APIRouter(tags=["geometry"])


def _to_shape(model: ShapeModel) -> Shape:
    try:
        draft = ShapeDraft(
            kind=model.kind,
            center=model.center,
            size=model.size,
            sides=model.sides,
            inner_ratio=model.inner_ratio,
            rotation=model.rotation,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Shape.from_draft(model.id, draft)


@router.get("/kinds")
async def list_kinds() -> List[Dict[str, Any]]:
    return [
        {"kind": kind.value, "uses_sides": kind.uses_sides, "uses_inner_ratio": kind.uses_inner_ratio}
        for kind in ShapeKind
    ]


@router.post("/expand", response_model=ExpandResponse)
async def expand_shape(body: ExpandRequest) -> ExpandResponse:
    shape = _to_shape(body.shape)
    config = get_config()
    symmetry = SymmetryConfig(**body.symmetry.model_dump())
    instances = []
    for instance in expand(shape, symmetry, config.canvas_size):
        path = None
        if body.include_paths:
            path = path_for_shape(shape, instance.center, instance.rotation, config.ring_segments).to_svg()
        instances.append(
            InstanceModel(
                key=instance.key,
                role=instance.role,
                center=instance.center,
                rotation=instance.rotation,
                path=path,
            )
        )
    return ExpandResponse(count=len(instances), instances=instances)


@router.post("/path", response_model=PathResponse)
async def shape_outline(body: PathRequest) -> PathResponse:
    shape = _to_shape(body.shape)
    desc = path_for_shape(shape, ring_segments=get_config().ring_segments)
    return PathResponse(kind=shape.kind.value, path=desc.to_svg(body.precision), bounds=desc.bounds())
