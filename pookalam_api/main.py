from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from pookalam_playground.logger import setup_logger
from pookalam_playground.shapes import ShapeKind

from .routers import geometry as geometry_router

setup_logger()

app = FastAPI(title="Pookalam API", version="0.1.0", description="Shape geometry and symmetry expansion")
app.include_router(geometry_router.router)


@app.get("/")
async def index() -> Dict[str, Any]:
    return {
        "name": "pookalam-api",
        "version": app.version,
        "routes": [
            {"path": "/kinds", "methods": ["GET"]},
            {"path": "/expand", "methods": ["POST"]},
            {"path": "/path", "methods": ["POST"]},
        ],
        "kind_count": len(ShapeKind),
    }
