"""API routers."""

from sheetlayout.web.routers.canvas import router as canvas_router
from sheetlayout.web.routers.layout import router as layout_router
from sheetlayout.web.routers.placements import router as placements_router
from sheetlayout.web.routers.space import router as space_router

__all__ = [
    "canvas_router",
    "layout_router",
    "placements_router",
    "space_router",
]
