"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sheetlayout.web.exceptions import register_exception_handlers
from sheetlayout.web.routers import (
    canvas_router,
    layout_router,
    placements_router,
    space_router,
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Sheet Layout API",
        description="REST API for printable areas, empty-space search and sheet layouts",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware for browser access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(canvas_router, prefix="/api/v1")
    app.include_router(layout_router, prefix="/api/v1")
    app.include_router(space_router, prefix="/api/v1")
    app.include_router(placements_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Application instance for ASGI servers (uvicorn)
app = create_app()
