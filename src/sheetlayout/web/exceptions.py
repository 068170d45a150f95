"""Error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sheetlayout.application.config import ConfigError
from sheetlayout.domain.errors import (
    DegenerateInputError,
    NotFoundError,
    OverflowRejectedError,
)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"kind": exc.kind, "id": exc.identifier},
            },
        )

    @app.exception_handler(DegenerateInputError)
    async def degenerate_input_handler(
        request: Request, exc: DegenerateInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": "degenerate_input",
                "details": [{"message": e} for e in exc.errors],
            },
        )

    @app.exception_handler(OverflowRejectedError)
    async def overflow_rejected_handler(
        request: Request, exc: OverflowRejectedError
    ) -> JSONResponse:
        plan = exc.plan
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "overflow_rejected",
                "details": {
                    "strategy": plan.strategy,
                    "columns": plan.columns,
                    "rows": plan.rows,
                    "warnings": [w.code for w in plan.warnings],
                },
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )
