"""
FastAPI application entrypoint for the workspace dashboard.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dashboard.api.routes import auth_router, router as api_router
from dashboard.core.config import get_settings
from dashboard.core.errors import DashboardError
from dashboard.core.logging import configure_logging
from dashboard.dependencies import get_worker_pool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_worker_pool.cache_info().currsize:
        get_worker_pool().shutdown(wait=False)


async def _dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"error": "Invalid request", "details": details},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "details": str(exc)},
    )


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title="Workspace Dashboard",
        version="0.1.0",
        description="Google Workspace summaries, document text extraction and chat.",
        lifespan=lifespan,
    )
    app.add_exception_handler(DashboardError, _dashboard_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
    app.include_router(auth_router, prefix="/auth")
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
