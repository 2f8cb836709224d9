"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.errors import AuthModuleError, ValidationError

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response


def register_exception_handlers(app: FastAPI, uniform_status: bool = False) -> None:
    """
    Render every auth error as ``{"error": message}``.

    With ``uniform_status`` all of them answer 400, otherwise each error
    class picks its own status (400 / 401 / 409 / 500).
    """

    def _render(exc: AuthModuleError) -> JSONResponse:
        code = status.HTTP_400_BAD_REQUEST if uniform_status else exc.status_code
        return JSONResponse(status_code=code, content={"error": exc.message})

    @app.exception_handler(AuthModuleError)
    async def auth_error_handler(request: Request, exc: AuthModuleError):
        logger.info(
            "%s %s -> %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.message,
        )
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return await auth_error_handler(request, ValidationError.from_errors(exc.errors()))
