"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from auth.errors import StoreError, UserAuthError
from auth.validation import format_error

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


def register_exception_handlers(app: FastAPI) -> None:
    """Report every auth failure as ``400`` with a plain-text message."""

    @app.exception_handler(UserAuthError)
    async def user_auth_error(request: Request, exc: UserAuthError):
        if isinstance(exc, StoreError):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.details)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            err = errors[0]
            loc = tuple(err["loc"])
            if err["type"] == "json_invalid":
                loc = ("body",)
            elif loc[:1] == ("body",) and len(loc) > 1:
                loc = loc[1:]
            message = format_error(loc, err["msg"])
        else:
            message = "Invalid request body"
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)
