"""
Error types and handlers for the HomeMade API.

Every error leaves the API as ``{"error": "<message>"}``, optionally with a
``details`` field, which is the shape the browser client reads.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class HomemadeError(Exception):
    """Base exception for errors raised on purpose by the API."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Any | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            result["details"] = self.details
        return result


class InvalidInputError(HomemadeError):
    def __init__(self, message: str = "Invalid input", details: Any | None = None):
        super().__init__(message, status_code=400, details=details)


class ConflictError(HomemadeError):
    """Raised when creating something that already exists."""

    def __init__(self, message: str):
        # Shown as a form error by the browser client
        super().__init__(message, status_code=400)


class NotFoundError(HomemadeError):
    def __init__(self, what: str):
        super().__init__(f"{what} not found", status_code=404)


class ForbiddenError(HomemadeError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status_code=403)


class GeocodingError(HomemadeError):
    """Raised when no geocoding source could place a coordinate."""

    def __init__(self, message: str = "Geocoding service error"):
        super().__init__(message, status_code=502)


# ── Handlers ─────────────────────────────────────────────────────────────


async def homemade_exception_handler(request: Request, exc: HomemadeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
