"""
Domain errors raised during graph resolution, plus the catch-all HTTP
handler for failures outside GraphQL execution.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ── Resolution errors ───────────────────────────────────────────────
class ResolutionError(Exception):
    """Base class for errors that are safe to show to the client.

    ``extensions`` is copied onto the GraphQL error entry, so callers can
    branch on ``extensions.code`` instead of parsing messages.
    """

    code = "BAD_REQUEST"
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    @property
    def extensions(self) -> dict[str, Any]:
        extensions: dict[str, Any] = {"code": self.code}
        if self.field is not None:
            extensions["field"] = self.field
        return extensions


class ValidationError(ResolutionError):
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class Unauthenticated(ResolutionError):
    code = "UNAUTHENTICATED"
    default_message = "Could not validate credentials"


class Forbidden(ResolutionError):
    code = "FORBIDDEN"
    default_message = "Insufficient privileges"


class NotFound(ResolutionError):
    code = "NOT_FOUND"
    default_message = "Record not found"


class Conflict(ResolutionError):
    code = "CONFLICT"
    default_message = "Record already exists"


# ── HTTP handlers ───────────────────────────────────────────────────
async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "success": False},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Answer failures outside GraphQL execution (context building, health checks) without a traceback."""
    app.add_exception_handler(Exception, _generic_exception_handler)
