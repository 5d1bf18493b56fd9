from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class PermitError(Exception):
    """Base for errors whose message is safe to show to the caller."""

    code = "PERMIT_ERROR"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(PermitError):
    code = "INVALID_CREDENTIALS"
    status_code = 401
    default_message = "Invalid credentials"


class TokenInvalidOrExpired(PermitError):
    code = "TOKEN_INVALID_OR_EXPIRED"
    status_code = 401
    default_message = "Invalid or expired token"


class InsufficientPermissions(PermitError):
    code = "INSUFFICIENT_PERMISSIONS"
    status_code = 403
    default_message = "Insufficient permissions"


class NotFound(PermitError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found"


class NotPending(PermitError):
    code = "NOT_PENDING"
    status_code = 409
    default_message = "Permit request is not in pending status"


class InvalidDateRange(PermitError):
    code = "INVALID_DATE_RANGE"
    status_code = 422
    default_message = "Return date/time must not precede departure date/time"


class ExportFailed(PermitError):
    code = "EXPORT_FAILED"
    status_code = 500
    default_message = "Export failed"


async def permit_error_handler(request: Request, exc: PermitError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PermitError, permit_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
