"""Custom exception hierarchy and handlers."""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

CODE_UNKNOWN = 1000
CODE_INVALID_PARAM = 1001
CODE_NOT_FOUND = 1002
CODE_INTERNAL = 1005
CODE_CONFLICT = 1006
CODE_BUSINESS_RULE = 1007


class AppException(Exception):
    """Base application exception."""

    status_code = 400
    code = CODE_UNKNOWN

    def __init__(self, message: str, detail: str | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationException(AppException):
    """Raised when request parameters fail domain validation."""

    status_code = 400
    code = CODE_INVALID_PARAM


class NotFoundException(AppException):
    """Raised when entity is not found."""

    status_code = 404
    code = CODE_NOT_FOUND


class ConflictException(AppException):
    """Raised when entity conflicts with current state."""

    status_code = 409
    code = CODE_CONFLICT


class BusinessRuleException(AppException):
    """Raised when business rule validation fails."""

    status_code = 422
    code = CODE_BUSINESS_RULE


class InternalException(AppException):
    """Wraps infrastructure failures; the cause stays in detail and logs."""

    status_code = 500
    code = CODE_INTERNAL

    @classmethod
    def wrap(cls, operation: str, exc: Exception) -> "InternalException":
        return cls(f"{operation} failed", detail=str(exc))


def error_body(code: int, message: str, detail: str | None = None) -> dict:
    """Build the standard error envelope."""
    return {"code": code, "message": message, "data": None, "detail": detail}


async def app_exception_handler(_: Request, exc: AppException) -> JSONResponse:
    """Handle custom domain exceptions."""
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.message, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message, exc.detail),
    )


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle body/query schema violations in unified shape."""
    return JSONResponse(
        status_code=422,
        content={
            **error_body(CODE_INVALID_PARAM, "Invalid request parameters"),
            "data": jsonable_encoder(exc.errors()),
        },
    )


async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions in unified shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(CODE_UNKNOWN, str(exc.detail)),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report storage errors that no service wrapped, named by the route that hit them."""
    route_path = getattr(request.scope.get("route"), "path", request.url.path)
    operation = f"{request.method} {route_path}"
    wrapped = InternalException.wrap(operation, exc)
    logger.error("%s: %s", wrapped.message, wrapped.detail)
    return JSONResponse(
        status_code=wrapped.status_code,
        content=error_body(wrapped.code, wrapped.message, wrapped.detail),
    )


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=500,
        content=error_body(CODE_UNKNOWN, "Internal server error"),
    )


def register_exception_handlers(app) -> None:
    """Register global exception handlers."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
