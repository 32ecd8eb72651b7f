"""
Error handlers — map storefront errors to HTTP responses.

Every error body has the same shape: ``{"error": <message>, "kind": <KIND>}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from kbmedic.api._schemas import ErrorOut
from kbmedic.domain import ErrorKind, NotFoundError, StorefrontError
from kbmedic.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = get_logger(__name__)

KIND_STATUS_MAP = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: StorefrontError) -> int:
    # An unknown product is a bad checkout request, not a missing resource.
    if isinstance(exc, NotFoundError) and exc.entity == "product":
        return status.HTTP_400_BAD_REQUEST
    return KIND_STATUS_MAP.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(status_code: int, message: str, kind: ErrorKind) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorOut(error=message, kind=kind.name).model_dump(),
    )


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    code = status_for(exc)
    logger.info("{} {} -> {} {}", request.method, request.url.path, code, exc.message)
    return error_response(code, exc.message, exc.kind)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(loc) for loc in first.get("loc", ()))
    msg = first.get("msg", "Invalid input data")
    logger.info("{} {} -> 400 {} validation errors", request.method, request.url.path, len(errors))
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        f"Invalid request field '{field}': {msg}",
        ErrorKind.VALIDATION,
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled storage error on {} {}", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Storage unavailable",
        ErrorKind.STORAGE,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)


__all__ = ("KIND_STATUS_MAP", "status_for", "register_error_handlers")
