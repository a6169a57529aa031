"""
Error types shared by all features, and their HTTP translation.

- `RequestValidationFailed` -> 400 with a field-level error list
- `StoreError` -> 500 with a generic message (details are logged, not returned)
- `InitializationError` -> raised during startup; never handled here
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    pass


class ReferenceViolation(StoreError):
    """
    A foreign-key constraint rejected the statement.
    """


class InitializationError(RuntimeError):
    pass


class RequestValidationFailed(ValueError):
    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__("Validation failed.")
        self.errors = errors


def field_error(field: str, message: str) -> dict[str, str]:
    return {"field": field, "message": message}


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    # Drop the "body"/"path"/"query" prefix FastAPI puts in front.
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in {"body", "path", "query", "header"}:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _validation_response(errors: list[dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed.", "errors": errors},
    )


def _error_field(err: dict[str, Any]) -> str:
    # Malformed JSON is located by byte offset, which is not a field.
    if err.get("type") == "json_invalid":
        return "body"
    return _field_name(err.get("loc", ()))


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [field_error(_error_field(err), str(err.get("msg", ""))) for err in exc.errors()]
    return _validation_response(errors)


async def validation_failed_handler(_: Request, exc: RequestValidationFailed) -> JSONResponse:
    return _validation_response(exc.errors)


async def store_error_handler(request: Request, _: StoreError) -> JSONResponse:
    # The cause was already logged where it happened.
    logger.warning("store_error_response method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error."},
    )


def install_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)
    app.add_exception_handler(StoreError, store_error_handler)
