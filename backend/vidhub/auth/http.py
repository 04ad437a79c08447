"""HTTP envelope helpers: the one place ``ErrorKind`` becomes a status code."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from vidhub.core.result import Err
from vidhub.core.result import ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_CREDENTIALS: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """Carries an ``Err`` out of a FastAPI dependency."""

    def __init__(self, err: Err) -> None:
        super().__init__(err.message)
        self.err = err


def api_response(*, status_code: int, data: Any, message: str) -> dict[str, Any]:
    """Build the success envelope."""
    return {"statusCode": status_code, "data": data, "message": message, "success": True}


def api_error(*, status_code: int, message: str, errors: list[Any] | None = None) -> dict[str, Any]:
    """Build the failure envelope."""
    return {"statusCode": status_code, "message": message, "success": False, "errors": errors or []}


def error_response(err: Err) -> JSONResponse:
    status_code = STATUS_BY_KIND[err.kind]
    return JSONResponse(
        status_code=status_code,
        content=api_error(status_code=status_code, message=err.message, errors=err.errors),
    )


async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.err)


async def handle_http_exception(_: Request, exc: HTTPException) -> JSONResponse:
    """Unify framework HTTP errors to the failure envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=api_error(status_code=exc.status_code, message=str(exc.detail)),
        headers=exc.headers,
    )


async def handle_validation_exception(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error.get("loc", ())[1:]), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=api_error(status_code=400, message="Invalid request body", errors=errors),
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=api_error(status_code=500, message="Something went wrong"),
    )
