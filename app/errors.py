"""API error type and the FastAPI handlers that render it.

Every failure leaves the service as ``{"status_code": n, "errors": [...]}`` with
the HTTP status mirroring ``status_code``.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.query.fields import InvalidFieldValue

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, error: str):
        super().__init__(error)
        self.status_code = status_code
        self.errors: List[str] = [str(error)]

    @classmethod
    def bad_request(cls, error: str) -> "ApiError":
        return cls(status.HTTP_400_BAD_REQUEST, error)

    @classmethod
    def internal(cls, error: str) -> "ApiError":
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, error)

    def append_error(self, error: str) -> None:
        self.errors.append(str(error))

    def to_dict(self) -> dict:
        return {"status_code": self.status_code, "errors": list(self.errors)}

    def __str__(self) -> str:
        return f"Err {self.status_code} {'; '.join(self.errors)}"


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def _validation_message(err: dict) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()) if part != "query")
    value = err.get("input")
    if value is None:
        return f"{location}: {err.get('msg')}"
    return f"{location}: {err.get('msg')} (got {value})"


def install_error_handlers(app: FastAPI) -> None:
    """Register handlers so every error path uses the same response shape."""

    @app.exception_handler(ApiError)
    async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(InvalidFieldValue)
    async def handle_invalid_field(_request: Request, exc: InvalidFieldValue) -> JSONResponse:
        return error_response(ApiError.bad_request(str(exc)))

    @app.exception_handler(RequestValidationError)
    async def handle_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = exc.errors()
        if not problems:
            return error_response(ApiError.bad_request("invalid request"))
        error = ApiError.bad_request(_validation_message(problems[0]))
        for problem in problems[1:]:
            error.append_error(_validation_message(problem))
        return error_response(error)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(ApiError.internal("internal server error"))
