"""
noroff_api.api.errors

Error envelope and exception handlers for the API layer.

Responsibilities:
- `ApiError`: host-layer error with status, message, optional code/path.
- `enforce`: turn a guard `Decision` into inclusions or an `ApiError`.
- Render every error as `{"errors": [...], "status": ..., "statusCode": ...}`.
"""

from __future__ import annotations

from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from noroff_api.guard.decision import Decision, DenyReason, Grant
from noroff_api.observability.logging import get_logger

log = get_logger(__name__)

_DENY_STATUS: dict[DenyReason, int] = {
    DenyReason.unauthenticated: HTTP_401_UNAUTHORIZED,
    DenyReason.not_owner: HTTP_403_FORBIDDEN,
    DenyReason.missing_role: HTTP_403_FORBIDDEN,
    DenyReason.invalid_media: HTTP_400_BAD_REQUEST,
    DenyReason.limit_exceeded: HTTP_400_BAD_REQUEST,
}


class ApiError(Exception):
    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: str | None = None,
        path: Sequence[str | int] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code
        self.path = list(path) if path is not None else None

    def as_error(self) -> dict[str, Any]:
        error: dict[str, Any] = {"message": self.message}
        if self.code is not None:
            error["code"] = self.code
        if self.path is not None:
            error["path"] = self.path
        return error


def enforce(decision: Decision, *, kind: str) -> frozenset[str]:
    if isinstance(decision, Grant):
        return decision.inclusions

    log.info(
        "guard.deny",
        kind=kind,
        reason=decision.reason.value,
        url=decision.url,
        cause=decision.cause,
    )
    message = decision.message
    if decision.cause:
        message = f"{message} ({decision.cause})"
    raise ApiError(
        _DENY_STATUS[decision.reason],
        message,
        code=decision.reason.value,
        path=["media"] if decision.reason is DenyReason.invalid_media else None,
    )


def _envelope(
    status_code: int, errors: list[dict[str, Any]], headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "errors": errors,
            "status": HTTPStatus(status_code).phrase,
            "statusCode": status_code,
        },
        headers=headers,
    )


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return _envelope(exc.status_code, [exc.as_error()])


async def _http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, [{"message": str(exc.detail)}], headers=exc.headers)


async def _validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        # Drop the "body"/"query"/"path" prefix; clients care about the field path.
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        errors.append({"code": err.get("type"), "message": err.get("msg"), "path": loc})
    return _envelope(HTTP_400_BAD_REQUEST, errors)


async def _unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
    log.exception("request.failed", error=str(exc))
    return _envelope(HTTP_500_INTERNAL_SERVER_ERROR, [{"message": "Something went wrong."}])


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)


# --- Module Notes -----------------------------------------------------------
# Routers never catch-and-reclassify: they raise `ApiError`/`HTTPException` or call
# `enforce`, and these handlers own the wire format.
