"""
Exception hierarchy for the fact list service.

Rule: every error carries the HTTP status it maps to, and every error body
is the `{"error": message}` envelope.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class JSONUTF8Response(JSONResponse):
    media_type = JSON_CONTENT_TYPE


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class TriviaException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message}


# Repository (domain) errors

class FactNotFoundError(TriviaException):
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, fact_id: int | None = None):
        self.fact_id = fact_id
        super().__init__("fact not found")


class FactAlreadyExistsError(TriviaException):
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, fact_id: int | None = None):
        self.fact_id = fact_id
        super().__init__("fact already exists")


# Service errors

class FactServiceError(TriviaException):
    """A repository failure wrapped with the operation that hit it."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, cause: Exception):
        self.cause = cause
        super().__init__(f"could not {operation}: {cause}")


# Transport errors

class NonNumericFactIDError(TriviaException):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, raw: str | None = None):
        self.raw = raw
        super().__init__("fact id must be numeric")


class InvalidRequestBodyError(TriviaException):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid request body: {reason}")


class ResourceNotFoundError(TriviaException):
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self):
        super().__init__("resource not found")


class MethodNotAllowedError(TriviaException):
    http_status = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self):
        super().__init__("method not allowed")


def describe_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Collapse a pydantic error list into a single human-readable reason."""
    reasons = []
    for error in errors:
        msg = error.get("msg", "invalid value")
        ctx_error = str((error.get("ctx") or {}).get("error", ""))
        if ctx_error and ctx_error not in msg:
            msg = f"{msg}: {ctx_error}"
        if error.get("type") == "json_invalid":
            reasons.append(msg)
            continue
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        reasons.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(reasons) or "malformed body"


def error_for_status(status_code: int) -> TriviaException:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ResourceNotFoundError()
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return MethodNotAllowedError()
    exc = TriviaException("internal server error")
    exc.http_status = status_code
    return exc


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def error_response(exc: TriviaException) -> JSONUTF8Response:
    return JSONUTF8Response(status_code=exc.http_status, content=exc.to_dict())


async def trivia_exception_handler(request: Request, exc: TriviaException) -> JSONUTF8Response:
    return error_response(exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONUTF8Response:
    """Body decode and validation failures are all reported as a 400."""
    return error_response(InvalidRequestBodyError(describe_errors(exc.errors())))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONUTF8Response:
    return error_response(error_for_status(exc.status_code))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONUTF8Response:
    logger = getattr(request.app.state, "logger", None) or structlog.get_logger()
    logger.error("unhandled error", path=request.url.path, err=repr(exc))
    return JSONUTF8Response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error"},
    )
