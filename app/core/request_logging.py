"""
Per-route request logging.

Routes built with `LoggingRoute` log one event per request with the
operation (endpoint name), method, path, elapsed seconds and final status.
Errors raised by the endpoint are logged with the status their exception
handler will answer with, then re-raised untouched.
"""
from __future__ import annotations

import time
from typing import Callable

import structlog
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import TriviaException


def _status_for(exc: Exception) -> int:
    if isinstance(exc, TriviaException):
        return exc.http_status
    if isinstance(exc, RequestValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class LoggingRoute(APIRoute):
    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()
        operation = self.name

        async def logging_handler(request: Request) -> Response:
            logger = getattr(request.app.state, "logger", None) or structlog.get_logger()
            begin = time.perf_counter()
            code = status.HTTP_200_OK
            try:
                response = await handler(request)
                code = response.status_code
                return response
            except Exception as exc:
                code = _status_for(exc)
                raise
            finally:
                logger.info(
                    "http request",
                    operation=operation,
                    method=request.method,
                    path=request.url.path,
                    took=round(time.perf_counter() - begin, 6),
                    status=code,
                )

        return logging_handler
