"""
API Middleware - Request/response processing.

Provides:
- Request ID tracking
- Response latency measurement
- Error handling with taxonomy codes
- Per-client rate limiting
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from chowline.config.errors import ChowlineError, ErrorCode

logger = logging.getLogger(__name__)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.SEARCH_INVALID_QUERY: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.MENU_ITEM_NOT_FOUND: 404,
    ErrorCode.ADDRESS_NOT_FOUND: 404,
    ErrorCode.SECURITY_RATE_LIMITED: 429,
    ErrorCode.STORAGE_CONNECTION_FAILED: 503,
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error_body(request: Request, code: ErrorCode, message: str, details: dict) -> dict:
    return {
        "error": {"code": code.value, "message": message, "details": details},
        "request_id": _request_id(request),
    }


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach request ID for tracing across logs and responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class LatencyMiddleware(BaseHTTPMiddleware):
    """Track and log request latency."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"

        logger.info(
            "%s %s status=%d latency_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            _request_id(request),
        )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert ChowlineError exceptions to structured JSON responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except ChowlineError as e:
            status = error_code_to_status(e.code)
            log = logger.error if status >= 500 else logger.warning
            log(
                "ChowlineError: %s request_id=%s details=%s",
                e.message,
                _request_id(request),
                e.details,
            )
            return JSONResponse(
                status_code=status,
                content=_error_body(request, e.code, e.message, e.details),
            )
        except Exception as e:
            logger.exception("Unhandled error: %s request_id=%s", e, _request_id(request))
            return JSONResponse(
                status_code=500,
                content=_error_body(
                    request, ErrorCode.INTERNAL_ERROR, "Internal server error", {}
                ),
            )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed one-minute window rate limiting per client IP."""

    def __init__(self, app: ASGIApp, requests_per_minute: int = 120) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self._window = 0
        self._used: dict[str, int] = {}

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        window = int(time.time() // 60)
        if window != self._window:
            # New minute: drop every client's count at once
            self._window = window
            self._used.clear()

        client_ip = request.client.host if request.client else "unknown"
        used = self._used.get(client_ip, 0)

        if used >= self.requests_per_minute:
            logger.warning(
                "Rate limit exceeded for %s request_id=%s", client_ip, _request_id(request)
            )
            return JSONResponse(
                status_code=429,
                content=_error_body(
                    request,
                    ErrorCode.SECURITY_RATE_LIMITED,
                    "Too many requests. Please retry after 60 seconds.",
                    {"retry_after": 60},
                ),
                headers={"Retry-After": "60"},
            )

        self._used[client_ip] = used + 1

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(self.requests_per_minute - used - 1)
        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        return response


def error_code_to_status(code: ErrorCode) -> int:
    """Map error codes to HTTP status codes (500 when unmapped)."""
    return _STATUS_BY_CODE.get(code, 500)
