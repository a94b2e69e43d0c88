"""HTTP Middleware — security headers, per-IP rate limiting, request logging.

Invariants:
    - Security headers set on every response, handled errors included
      (the unhandled-exception 500 is produced outside the middleware stack)
    - Rate limiter is a fixed window per client IP; exceeding it yields 429 RATE_LIMITED
      in the standard error envelope
    - Expired windows are swept at most once per window: memory tracks active clients only
    - Request log line emitted once per request with method, path, status, duration

Design Decisions:
    - Rate limit counters are in-process: a single uvicorn worker owns its own budget.
      Multi-worker deployments get max_requests per worker.
"""

import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from order_api.core.errors import RateLimitExceededError

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Permitted-Cross-Domain-Policies": "none",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class FixedWindowCounter:
    """Counts hits per key inside fixed windows of `window_seconds`."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> int | None:
        """Record a hit. Returns seconds until reset when over budget, else None."""
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)
        if count > self.max_requests:
            return max(1, int(self.window_seconds - (now - started)))
        return None

    def _sweep(self, now: float) -> None:
        """Drop windows that have expired; runs at most once per window."""
        self._windows = {
            key: (started, count)
            for key, (started, count) in self._windows.items()
            if now - started < self.window_seconds
        }
        self._last_sweep = now


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, counter: FixedWindowCounter):
        super().__init__(app)
        self.counter = counter

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        client_ip = request.client.host if request.client else "unknown"
        retry_after = self.counter.hit(client_ip)
        if retry_after is not None:
            exc = RateLimitExceededError(retry_after)
            logger.warning(
                "Rate limit exceeded",
                extra={"client_ip": client_ip, "error_code": exc.code},
            )
            return JSONResponse(
                status_code=exc.http_status,
                content=exc.to_response(),
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
