"""Middleware Chain: tracing, timeout, concurrency cap and request counting.

Invariants:
    - Order, outermost first: RequestLogging -> CORS -> Timeout -> ConcurrencyLimit
      -> RequestCounter -> routes (CORS is Starlette's CORSMiddleware)
    - Timeout wraps the concurrency wait: a request queued past the deadline fails
      with 408 instead of running
    - At most max_concurrent requests run past ConcurrencyLimitMiddleware at once
    - RequestCounter sees every request that reaches the routes, 404s included
    - Non-HTTP scopes (lifespan) pass straight through every layer

Design Decisions:
    - Pure ASGI classes over BaseHTTPMiddleware: no body buffering, and
      cancellation from the timeout reaches the route coroutine directly
    - Semaphore queueing over rejection: excess requests wait for capacity
"""

import asyncio
import logging
import time

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from users_api.core.errors import RequestTimeoutError
from users_api.core.metrics import MetricsCollector

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Log one line per request with method, path, status and duration."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(
                f"{scope['method']} {scope['path']} -> {status_code} ({duration_ms}ms)",
                extra={
                    "method": scope["method"],
                    "path": scope["path"],
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )


class TimeoutMiddleware:
    """Fail requests that do not complete within timeout_seconds."""

    def __init__(self, app: ASGIApp, timeout_seconds: float = 30.0):
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Request timed out after {self.timeout_seconds}s",
                extra={"method": scope["method"], "path": scope["path"]},
            )
            # Headers already sent: nothing valid left to write
            if response_started:
                raise
            error = RequestTimeoutError(self.timeout_seconds)
            response = JSONResponse(
                status_code=error.http_status, content=error.to_response(),
            )
            await response(scope, receive, send)


class ConcurrencyLimitMiddleware:
    """Queue requests so at most max_concurrent are processed at once."""

    def __init__(self, app: ASGIApp, max_concurrent: int = 100):
        self.app = app
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async with self._semaphore:
            await self.app(scope, receive, send)


class RequestCounterMiddleware:
    """Count every request before it reaches the route table."""

    def __init__(self, app: ASGIApp, metrics: MetricsCollector):
        self.app = app
        self.metrics = metrics

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            self.metrics.record_request()
        await self.app(scope, receive, send)
