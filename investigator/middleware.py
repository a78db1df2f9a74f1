"""Request metrics middleware."""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from investigator.telemetry.metrics import (
    http_request_duration,
    http_requests_in_progress,
    http_requests_total,
)

_UNINSTRUMENTED = frozenset({"/metrics", "/health", "/openapi.json", "/docs", "/redoc"})


def route_template(request: Request) -> str:
    """Matched route path (``/investigations``), or the raw path when nothing matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe latency, outcome and concurrency of investigation requests."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _UNINSTRUMENTED:
            return await call_next(request)

        in_progress = http_requests_in_progress.labels(method=request.method)
        in_progress.inc()
        status_code = 500
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed = time.perf_counter() - start
            in_progress.dec()
            outcome = {
                "method": request.method,
                "endpoint": route_template(request),
                "status_code": str(status_code),
            }
            http_request_duration.labels(**outcome).observe(elapsed)
            http_requests_total.labels(**outcome).inc()
