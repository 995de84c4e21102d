"""Middleware for monitoring HTTP requests."""

import time
from typing import Callable, Awaitable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response as StarletteResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from src.metrics import REQUEST_COUNT, REQUEST_DURATION, APPLICATION_ERRORS


def endpoint_label(request: Request) -> str:
    """Route template for the request, so /restaurants/{city} is one series."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect metrics for HTTP requests."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> StarletteResponse:
        start_time = time.time()

        response = await call_next(request)

        endpoint = endpoint_label(request)
        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code
        ).inc()

        REQUEST_DURATION.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(time.time() - start_time)

        return response


class ErrorTrackingMiddleware(BaseHTTPMiddleware):
    """Middleware to count client errors, server errors and unhandled exceptions."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> StarletteResponse:
        try:
            response = await call_next(request)
        except Exception:
            APPLICATION_ERRORS.labels(
                type="unhandled_exception",
                endpoint=endpoint_label(request),
            ).inc()
            raise

        if response.status_code >= 500:
            error_type = "http_5xx"
        elif response.status_code >= 400:
            error_type = "http_4xx"
        else:
            return response

        APPLICATION_ERRORS.labels(type=error_type, endpoint=endpoint_label(request)).inc()
        return response


def metrics_endpoint():
    """Endpoint to expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
