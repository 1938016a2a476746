"""
Prometheus Metrics Collection for the Team Tasks backend

Every replica keeps its own registry; Prometheus scrapes each one
independently, so nothing here is shared across processes.
"""

import logging
import re
import time
from contextlib import contextmanager
from typing import Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# =============================================================================
# HTTP Request Metrics
# =============================================================================

http_requests_total = Counter(
    "teamtasks_http_requests_total",
    "HTTP requests by method, endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "teamtasks_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# =============================================================================
# Domain Operation Metrics
# =============================================================================

operations_total = Counter(
    "teamtasks_operations_total",
    "Resolved operations by name and outcome (success or error kind)",
    ["operation", "outcome"],
)

operation_duration_seconds = Histogram(
    "teamtasks_operation_duration_seconds",
    "Operation duration in seconds",
    ["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

notifications_total = Counter(
    "teamtasks_notifications_total",
    "Notification dispatch attempts by result",
    ["status"],
)

# =============================================================================
# Database Metrics
# =============================================================================

db_operations_total = Counter(
    "teamtasks_db_operations_total",
    "Database operations by collection and operation",
    ["collection", "operation"],
)

db_errors_total = Counter(
    "teamtasks_db_errors_total",
    "Database errors by collection and exception type",
    ["collection", "error_type"],
)


async def metrics_endpoint(request: Request) -> Response:
    """Expose the default registry in Prometheus text format."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics for the /metrics endpoint itself to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = self._normalize_path(request.url.path)
        start_time = time.perf_counter()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
        except Exception as e:
            logger.error(f"Error in PrometheusMiddleware: {e}")
            raise
        finally:
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                time.perf_counter() - start_time
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()

        return response

    def _normalize_path(self, path: str) -> str:
        """Replace UUIDs and numeric IDs with placeholders to bound cardinality."""
        path = re.sub(
            r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
            "/{id}",
            path,
            flags=re.IGNORECASE,
        )
        return re.sub(r"/\d+", "/{id}", path)


# =============================================================================
# Helper Functions for Application Code
# =============================================================================


def track_db_operation(collection: str, operation: str):
    """Context manager to track database operation metrics."""

    @contextmanager
    def _tracker():
        try:
            yield
            db_operations_total.labels(collection=collection, operation=operation).inc()
        except Exception as e:
            db_errors_total.labels(collection=collection, error_type=type(e).__name__).inc()
            raise

    return _tracker()


@contextmanager
def track_operation(operation: str):
    """Record duration and outcome of one resolved operation."""
    start_time = time.perf_counter()
    outcome = "success"
    try:
        yield
    except Exception as e:
        outcome = getattr(e, "error_type", "InternalError")
        raise
    finally:
        operation_duration_seconds.labels(operation=operation).observe(time.perf_counter() - start_time)
        operations_total.labels(operation=operation, outcome=outcome).inc()
