"""Prometheus metrics for the Device Registry API.

Metrics are exposed at the /metrics endpoint.

Metrics Categories:
- HTTP request metrics (latency, count, in-flight)
- Registry operation outcomes (success or error kind per operation)
"""

from typing import Iterable

from prometheus_client import Counter, Gauge, Histogram, Info
from starlette.routing import BaseRoute, Match
from starlette.types import Scope

APP_INFO = Info("device_registry_app", "Device Registry application information")

HTTP_REQUESTS_TOTAL = Counter(
    "device_registry_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "device_registry_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "device_registry_http_requests_in_progress",
    "Number of HTTP requests currently in progress",
    ["method", "endpoint"],
)

DEVICE_OPERATIONS_TOTAL = Counter(
    "device_registry_operations_total",
    "Registry operations by outcome",
    ["operation", "outcome"],  # outcome: success, not_found, validation, illegal_argument, service
)


def set_app_info(version: str, environment: str) -> None:
    """Set application info metric."""
    APP_INFO.info({"version": version, "environment": environment})


UNMATCHED_ENDPOINT = "<unmatched>"


def route_template(routes: Iterable[BaseRoute], scope: Scope) -> str:
    """Label a request by the route path it matches, e.g. ``/devices/search/brand/{brand}``.

    Path parameters never reach the label, so the series count is bounded
    by the number of routes. Requests that match no route share one label.
    """
    partial = None
    for route in routes:
        match, _ = route.matches(scope)
        if match == Match.FULL:
            return route.path
        if match == Match.PARTIAL and partial is None:
            partial = route.path
    return partial or UNMATCHED_ENDPOINT


def record_device_operation(operation: str, outcome: str) -> None:
    """Count one registry operation.

    Args:
        operation: Registry operation name (create, get_by_id, update_partial, ...).
        outcome: ``success`` or the error kind returned to the caller.
    """
    DEVICE_OPERATIONS_TOTAL.labels(operation=operation, outcome=outcome).inc()
