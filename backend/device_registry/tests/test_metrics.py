"""Tests for Prometheus metrics module."""

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from device_registry.core.metrics import (
    UNMATCHED_ENDPOINT,
    record_device_operation,
    route_template,
    set_app_info,
)
from device_registry.domain.devices import DeviceCandidate
from device_registry.main import app

BRAND_SEARCH = "/devices/search/brand/{brand}"


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0


def _endpoints(name: str) -> set[str]:
    return {
        sample.labels["endpoint"]
        for metric in REGISTRY.collect()
        for sample in metric.samples
        if sample.name == name
    }


class TestMetricsEndpoint:
    """Tests for the /metrics endpoint."""

    def test_metrics_endpoint_returns_prometheus_format(self, client: TestClient) -> None:
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    def test_metrics_endpoint_contains_app_info(self, client: TestClient) -> None:
        response = client.get("/metrics")
        assert "device_registry_app_info" in response.text

    def test_metrics_endpoint_contains_http_metrics(self, client: TestClient) -> None:
        client.get("/health")

        content = client.get("/metrics").text
        assert "device_registry_http_requests_total" in content
        assert "device_registry_http_request_duration_seconds" in content

    def test_device_routes_use_route_template(self, client: TestClient, test_device) -> None:
        labels = {"method": "GET", "endpoint": "/devices/{device_id}", "status_code": "200"}
        before = _sample("device_registry_http_requests_total", labels)

        client.get(f"/devices/{test_device.id}")

        assert _sample("device_registry_http_requests_total", labels) == before + 1

    def test_brand_searches_share_one_label(self, client: TestClient) -> None:
        """Brand values never become label values."""
        labels = {"method": "GET", "endpoint": BRAND_SEARCH, "status_code": "404"}
        before = _sample("device_registry_http_requests_total", labels)

        for index in range(3):
            client.get(f"/devices/search/brand/label-brand{index}")

        assert _sample("device_registry_http_requests_total", labels) == before + 3
        for name in (
            "device_registry_http_requests_total",
            "device_registry_http_request_duration_seconds_count",
            "device_registry_http_requests_in_progress",
        ):
            assert not any("label-brand" in endpoint for endpoint in _endpoints(name))

    def test_unknown_paths_share_one_label(self, client: TestClient) -> None:
        labels = {"method": "GET", "endpoint": UNMATCHED_ENDPOINT, "status_code": "404"}
        before = _sample("device_registry_http_requests_total", labels)

        client.get("/unknown-a")
        client.get("/unknown-b/c")

        assert _sample("device_registry_http_requests_total", labels) == before + 2
        assert not any(
            "unknown-" in endpoint for endpoint in _endpoints("device_registry_http_requests_total")
        )

    def test_metrics_endpoint_is_not_counted(self, client: TestClient) -> None:
        labels = {"method": "GET", "endpoint": "/metrics", "status_code": "200"}
        before = _sample("device_registry_http_requests_total", labels)

        client.get("/metrics")

        assert _sample("device_registry_http_requests_total", labels) == before


class TestAppInfoMetric:
    def test_set_app_info(self) -> None:
        set_app_info("1.0.0", "test")

        sample = REGISTRY.get_sample_value(
            "device_registry_app_info", {"version": "1.0.0", "environment": "test"}
        )
        assert sample == 1.0


@pytest.mark.parametrize(
    "method, path, expected",
    [
        ("GET", "/devices/42", "/devices/{device_id}"),
        ("DELETE", "/devices/42", "/devices/{device_id}"),
        ("GET", "/devices", "/devices"),
        ("GET", "/devices/search/brand/Acme", BRAND_SEARCH),
        ("GET", "/devices/search/brand/anything-else", BRAND_SEARCH),
        ("GET", "/health/ready", "/health/ready"),
        ("GET", "/no/such/route", UNMATCHED_ENDPOINT),
    ],
)
def test_route_template(method, path, expected):
    scope = {"type": "http", "method": method, "path": path, "root_path": "", "headers": []}
    assert route_template(app.router.routes, scope) == expected


class TestDeviceOperationMetrics:
    """Registry outcomes are counted per operation."""

    def test_record_device_operation(self) -> None:
        labels = {"operation": "metrics_test", "outcome": "success"}
        before = _sample("device_registry_operations_total", labels)

        record_device_operation("metrics_test", "success")

        assert _sample("device_registry_operations_total", labels) == before + 1

    def test_registry_counts_success_and_rejection(self, registry) -> None:
        success = {"operation": "create", "outcome": "success"}
        rejected = {"operation": "create", "outcome": "validation"}
        before_success = _sample("device_registry_operations_total", success)
        before_rejected = _sample("device_registry_operations_total", rejected)

        registry.create(DeviceCandidate(name="Sensor", brand="Acme"))
        registry.create(DeviceCandidate(name="", brand="Acme"))

        assert _sample("device_registry_operations_total", success) == before_success + 1
        assert _sample("device_registry_operations_total", rejected) == before_rejected + 1

    def test_registry_counts_not_found(self, registry) -> None:
        labels = {"operation": "delete", "outcome": "not_found"}
        before = _sample("device_registry_operations_total", labels)

        registry.delete(424242)

        assert _sample("device_registry_operations_total", labels) == before + 1
