"""Tests for application factory."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from platform_core.config import CovenantMonitorSettings
from platform_core.json_utils import load_json_str

from covenant_monitor_api.api.main import create_app


def _settings() -> CovenantMonitorSettings:
    return {
        "app_env": "dev",
        "logging": {"level": "INFO", "format": "text"},
        "scenario": {
            "baseline_control": 98.2,
            "baseline_a": 5.2,
            "coefficient_a": 2.0,
            "operator_a": "<=",
            "threshold_a": 5.0,
            "baseline_b": 14.7,
            "coefficient_b": 0.5,
            "operator_b": ">=",
            "threshold_b": 15.0,
            "precision": 1,
        },
    }


def test_app_factory_creates_fastapi_app() -> None:
    app = create_app(_settings())
    assert app.title == "covenant-monitor-api"
    assert app.version == "0.1.0"


def test_app_factory_health_endpoint() -> None:
    client = TestClient(create_app(_settings()))
    response = client.get("/healthz")
    assert response.status_code == 200
    assert load_json_str(response.text) == {"status": "ok", "service": "covenant-monitor-api"}
    assert response.headers["x-request-id"] != ""


def test_app_factory_registers_routes() -> None:
    paths = create_app(_settings()).openapi()["paths"]
    for path in (
        "/healthz",
        "/covenants/evaluate",
        "/covenants/history",
        "/provisioning/summary",
        "/early-warnings/trend",
        "/early-warnings/scenario",
        "/early-warnings/alerts",
    ):
        assert path in paths


def test_app_factory_reads_env_when_no_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCENARIO__THRESHOLD_B", "16")
    monkeypatch.setenv("LOGGING__FORMAT", "text")
    client = TestClient(create_app())
    response = client.post("/early-warnings/scenario", json={"control": 99.2})
    body = load_json_str(response.text)
    assert type(body) is dict
    assert body["projected_b"] == 15.2
    assert body["status_b"] == "breached"


def test_scenario_baseline_from_settings() -> None:
    settings = _settings()
    settings["scenario"]["baseline_control"] = 99.2
    client = TestClient(create_app(settings))
    response = client.post("/early-warnings/scenario", json={"control": 99.2})
    assert load_json_str(response.text) == {
        "projected_a": 5.2,
        "projected_b": 14.7,
        "status_a": "breached",
        "status_b": "breached",
    }
