"""Unit tests for health and metrics endpoints."""

from fastapi.testclient import TestClient

from actiongate import __version__
from actiongate.api.dependencies import reset_runtime
from actiongate.main import app


class TestHealthAPI:
    """Tests for /health and /metrics."""

    def test_health(self) -> None:
        with TestClient(app) as client:
            response = client.get("/health")
        reset_runtime()

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_metrics_exposes_docker_series(self) -> None:
        with TestClient(app) as client:
            response = client.get("/metrics")
        reset_runtime()

        assert response.status_code == 200
        assert "actiongate_docker_duration_seconds" in response.text
        assert "actiongate_exec_output_bytes_total" in response.text
