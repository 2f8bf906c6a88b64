"""Tests for the /health endpoint."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from src.main import app


def test_health_returns_ok(client: TestClient) -> None:
    """GET /health should return 200 with status 'ok'."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"


def test_health_ticker_stopped(client: TestClient) -> None:
    """Without a scheduler the ticker is reported as stopped."""
    assert client.get("/health").json()["ticker"] == "stopped"


def test_health_ticker_running(client: TestClient) -> None:
    app.state.tick_scheduler = MagicMock(running=True)
    assert client.get("/health").json()["ticker"] == "running"
