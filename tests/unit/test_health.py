"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


def test_readyz_database_healthy():
    db_health = {
        "healthy": True,
        "service": "database_pool",
        "connection_time_ms": 1.2,
        "pool_stats": {"pool_size": 2, "pool_available": 2, "pool_utilization_percent": 0.0},
    }
    with patch("app.routes.health.db_health_check", AsyncMock(return_value=db_health)):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["database"]["ok"] is True
    assert data["checks"]["database"]["pool_size"] == 2
    assert isinstance(data["checks"]["database"]["latency_ms"], (int, float))


def test_readyz_database_unhealthy():
    db_health = {"healthy": False, "service": "database_pool", "error": "Pool not initialized"}
    with patch("app.routes.health.db_health_check", AsyncMock(return_value=db_health)):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["error"] == "Pool not initialized"


def test_readyz_reports_uninitialized_pool():
    """Without the lifespan the pool is never opened."""
    response = client.get("/readyz")

    assert response.status_code == 200
    assert response.json()["overall_ok"] is False
