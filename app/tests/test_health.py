from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from core.db import get_db
from main import app


def test_read_main(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_db(client):
    db = AsyncMock()
    app.dependency_overrides[get_db] = lambda: db

    response = client.get("/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "up"}
    db.execute.assert_awaited_once()


def test_health_db_down(client):
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    app.dependency_overrides[get_db] = lambda: db

    response = client.get("/health/db")

    assert response.status_code == 503
    assert response.json()["database"] == "down"


def test_prometheus_metrics(client):
    response = client.get("/metrics/prometheus")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "auto_service_requests_total" in response.text
    assert "auto_service_info" in response.text
