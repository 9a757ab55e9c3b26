"""
Tests for the public health endpoint.
"""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from invoicing.main import app

client = TestClient(app)


def test_health_without_lifespan_reports_closed_database():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "closed"}


def test_lifespan_opens_and_closes_database(monkeypatch):
    """The storage client exists only between startup and shutdown."""
    created = MagicMock(name="supabase_client")
    monkeypatch.setattr("invoicing.db.client.create_client", lambda **kwargs: created)

    with TestClient(app) as running:
        response = running.get("/health")
        database = app.state.database

        assert response.json() == {"status": "ok", "database": "open"}
        assert database.client is created

    assert database.is_open is False
