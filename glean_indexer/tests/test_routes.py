"""Tests for the indexing API routes."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from glean_indexer.api.deps import get_indexing_service
from glean_indexer.api.main import create_app
from glean_indexer.core.errors import RetrievalError


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def app(service):
    app = create_app()
    app.dependency_overrides[get_indexing_service] = lambda: service
    return app


def test_bulk_index_returns_ok(app, service):
    """POST /bulk-index runs one indexing pass."""
    response = TestClient(app).post("/bulk-index")

    assert response.status_code == 200
    assert response.content == b""
    service.bulk_index.assert_called_once()


def test_bulk_index_upstream_failure(app, service):
    """Upstream failures are reported as a bad gateway."""
    service.bulk_index.side_effect = RetrievalError("Service Unavailable", status_code=503)

    response = TestClient(app).post("/bulk-index")

    assert response.status_code == 502
    assert response.json() == {"error": "upstream_error", "detail": "Service Unavailable"}


def test_bulk_index_unexpected_failure(app, service):
    """Anything else becomes a generic server error."""
    service.bulk_index.side_effect = RuntimeError("boom")

    response = TestClient(app, raise_server_exceptions=False).post("/bulk-index")

    assert response.status_code == 500
    assert response.json()["error"] == "internal_server_error"


def test_health(app):
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
