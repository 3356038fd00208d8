"""Unit tests for the assembled FastAPI application."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ballotbox.api.dependencies.election import reset_election_dependencies
from ballotbox.api.main import app
from ballotbox.api.middleware.logging_middleware import CORRELATION_HEADER


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Client running the app lifespan with a known owner."""
    reset_election_dependencies()
    monkeypatch.setenv("ELECTION_OWNER_IDENTITY", "lifespan-owner")
    monkeypatch.setenv("ENVIRONMENT", "test")
    with TestClient(app) as test_client:
        yield test_client
    reset_election_dependencies()


class TestHealth:
    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestLifespan:
    def test_election_created_from_environment(self, client: TestClient) -> None:
        response = client.get("/v1/election/status")

        assert response.json()["owner_identity"] == "lifespan-owner"
        assert response.json()["status"] == "RegisteringVoters"


class TestLoggingMiddleware:
    def test_echoes_correlation_id(self, client: TestClient) -> None:
        response = client.get("/v1/health", headers={CORRELATION_HEADER: "abc-123"})
        assert response.headers[CORRELATION_HEADER] == "abc-123"

    def test_generates_correlation_id(self, client: TestClient) -> None:
        response = client.get("/v1/health")
        assert len(response.headers[CORRELATION_HEADER]) == 36
