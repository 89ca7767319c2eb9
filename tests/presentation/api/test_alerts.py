"""Tests for the alerts API router.

Tests the alert lifecycle endpoints against an in-memory store.
"""

import json
from datetime import timedelta
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.crypto_alerts.application.services.entry_catalog import EntryCatalog
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.infrastructure.external.synthetic_source import SyntheticQuoteSource
from app.crypto_alerts.infrastructure.notifications import LoggingSink, SubscriptionRegistry
from app.crypto_alerts.infrastructure.persistence import JsonStateStore
from app.crypto_alerts.infrastructure.repositories import InMemoryAlertRepository
from app.crypto_alerts.presentation.api.alerts import router
from app.crypto_alerts.presentation.api.dependencies import get_container

BTC_HIGHER = {"symbol": "BTC", "operator": "higher", "threshold": 40000}


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture
def container(state_file: Path) -> ServiceContainer:
    """Create a service container backed by synthetic data."""
    settings = Settings(state_file=str(state_file))
    source = SyntheticQuoteSource(list_interval=timedelta(hours=1))
    return ServiceContainer(
        settings=settings,
        source=source,
        catalog=EntryCatalog(source),
        alert_repository=InMemoryAlertRepository(),
        subscriptions=SubscriptionRegistry(),
        sink=LoggingSink(),
        state_store=JsonStateStore(state_file),
    )


@pytest.fixture
def app(container: ServiceContainer) -> FastAPI:
    """Create a test FastAPI app with the alerts router."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_container] = lambda: container
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)


def create(client: TestClient, payload: dict = BTC_HIGHER) -> str:
    response = client.post("/api/alerts", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


class TestCreateAlert:
    """Tests for POST /api/alerts."""

    def test_create_alert_success(self, client: TestClient, state_file: Path) -> None:
        alert_id = create(client)

        data = client.get("/api/alerts").json()
        assert data["total"] == 1
        alert = data["alerts"][0]
        assert alert["id"] == alert_id
        assert alert["symbol"] == "BTC"
        assert alert["operator"] == "higher"
        assert float(alert["threshold"]) == 40000
        assert alert["vibration"] is False
        assert alert["notification"] is True
        assert alert["activation"] is None
        assert alert["state"] == "pending"

        persisted = json.loads(state_file.read_text(encoding="utf-8"))
        assert [a["id"] for a in persisted["alerts"]] == [alert_id]

    def test_create_alert_unknown_operator(self, client: TestClient) -> None:
        response = client.post("/api/alerts", json={**BTC_HIGHER, "operator": "sideways"})

        assert response.status_code == 422

    def test_create_alert_missing_threshold(self, client: TestClient) -> None:
        response = client.post("/api/alerts", json={"symbol": "BTC", "operator": "lower"})

        assert response.status_code == 422

    def test_create_alert_with_expiration(self, client: TestClient) -> None:
        alert_id = create(client, {**BTC_HIGHER, "expiration": "2000-01-01T00:00:00Z"})

        alert = client.get("/api/alerts", params={"ids": alert_id}).json()["alerts"][0]
        assert alert["state"] == "expired"


class TestUpdateAlert:
    """Tests for PUT /api/alerts/{alert_id}."""

    def test_update_replaces_fields(self, client: TestClient) -> None:
        alert_id = create(client)

        response = client.put(
            f"/api/alerts/{alert_id}",
            json={"symbol": "ETH", "operator": "cross", "threshold": 3000, "vibration": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == alert_id
        assert data["symbol"] == "ETH"
        assert data["operator"] == "cross"
        assert data["vibration"] is True

    def test_update_unknown_alert(self, client: TestClient) -> None:
        response = client.put("/api/alerts/missing", json=BTC_HIGHER)

        assert response.status_code == 404
        assert "missing" in response.json()["detail"]


class TestDeleteAlerts:
    """Tests for POST /api/alerts/delete."""

    def test_delete_batch(self, client: TestClient) -> None:
        first = create(client)
        second = create(client)
        third = create(client)

        response = client.post("/api/alerts/delete", json=[first, third])

        assert response.status_code == 204
        ids = [a["id"] for a in client.get("/api/alerts").json()["alerts"]]
        assert ids == [second]

    def test_delete_is_all_or_nothing(self, client: TestClient) -> None:
        alert_id = create(client)

        response = client.post("/api/alerts/delete", json=[alert_id, "missing"])

        assert response.status_code == 404
        assert client.get("/api/alerts").json()["total"] == 1


class TestListAlerts:
    """Tests for GET /api/alerts."""

    def test_list_empty(self, client: TestClient) -> None:
        response = client.get("/api/alerts")

        assert response.status_code == 200
        assert response.json() == {"alerts": [], "total": 0}

    def test_list_by_ids(self, client: TestClient) -> None:
        first = create(client)
        create(client)
        third = create(client)

        response = client.get("/api/alerts", params=[("ids", third), ("ids", first)])

        assert response.status_code == 200
        assert [a["id"] for a in response.json()["alerts"]] == [first, third]

    def test_list_unknown_id(self, client: TestClient) -> None:
        create(client)

        response = client.get("/api/alerts", params={"ids": "missing"})

        assert response.status_code == 404
