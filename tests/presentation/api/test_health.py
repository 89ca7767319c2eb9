"""Tests for the health router."""

import asyncio
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.crypto_alerts.application.services.entry_catalog import EntryCatalog
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.domain.entities.alert import AlertDefinition, Operator
from app.crypto_alerts.infrastructure.external.synthetic_source import SyntheticQuoteSource
from app.crypto_alerts.infrastructure.notifications import LoggingSink, SubscriptionRegistry
from app.crypto_alerts.infrastructure.persistence import JsonStateStore
from app.crypto_alerts.infrastructure.repositories import InMemoryAlertRepository
from app.crypto_alerts.presentation.api.dependencies import get_container
from app.crypto_alerts.presentation.api.health import router


@pytest.fixture
def container(tmp_path: Path) -> ServiceContainer:
    state_file = tmp_path / "database.json"
    source = SyntheticQuoteSource(list_interval=timedelta(hours=1))
    return ServiceContainer(
        settings=Settings(state_file=str(state_file)),
        source=source,
        catalog=EntryCatalog(source),
        alert_repository=InMemoryAlertRepository(),
        subscriptions=SubscriptionRegistry(),
        sink=LoggingSink(),
        state_store=JsonStateStore(state_file),
    )


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_container] = lambda: container
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready_before_catalog_load(client: TestClient) -> None:
    data = client.get("/api/ready").json()

    assert data["status"] == "starting"
    assert data["source"] == "test"
    assert data["catalog_entries"] == 0
    assert data["evaluation_running"] is False


def test_ready_reports_counts(client: TestClient, container: ServiceContainer) -> None:
    asyncio.run(container.catalog.list())
    asyncio.run(container.alert_repository.add(
        AlertDefinition(symbol="BTC", operator=Operator.HIGHER, threshold=Decimal("1"))
    ))

    data = client.get("/api/ready").json()

    assert data["status"] == "ready"
    assert data["catalog_entries"] == 3
    assert data["alerts"] == 1
