"""Tests for the entries API router."""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.crypto_alerts.application.exceptions import SourceUnavailableError
from app.crypto_alerts.application.services.entry_catalog import EntryCatalog
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.infrastructure.external.synthetic_source import SyntheticQuoteSource
from app.crypto_alerts.infrastructure.notifications import LoggingSink, SubscriptionRegistry
from app.crypto_alerts.infrastructure.persistence import JsonStateStore
from app.crypto_alerts.infrastructure.repositories import InMemoryAlertRepository
from app.crypto_alerts.presentation.api.dependencies import get_container
from app.crypto_alerts.presentation.api.entries import router


class Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def source() -> SyntheticQuoteSource:
    return SyntheticQuoteSource(list_interval=timedelta(hours=1))


@pytest.fixture
def container(tmp_path: Path, source: SyntheticQuoteSource, clock: Clock) -> ServiceContainer:
    state_file = tmp_path / "database.json"
    return ServiceContainer(
        settings=Settings(state_file=str(state_file)),
        source=source,
        catalog=EntryCatalog(source, clock=clock),
        alert_repository=InMemoryAlertRepository(),
        subscriptions=SubscriptionRegistry(),
        sink=LoggingSink(),
        state_store=JsonStateStore(state_file),
    )


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    """Create a test client with the entries router."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_container] = lambda: container
    return TestClient(app)


class TestListEntries:
    """Tests for GET /api/entries."""

    def test_lists_catalog_without_quotation_symbol(self, client: TestClient, clock: Clock) -> None:
        response = client.get("/api/entries")

        assert response.status_code == 200
        data = response.json()
        assert [e["symbol"] for e in data["entries"]] == ["BTC", "ETH", "BNB"]
        assert data["total"] == 3
        assert data["stale"] is False
        assert data["entries"][0]["name"] == "Bitcoin"
        assert data["entries"][0]["current_quote"] is None
        assert datetime.fromisoformat(data["next_refresh_at"].replace("Z", "+00:00")) == (
            clock.now + timedelta(hours=1)
        )

    def test_includes_latest_quotes(
        self, client: TestClient, container: ServiceContainer
    ) -> None:
        client.get("/api/entries")
        asyncio.run(container.catalog.apply_quotes({"BTC": Decimal("41500")}))

        data = client.get("/api/entries").json()

        btc = next(e for e in data["entries"] if e["symbol"] == "BTC")
        assert float(btc["current_quote"]) == 41500

    def test_serves_stale_catalog_on_source_failure(
        self, client: TestClient, source: SyntheticQuoteSource, clock: Clock
    ) -> None:
        client.get("/api/entries")
        source.list_entries = AsyncMock(side_effect=SourceUnavailableError("test", "down"))
        clock.now += timedelta(hours=2)

        response = client.get("/api/entries")

        assert response.status_code == 200
        data = response.json()
        assert data["stale"] is True
        assert data["total"] == 3

    def test_unavailable_without_cache(
        self, client: TestClient, source: SyntheticQuoteSource
    ) -> None:
        source.list_entries = AsyncMock(side_effect=SourceUnavailableError("test", "down"))

        response = client.get("/api/entries")

        assert response.status_code == 503
        assert "down" in response.json()["detail"]
