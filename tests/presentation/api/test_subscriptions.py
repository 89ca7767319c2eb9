"""Tests for the web push subscription router."""

import json
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.crypto_alerts.application.services.entry_catalog import EntryCatalog
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.infrastructure.external.synthetic_source import SyntheticQuoteSource
from app.crypto_alerts.infrastructure.notifications import (
    LoggingSink,
    SubscriptionRegistry,
    WebPushSink,
)
from app.crypto_alerts.infrastructure.persistence import JsonStateStore
from app.crypto_alerts.infrastructure.repositories import InMemoryAlertRepository
from app.crypto_alerts.presentation.api.dependencies import get_container
from app.crypto_alerts.presentation.api.subscriptions import router

SUBSCRIPTION = {
    "endpoint": "https://push.example.com/abc",
    "expirationTime": None,
    "keys": {"p256dh": "client-key", "auth": "client-auth"},
}


def make_container(state_file: Path, push: bool) -> ServiceContainer:
    settings = Settings(
        state_file=str(state_file),
        vapid_public_key="public-key" if push else "",
        vapid_private_key="private-key" if push else "",
    )
    source = SyntheticQuoteSource(list_interval=timedelta(hours=1))
    subscriptions = SubscriptionRegistry()
    sink = (
        WebPushSink(subscriptions, settings.vapid_private_key, settings.vapid_subject)
        if push
        else LoggingSink()
    )
    return ServiceContainer(
        settings=settings,
        source=source,
        catalog=EntryCatalog(source),
        alert_repository=InMemoryAlertRepository(),
        subscriptions=subscriptions,
        sink=sink,
        state_store=JsonStateStore(state_file),
    )


def make_client(container: ServiceContainer) -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api")
    app.dependency_overrides[get_container] = lambda: container
    return TestClient(app)


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture
def container(state_file: Path) -> ServiceContainer:
    return make_container(state_file, push=True)


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    return make_client(container)


class TestPublicKey:
    def test_returns_plain_text_key(self, client: TestClient) -> None:
        response = client.get("/api/subscription/key")

        assert response.status_code == 200
        assert response.text == "public-key"
        assert response.headers["content-type"].startswith("text/plain")

    def test_not_configured(self, state_file: Path) -> None:
        client = make_client(make_container(state_file, push=False))

        assert client.get("/api/subscription/key").status_code == 404


class TestRegister:
    def test_register_persists_subscription(
        self, client: TestClient, container: ServiceContainer, state_file: Path
    ) -> None:
        response = client.post("/api/subscription/register", json={"subscription": SUBSCRIPTION})

        assert response.status_code == 201
        assert response.json() == {"endpoint": SUBSCRIPTION["endpoint"], "changed": True}
        assert SUBSCRIPTION["endpoint"] in container.subscriptions

        persisted = json.loads(state_file.read_text(encoding="utf-8"))
        assert persisted["subscriptions"][0]["keys"] == SUBSCRIPTION["keys"]

    def test_register_twice(self, client: TestClient, container: ServiceContainer) -> None:
        client.post("/api/subscription/register", json={"subscription": SUBSCRIPTION})
        response = client.post("/api/subscription/register", json={"subscription": SUBSCRIPTION})

        assert response.json()["changed"] is False
        assert len(container.subscriptions) == 1

    def test_register_requires_endpoint(self, client: TestClient) -> None:
        response = client.post("/api/subscription/register", json={"subscription": {"keys": {}}})

        assert response.status_code == 422


class TestUnregister:
    def test_unregister(self, client: TestClient, container: ServiceContainer) -> None:
        client.post("/api/subscription/register", json={"subscription": SUBSCRIPTION})

        response = client.post("/api/subscription/unregister", json={"subscription": SUBSCRIPTION})

        assert response.status_code == 200
        assert response.json()["changed"] is True
        assert len(container.subscriptions) == 0

    def test_unregister_unknown(self, client: TestClient) -> None:
        response = client.post("/api/subscription/unregister", json={"subscription": SUBSCRIPTION})

        assert response.status_code == 200
        assert response.json()["changed"] is False


class TestSendTest:
    def test_pushes_sample_activation(self, client: TestClient) -> None:
        client.post("/api/subscription/register", json={"subscription": SUBSCRIPTION})

        with patch("app.crypto_alerts.infrastructure.notifications.web_push.webpush") as mock_webpush:
            response = client.post("/api/subscription/test")

        assert response.status_code == 202
        assert response.json()["subscribers"] == 1
        mock_webpush.assert_called_once()
        data = json.loads(mock_webpush.call_args.kwargs["data"])
        assert data["title"] == "Crypto!"
        assert data["activation"]["id"] == "test"

    def test_not_configured(self, state_file: Path) -> None:
        client = make_client(make_container(state_file, push=False))

        assert client.post("/api/subscription/test").status_code == 503
