"""Service wiring shared by the evaluation loop and the HTTP API.

One ServiceContainer is built at startup and stored on ``app.state``; route
handlers reach it through the ``get_container`` dependency.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from app.core.config import Settings
from app.crypto_alerts.application.exceptions import PushNotConfiguredError
from app.crypto_alerts.application.interfaces.notification_sink import NotificationSink
from app.crypto_alerts.application.interfaces.quote_source import QuoteSource
from app.crypto_alerts.application.services.entry_catalog import EntryCatalog
from app.crypto_alerts.application.use_cases.evaluate_alerts import (
    CycleResult,
    EvaluateAlertsUseCase,
)
from app.crypto_alerts.domain.entities.activation import ActivationEvent
from app.crypto_alerts.domain.repositories.alert_repository import AlertRepository
from app.crypto_alerts.infrastructure.external import create_quote_source
from app.crypto_alerts.infrastructure.notifications import (
    LoggingSink,
    SubscriptionRegistry,
    WebPushSink,
)
from app.crypto_alerts.infrastructure.persistence import JsonStateStore
from app.crypto_alerts.infrastructure.repositories import InMemoryAlertRepository
from app.crypto_alerts.infrastructure.tasks import EvaluationLoop

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Explicit instances of every service of the application."""

    settings: Settings
    source: QuoteSource
    catalog: EntryCatalog
    alert_repository: AlertRepository
    subscriptions: SubscriptionRegistry
    sink: NotificationSink
    state_store: JsonStateStore
    evaluate_alerts: EvaluateAlertsUseCase = field(init=False)
    evaluation_loop: EvaluationLoop = field(init=False)
    _save_lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock, repr=False)

    def __post_init__(self) -> None:
        self.evaluate_alerts = EvaluateAlertsUseCase(
            alert_repository=self.alert_repository,
            catalog=self.catalog,
            source=self.source,
            sink=self.sink,
        )
        self.evaluation_loop = EvaluationLoop(
            self.evaluate_alerts,
            interval=self.source.quote_interval,
            on_activations=self._on_activations,
        )

    async def load_state(self) -> None:
        """Restore alerts and subscriptions from the state file."""
        state = await self.state_store.load()
        for record in state.alerts:
            try:
                await self.alert_repository.restore(record.to_alert())
            except ValueError as e:
                logger.warning(f"Skipping persisted alert: {e}")
        for subscription in state.subscriptions:
            if not subscription.get("endpoint"):
                logger.warning("Skipping persisted subscription without endpoint")
                continue
            self.subscriptions.register(subscription)

    async def persist(self) -> None:
        """Write the current alerts and subscriptions to the state file.

        A failed write is logged; the in-memory state stays authoritative.
        """
        async with self._save_lock:
            alerts = await self.alert_repository.list()
            try:
                await self.state_store.save(alerts, self.subscriptions.all())
            except OSError as e:
                logger.error(f"Failed to save state to {self.state_store.path}: {e}")

    async def send_test_notification(self) -> ActivationEvent:
        """Deliver a sample activation to every subscriber.

        Raises:
            PushNotConfiguredError: If no VAPID key pair is configured.
        """
        if not self.settings.push_enabled:
            raise PushNotConfiguredError()

        entries = await self.catalog.snapshot()
        quoted = [entry for entry in entries if entry.is_quoted]
        now = datetime.now(timezone.utc)
        if quoted:
            entry = quoted[0]
            event = ActivationEvent(
                alert_id="test",
                activated_at=now,
                symbol=entry.symbol,
                name=entry.name,
                url=entry.url,
                logo=entry.logo,
                price=entry.current_quote,
            )
        else:
            event = ActivationEvent(
                alert_id="test",
                activated_at=now,
                symbol="TEST",
                name="Test notification",
                url="",
                logo="",
                price=Decimal("0"),
            )
        await self.sink.deliver([event])
        return event

    async def close(self) -> None:
        await self.evaluation_loop.stop()
        await self.source.close()

    async def _on_activations(self, result: CycleResult) -> None:
        await self.persist()


def build_container(settings: Settings) -> ServiceContainer:
    """Assemble the services selected by configuration.

    Raises:
        RuntimeError: On fatal configuration (missing CMC key for the live
            source, missing VAPID keys in production).
    """
    source = create_quote_source(settings)
    subscriptions = SubscriptionRegistry()

    sink: NotificationSink
    if settings.push_enabled:
        sink = WebPushSink(
            subscriptions,
            vapid_private_key=settings.vapid_private_key,
            vapid_subject=settings.vapid_subject,
        )
    elif settings.is_production:
        raise RuntimeError(
            "Missing VAPID_PUBLIC_KEY / VAPID_PRIVATE_KEY environment variables. "
            "Generate a key pair with `vapid --gen`."
        )
    else:
        logger.warning("VAPID keys not configured, activations will only be logged")
        sink = LoggingSink()

    logger.info(f"Quote source: {source.title}")
    return ServiceContainer(
        settings=settings,
        source=source,
        catalog=EntryCatalog(source),
        alert_repository=InMemoryAlertRepository(),
        subscriptions=subscriptions,
        sink=sink,
        state_store=JsonStateStore(settings.state_file),
    )
