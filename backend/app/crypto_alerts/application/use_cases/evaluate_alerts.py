"""Use case running one evaluation cycle of the alert engine.

A cycle:
1. Skips quoting entirely when no alert exists
2. Collects the distinct symbols referenced by the alerts
3. Fetches current prices for those symbols from the quote source
4. Shifts the quote pair of every catalog entry present in the result
   and re-reads the alerts, since they may have changed during the fetch
5. Evaluates every pending alert whose entry was refreshed
6. Hands the activation batch, if any, to the notification sink once
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from app.crypto_alerts.application.interfaces.notification_sink import NotificationSink
from app.crypto_alerts.application.interfaces.quote_source import QuoteSource
from app.crypto_alerts.application.services.entry_catalog import EntryCatalog
from app.crypto_alerts.domain.entities.activation import ActivationEvent
from app.crypto_alerts.domain.entities.alert import Alert
from app.crypto_alerts.domain.repositories.alert_repository import AlertRepository
from app.crypto_alerts.domain.services.alert_policy import AlertPolicy

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CycleResult:
    """Summary of one evaluation cycle.

    Attributes:
        idle: True when no alert existed and quoting was skipped.
        symbols_requested: Distinct symbols sent to the quote source.
        entries_updated: Number of catalog entries whose quotes moved.
        alerts_evaluated: Pending alerts checked against a refreshed entry.
        activations: Activations produced by the cycle.
        delivered: Whether the sink accepted the batch without raising.
        timestamp: Evaluation moment.
    """

    idle: bool = False
    symbols_requested: list[str] = field(default_factory=list)
    entries_updated: int = 0
    alerts_evaluated: int = 0
    activations: list[ActivationEvent] = field(default_factory=list)
    delivered: bool = False
    timestamp: Optional[datetime] = None


class EvaluateAlertsUseCase:
    """Application service detecting alert activations on fresh quotes.

    Quote source failures propagate as SourceUnavailableError and abort the cycle
    before any entry or alert is touched. Sink failures are logged and never
    affect engine state.
    """

    def __init__(
        self,
        alert_repository: AlertRepository,
        catalog: EntryCatalog,
        source: QuoteSource,
        sink: NotificationSink,
        policy: Optional[AlertPolicy] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the use case with required dependencies.

        Args:
            alert_repository: Store of alerts and activations.
            catalog: Entry catalog receiving the quotes.
            source: Quote source queried each cycle.
            sink: Consumer of activation batches.
            policy: Alert policy (default AlertPolicy()).
            clock: Returns the evaluation moment (injectable for tests).
        """
        self._alert_repository = alert_repository
        self._catalog = catalog
        self._source = source
        self._sink = sink
        self._policy = policy or AlertPolicy()
        self._clock = clock

    async def execute(self) -> CycleResult:
        """Run one cycle.

        Returns:
            Summary of the cycle.

        Raises:
            SourceUnavailableError: If the quote request failed.
        """
        alerts = await self._alert_repository.list()
        if not alerts:
            logger.debug("No alert configured, skipping quotes")
            return CycleResult(idle=True, timestamp=self._clock())

        symbols = sorted({alert.symbol for alert in alerts})
        quotes = await self._source.fetch_quotes(symbols)
        updated = await self._catalog.apply_quotes(quotes)

        now = self._clock()
        result = CycleResult(
            symbols_requested=symbols,
            entries_updated=len(updated),
            timestamp=now,
        )

        def triggers(stored: Alert) -> bool:
            entry = updated.get(stored.symbol)
            return entry is not None and self._policy.should_trigger(stored, entry, now)

        # Definitions may have changed while quotes were fetched
        for alert in await self._alert_repository.list():
            if not self._policy.is_pending(alert, now):
                continue

            if alert.symbol not in updated:
                # No price this cycle
                continue

            result.alerts_evaluated += 1
            if not triggers(alert):
                continue

            # Re-checked against the stored alert atomically with the activation
            activated = await self._alert_repository.activate(alert.id, now, condition=triggers)
            if activated is None:
                continue

            alert = activated
            entry = updated[alert.symbol]
            event = ActivationEvent.for_alert(alert, entry, now)
            result.activations.append(event)
            logger.info(
                f"Alert {alert.id} activated: {entry.symbol} {alert.operator.value} "
                f"{alert.threshold} at {entry.current_quote}"
            )

        if result.activations:
            result.delivered = await self._deliver(result.activations)

        logger.debug(
            f"Cycle complete: {len(symbols)} symbols, {result.entries_updated} entries updated, "
            f"{result.alerts_evaluated} alerts evaluated, {len(result.activations)} activations"
        )
        return result

    async def _deliver(self, batch: list[ActivationEvent]) -> bool:
        try:
            await self._sink.deliver(batch)
            return True
        except Exception as e:
            logger.exception(f"Failed to deliver {len(batch)} activation(s): {e}")
            return False
