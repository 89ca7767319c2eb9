"""In-memory implementation of the AlertRepository interface.

Alerts live in an insertion-ordered dict keyed by id. Every operation runs
under one asyncio.Lock so the API and the evaluation loop never observe a
half-applied batch. Callers always receive copies.
"""

import asyncio
import logging
import uuid
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

from app.crypto_alerts.application.exceptions import AlertNotFoundError
from app.crypto_alerts.domain.entities.alert import Alert, AlertDefinition
from app.crypto_alerts.domain.repositories.alert_repository import AlertRepository

logger = logging.getLogger(__name__)


class InMemoryAlertRepository(AlertRepository):
    """Process-local alert store.

    Attributes:
        _alerts: Alerts keyed by id, in creation order.
        _lock: Mutual-exclusion boundary for read-modify-write sequences.
    """

    def __init__(self) -> None:
        self._alerts: dict[str, Alert] = {}
        self._lock = asyncio.Lock()

    def _new_id(self) -> str:
        alert_id = str(uuid.uuid4())
        while alert_id in self._alerts:
            alert_id = str(uuid.uuid4())
        return alert_id

    def _missing(self, alert_ids: Sequence[str]) -> List[str]:
        return [alert_id for alert_id in alert_ids if alert_id not in self._alerts]

    async def add(self, definition: AlertDefinition) -> str:
        async with self._lock:
            alert_id = self._new_id()
            self._alerts[alert_id] = Alert.from_definition(alert_id, definition)
            return alert_id

    async def update(self, alert_id: str, definition: AlertDefinition) -> Alert:
        async with self._lock:
            alert = self._alerts.get(alert_id)
            if alert is None:
                raise AlertNotFoundError([alert_id])
            alert.apply(definition)
            return replace(alert)

    async def delete(self, alert_ids: Sequence[str]) -> None:
        async with self._lock:
            missing = self._missing(alert_ids)
            if missing:
                raise AlertNotFoundError(missing)
            for alert_id in alert_ids:
                self._alerts.pop(alert_id, None)

    async def list(self, alert_ids: Optional[Sequence[str]] = None) -> List[Alert]:
        async with self._lock:
            if alert_ids is None:
                return [replace(alert) for alert in self._alerts.values()]

            missing = self._missing(alert_ids)
            if missing:
                raise AlertNotFoundError(missing)
            wanted = set(alert_ids)
            return [replace(alert) for alert in self._alerts.values() if alert.id in wanted]

    async def restore(self, alert: Alert) -> None:
        async with self._lock:
            if alert.id in self._alerts:
                raise ValueError(f"Alert {alert.id} already exists")
            self._alerts[alert.id] = replace(alert)
            logger.debug(f"Restored alert {alert.id} on {alert.symbol}")

    async def activate(
        self,
        alert_id: str,
        activated_at: datetime,
        condition: Optional[Callable[[Alert], bool]] = None,
    ) -> Optional[Alert]:
        async with self._lock:
            alert = self._alerts.get(alert_id)
            if alert is None or alert.is_activated:
                return None
            if condition is not None and not condition(replace(alert)):
                return None
            alert.activate(activated_at)
            return replace(alert)

    async def count(self) -> int:
        async with self._lock:
            return len(self._alerts)
