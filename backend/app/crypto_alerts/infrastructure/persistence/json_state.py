"""JSON file persistence for alerts and push subscriptions.

The whole state is one small document, rewritten after every change:

    {"alerts": [AlertRecord...], "subscriptions": [{"endpoint": ..., "keys": {...}}]}
"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.crypto_alerts.domain.entities.alert import Alert, Operator

logger = logging.getLogger(__name__)


class AlertRecord(BaseModel):
    """Stored form of an alert, including its id and activation."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "uuid"))
    symbol: str
    operator: Operator
    threshold: Decimal
    expiration: Optional[datetime] = None
    vibration: bool = False
    notification: bool = True
    activation: Optional[datetime] = None

    @field_validator("expiration", "activation")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_alert(cls, alert: Alert) -> "AlertRecord":
        return cls(
            id=alert.id,
            symbol=alert.symbol,
            operator=alert.operator,
            threshold=alert.threshold,
            expiration=alert.expiration,
            vibration=alert.vibration,
            notification=alert.notification,
            activation=alert.activation,
        )

    def to_alert(self) -> Alert:
        return Alert(
            id=self.id,
            symbol=self.symbol,
            operator=self.operator,
            threshold=self.threshold,
            expiration=self.expiration,
            vibration=self.vibration,
            notification=self.notification,
            activation=self.activation,
        )


class PersistedState(BaseModel):
    alerts: list[AlertRecord] = Field(default_factory=list)
    subscriptions: list[dict[str, Any]] = Field(default_factory=list)


class JsonStateStore:
    """Reads and atomically rewrites the state file.

    Attributes:
        path: Location of the JSON document.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def load(self) -> PersistedState:
        """Read the state file.

        A missing or unreadable file yields an empty state, so a corrupted
        file never prevents the service from starting.
        """
        return await asyncio.to_thread(self._read)

    async def save(self, alerts: list[Alert], subscriptions: list[dict[str, Any]]) -> None:
        state = PersistedState(
            alerts=[AlertRecord.from_alert(alert) for alert in alerts],
            subscriptions=subscriptions,
        )
        await asyncio.to_thread(self._write, state.model_dump_json(indent=2))
        logger.debug(
            f"Saved {len(state.alerts)} alert(s) and "
            f"{len(state.subscriptions)} subscription(s) to {self.path}"
        )

    def _read(self) -> PersistedState:
        if not self.path.exists():
            logger.info(f"No state file at {self.path}, starting empty")
            return PersistedState()

        try:
            state = PersistedState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Unreadable state file {self.path}, starting empty: {e}")
            return PersistedState()

        logger.info(
            f"Loaded {len(state.alerts)} alert(s) and "
            f"{len(state.subscriptions)} subscription(s) from {self.path}"
        )
        return state

    def _write(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, self.path)
