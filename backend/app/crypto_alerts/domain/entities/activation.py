"""Activation event emitted when an alert's condition fires."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.crypto_alerts.domain.entities.alert import Alert
from app.crypto_alerts.domain.entities.entry import Entry


@dataclass(frozen=True)
class ActivationEvent:
    """Immutable record of one alert activation, ready for delivery.

    Attributes:
        alert_id: Identifier of the activated alert.
        activated_at: When the activation was recorded.
        symbol: Symbol of the entry that triggered the alert.
        name: Entry display name.
        url: Entry reference page.
        logo: Entry logo URL.
        price: Current quote that made the condition true.
    """

    alert_id: str
    activated_at: datetime
    symbol: str
    name: str
    url: str
    logo: str
    price: Decimal

    @classmethod
    def for_alert(cls, alert: Alert, entry: Entry, activated_at: datetime) -> "ActivationEvent":
        if entry.current_quote is None:
            raise ValueError(f"Entry {entry.symbol} has no current quote")
        return cls(
            alert_id=alert.id,
            activated_at=activated_at,
            symbol=entry.symbol,
            name=entry.name,
            url=entry.url,
            logo=entry.logo,
            price=entry.current_quote,
        )

    def to_payload(self) -> dict:
        """Serialize for push payloads (epoch milliseconds, float price)."""
        return {
            "id": self.alert_id,
            "activation": int(self.activated_at.timestamp() * 1000),
            "symbol": self.symbol,
            "name": self.name,
            "url": self.url,
            "logo": self.logo,
            "price": float(self.price),
        }
