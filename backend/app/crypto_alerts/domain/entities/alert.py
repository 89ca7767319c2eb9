"""Alert entity representing a user's price condition on one asset."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class Operator(Enum):
    """Condition kinds comparing an asset's price against a threshold."""

    HIGHER = "higher"
    LOWER = "lower"
    CROSS = "cross"


class AlertState(Enum):
    """Evaluation state derived from an alert's fields."""

    PENDING = "pending"
    ACTIVATED = "activated"
    EXPIRED = "expired"


@dataclass(frozen=True)
class AlertDefinition:
    """The user-editable part of an alert.

    Attributes:
        symbol: Symbol of the watched entry (not checked against the catalog).
        operator: Condition kind.
        threshold: Price level the condition compares against.
        expiration: Moment after which the alert is no longer evaluated.
        vibration: Delivery hint for the client.
        notification: Delivery hint for the client.
    """

    symbol: str
    operator: Operator
    threshold: Decimal
    expiration: Optional[datetime] = None
    vibration: bool = False
    notification: bool = True


@dataclass
class Alert:
    """Domain entity for a stored alert.

    The id is assigned once by the store. The activation timestamp is set at most
    once, when the condition first holds, and is never cleared by an update.

    Attributes:
        id: Opaque unique identifier.
        symbol: Symbol of the watched entry.
        operator: Condition kind.
        threshold: Price level the condition compares against.
        expiration: Moment after which the alert is no longer evaluated.
        vibration: Delivery hint for the client.
        notification: Delivery hint for the client.
        activation: When the condition fired, None while not activated.
    """

    id: str
    symbol: str
    operator: Operator
    threshold: Decimal
    expiration: Optional[datetime] = None
    vibration: bool = False
    notification: bool = True
    activation: Optional[datetime] = None

    @classmethod
    def from_definition(cls, alert_id: str, definition: AlertDefinition) -> "Alert":
        return cls(
            id=alert_id,
            symbol=definition.symbol,
            operator=definition.operator,
            threshold=definition.threshold,
            expiration=definition.expiration,
            vibration=definition.vibration,
            notification=definition.notification,
        )

    def apply(self, definition: AlertDefinition) -> None:
        """Replace every editable field, keeping id and activation."""
        self.symbol = definition.symbol
        self.operator = definition.operator
        self.threshold = definition.threshold
        self.expiration = definition.expiration
        self.vibration = definition.vibration
        self.notification = definition.notification

    @property
    def is_activated(self) -> bool:
        return self.activation is not None

    def is_expired(self, now: datetime) -> bool:
        """Check whether the expiration moment has passed."""
        return self.expiration is not None and now > self.expiration

    def state(self, now: datetime) -> AlertState:
        if self.is_activated:
            return AlertState.ACTIVATED
        if self.is_expired(now):
            return AlertState.EXPIRED
        return AlertState.PENDING

    def activate(self, at: datetime) -> None:
        """Record the activation moment.

        Raises:
            ValueError: If the alert was already activated.
        """
        if self.activation is not None:
            raise ValueError(f"Alert {self.id} is already activated")
        self.activation = at
