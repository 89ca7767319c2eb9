"""Data Transfer Objects for alert-related API requests and responses.

These DTOs represent the external contract for alert operations exposed
through the API layer. They are decoupled from domain entities and
optimized for JSON serialization.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.crypto_alerts.domain.entities.alert import Alert, AlertDefinition, AlertState, Operator


class AlertDefinitionRequest(BaseModel):
    """Request payload carrying every editable alert field.

    Used both to create an alert and to replace an existing alert's fields.
    """

    model_config = ConfigDict(
        json_encoders={Decimal: lambda v: float(v)},
    )

    symbol: str = Field(min_length=1, description="Symbol of the watched asset (e.g., 'BTC')")
    operator: Operator = Field(
        description="'higher' fires on a move above the threshold, 'lower' below, "
        "'cross' on a move to either side"
    )
    threshold: Decimal = Field(description="Price level compared against the asset quote")
    expiration: Optional[datetime] = Field(
        default=None,
        description="Moment after which the alert is no longer evaluated",
    )
    vibration: bool = Field(default=False, description="Ask the client to vibrate on delivery")
    notification: bool = Field(default=True, description="Ask the client to show a notification")

    @field_validator("expiration")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are taken as UTC so they compare with the engine clock
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_definition(self) -> AlertDefinition:
        return AlertDefinition(
            symbol=self.symbol,
            operator=self.operator,
            threshold=self.threshold,
            expiration=self.expiration,
            vibration=self.vibration,
            notification=self.notification,
        )


class CreateAlertResponse(BaseModel):
    """Identifier of a newly created alert."""

    id: str = Field(description="Unique alert identifier, needed for later updates")


class AlertDTO(BaseModel):
    """Alert data for API responses."""

    model_config = ConfigDict(
        json_encoders={Decimal: lambda v: float(v)},
        from_attributes=True,
    )

    id: str = Field(description="Unique alert identifier")
    symbol: str = Field(description="Symbol of the watched asset")
    operator: Operator = Field(description="Condition kind")
    threshold: Decimal = Field(description="Price threshold")
    expiration: Optional[datetime] = Field(default=None, description="Evaluation deadline (UTC)")
    vibration: bool = Field(description="Vibration delivery hint")
    notification: bool = Field(description="Notification delivery hint")
    activation: Optional[datetime] = Field(
        default=None,
        description="When the condition fired (UTC), unset while not activated"
    )
    state: AlertState = Field(description="pending, activated or expired")

    @classmethod
    def from_alert(cls, alert: Alert, now: datetime) -> "AlertDTO":
        return cls(
            id=alert.id,
            symbol=alert.symbol,
            operator=alert.operator,
            threshold=alert.threshold,
            expiration=alert.expiration,
            vibration=alert.vibration,
            notification=alert.notification,
            activation=alert.activation,
            state=alert.state(now),
        )


class AlertListDTO(BaseModel):
    """List of alerts for API responses."""

    alerts: list[AlertDTO] = Field(default_factory=list, description="List of alerts")
    total: int = Field(description="Number of alerts returned")
