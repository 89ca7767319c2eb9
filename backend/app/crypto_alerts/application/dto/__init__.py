"""Data transfer objects for application layer."""

from app.crypto_alerts.application.dto.alert_dto import (
    AlertDefinitionRequest,
    AlertDTO,
    AlertListDTO,
    CreateAlertResponse,
)
from app.crypto_alerts.application.dto.entry_dto import EntryDTO, EntryListDTO
from app.crypto_alerts.application.dto.subscription_dto import (
    PushSubscription,
    SubscriptionRequest,
)

__all__ = [
    # Alert DTOs
    "AlertDefinitionRequest",
    "AlertDTO",
    "AlertListDTO",
    "CreateAlertResponse",
    # Entry DTOs
    "EntryDTO",
    "EntryListDTO",
    # Subscription DTOs
    "PushSubscription",
    "SubscriptionRequest",
]
