"""Application layer - use cases and orchestration.

This layer contains:
- DTOs: Data Transfer Objects for API input/output
- Interfaces: QuoteSource and NotificationSink ports
- Services: the EntryCatalog cache
- Use Cases: alert management and the evaluation cycle
- Exceptions: Application-level error types
"""

from app.crypto_alerts.application.dto import (
    AlertDefinitionRequest,
    AlertDTO,
    AlertListDTO,
    CreateAlertResponse,
    EntryDTO,
    EntryListDTO,
    PushSubscription,
    SubscriptionRequest,
)
from app.crypto_alerts.application.exceptions import (
    AlertNotFoundError,
    ApplicationError,
    PushNotConfiguredError,
    SourceUnavailableError,
)
from app.crypto_alerts.application.services import EntryCatalog
from app.crypto_alerts.application.use_cases import (
    CreateAlertUseCase,
    CycleResult,
    DeleteAlertsUseCase,
    EvaluateAlertsUseCase,
    ListAlertsUseCase,
    UpdateAlertUseCase,
)

__all__ = [
    # DTOs
    "AlertDefinitionRequest",
    "AlertDTO",
    "AlertListDTO",
    "CreateAlertResponse",
    "EntryDTO",
    "EntryListDTO",
    "PushSubscription",
    "SubscriptionRequest",
    # Services
    "EntryCatalog",
    # Use Cases
    "CreateAlertUseCase",
    "CycleResult",
    "DeleteAlertsUseCase",
    "EvaluateAlertsUseCase",
    "ListAlertsUseCase",
    "UpdateAlertUseCase",
    # Exceptions
    "AlertNotFoundError",
    "ApplicationError",
    "PushNotConfiguredError",
    "SourceUnavailableError",
]
