"""Application use cases for orchestrating domain logic."""

from app.crypto_alerts.application.use_cases.evaluate_alerts import (
    CycleResult,
    EvaluateAlertsUseCase,
)
from app.crypto_alerts.application.use_cases.manage_alerts import (
    CreateAlertUseCase,
    DeleteAlertsUseCase,
    ListAlertsUseCase,
    UpdateAlertUseCase,
)

__all__ = [
    "CreateAlertUseCase",
    "CycleResult",
    "DeleteAlertsUseCase",
    "EvaluateAlertsUseCase",
    "ListAlertsUseCase",
    "UpdateAlertUseCase",
]
