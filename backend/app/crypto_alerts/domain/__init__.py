# Domain layer - pure business rules, no framework dependencies

from app.crypto_alerts.domain.entities import (
    ActivationEvent,
    Alert,
    AlertDefinition,
    AlertState,
    Entry,
    Operator,
)
from app.crypto_alerts.domain.services import AlertPolicy, condition_holds

__all__ = [
    # Entities and enums
    "ActivationEvent",
    "Alert",
    "AlertDefinition",
    "AlertState",
    "Entry",
    "Operator",
    # Services
    "AlertPolicy",
    "condition_holds",
]
