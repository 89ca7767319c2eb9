"""Domain entities for the crypto alert engine.

This module exports the core business entities used throughout the domain layer.
"""

from app.crypto_alerts.domain.entities.activation import ActivationEvent
from app.crypto_alerts.domain.entities.alert import Alert, AlertDefinition, AlertState, Operator
from app.crypto_alerts.domain.entities.entry import Entry

__all__ = [
    "ActivationEvent",
    "Alert",
    "AlertDefinition",
    "AlertState",
    "Entry",
    "Operator",
]
