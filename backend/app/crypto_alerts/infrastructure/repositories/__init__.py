"""Infrastructure repository implementations.

This module exports concrete repository implementations that fulfill
the abstract interfaces defined in the domain layer.
"""

from app.crypto_alerts.infrastructure.repositories.memory_alert_repository import (
    InMemoryAlertRepository,
)

__all__ = [
    "InMemoryAlertRepository",
]
