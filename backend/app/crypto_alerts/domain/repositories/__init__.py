"""Domain repository interfaces for the crypto alert engine.

This module defines abstract repository interfaces that establish the contract
between the domain layer and storage implementations. These interfaces:

- Allow the domain to remain independent of storage specifics
- Enable infrastructure adapters to implement storage logic
- Support dependency injection for testing with mock repositories
- Use async methods so the evaluation loop and the API share one store

Concrete implementations live in the infrastructure layer
(e.g., backend/app/crypto_alerts/infrastructure/repositories/).
"""

from app.crypto_alerts.domain.repositories.alert_repository import AlertRepository

__all__ = [
    "AlertRepository",
]
