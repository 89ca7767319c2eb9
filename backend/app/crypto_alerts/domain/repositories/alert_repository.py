"""Abstract repository interface for Alert entities."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Callable, List, Optional

from ..entities.alert import Alert, AlertDefinition


class AlertRepository(ABC):
    """Abstract store for alert definitions and their activation status.

    Alerts are keyed by an opaque identifier assigned on creation. Batch
    operations are all-or-nothing: if any requested id is unknown, nothing
    changes and AlertNotFoundError is raised. All methods are async so the
    engine and the API can share one store.
    """

    @abstractmethod
    async def add(self, definition: AlertDefinition) -> str:
        """Store a new alert with activation unset.

        Args:
            definition: Condition and delivery fields of the alert.

        Returns:
            The freshly generated alert id.
        """
        pass

    @abstractmethod
    async def update(self, alert_id: str, definition: AlertDefinition) -> Alert:
        """Replace every field of an alert except its id and activation.

        Args:
            alert_id: Identifier of the alert to update.
            definition: New condition and delivery fields.

        Returns:
            The updated alert.

        Raises:
            AlertNotFoundError: If no alert has this id.
        """
        pass

    @abstractmethod
    async def delete(self, alert_ids: Sequence[str]) -> None:
        """Remove every alert whose id is listed.

        Raises:
            AlertNotFoundError: If any id is unknown (no alert is removed).
        """
        pass

    @abstractmethod
    async def list(self, alert_ids: Optional[Sequence[str]] = None) -> List[Alert]:
        """Return alerts in store order.

        Args:
            alert_ids: Restrict the result to these ids, or None for all alerts.

        Raises:
            AlertNotFoundError: If any requested id is unknown.
        """
        pass

    @abstractmethod
    async def restore(self, alert: Alert) -> None:
        """Insert a previously persisted alert, keeping its id and activation.

        Raises:
            ValueError: If an alert with the same id already exists.
        """
        pass

    @abstractmethod
    async def activate(
        self,
        alert_id: str,
        activated_at: datetime,
        condition: Optional[Callable[[Alert], bool]] = None,
    ) -> Optional[Alert]:
        """Stamp the activation of an alert if it is still unset.

        The condition is checked against the alert as stored, atomically with
        the activation, so a concurrent update or delete is never overridden.

        Args:
            alert_id: Identifier of the alert to activate.
            activated_at: Activation moment.
            condition: Predicate the stored alert must satisfy.

        Returns:
            The activated alert, or None if it is gone, already activated, or
            fails the condition.
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored alerts."""
        pass
