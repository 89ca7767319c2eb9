"""Use cases for creating, updating, deleting and listing price alerts.

Each use case orchestrates the AlertRepository and converts between request
DTOs and domain entities. Unknown ids surface as AlertNotFoundError.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Callable, Optional

from app.crypto_alerts.application.dto.alert_dto import AlertDefinitionRequest, AlertDTO
from app.crypto_alerts.domain.repositories.alert_repository import AlertRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CreateAlertUseCase:
    """Application service for creating price alerts."""

    def __init__(self, alert_repository: AlertRepository) -> None:
        """Initialize the use case with required dependencies.

        Args:
            alert_repository: Repository for alert storage.
        """
        self._alert_repository = alert_repository

    async def execute(self, request: AlertDefinitionRequest) -> str:
        """Execute the alert creation.

        Args:
            request: Condition and delivery fields of the new alert.

        Returns:
            The id assigned to the alert.
        """
        alert_id = await self._alert_repository.add(request.to_definition())
        logger.info(f"Add alert {alert_id} on {request.symbol} {request.operator.value} {request.threshold}")
        return alert_id


class UpdateAlertUseCase:
    """Application service replacing the editable fields of an alert.

    The activation timestamp is never reset by an update.
    """

    def __init__(
        self,
        alert_repository: AlertRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._alert_repository = alert_repository
        self._clock = clock

    async def execute(self, alert_id: str, request: AlertDefinitionRequest) -> AlertDTO:
        """Execute the alert update.

        Args:
            alert_id: Identifier of the alert to update.
            request: New condition and delivery fields.

        Returns:
            AlertDTO of the updated alert.

        Raises:
            AlertNotFoundError: If no alert has this id.
        """
        alert = await self._alert_repository.update(alert_id, request.to_definition())
        logger.info(f"Update alert {alert_id} on {request.symbol} {request.operator.value} {request.threshold}")
        return AlertDTO.from_alert(alert, self._clock())


class DeleteAlertsUseCase:
    """Application service deleting a batch of alerts, all or nothing."""

    def __init__(self, alert_repository: AlertRepository) -> None:
        self._alert_repository = alert_repository

    async def execute(self, alert_ids: Sequence[str]) -> None:
        """Execute the batch deletion.

        Raises:
            AlertNotFoundError: If any id is unknown (nothing is deleted).
        """
        await self._alert_repository.delete(alert_ids)
        logger.info(f"Delete alerts {', '.join(alert_ids)}")


class ListAlertsUseCase:
    """Application service listing alerts, optionally restricted to some ids."""

    def __init__(
        self,
        alert_repository: AlertRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._alert_repository = alert_repository
        self._clock = clock

    async def execute(self, alert_ids: Optional[Sequence[str]] = None) -> list[AlertDTO]:
        """Execute the listing.

        Args:
            alert_ids: Ids to return, or None for every alert.

        Returns:
            AlertDTOs in store order.

        Raises:
            AlertNotFoundError: If any requested id is unknown.
        """
        alerts = await self._alert_repository.list(alert_ids)
        now = self._clock()
        return [AlertDTO.from_alert(alert, now) for alert in alerts]
