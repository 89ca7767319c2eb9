"""Development sink that only logs activations."""

import logging
from collections.abc import Sequence

from app.crypto_alerts.application.interfaces.notification_sink import NotificationSink
from app.crypto_alerts.domain.entities.activation import ActivationEvent

logger = logging.getLogger(__name__)


class LoggingSink(NotificationSink):
    """NotificationSink used when web push is not configured."""

    async def deliver(self, batch: Sequence[ActivationEvent]) -> None:
        for event in batch:
            logger.info(
                f"[DEV MODE] Activation {event.alert_id}: {event.name} ({event.symbol}) "
                f"at {event.price}, {event.url}"
            )
