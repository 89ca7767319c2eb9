"""Web push notification sink.

Each activation is pushed to every registered subscription. Deliveries run
concurrently in worker threads and each one captures its own failure; failed
subscriptions are pruned once every delivery has completed.
"""

import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Any

from pywebpush import WebPushException, webpush

from app.crypto_alerts.application.interfaces.notification_sink import NotificationSink
from app.crypto_alerts.domain.entities.activation import ActivationEvent
from app.crypto_alerts.infrastructure.notifications.subscriptions import SubscriptionRegistry

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Crypto!"

# Push services may keep undelivered messages for up to a day
DEFAULT_TTL_SECONDS = 24 * 60 * 60


class WebPushSink(NotificationSink):
    """NotificationSink delivering activations through the Web Push protocol.

    Attributes:
        _subscriptions: Registry of subscriber endpoints.
        _vapid_private_key: VAPID private key used to sign push requests.
        _vapid_subject: VAPID ``sub`` claim (mailto: or https: URL).
    """

    def __init__(
        self,
        subscriptions: SubscriptionRegistry,
        vapid_private_key: str,
        vapid_subject: str,
        title: str = DEFAULT_TITLE,
        ttl: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        self._subscriptions = subscriptions
        self._vapid_private_key = vapid_private_key
        self._vapid_subject = vapid_subject
        self._title = title
        self._ttl = ttl

    async def deliver(self, batch: Sequence[ActivationEvent]) -> None:
        for event in batch:
            logger.info(f"Push notification for {event.symbol} at {event.price}")
            await self.broadcast(event.to_payload())

    async def broadcast(self, activation: dict[str, Any]) -> int:
        """Push one activation payload to every subscriber.

        Args:
            activation: Serialized activation.

        Returns:
            Number of subscribers that accepted the message.
        """
        subscribers = self._subscriptions.all()
        if not subscribers:
            logger.debug("No push subscriber registered")
            return 0

        data = json.dumps({"title": self._title, "activation": activation})
        outcomes = await asyncio.gather(
            *(self._push(subscription, data) for subscription in subscribers)
        )

        failed = [
            subscription["endpoint"]
            for subscription, delivered in zip(subscribers, outcomes)
            if not delivered
        ]
        if failed:
            removed = self._subscriptions.remove(failed)
            logger.warning(f"Pruned {removed} failing push subscription(s)")

        return len(subscribers) - len(failed)

    async def _push(self, subscription: dict[str, Any], data: str) -> bool:
        endpoint = subscription.get("endpoint", "?")
        try:
            await asyncio.to_thread(
                webpush,
                subscription_info=subscription,
                data=data,
                vapid_private_key=self._vapid_private_key,
                # pywebpush mutates the claims, so each push gets its own dict
                vapid_claims={"sub": self._vapid_subject},
                ttl=self._ttl,
            )
        except WebPushException as e:
            status = e.response.status_code if e.response is not None else "n/a"
            logger.error(f"ERROR in sending push notification to {endpoint} (status {status}): {e}")
            return False
        except Exception as e:
            logger.error(f"ERROR in sending push notification to {endpoint}: {e}")
            return False

        logger.debug(f"Push notification sent to {endpoint}")
        return True
