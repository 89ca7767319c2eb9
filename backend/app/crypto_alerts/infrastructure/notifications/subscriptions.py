"""Registry of web push subscriptions keyed by endpoint."""

import logging
from collections.abc import Iterable
from typing import Any

logger = logging.getLogger(__name__)


class SubscriptionRegistry:
    """Set of push subscriptions, one per endpoint.

    Subscriptions are stored as plain dicts so they can be handed to the push
    library and written to the state file unchanged. Methods contain no await
    point, so each call is atomic on the event loop.
    """

    def __init__(self, subscriptions: Iterable[dict[str, Any]] = ()) -> None:
        self._subscriptions: dict[str, dict[str, Any]] = {}
        for subscription in subscriptions:
            self._subscriptions[subscription["endpoint"]] = dict(subscription)

    def register(self, subscription: dict[str, Any]) -> bool:
        """Add a subscription.

        Returns:
            True if the endpoint was not registered yet.
        """
        endpoint = subscription["endpoint"]
        if endpoint in self._subscriptions:
            return False
        self._subscriptions[endpoint] = dict(subscription)
        logger.info(f"Subscription registered {endpoint}")
        return True

    def unregister(self, endpoint: str) -> bool:
        """Remove the subscription of an endpoint.

        Returns:
            True if the endpoint was registered.
        """
        if self._subscriptions.pop(endpoint, None) is None:
            return False
        logger.info(f"Subscription unregistered {endpoint}")
        return True

    def remove(self, endpoints: Iterable[str]) -> int:
        """Drop several endpoints, ignoring unknown ones.

        Returns:
            Number of subscriptions removed.
        """
        removed = 0
        for endpoint in endpoints:
            if self._subscriptions.pop(endpoint, None) is not None:
                removed += 1
        return removed

    def all(self) -> list[dict[str, Any]]:
        """Return copies of every subscription, in registration order."""
        return [dict(subscription) for subscription in self._subscriptions.values()]

    def __contains__(self, endpoint: object) -> bool:
        return endpoint in self._subscriptions

    def __len__(self) -> int:
        return len(self._subscriptions)
