"""Notification sink interface for delivering activation batches."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.crypto_alerts.domain.entities.activation import ActivationEvent


class NotificationSink(ABC):
    """Consumer of activation batches.

    Delivery is best-effort: implementations isolate per-subscriber failures and
    never let them reach the evaluation loop's state.
    """

    @abstractmethod
    async def deliver(self, batch: Sequence[ActivationEvent]) -> None:
        """Deliver one cycle's activations to subscribers.

        Args:
            batch: Activations produced by a single evaluation cycle.
        """
        ...
