"""Data Transfer Objects for web push subscriptions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PushSubscription(BaseModel):
    """A browser PushSubscription as serialized by the Push API.

    Unknown fields are kept so the record can be handed back to the push
    service unchanged.
    """

    model_config = ConfigDict(extra="allow")

    endpoint: str = Field(min_length=1, description="Push service endpoint URL")
    keys: dict[str, str] = Field(
        default_factory=dict,
        description="Client public keys ('p256dh' and 'auth')",
    )
    expirationTime: Optional[float] = Field(default=None, description="Subscription expiry (ms)")


class SubscriptionRequest(BaseModel):
    """Request payload for subscription register/unregister."""

    subscription: PushSubscription
