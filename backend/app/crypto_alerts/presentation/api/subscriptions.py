"""Web push subscription endpoints.

- GET /api/subscription/key - VAPID public key for PushManager.subscribe()
- POST /api/subscription/register - Register a browser subscription
- POST /api/subscription/unregister - Remove a browser subscription
- POST /api/subscription/test - Push a sample activation to every subscriber
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from app.crypto_alerts.application.dto.subscription_dto import SubscriptionRequest
from app.crypto_alerts.application.exceptions import PushNotConfiguredError
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.presentation.api.dependencies import get_container

router = APIRouter()


class SubscriptionResponse(BaseModel):
    """Outcome of a register or unregister call."""

    endpoint: str
    changed: bool


@router.get("/subscription/key", response_class=PlainTextResponse)
async def get_public_key(
    container: ServiceContainer = Depends(get_container),
) -> str:
    """Get the VAPID public key used as applicationServerKey.

    Raises:
        HTTPException: 404 if web push is not configured.
    """
    if not container.settings.push_enabled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=PushNotConfiguredError().message,
        )
    return container.settings.vapid_public_key


@router.post(
    "/subscription/register",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_subscription(
    request: SubscriptionRequest,
    container: ServiceContainer = Depends(get_container),
) -> SubscriptionResponse:
    """Register a push subscription; registering twice is a no-op."""
    subscription = request.subscription.model_dump()
    changed = container.subscriptions.register(subscription)
    if changed:
        await container.persist()
    return SubscriptionResponse(endpoint=request.subscription.endpoint, changed=changed)


@router.post("/subscription/unregister", response_model=SubscriptionResponse)
async def unregister_subscription(
    request: SubscriptionRequest,
    container: ServiceContainer = Depends(get_container),
) -> SubscriptionResponse:
    """Remove a push subscription; unknown endpoints are ignored."""
    changed = container.subscriptions.unregister(request.subscription.endpoint)
    if changed:
        await container.persist()
    return SubscriptionResponse(endpoint=request.subscription.endpoint, changed=changed)


@router.post("/subscription/test", status_code=status.HTTP_202_ACCEPTED)
async def send_test_notification(
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    """Push a sample activation to every registered subscriber.

    Raises:
        HTTPException: 503 if web push is not configured.
    """
    try:
        event = await container.send_test_notification()
    except PushNotConfiguredError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e

    # Subscribers failing this push were pruned during delivery
    await container.persist()
    return {"status": "sent", "subscribers": len(container.subscriptions), "activation": event.to_payload()}
