"""FastAPI dependencies resolving the shared services."""

from fastapi import Request

from app.crypto_alerts.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Return the ServiceContainer built by the application lifespan."""
    return request.app.state.container
