# FastAPI routers - entries, alerts, subscriptions, health
from app.crypto_alerts.presentation.api import alerts, entries, health, subscriptions

__all__ = ["health", "entries", "alerts", "subscriptions"]
