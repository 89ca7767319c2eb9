"""Stateful application services shared by the API and the evaluation loop."""

from app.crypto_alerts.application.services.entry_catalog import EntryCatalog

__all__ = ["EntryCatalog"]
