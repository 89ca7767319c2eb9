# Ports for external integrations (QuoteSource, NotificationSink)

from .notification_sink import NotificationSink
from .quote_source import EntryListing, QuoteSource

__all__ = [
    "EntryListing",
    "NotificationSink",
    "QuoteSource",
]
