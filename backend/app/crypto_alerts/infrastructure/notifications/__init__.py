# Notification sinks - web push, log-only development sink

from .log_sink import LoggingSink
from .subscriptions import SubscriptionRegistry
from .web_push import WebPushSink

__all__ = [
    "LoggingSink",
    "SubscriptionRegistry",
    "WebPushSink",
]
