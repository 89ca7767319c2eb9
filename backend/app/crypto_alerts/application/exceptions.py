"""Application-layer exceptions for use case error handling.

These exceptions represent business logic errors that can occur during
use case execution. They are designed to be caught and mapped to
appropriate HTTP responses by the presentation layer, or logged and
retried by the evaluation loop.
"""

from collections.abc import Iterable


class ApplicationError(Exception):
    """Base class for all application-layer exceptions."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class AlertNotFoundError(ApplicationError):
    """Raised when one or more requested alert ids do not exist."""

    def __init__(self, alert_ids: Iterable[str]) -> None:
        self.alert_ids = list(alert_ids)
        super().__init__(
            message=f"Alert(s) not found: {', '.join(self.alert_ids)}",
            code="ALERT_NOT_FOUND"
        )


class SourceUnavailableError(ApplicationError):
    """Raised when the quote source cannot serve a catalog or quote request."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(
            message=f"Quote source '{source}' unavailable: {reason}",
            code="SOURCE_UNAVAILABLE"
        )
        self.source = source
        self.reason = reason


class PushNotConfiguredError(ApplicationError):
    """Raised when web push is requested but no VAPID key pair is configured."""

    def __init__(self) -> None:
        super().__init__(
            message="Web push is not configured (missing VAPID key pair)",
            code="PUSH_NOT_CONFIGURED"
        )
