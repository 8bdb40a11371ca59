"""Error taxonomy shared by the use cases and the API layer."""

from __future__ import annotations


class NotFoundError(ValueError):
    """A referenced notification, template or recipient does not exist."""


class ValidationError(ValueError):
    """Request data is malformed or violates a domain rule."""


class AuthorizationError(ValueError):
    """The acting recipient is not allowed to perform the operation."""


class ProviderError(Exception):
    """A delivery provider failed to send a message.

    Raised from the provider helpers and propagated by the delivery workers
    so the queue retry policy can take over.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmailDeliveryError(ProviderError):
    """SendGrid refused or failed to deliver an email."""


class SmsDeliveryError(ProviderError):
    """Twilio refused or failed to deliver an SMS."""


class QueueUnavailableError(RuntimeError):
    """The delivery broker could not accept a job."""


__all__ = [
    "AuthorizationError",
    "EmailDeliveryError",
    "NotFoundError",
    "ProviderError",
    "QueueUnavailableError",
    "SmsDeliveryError",
    "ValidationError",
]
