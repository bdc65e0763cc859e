"""
Notification module exceptions.
"""

from typing import Optional

from shared.exceptions import StocklineError, ValidationError, ExternalServiceError


class NotificationError(StocklineError):
    """Base exception for notification errors."""

    pass


class EmailConfigurationError(NotificationError):
    """Raised before any network call when the mail provider is not configured."""

    def __init__(self, message: str = "SendGrid API key not configured"):
        super().__init__(message, code="EMAIL_NOT_CONFIGURED")


class MissingRecipientError(ValidationError):
    """Raised when neither the request nor settings name a recipient."""

    def __init__(self):
        super().__init__(
            "No recipient given and no default recipient configured",
            code="MISSING_RECIPIENT",
        )


class EmailDeliveryError(ExternalServiceError):
    """
    Raised when the mail provider rejects or never receives the message.

    ``status_code`` is None for transport failures.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(
            message,
            service="sendgrid",
            code="EMAIL_DELIVERY_FAILED",
            details={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body
