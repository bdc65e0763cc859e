"""
Notification module interface.

The alerts module depends on INotificationEmitter, not on SendGrid.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import EmailNotificationRequest, EmailResult


@runtime_checkable
class INotificationEmitter(Protocol):
    """Formats and delivers a single typed message."""

    async def send(self, request: EmailNotificationRequest) -> EmailResult:
        """
        Render and deliver one message.

        Raises:
            EmailConfigurationError: API key missing (no network call made)
            MissingRecipientError: No recipient available
            EmailDeliveryError: Provider rejected the message or was unreachable
        """
        ...

    async def send_notification(
        self,
        message_type: str,
        to: Optional[str],
        **fields: Any,
    ) -> EmailResult:
        """Build a request from keyword fields and send it."""
        ...
