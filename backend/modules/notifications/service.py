"""
Email notification service.

Renders a typed message and delivers it with one call to the SendGrid
v3 mail-send API.
"""

import logging
from typing import Any, Optional

import httpx

from shared.config import get_settings

from .exceptions import EmailConfigurationError, EmailDeliveryError, MissingRecipientError
from .interfaces import INotificationEmitter
from .models import EmailNotificationRequest, EmailResult, RenderedEmail
from .templates import render_email

logger = logging.getLogger(__name__)


class EmailNotificationService(INotificationEmitter):
    """
    SendGrid-backed implementation of INotificationEmitter.

    The API key is resolved on every send, so a key added to the
    environment is picked up without rebuilding the service.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: SendGrid API key. If not provided, SENDGRID_API_KEY
                     from settings is used.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._settings = get_settings()
        self._api_key = api_key
        self._transport = transport

    async def send(self, request: EmailNotificationRequest) -> EmailResult:
        api_key = self._api_key or self._settings.sendgrid_api_key
        if not api_key:
            logger.error("SendGrid API key not found in settings")
            raise EmailConfigurationError()

        recipient = request.to or self._settings.notification_default_recipient
        if not recipient:
            raise MissingRecipientError()

        rendered = render_email(request)
        payload = self._build_payload(recipient, rendered, request.company_name)

        logger.info(f"Sending {request.type or 'default'} email to {recipient}")
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self._settings.sendgrid_api_url,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                    timeout=self._settings.sendgrid_timeout,
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"SendGrid request failed: {e}") from e

        if response.is_error:
            logger.error(f"SendGrid error response {response.status_code}: {response.text}")
            raise EmailDeliveryError(
                f"SendGrid API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info(f"Email sent successfully to {recipient}")
        return EmailResult(type=request.type, recipient=recipient)

    async def send_notification(
        self,
        message_type: str,
        to: Optional[str],
        **fields: Any,
    ) -> EmailResult:
        request = EmailNotificationRequest(type=message_type, to=to, **fields)
        return await self.send(request)

    def _build_payload(
        self,
        recipient: str,
        rendered: RenderedEmail,
        company_name: Optional[str],
    ) -> dict[str, Any]:
        return {
            "personalizations": [
                {
                    "to": [{"email": recipient}],
                    "subject": rendered.subject,
                }
            ],
            "from": {
                "email": self._settings.notification_from_email,
                "name": company_name or self._settings.notification_from_name,
            },
            "content": [
                {
                    "type": "text/html",
                    "value": rendered.html,
                }
            ],
        }
