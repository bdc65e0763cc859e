"""
Notifications module.

Renders typed transactional emails and delivers them through SendGrid,
and collects non-blocking user-facing notices.

Public API:
- INotificationEmitter: Interface used by other modules to send email
- NoticeQueue / Notice: Toast-style notices returned to the client
- Models and exceptions
"""

from .interfaces import INotificationEmitter
from .models import (
    NotificationType,
    EmailNotificationRequest,
    EmailResult,
    EmailErrorResponse,
    RenderedEmail,
    TechLowStockData,
)
from .notices import Notice, NoticeLevel, NoticeQueue
from .exceptions import (
    NotificationError,
    EmailConfigurationError,
    EmailDeliveryError,
    MissingRecipientError,
)

__all__ = [
    # Interface
    "INotificationEmitter",
    # Models
    "NotificationType",
    "EmailNotificationRequest",
    "EmailResult",
    "EmailErrorResponse",
    "RenderedEmail",
    "TechLowStockData",
    # Notices
    "Notice",
    "NoticeLevel",
    "NoticeQueue",
    # Exceptions
    "NotificationError",
    "EmailConfigurationError",
    "EmailDeliveryError",
    "MissingRecipientError",
]
