"""
User-facing, non-blocking notices.

Services push notices here instead of raising when a failure should be
shown to the user without interrupting the flow (for example a profile
that failed to load). The API returns the collected notices alongside
the response so the client can render them as toasts.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class NoticeLevel(str, Enum):
    ERROR = "error"
    SUCCESS = "success"
    INFO = "info"


class Notice(BaseModel):
    """A single toast-style message."""

    level: NoticeLevel
    title: str
    message: str
    duration_ms: int


def friendly_error_message(message: str) -> str:
    """Replace credential and connectivity errors with actionable hints."""
    lowered = message.lower()
    if "invalid api key" in lowered or "unauthorized" in lowered:
        return "Authentication failed. Please check your credentials and try again."
    if "network" in lowered or "fetch" in lowered:
        return "Network error. Please check your connection and try again."
    return message


class NoticeQueue:
    """Collects notices for one request or one bridge."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []

    def error(
        self,
        message: Optional[str],
        title: str = "Error",
        default_message: str = "An error occurred",
    ) -> Notice:
        return self._push(
            NoticeLevel.ERROR,
            title,
            friendly_error_message(message or default_message),
            5000,
        )

    def success(self, message: str, title: str = "Success") -> Notice:
        return self._push(NoticeLevel.SUCCESS, title, message, 3000)

    def info(self, message: str, title: str = "Info") -> Notice:
        return self._push(NoticeLevel.INFO, title, message, 4000)

    def drain(self) -> list[Notice]:
        """Return all pending notices and clear the queue."""
        notices, self._notices = self._notices, []
        return notices

    @property
    def pending(self) -> list[Notice]:
        return list(self._notices)

    def _push(self, level: NoticeLevel, title: str, message: str, duration_ms: int) -> Notice:
        notice = Notice(level=level, title=title, message=message, duration_ms=duration_ms)
        self._notices.append(notice)
        return notice

    def __len__(self) -> int:
        return len(self._notices)
