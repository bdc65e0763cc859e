"""
Translate auth-provider error messages into user-presentable errors.
"""

from typing import Optional

from .models import AuthErrorInfo


# (substring in provider message, user message, code), checked in order
_KNOWN_ERRORS = [
    (
        "invalid login credentials",
        "Invalid email or password. Please try again.",
        "INVALID_CREDENTIALS",
    ),
    (
        "email not confirmed",
        "Please check your email and click the confirmation link.",
        "EMAIL_NOT_CONFIRMED",
    ),
    (
        "user already registered",
        "An account with this email already exists.",
        "USER_EXISTS",
    ),
    (
        "password",
        "Password must be at least 6 characters long.",
        "WEAK_PASSWORD",
    ),
    (
        "rate limit",
        "Too many attempts. Please wait a moment and try again.",
        "RATE_LIMIT",
    ),
]


def map_auth_error(message: Optional[str]) -> AuthErrorInfo:
    """
    Map a raw provider error message to an AuthErrorInfo.

    Unrecognized messages pass through unchanged with code AUTH_ERROR.
    """
    if not message:
        return AuthErrorInfo(
            message="An unexpected error occurred. Please try again.",
            code="UNKNOWN",
        )

    lowered = message.lower()
    for needle, user_message, code in _KNOWN_ERRORS:
        if needle in lowered:
            return AuthErrorInfo(message=user_message, code=code)

    return AuthErrorInfo(message=message, code="AUTH_ERROR")
