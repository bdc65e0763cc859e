"""
Mail-function endpoint.

Accepts a typed notification, renders it and delivers it through the
mail provider. Failures come back as a structured 500 body rather than
FastAPI's default error shape.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from api.middleware.auth import get_current_user
from api.dependencies import get_email_service
from shared.exceptions import StocklineError
from shared.models import AuthenticatedUser

from .interfaces import INotificationEmitter
from .models import EmailErrorResponse, EmailNotificationRequest, EmailResult

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@router.options("")
async def email_notifications_preflight() -> PlainTextResponse:
    """Answer cross-origin pre-flight requests."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("", response_model=EmailResult)
async def send_email_notification(
    request: EmailNotificationRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: INotificationEmitter = Depends(get_email_service),
) -> JSONResponse:
    """
    Send one notification email.

    Returns {success, message, type, recipient} on delivery, or HTTP 500
    with {error, message, details} when configuration or delivery fails.
    """
    logger.info(f"Email notification request from {user.id}: type={request.type or 'default'}")
    try:
        result = await service.send(request)
    except StocklineError as e:
        logger.error(f"Email notification error: {e.message}")
        error = EmailErrorResponse(
            message=e.message,
            details=f"{e.__class__.__name__}: {e.message}",
        )
        return JSONResponse(status_code=500, content=error.model_dump(), headers=CORS_HEADERS)

    return JSONResponse(content=result.model_dump(), headers=CORS_HEADERS)
