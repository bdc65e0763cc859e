"""
Low-stock alert evaluation.

Runs after an inventory write has committed. Checks the item's threshold,
gates on the company's notification settings and asks the notification
emitter to send the alert. A failed alert never affects the write.
"""

import logging
from typing import Any, Optional

import httpx
from supabase import PostgrestAPIError

from shared.config import get_settings
from shared.exceptions import StocklineError, error_message
from modules.notifications.interfaces import INotificationEmitter
from modules.notifications.models import TechLowStockData

from .interfaces import ILowStockAlertService
from .models import AlertEvent, AlertKind, CompanySettings
from .repository import AlertRepository

logger = logging.getLogger(__name__)

# Errors a database lookup can raise
LOOKUP_FAILURES = (PostgrestAPIError, httpx.HTTPError)


def should_alert_company(quantity: int, min_quantity: int) -> bool:
    """Company path: at or below threshold, but an empty shelf does not alert."""
    return 0 < quantity <= min_quantity


def should_alert_technician(quantity: int, min_quantity: int) -> bool:
    """Technician path: at or below threshold, running out included."""
    return quantity <= min_quantity


class LowStockAlertService(ILowStockAlertService):
    """Implementation of ILowStockAlertService over Supabase lookups."""

    def __init__(self, repository: AlertRepository, emitter: INotificationEmitter):
        self._repo = repository
        self._emitter = emitter
        self._settings = get_settings()

    async def check_and_send_low_stock_alert(
        self,
        item_id: str,
        new_quantity: int,
    ) -> Optional[AlertEvent]:
        try:
            item = self._repo.get_item_threshold(item_id)
        except LOOKUP_FAILURES as e:
            logger.error(f"Error fetching item {item_id} for low stock check: {error_message(e)}")
            return None

        if item is None:
            logger.error(f"Item {item_id} not found for low stock check")
            return None
        if not item.company_id:
            logger.error(f"Item {item_id} has no company_id")
            return None

        if not should_alert_company(new_quantity, item.min_quantity):
            return None

        logger.info(
            f"Low stock for {item.name}: {new_quantity} remaining (min: {item.min_quantity})"
        )
        company = self._load_company(item.company_id)
        if company is None:
            return None

        event = AlertEvent(
            kind=AlertKind.COMPANY,
            item_id=item_id,
            item_name=item.name,
            quantity=new_quantity,
            threshold=item.min_quantity,
            recipient=company.admin_email,
            company_id=company.company_id,
            company_name=company.company_name,
        )
        return await self._dispatch(
            event,
            subject=f"Low Stock Alert - {item.name}",
            message=(
                f'Item "{item.name}" is running low with only {new_quantity} units remaining. '
                f"Minimum required: {item.min_quantity}."
            ),
            company_name=company.company_name,
            company_id=company.company_id,
        )

    async def check_and_send_tech_low_stock_alert(
        self,
        item_id: str,
        tech_user_id: str,
        new_quantity: int,
        company_id: Optional[str] = None,
    ) -> Optional[AlertEvent]:
        try:
            item = self._repo.get_item_threshold(item_id)
        except LOOKUP_FAILURES as e:
            logger.error(f"Error fetching item {item_id} for tech low stock check: {error_message(e)}")
            return None
        if item is None:
            logger.error(f"Item {item_id} not found for tech low stock check")
            return None

        try:
            tech_email = self._repo.get_technician_email(tech_user_id)
        except LOOKUP_FAILURES as e:
            logger.error(f"Error fetching technician profile {tech_user_id}: {error_message(e)}")
            return None
        if not tech_email:
            logger.error(f"Technician {tech_user_id} has no profile email")
            return None

        if not should_alert_technician(new_quantity, item.min_quantity):
            return None

        target_company = company_id or item.company_id
        if not target_company:
            logger.error(f"No company to notify for technician alert on item {item_id}")
            return None

        logger.info(
            f"Technician low stock for {item.name} ({tech_email}): "
            f"{new_quantity} remaining (min: {item.min_quantity})"
        )
        company = self._load_company(target_company)
        if company is None:
            return None

        event = AlertEvent(
            kind=AlertKind.TECHNICIAN,
            item_id=item_id,
            item_name=item.name,
            quantity=new_quantity,
            threshold=item.min_quantity,
            recipient=company.admin_email,
            company_id=company.company_id,
            company_name=company.company_name,
            tech_email=tech_email,
        )
        return await self._dispatch(
            event,
            subject=f"Technician Low Stock Alert - {item.name}",
            tech_low_stock_data=TechLowStockData(
                item_name=item.name,
                tech_email=tech_email,
                remaining_quantity=new_quantity,
                min_quantity=item.min_quantity,
                company_name=company.company_name,
            ),
            company_name=company.company_name,
            company_id=company.company_id,
        )

    def _load_company(self, company_id: str) -> Optional[CompanySettings]:
        """Company settings if alerts may be sent, else None (with the reason logged)."""
        try:
            company = self._repo.get_company_settings(
                company_id,
                fallback_name=self._settings.default_company_name,
            )
        except LOOKUP_FAILURES as e:
            logger.error(f"Error fetching company {company_id}: {error_message(e)}")
            return None

        if company is None:
            logger.info(f"Company {company_id} not found")
            return None
        if not company.admin_email:
            logger.info(f"No admin email configured for company {company_id}")
            return None
        if not company.enable_low_stock_alerts:
            logger.info(f"Low stock alerts are disabled for company {company_id}")
            return None
        return company

    async def _dispatch(self, event: AlertEvent, **fields: Any) -> Optional[AlertEvent]:
        try:
            await self._emitter.send_notification(event.kind.value, event.recipient, **fields)
        except StocklineError as e:
            logger.error(f"Failed to send {event.kind.value} alert to {event.recipient}: {e.message}")
            return None

        logger.info(f"{event.kind.value} alert sent to {event.recipient} for {event.item_name}")
        return event
