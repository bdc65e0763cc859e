"""
Inventory service implementation.

Performs the stock write and records it in the activity log. Alert
evaluation is not done here; routes schedule it after the write returns.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from supabase import PostgrestAPIError

from shared.exceptions import error_message
from modules.auth.models import UserProfile

from .exceptions import (
    InventoryAccessDeniedError,
    InventoryItemNotFoundError,
    InvalidQuantityError,
    StaleRecordError,
    TechnicianRecordNotFoundError,
)
from .interfaces import IInventoryService
from .models import InventoryItem, TechnicianInventoryItem, TechnicianItemStatus
from .repository import InventoryRepository

logger = logging.getLogger(__name__)


def usage_note(quantity: int, job_reference: Optional[str], when: datetime) -> str:
    """One line appended to a technician record's notes per usage."""
    note = f"Used {quantity} on {when.strftime('%m/%d/%Y, %I:%M:%S %p')} UTC"
    if job_reference:
        note += f" (Job: {job_reference})"
    return note


class InventoryService(IInventoryService):
    """Implementation of IInventoryService over InventoryRepository."""

    def __init__(self, repository: InventoryRepository):
        self._repo = repository

    async def update_item_quantity(
        self,
        item_id: str,
        quantity: int,
        actor: UserProfile,
    ) -> InventoryItem:
        if quantity < 0:
            raise InvalidQuantityError("Quantity cannot be negative", quantity)

        item = self._repo.get_item(item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)
        if actor.company_id is None or item.company_id != actor.company_id:
            raise InventoryAccessDeniedError(item_id, actor.id)

        updated = self._repo.set_item_quantity(item_id, quantity)
        if updated is None:
            raise InventoryItemNotFoundError(item_id)

        logger.info(f"Item {item.name} quantity {item.quantity} -> {quantity} by {actor.id}")
        self._log_activity(
            actor.id,
            updated.company_id,
            "UPDATE_ITEM",
            item_id,
            {
                "item_name": item.name,
                "previous_quantity": item.quantity,
                "new_quantity": quantity,
            },
        )
        return updated

    async def use_technician_item(
        self,
        record_id: str,
        user_id: str,
        quantity: int,
        job_reference: Optional[str] = None,
    ) -> TechnicianInventoryItem:
        if quantity <= 0:
            raise InvalidQuantityError("Quantity used must be greater than zero", quantity)

        record = self._repo.get_technician_record(record_id)
        if record is None:
            raise TechnicianRecordNotFoundError(record_id)
        if record.user_id != user_id:
            raise InventoryAccessDeniedError(record_id, user_id)
        if quantity > record.remaining_quantity:
            raise InvalidQuantityError("Cannot use more than available quantity", quantity)

        remaining = record.remaining_quantity - quantity
        note = usage_note(quantity, job_reference, datetime.now(timezone.utc))
        changes = {
            "used_quantity": record.used_quantity + quantity,
            "remaining_quantity": remaining,
            "status": (
                TechnicianItemStatus.USED if remaining == 0 else TechnicianItemStatus.ACTIVE
            ).value,
            "notes": f"{record.notes}\n{note}" if record.notes else note,
        }
        updated = self._repo.update_technician_record(
            record_id, changes, expected_remaining=record.remaining_quantity
        )
        if updated is None:
            raise StaleRecordError(record_id)

        logger.info(f"Technician {user_id} used {quantity} of {record.item_name} ({remaining} left)")
        self._log_activity(
            user_id,
            record.company_id,
            "used",
            record.item_id,
            {
                "item_name": record.item_name,
                "quantity_used": quantity,
                "job_reference": job_reference,
                "remaining_quantity": remaining,
            },
        )
        return updated

    def _log_activity(
        self,
        user_id: str,
        company_id: Optional[str],
        action: str,
        item_id: str,
        details: dict[str, Any],
    ) -> None:
        # The write already committed; a missing log line is not fatal
        try:
            self._repo.log_activity(user_id, company_id, action, item_id, details)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.warning(f"Failed to record {action} activity for {item_id}: {error_message(e)}")
