"""
Inventory repository for database access.

Tables: inventory_items, technician_inventory, activity_logs.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository

from .models import InventoryItem, TechnicianInventoryItem

ITEM_COLUMNS = "id, name, quantity, min_quantity, company_id, updated_at"
TECH_COLUMNS = (
    "id, user_id, item_id, item_name, quantity, used_quantity, remaining_quantity, "
    "status, job_number, notes, company_id, updated_at"
)


class InventoryRepository(BaseRepository[InventoryItem]):
    """
    Repository for inventory data access.

    Note: This repository does NOT perform authorization checks.
    The service layer verifies company and ownership.
    """

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        row = self._fetch_single("inventory_items", ITEM_COLUMNS, item_id)
        return InventoryItem(**row) if row else None

    def set_item_quantity(self, item_id: str, quantity: int) -> Optional[InventoryItem]:
        """Returns the updated item, or None if no row matched."""
        result = (
            self._db.table("inventory_items")
            .update({"quantity": quantity, "updated_at": _now_iso()})
            .eq("id", item_id)
            .execute()
        )
        if not result.data:
            return None
        return InventoryItem(**result.data[0])

    def get_technician_record(self, record_id: str) -> Optional[TechnicianInventoryItem]:
        row = self._fetch_single("technician_inventory", TECH_COLUMNS, record_id)
        return TechnicianInventoryItem(**row) if row else None

    def update_technician_record(
        self,
        record_id: str,
        changes: dict[str, Any],
        expected_remaining: Optional[int] = None,
    ) -> Optional[TechnicianInventoryItem]:
        """
        Returns the updated record, or None if no row matched.

        With expected_remaining set, the row only matches while its
        remaining_quantity still equals that value.
        """
        changes = {**changes, "updated_at": _now_iso()}
        query = (
            self._db.table("technician_inventory")
            .update(changes)
            .eq("id", record_id)
        )
        if expected_remaining is not None:
            query = query.eq("remaining_quantity", expected_remaining)
        result = query.execute()
        if not result.data:
            return None
        return TechnicianInventoryItem(**result.data[0])

    def log_activity(
        self,
        user_id: str,
        company_id: Optional[str],
        action: str,
        item_id: Optional[str],
        details: dict[str, Any],
    ) -> None:
        self._db.table("activity_logs").insert({
            "user_id": user_id,
            "company_id": company_id,
            "action": action,
            "item_id": item_id,
            "details": details,
            "timestamp": _now_iso(),
        }).execute()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
