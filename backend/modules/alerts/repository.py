"""
Read-only lookups used by the low-stock evaluator.

Tables: inventory_items, user_profiles, companies.
"""

from typing import Optional

from shared.repository import BaseRepository

from .models import AlertEvent, CompanySettings, ItemThreshold


class AlertRepository(BaseRepository[AlertEvent]):
    """
    Point reads for alert evaluation.

    Every method returns None when the row does not exist and lets
    other database errors propagate; the service decides what to do.
    """

    def get_item_threshold(self, item_id: str) -> Optional[ItemThreshold]:
        row = self._fetch_single("inventory_items", "id, name, min_quantity, company_id", item_id)
        if row is None:
            return None
        return ItemThreshold(**row)

    def get_technician_email(self, user_id: str) -> Optional[str]:
        row = self._fetch_single("user_profiles", "email", user_id)
        if row is None:
            return None
        return row.get("email") or None

    def get_company_settings(
        self,
        company_id: str,
        fallback_name: str,
    ) -> Optional[CompanySettings]:
        row = self._fetch_single("companies", "id, name, settings", company_id)
        if row is None:
            return None
        row.setdefault("id", company_id)
        return CompanySettings.from_company_row(row, fallback_name)
