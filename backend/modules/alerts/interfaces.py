"""
Alerts module interface.

The inventory module schedules evaluations through ILowStockAlertService
after its writes commit.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import AlertEvent


@runtime_checkable
class ILowStockAlertService(Protocol):
    """
    Decides whether an inventory change warrants a low-stock email.

    Neither method raises: lookup and delivery failures are logged and
    reported as "no alert".
    """

    async def check_and_send_low_stock_alert(
        self,
        item_id: str,
        new_quantity: int,
    ) -> Optional[AlertEvent]:
        """
        Company-wide path. Fires iff 0 < new_quantity <= min_quantity.

        Returns:
            The dispatched AlertEvent, or None if nothing was sent
        """
        ...

    async def check_and_send_tech_low_stock_alert(
        self,
        item_id: str,
        tech_user_id: str,
        new_quantity: int,
        company_id: Optional[str] = None,
    ) -> Optional[AlertEvent]:
        """
        Per-technician path. Fires iff new_quantity <= min_quantity (zero included).

        Args:
            item_id: Inventory item the technician holds
            tech_user_id: Technician principal id
            new_quantity: Technician's remaining quantity after the change
            company_id: Company to notify; defaults to the item's company

        Returns:
            The dispatched AlertEvent, or None if nothing was sent
        """
        ...
