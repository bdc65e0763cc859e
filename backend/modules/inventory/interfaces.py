"""
Inventory module interface.

The API layer depends on IInventoryService for stock writes. Low-stock
alerting is scheduled by the routes once a write has returned.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.auth.models import UserProfile

from .models import InventoryItem, TechnicianInventoryItem


@runtime_checkable
class IInventoryService(Protocol):
    """Interface for inventory writes."""

    async def update_item_quantity(
        self,
        item_id: str,
        quantity: int,
        actor: UserProfile,
    ) -> InventoryItem:
        """
        Set an item's warehouse quantity.

        Args:
            item_id: Inventory item ID
            quantity: New quantity (zero or more)
            actor: Profile of the admin making the change

        Returns:
            The updated item

        Raises:
            InventoryItemNotFoundError: If the item does not exist
            InventoryAccessDeniedError: If the item is outside the admin's company,
                or the admin has no company
            InvalidQuantityError: If quantity is negative
        """
        ...

    async def use_technician_item(
        self,
        record_id: str,
        user_id: str,
        quantity: int,
        job_reference: Optional[str] = None,
    ) -> TechnicianInventoryItem:
        """
        Record that a technician used stock from one of their records.

        Args:
            record_id: technician_inventory row ID
            user_id: The technician; must own the record
            quantity: Units used (1 to remaining_quantity)
            job_reference: Optional job number noted with the usage

        Returns:
            The updated record

        Raises:
            TechnicianRecordNotFoundError: If the record does not exist
            InventoryAccessDeniedError: If the record belongs to someone else
            InvalidQuantityError: If quantity is out of range
            StaleRecordError: If the record changed after it was read
        """
        ...
