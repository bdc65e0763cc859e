"""
Inventory module.

Stock writes that feed the low-stock evaluator.

Public API:
- IInventoryService: Interface for inventory writes
- Models: InventoryItem, TechnicianInventoryItem, request bodies
- Exceptions: InventoryItemNotFoundError, TechnicianRecordNotFoundError, etc.
"""

from .interfaces import IInventoryService
from .models import (
    InventoryItem,
    TechnicianInventoryItem,
    TechnicianItemStatus,
    UpdateQuantityRequest,
    UseItemRequest,
)
from .exceptions import (
    InventoryAccessDeniedError,
    InventoryItemNotFoundError,
    InvalidQuantityError,
    StaleRecordError,
    TechnicianRecordNotFoundError,
)

__all__ = [
    "IInventoryService",
    "InventoryItem",
    "TechnicianInventoryItem",
    "TechnicianItemStatus",
    "UpdateQuantityRequest",
    "UseItemRequest",
    "InventoryAccessDeniedError",
    "InventoryItemNotFoundError",
    "InvalidQuantityError",
    "StaleRecordError",
    "TechnicianRecordNotFoundError",
]
