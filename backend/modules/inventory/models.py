"""
Inventory module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TechnicianItemStatus(str, Enum):
    """Lifecycle of a technician inventory record."""

    ACTIVE = "active"
    USED = "used"
    RETURNED = "returned"


class InventoryItem(BaseModel):
    """A warehouse inventory item."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    quantity: int = 0
    min_quantity: int = 0
    company_id: Optional[str] = None
    updated_at: Optional[datetime] = None

    @field_validator("quantity", "min_quantity", mode="before")
    @classmethod
    def _null_count_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class TechnicianInventoryItem(BaseModel):
    """Stock held by one technician, received against a request or job."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    item_id: str
    item_name: str
    quantity: int = 0
    used_quantity: int = 0
    remaining_quantity: int = 0
    status: TechnicianItemStatus = TechnicianItemStatus.ACTIVE
    job_number: Optional[str] = None
    notes: Optional[str] = None
    company_id: str
    updated_at: Optional[datetime] = None

    @field_validator("quantity", "used_quantity", "remaining_quantity", mode="before")
    @classmethod
    def _null_count_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class UpdateQuantityRequest(BaseModel):
    """Request body for setting an item's warehouse quantity."""

    quantity: int = Field(..., description="New quantity, zero or more")


class UseItemRequest(BaseModel):
    """Request body for recording technician usage."""

    quantity: int = Field(..., description="Units used, more than zero")
    job_reference: Optional[str] = Field(None, max_length=100)
