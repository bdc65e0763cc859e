"""
Notification module data models.

Request payloads use the camelCase field names of the mail-function
contract (``companyName``, ``techLowStockData``, ...); Python code
uses the snake_case attribute names.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NotificationType(str, Enum):
    """Recognized message types. Anything else renders the default template."""

    STOCK_REQUEST = "stock_request"
    PURCHASE = "purchase"
    LOW_STOCK = "low_stock"
    TECH_LOW_STOCK = "tech_low_stock"
    USER_ACTIVITY = "user_activity"
    TEST = "test"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestedItem(CamelModel):
    item_name: Optional[str] = None
    quantity: Optional[Union[int, float]] = None


class StockRequestData(CamelModel):
    user_name: Optional[str] = None
    job_number: Optional[str] = None
    date: Optional[str] = None
    items: list[RequestedItem] = Field(default_factory=list)
    notes: Optional[str] = None


class PurchaseData(CamelModel):
    user_name: Optional[str] = None
    item_name: Optional[str] = None
    quantity: Optional[Union[int, float]] = None
    total: Optional[Union[int, float, str]] = None


class ActivityData(CamelModel):
    user_name: Optional[str] = None
    action: Optional[str] = None
    details: Optional[str] = None


class TechLowStockData(CamelModel):
    item_name: Optional[str] = None
    tech_email: Optional[str] = None
    remaining_quantity: Optional[int] = None
    min_quantity: Optional[int] = None
    company_name: Optional[str] = None


class LowStockItem(BaseModel):
    """One row of a multi-item low stock digest (inventory row field names)."""

    name: str
    quantity: int
    min_quantity: Optional[int] = None


class EmailNotificationRequest(CamelModel):
    """Body accepted by the mail function."""

    type: str = Field(default="", description="Message type tag")
    to: Optional[str] = Field(None, description="Recipient address")
    subject: Optional[str] = None
    message: Optional[str] = None
    company_name: Optional[str] = None
    company_id: Optional[str] = None

    # Type-specific payloads
    request_data: Optional[StockRequestData] = None
    purchase_data: Optional[PurchaseData] = None
    activity_data: Optional[ActivityData] = None
    tech_low_stock_data: Optional[TechLowStockData] = None
    items: Optional[list[LowStockItem]] = None


class RenderedEmail(BaseModel):
    """Subject and HTML body produced from a request."""

    model_config = {"frozen": True}

    subject: str
    html: str


class EmailResult(BaseModel):
    """Successful delivery response."""

    success: bool = True
    message: str = "Email sent successfully"
    type: str
    recipient: str


class EmailErrorResponse(BaseModel):
    """Failed delivery response (returned with HTTP 500)."""

    error: str = "Failed to send email"
    message: str
    details: str
