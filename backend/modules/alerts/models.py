"""
Alerts module data models.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class AlertKind(str, Enum):
    """Alert paths; values double as the notification type sent."""

    COMPANY = "low_stock"
    TECHNICIAN = "tech_low_stock"


class ItemThreshold(BaseModel):
    """The slice of an inventory item the evaluator needs."""

    id: Optional[str] = None
    name: str
    min_quantity: int = 0
    company_id: Optional[str] = None

    @field_validator("min_quantity", mode="before")
    @classmethod
    def _null_threshold_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class CompanySettings(BaseModel):
    """
    Per-company notification configuration.

    Read from ``companies.settings.emailNotifications``. Only an explicit
    ``false`` disables low-stock alerts; a missing flag means enabled.
    """

    company_id: str
    company_name: str
    admin_email: Optional[str] = None
    enable_low_stock_alerts: bool = True
    enable_purchase_notifications: bool = True
    enable_stock_request_notifications: bool = True
    enable_user_activity_alerts: bool = False

    @classmethod
    def from_company_row(cls, row: dict[str, Any], fallback_name: str) -> "CompanySettings":
        settings = row.get("settings") or {}
        config = settings.get("emailNotifications") or {}
        return cls(
            company_id=str(row.get("id", "")),
            company_name=config.get("companyName") or row.get("name") or fallback_name,
            admin_email=config.get("adminEmail") or None,
            enable_low_stock_alerts=config.get("enableLowStockAlerts") is not False,
            enable_purchase_notifications=config.get("enablePurchaseNotifications") is not False,
            enable_stock_request_notifications=(
                config.get("enableStockRequestNotifications") is not False
            ),
            enable_user_activity_alerts=config.get("enableUserActivityAlerts") is True,
        )


class AlertEvent(BaseModel):
    """
    A low-stock condition that was dispatched.

    Lives only for one evaluation call; never persisted.
    """

    kind: AlertKind
    item_id: str
    item_name: str
    quantity: int
    threshold: int
    recipient: str = Field(..., description="Company admin email")
    company_id: str
    company_name: str
    tech_email: Optional[str] = None
