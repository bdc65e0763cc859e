"""
Alerts module.

Evaluates inventory changes against per-item thresholds and sends
low-stock emails to the company admin.

Public API:
- ILowStockAlertService: Interface for scheduling evaluations
- Models: AlertEvent, AlertKind, CompanySettings, ItemThreshold
"""

from .interfaces import ILowStockAlertService
from .models import AlertEvent, AlertKind, CompanySettings, ItemThreshold

__all__ = [
    "ILowStockAlertService",
    "AlertEvent",
    "AlertKind",
    "CompanySettings",
    "ItemThreshold",
]
