"""
Inventory API endpoints.

Each write schedules its low-stock evaluation as a background task, so
the response is never delayed or failed by alerting.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from api.dependencies import get_alert_service, get_inventory_service
from api.middleware.auth import get_current_admin, get_current_user
from modules.alerts.interfaces import ILowStockAlertService
from modules.auth.models import UserProfile
from shared.models import AuthenticatedUser

from .exceptions import (
    InventoryAccessDeniedError,
    InventoryItemNotFoundError,
    InvalidQuantityError,
    StaleRecordError,
    TechnicianRecordNotFoundError,
)
from .interfaces import IInventoryService
from .models import (
    InventoryItem,
    TechnicianInventoryItem,
    UpdateQuantityRequest,
    UseItemRequest,
)

router = APIRouter()


@router.patch("/items/{item_id}/quantity", response_model=InventoryItem)
async def update_item_quantity(
    item_id: str,
    request: UpdateQuantityRequest,
    background_tasks: BackgroundTasks,
    admin: UserProfile = Depends(get_current_admin),
    service: IInventoryService = Depends(get_inventory_service),
    alerts: ILowStockAlertService = Depends(get_alert_service),
) -> InventoryItem:
    """
    Set an item's warehouse quantity (admin only).

    Triggers the company low-stock check after the response is sent.
    """
    try:
        item = await service.update_item_quantity(item_id, request.quantity, admin)
    except InvalidQuantityError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except InventoryItemNotFoundError:
        raise HTTPException(status_code=404, detail="Item not found")
    except InventoryAccessDeniedError:
        raise HTTPException(status_code=403, detail="Access denied")

    background_tasks.add_task(alerts.check_and_send_low_stock_alert, item.id, item.quantity)
    return item


@router.post("/technician/{record_id}/use", response_model=TechnicianInventoryItem)
async def use_technician_item(
    record_id: str,
    request: UseItemRequest,
    background_tasks: BackgroundTasks,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IInventoryService = Depends(get_inventory_service),
    alerts: ILowStockAlertService = Depends(get_alert_service),
) -> TechnicianInventoryItem:
    """
    Record usage from the caller's own technician inventory.

    Triggers the technician low-stock check after the response is sent.
    """
    try:
        record = await service.use_technician_item(
            record_id, user.id, request.quantity, request.job_reference
        )
    except InvalidQuantityError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except TechnicianRecordNotFoundError:
        raise HTTPException(status_code=404, detail="Record not found")
    except InventoryAccessDeniedError:
        raise HTTPException(status_code=403, detail="Access denied")
    except StaleRecordError as e:
        raise HTTPException(status_code=409, detail=e.message)

    background_tasks.add_task(
        alerts.check_and_send_tech_low_stock_alert,
        record.item_id,
        user.id,
        record.remaining_quantity,
        record.company_id,
    )
    return record
