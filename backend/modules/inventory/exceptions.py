"""
Inventory module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, StocklineError, ValidationError


class InventoryItemNotFoundError(NotFoundError):
    """Raised when an inventory item is not found."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class TechnicianRecordNotFoundError(NotFoundError):
    """Raised when a technician inventory record is not found."""

    def __init__(self, record_id: str):
        super().__init__(
            f"Technician inventory record not found: {record_id}",
            code="TECH_RECORD_NOT_FOUND",
            details={"record_id": record_id},
        )


class InventoryAccessDeniedError(AuthorizationError):
    """Raised when a user acts on stock outside their company or ownership."""

    def __init__(self, resource_id: str, user_id: str):
        super().__init__(
            f"Access denied to inventory record: {resource_id}",
            code="INVENTORY_ACCESS_DENIED",
            details={"resource_id": resource_id, "user_id": user_id},
        )


class InvalidQuantityError(ValidationError):
    """Raised when a quantity is negative or exceeds what is available."""

    def __init__(self, message: str, quantity: int):
        super().__init__(
            message,
            code="INVALID_QUANTITY",
            details={"quantity": quantity},
        )


class StaleRecordError(StocklineError):
    """Raised when a technician record changed between read and write."""

    def __init__(self, record_id: str):
        super().__init__(
            "Inventory record was changed by another request. Please try again.",
            code="STALE_RECORD",
            details={"record_id": record_id},
        )
