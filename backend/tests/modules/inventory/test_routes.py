"""Tests for inventory endpoints."""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_alert_service, get_inventory_service
from modules.inventory.exceptions import (
    InventoryAccessDeniedError,
    InventoryItemNotFoundError,
    InvalidQuantityError,
    StaleRecordError,
)
from modules.inventory.models import InventoryItem, TechnicianInventoryItem


@pytest.fixture
def inventory():
    service = AsyncMock()
    service.update_item_quantity.return_value = InventoryItem(
        id="i-1", name="Filter", quantity=3, min_quantity=5, company_id="c-1"
    )
    service.use_technician_item.return_value = TechnicianInventoryItem(
        id="r-1",
        user_id="tech-1",
        item_id="i-1",
        item_name="Filter",
        remaining_quantity=0,
        company_id="c-1",
    )
    return service


@pytest.fixture
def alerts():
    return AsyncMock()


@pytest.fixture
def client(memory_auth, inventory, alerts):
    app = create_app()
    app.dependency_overrides[get_inventory_service] = lambda: inventory
    app.dependency_overrides[get_alert_service] = lambda: alerts
    return TestClient(app)


@pytest.fixture
def admin_headers(bearer):
    return bearer("admin-1", "admin@test.com")


@pytest.fixture
def tech_headers(bearer):
    return bearer("tech-1", "tech@test.com")


class TestUpdateItemQuantity:
    def test_admin_update_schedules_company_alert(self, client, alerts, admin_headers):
        response = client.patch(
            "/api/inventory/items/i-1/quantity", json={"quantity": 3}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["quantity"] == 3
        alerts.check_and_send_low_stock_alert.assert_awaited_once_with("i-1", 3)

    def test_tech_is_forbidden(self, client, inventory, tech_headers):
        response = client.patch(
            "/api/inventory/items/i-1/quantity", json={"quantity": 3}, headers=tech_headers
        )

        assert response.status_code == 403
        inventory.update_item_quantity.assert_not_awaited()

    def test_requires_auth(self, client):
        response = client.patch("/api/inventory/items/i-1/quantity", json={"quantity": 3})
        assert response.status_code == 401

    def test_unknown_item(self, client, inventory, alerts, admin_headers):
        inventory.update_item_quantity.side_effect = InventoryItemNotFoundError("i-404")

        response = client.patch(
            "/api/inventory/items/i-404/quantity", json={"quantity": 3}, headers=admin_headers
        )

        assert response.status_code == 404
        alerts.check_and_send_low_stock_alert.assert_not_awaited()

    def test_invalid_quantity(self, client, inventory, admin_headers):
        inventory.update_item_quantity.side_effect = InvalidQuantityError(
            "Quantity cannot be negative", -1
        )

        response = client.patch(
            "/api/inventory/items/i-1/quantity", json={"quantity": -1}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Quantity cannot be negative"

    def test_other_company(self, client, inventory, admin_headers):
        inventory.update_item_quantity.side_effect = InventoryAccessDeniedError("i-1", "admin-1")

        response = client.patch(
            "/api/inventory/items/i-1/quantity", json={"quantity": 3}, headers=admin_headers
        )

        assert response.status_code == 403

    def test_alert_failure_does_not_fail_write(self, client, alerts, admin_headers):
        alerts.check_and_send_low_stock_alert.return_value = None

        response = client.patch(
            "/api/inventory/items/i-1/quantity", json={"quantity": 3}, headers=admin_headers
        )

        assert response.status_code == 200


class TestUseTechnicianItem:
    def test_use_schedules_technician_alert(self, client, inventory, alerts, tech_headers):
        response = client.post(
            "/api/inventory/technician/r-1/use",
            json={"quantity": 2, "job_reference": "J-42"},
            headers=tech_headers,
        )

        assert response.status_code == 200
        assert response.json()["remaining_quantity"] == 0
        inventory.use_technician_item.assert_awaited_once_with("r-1", "tech-1", 2, "J-42")
        alerts.check_and_send_tech_low_stock_alert.assert_awaited_once_with(
            "i-1", "tech-1", 0, "c-1"
        )

    def test_not_owner(self, client, inventory, alerts, tech_headers):
        inventory.use_technician_item.side_effect = InventoryAccessDeniedError("r-1", "tech-1")

        response = client.post(
            "/api/inventory/technician/r-1/use", json={"quantity": 1}, headers=tech_headers
        )

        assert response.status_code == 403
        alerts.check_and_send_tech_low_stock_alert.assert_not_awaited()

    def test_too_many(self, client, inventory, tech_headers):
        inventory.use_technician_item.side_effect = InvalidQuantityError(
            "Cannot use more than available quantity", 9
        )

        response = client.post(
            "/api/inventory/technician/r-1/use", json={"quantity": 9}, headers=tech_headers
        )

        assert response.status_code == 400

    def test_concurrent_use_conflicts(self, client, inventory, alerts, tech_headers):
        inventory.use_technician_item.side_effect = StaleRecordError("r-1")

        response = client.post(
            "/api/inventory/technician/r-1/use", json={"quantity": 1}, headers=tech_headers
        )

        assert response.status_code == 409
        alerts.check_and_send_tech_low_stock_alert.assert_not_awaited()
