"""Tests for notification templates."""

from datetime import datetime, timezone

import pytest

from modules.notifications.models import EmailNotificationRequest
from modules.notifications.templates import render_email

SENT_AT = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)


def render(**body):
    return render_email(EmailNotificationRequest.model_validate(body), now=SENT_AT)


class TestStockRequest:
    def test_subject_and_items(self):
        email = render(
            type="stock_request",
            companyName="Acme HVAC",
            requestData={
                "userName": "Sam",
                "jobNumber": "J-42",
                "items": [{"itemName": "Filter", "quantity": 3}],
                "notes": "Rush",
            },
        )
        assert email.subject == "[Acme HVAC] New Stock Request - Job #J-42"
        assert "<strong>Filter</strong> - Quantity: 3" in email.html
        assert "<h3>Notes:</h3><p>Rush</p>" in email.html

    def test_without_request_data(self):
        email = render(type="stock_request")
        assert email.subject == "[Company] New Stock Request - Job #N/A"
        assert "<li>No items specified</li>" in email.html
        assert "03/05/2024, 02:07:09 PM UTC" in email.html

    def test_caller_subject_wins(self):
        email = render(type="stock_request", subject="Custom")
        assert email.subject == "Custom"


class TestPurchase:
    def test_subject_ignores_caller_subject(self):
        email = render(type="purchase", subject="ignored", companyName="Acme")
        assert email.subject == "New Purchase - Acme"

    def test_details(self):
        email = render(
            type="purchase",
            purchaseData={"userName": "Sam", "itemName": "Gloves", "quantity": 2, "total": 19.5},
        )
        assert "<strong>Total:</strong> $19.5" in email.html
        assert "<strong>Item:</strong> Gloves" in email.html


class TestLowStock:
    def test_single_message(self):
        email = render(type="low_stock", companyName="Acme", message="Filters are low")
        assert email.subject == "[Acme] Low Stock Alert"
        assert "<p>Filters are low</p>" in email.html

    def test_item_digest(self):
        email = render(
            type="low_stock",
            items=[
                {"name": "Filter", "quantity": 2, "min_quantity": 5},
                {"name": "Coil", "quantity": 1},
            ],
        )
        assert "<strong>Filter</strong> - Only 2 remaining (Min: 5)" in email.html
        assert "(Min: N/A)" in email.html


class TestTechLowStock:
    def test_details(self):
        email = render(
            type="tech_low_stock",
            companyName="Acme",
            techLowStockData={
                "itemName": "Filter",
                "techEmail": "tech@example.com",
                "remainingQuantity": 0,
                "minQuantity": 2,
            },
        )
        assert email.subject == "[Acme] Technician Low Stock Alert"
        assert "<strong>Technician:</strong> tech@example.com" in email.html
        assert "<strong>Remaining Quantity:</strong> 0" in email.html
        assert "<strong>Minimum Required:</strong> 2" in email.html

    def test_zero_threshold_is_shown(self):
        email = render(
            type="tech_low_stock",
            techLowStockData={"itemName": "Filter", "remainingQuantity": 0, "minQuantity": 0},
        )
        assert "<strong>Minimum Required:</strong> 0" in email.html

    def test_missing_threshold_is_na(self):
        email = render(type="tech_low_stock", techLowStockData={"itemName": "Filter"})
        assert "<strong>Minimum Required:</strong> N/A" in email.html


class TestUserActivity:
    def test_defaults(self):
        email = render(type="user_activity")
        assert email.subject == "User Activity Alert - Inventory System"
        assert "No details" in email.html


class TestTestAndDefault:
    def test_test_type_needs_no_payload(self):
        email = render(type="test")
        assert email.subject == "Test Email - Inventory System"
        assert email.html == "This is a test email from your inventory system."

    def test_test_type_uses_message(self):
        assert render(type="test", message="hello").html == "hello"

    @pytest.mark.parametrize("message_type", ["", "weekly_digest"])
    def test_unknown_types_use_default(self, message_type):
        email = render(type=message_type, companyName="Acme")
        assert email.subject == "Notification - Acme"
        assert email.html == "You have a new notification."


class TestEscaping:
    def test_values_are_escaped(self):
        email = render(type="test", message="<script>alert(1)</script>")
        assert "<script>" not in email.html
        assert "&lt;script&gt;" in email.html
