from modules.notifications.models import EmailNotificationRequest


class TestEmailNotificationRequest:
    def test_parses_camel_case_body(self):
        request = EmailNotificationRequest.model_validate({
            "type": "tech_low_stock",
            "to": "admin@example.com",
            "companyName": "Acme",
            "companyId": "c-1",
            "techLowStockData": {"itemName": "Filter", "remainingQuantity": 1},
        })
        assert request.company_name == "Acme"
        assert request.company_id == "c-1"
        assert request.tech_low_stock_data.item_name == "Filter"
        assert request.tech_low_stock_data.remaining_quantity == 1

    def test_accepts_snake_case_names(self):
        request = EmailNotificationRequest(type="test", company_name="Acme")
        assert request.company_name == "Acme"

    def test_everything_optional(self):
        request = EmailNotificationRequest.model_validate({})
        assert request.type == ""
        assert request.to is None
        assert request.items is None
