"""Integration tests for the order creation endpoint.

Covers:
- 201 for guests and signed-in users, with the order summary.
- 400 for invalid payloads, 404 for unknown cars, 409 for taken cars.
- Car availability flips with the order.
- Notifications sent after commit; a failing channel never breaks the order.
- Creation throttle.
"""

from __future__ import annotations

import uuid
from unittest.mock import patch

import pytest
import requests
from django.core import mail

from modules.cars.models import Car
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


class TestCreateOrder:
    def test_guest_order(self, api_client, car, order_payload):
        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["status"] == "pending"
        assert data["total_amount"] == "2800.00"
        assert data["user_id"] is None
        assert data["car_title"] == "2006 Honda Civic"
        assert data["summary"]["order_number"] == data["order_number"]
        assert data["summary"]["amount"] == "$2,800.00"
        assert len(data["status_history"]) == 1

        car.refresh_from_db()
        assert car.is_available is False

    def test_signed_in_order_records_owner(self, auth_client, user, order_payload):
        response = auth_client.post(URL, order_payload, format="json")
        assert response.status_code == 201
        assert Order.objects.get().user_id == user.id

    def test_total_ignores_client_amount(self, api_client, order_payload):
        payload = {**order_payload, "total_amount": "1.00"}
        response = api_client.post(URL, payload, format="json")
        assert response.json()["total_amount"] == "2800.00"

    def test_car_already_reserved(self, api_client, order_payload):
        assert api_client.post(URL, order_payload, format="json").status_code == 201
        response = api_client.post(URL, order_payload, format="json")
        assert response.status_code == 409
        assert Order.objects.count() == 1

    def test_unknown_car(self, api_client, order_payload):
        payload = {**order_payload, "car_id": str(uuid.uuid4())}
        assert api_client.post(URL, payload, format="json").status_code == 404

    @pytest.mark.parametrize(
        "field,value",
        [
            ("customer_phone", "call me maybe"),
            ("customer_email", "nope"),
            ("payment_method", "Bitcoin"),
            ("customer_name", ""),
            ("car_id", "not-a-uuid"),
            ("notes", "x" * 1001),
        ],
    )
    def test_invalid_payload(self, api_client, car, order_payload, field, value):
        payload = {**order_payload, field: value}
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 400
        assert Order.objects.count() == 0
        car.refresh_from_db()
        assert car.is_available is True

    def test_phone_without_digits(self, api_client, order_payload):
        payload = {**order_payload, "customer_phone": "(--)"}
        assert api_client.post(URL, payload, format="json").status_code == 400

    def test_missing_address(self, api_client, order_payload):
        payload = dict(order_payload)
        payload.pop("customer_address")
        assert api_client.post(URL, payload, format="json").status_code == 400


class TestCreateNotifications:
    def test_staff_email_after_commit(
        self, api_client, order_payload, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 201
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == "New Car Order - 2006 Honda Civic"

    def test_failing_channel_does_not_affect_order(
        self, api_client, order_payload, settings, django_capture_on_commit_callbacks
    ):
        settings.TELEGRAM_BOT_TOKEN = "123:abc"
        settings.TELEGRAM_CHAT_ID = "42"
        with patch("time.sleep"), patch(
            "modules.notifications.channels.requests.post",
            side_effect=requests.ConnectionError("telegram down"),
        ):
            with django_capture_on_commit_callbacks(execute=True):
                response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 201
        assert Order.objects.count() == 1
        assert len(mail.outbox) == 1

    def test_broken_event_bus_does_not_affect_order(
        self, api_client, order_payload, django_capture_on_commit_callbacks
    ):
        with patch(
            "modules.orders.services.event_bus.publish", side_effect=RuntimeError("boom")
        ):
            with django_capture_on_commit_callbacks(execute=True):
                response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 201
        assert Car.objects.get(id=order_payload["car_id"]).is_available is False


class TestCreateThrottle:
    def test_sixth_order_in_a_minute_is_throttled(self, api_client, make_car, order_payload):
        statuses = []
        for _ in range(6):
            payload = {**order_payload, "car_id": str(make_car().id)}
            statuses.append(api_client.post(URL, payload, format="json").status_code)
        assert statuses == [201] * 5 + [429]
