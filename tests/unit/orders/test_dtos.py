"""Unit tests for Order DTOs."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.orders.dtos import CreateOrderDTO, CustomerInfoDTO, OrderSummaryDTO, PaymentMethodEnum
from modules.orders.models import Order

pytestmark = pytest.mark.unit


def _customer(**overrides):
    data = {
        "name": "Jane Doe",
        "email": "jane@mail.com",
        "phone": "+1 (555) 123-4567",
        "address": "12 Elm Street",
    }
    data.update(overrides)
    return data


class TestCustomerInfoDTO:
    def test_valid(self):
        info = CustomerInfoDTO(**_customer())
        assert info.phone == "+1 (555) 123-4567"

    @pytest.mark.parametrize("phone", ["call me", "555-abc", "()--", ""])
    def test_invalid_phone(self, phone):
        with pytest.raises(ValidationError):
            CustomerInfoDTO(**_customer(phone=phone))

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            CustomerInfoDTO(**_customer(email="not-an-email"))

    @pytest.mark.parametrize("field", ["name", "address"])
    def test_blank_required_fields(self, field):
        with pytest.raises(ValidationError):
            CustomerInfoDTO(**_customer(**{field: "   "}))


class TestCreateOrderDTO:
    def test_valid_guest_order(self):
        dto = CreateOrderDTO(
            car_id=uuid.uuid4(),
            customer=_customer(),
            payment_method="Apple Pay",
        )
        assert dto.payment_method == PaymentMethodEnum.APPLE_PAY
        assert dto.user_id is None
        assert dto.notes == ""

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(car_id=uuid.uuid4(), customer=_customer(), payment_method="Bitcoin")

    def test_notes_none_is_blank(self):
        dto = CreateOrderDTO(
            car_id=uuid.uuid4(), customer=_customer(), payment_method="Zelle", notes=None
        )
        assert dto.notes == ""

    def test_notes_length_limit(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(
                car_id=uuid.uuid4(),
                customer=_customer(),
                payment_method="Zelle",
                notes="x" * 1001,
            )

    def test_all_seven_payment_methods(self):
        assert {m.value for m in PaymentMethodEnum} == {
            "Cash App",
            "Chime",
            "Zelle",
            "Apple Pay",
            "PayPal",
            "Varo",
            "Gift Cards",
        }


class TestOrderSummaryDTO:
    def test_from_entity(self, car, place_order):
        order = place_order(car)
        summary = OrderSummaryDTO.from_entity(order)
        assert summary.order_number == order.id.hex[-8:].upper()
        assert summary.car_title == "2006 Honda Civic"
        assert summary.amount == "$2,800.00"
        assert summary.status == "pending"
        assert summary.date == order.created_at.date()

    def test_deleted_car_shows_placeholder(self, car, place_order, order_service):
        order = place_order(car)
        order_service.update_status(order.id, "cancelled")
        car.delete()

        summary = OrderSummaryDTO.from_entity(Order.objects.get(id=order.id))

        assert summary.car_title == "Car not available"
        assert summary.amount == "$2,800.00"

    def test_order_number_is_eight_uppercase_hex(self, car, place_order):
        number = OrderSummaryDTO.from_entity(place_order(car)).order_number
        assert len(number) == 8
        assert number == number.upper()
        int(number, 16)

    def test_amount_formatting_without_thousands(self, make_car, place_order):
        order = place_order(make_car(price=Decimal("950.5")))
        assert OrderSummaryDTO.from_entity(order).amount == "$950.50"
