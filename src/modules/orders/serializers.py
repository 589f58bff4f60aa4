"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import (
    CUSTOMER_ADDRESS_MAX_LENGTH,
    CUSTOMER_NAME_MAX_LENGTH,
    CUSTOMER_PHONE_MAX_LENGTH,
    MISSING_CAR_TITLE,
    NOTES_MAX_LENGTH,
    PaymentMethod,
)
from modules.orders.dtos import PHONE_PATTERN
from modules.orders.models import Order, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    car_id = serializers.UUIDField()
    customer_name = serializers.CharField(max_length=CUSTOMER_NAME_MAX_LENGTH)
    customer_email = serializers.EmailField()
    customer_phone = serializers.RegexField(
        PHONE_PATTERN,
        max_length=CUSTOMER_PHONE_MAX_LENGTH,
        error_messages={"invalid": "Please provide a valid phone number."},
    )
    customer_address = serializers.CharField(max_length=CUSTOMER_ADDRESS_MAX_LENGTH)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    notes = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=NOTES_MAX_LENGTH
    )


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class CancelOrderSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read serializer for order status history records."""

    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderSummarySerializer(serializers.Serializer):
    order_number = serializers.CharField()
    car_title = serializers.CharField()
    customer_name = serializers.CharField()
    amount = serializers.CharField()
    status = serializers.CharField()
    date = serializers.DateField()


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with car title and history."""

    order_number = serializers.CharField(read_only=True)
    car_title = serializers.SerializerMethodField()
    status_history = StatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "car_id",
            "car_title",
            "user_id",
            "customer_name",
            "customer_email",
            "customer_phone",
            "customer_address",
            "payment_method",
            "total_amount",
            "status",
            "notes",
            "created_at",
            "updated_at",
            "status_history",
        ]
        read_only_fields = fields

    def get_car_title(self, obj: Order) -> str:
        return obj.car.title if obj.car is not None else MISSING_CAR_TITLE


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order list (no nested relations)."""

    order_number = serializers.CharField(read_only=True)
    car_title = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "car_id",
            "car_title",
            "customer_name",
            "payment_method",
            "status",
            "total_amount",
            "created_at",
        ]
        read_only_fields = fields

    def get_car_title(self, obj: Order) -> str:
        return obj.car.title if obj.car is not None else MISSING_CAR_TITLE
