"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CustomerInfoDTO``: embedded customer contact details.
- ``CreateOrderDTO``: input for order creation.
- ``OrderSummaryDTO``: short projection used by notifications and
  the dashboard.
"""

from __future__ import annotations

import re
from datetime import date as Date
from enum import StrEnum
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.orders.constants import (
    CUSTOMER_ADDRESS_MAX_LENGTH,
    CUSTOMER_NAME_MAX_LENGTH,
    CUSTOMER_PHONE_MAX_LENGTH,
    MISSING_CAR_TITLE,
    NOTES_MAX_LENGTH,
)

if TYPE_CHECKING:
    from modules.orders.models import Order

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")


class PaymentMethodEnum(StrEnum):
    CASH_APP = "Cash App"
    CHIME = "Chime"
    ZELLE = "Zelle"
    APPLE_PAY = "Apple Pay"
    PAYPAL = "PayPal"
    VARO = "Varo"
    GIFT_CARDS = "Gift Cards"


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CustomerInfoDTO(BaseModel):
    """Customer contact details, all required."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=CUSTOMER_NAME_MAX_LENGTH)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=CUSTOMER_PHONE_MAX_LENGTH)
    address: str = Field(min_length=1, max_length=CUSTOMER_ADDRESS_MAX_LENGTH)

    @field_validator("phone")
    @classmethod
    def phone_shape(cls, v: str) -> str:
        if not PHONE_PATTERN.match(v) or not any(ch.isdigit() for ch in v):
            raise ValueError("Please provide a valid phone number.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    ``user_id`` is ``None`` for guest orders.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    car_id: UUID
    customer: CustomerInfoDTO
    payment_method: PaymentMethodEnum
    notes: str = Field(default="", max_length=NOTES_MAX_LENGTH)
    user_id: Optional[UUID] = None

    @field_validator("notes", mode="before")
    @classmethod
    def none_notes_as_blank(cls, v: Optional[str]) -> str:
        return v or ""


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderSummaryDTO(BaseModel):
    """Pure projection of an order for people, not machines.

    ``amount`` is preformatted (``$1,200.00``).  A deleted car shows as
    "Car not available".
    """

    model_config = ConfigDict(frozen=True)

    order_number: str
    car_title: str
    customer_name: str
    amount: str
    status: str
    date: Date

    @classmethod
    def from_entity(cls, order: Order) -> OrderSummaryDTO:
        car = order.car
        return cls(
            order_number=order.order_number,
            car_title=car.title if car is not None else MISSING_CAR_TITLE,
            customer_name=order.customer_name,
            amount=f"${order.total_amount:,.2f}",
            status=order.status,
            date=order.created_at.date(),
        )
