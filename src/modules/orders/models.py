"""Order and OrderStatusHistory models.

Business rules implemented:
- Status transitions are validated against the state machine
  (enforced at service layer, helpers here).
- Each status change generates an append-only history record.
- ``total_amount`` is a snapshot of the car price at creation time.
- ``car`` uses SET_NULL: deleting a car keeps its past orders, which then
  display as "Car not available".  The reference is never reassigned.
- Orders are permanent records: there is no delete path.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    CUSTOMER_ADDRESS_MAX_LENGTH,
    CUSTOMER_NAME_MAX_LENGTH,
    CUSTOMER_PHONE_MAX_LENGTH,
    NOTES_MAX_LENGTH,
    ORDER_NUMBER_LENGTH,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
)


class Order(BaseModel):
    """Order aggregate root.

    Customer details are embedded (guest orders have no ``user``).
    ``order_number`` is derived from the UUIDv7 ``id``; the full ``id``
    is used for all internal references and API lookups.
    """

    car = models.ForeignKey(
        "cars.Car",
        on_delete=models.SET_NULL,
        null=True,
        related_name="orders",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    customer_name = models.CharField(max_length=CUSTOMER_NAME_MAX_LENGTH)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=CUSTOMER_PHONE_MAX_LENGTH)
    customer_address = models.CharField(max_length=CUSTOMER_ADDRESS_MAX_LENGTH)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    notes = models.TextField(blank=True, default="", max_length=NOTES_MAX_LENGTH)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
            models.Index(fields=["car", "status"], name="orders_car_status_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def order_number(self) -> str:
        """Short shareable reference: last eight hex digits of the id."""
        return self.id.hex[-ORDER_NUMBER_LENGTH:].upper()

    def __str__(self) -> str:
        return f"#{self.order_number} ({self.status})"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status transitions.

    Each record captures a single status change with the responsible user
    and optional notes (e.g. cancellation reason).  ``user`` is nullable:
    ``None`` means a guest or the system performed the change.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order} : {self.old_status} -> {self.new_status}"
