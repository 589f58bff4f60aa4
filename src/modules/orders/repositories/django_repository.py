"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Concurrency control on status updates uses ``select_for_update()``
to serialise transitions of the same order.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderDeletionNotAllowed
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order.

        ``data`` keys: ``car_id``, ``total_amount``, ``customer_name``,
        ``customer_email``, ``customer_phone``, ``customer_address``,
        ``payment_method`` (required); ``user_id``, ``notes`` (optional).
        """
        order = Order(
            car_id=data["car_id"],
            user_id=data.get("user_id"),
            customer_name=data["customer_name"],
            customer_email=data["customer_email"],
            customer_phone=data["customer_phone"],
            customer_address=data["customer_address"],
            payment_method=data["payment_method"],
            total_amount=data["total_amount"],
            notes=data.get("notes", ""),
            status=OrderStatus.PENDING,
        )
        order.save()
        logger.info("order.inserted", order_id=str(order.id), car_id=str(order.car_id))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        ``select_related`` joins the car and user (single query) and
        ``prefetch_related`` batches the status history.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("car", "user")
                .prefetch_related("status_history")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Only the order row is locked; the car is mutated through its own
        atomic updates.  Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders with optional filters and eager-loaded relations.

        Examples of valid filters::

            {"status": "pending"}
            {"user_id": user.id}
            {"created_at__date__gte": date(2024, 1, 1)}
        """
        queryset = Order.objects.select_related("car", "user").order_by("-created_at", "-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def count_for_car(self, car_id: UUID, statuses: Iterable[str]) -> int:
        return Order.objects.filter(car_id=car_id, status__in=list(statuses)).count()

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity

    def delete(self, id: str) -> bool:
        """Orders are permanent records.

        Raises:
            OrderDeletionNotAllowed: always.
        """
        logger.warning("order.delete_refused", order_id=str(id))
        raise OrderDeletionNotAllowed(f"Order {id} cannot be deleted.")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        user_id: Optional[UUID] = None,
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""
        history = OrderStatusHistory(
            order_id=order_id,
            old_status=old_status,
            new_status=status,
            notes=notes,
            user_id=user_id,
        )
        history.save()

        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=status,
        )
        return history
