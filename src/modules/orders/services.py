"""Order service layer (Use Cases).

Orchestrates order creation, status management and cancellation, and
keeps ``Car.is_available`` consistent with the order state machine.
All write operations are atomic: the service defines the unit-of-work
boundary, so a raised domain exception leaves no partial writes.

Business rules enforced:
- A car is reserved by a compare-and-set on ``is_available``; of two
  concurrent orders for the same car exactly one wins.
- ``total_amount`` snapshots the car price when the order is placed.
- Status transitions are validated against the state machine.
- Cancelling releases the car; completing keeps it sold.
- History is recorded on every status change.
- Domain events (and so notifications) are published only after the
  transaction commits; a failing handler never affects the order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.cars.exceptions import CarNotFound
from modules.core.identity import Identity
from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderSummaryDTO
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.exceptions import (
    CarUnavailable,
    InvalidOrderStatus,
    OrderAccessDenied,
    OrderNotFound,
)
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from django.db import models

    from modules.cars.repositories.interfaces import ICarRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        car_repository: ICarRepository,
    ) -> None:
        self._order_repo = order_repository
        self._car_repo = car_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Reserve the car and create a ``pending`` order for it.

        Steps:
        1. Resolve the car and snapshot its price.
        2. Reserve it (``UPDATE ... WHERE is_available``); losing the
           race is reported exactly like an unavailable car.
        3. Insert the order and its initial history record.
        4. Publish ``OrderCreated`` once the transaction commits.

        Raises:
            CarNotFound: the car does not exist.
            CarUnavailable: the car is already reserved.
        """
        log = logger.bind(car_id=str(dto.car_id))
        log.info("order.creation_started")

        car = self._car_repo.get_by_id(str(dto.car_id))
        if not car:
            raise CarNotFound(f"Car {dto.car_id} not found.")
        if not car.is_available or not self._car_repo.reserve(car.id):
            log.warning("order.car_unavailable")
            raise CarUnavailable(f"Car {car.id} is no longer available.")

        order = self._order_repo.create(
            {
                "car_id": car.id,
                "user_id": dto.user_id,
                "customer_name": dto.customer.name,
                "customer_email": dto.customer.email,
                "customer_phone": dto.customer.phone,
                "customer_address": dto.customer.address,
                "payment_method": dto.payment_method.value,
                "total_amount": car.price,
                "notes": dto.notes,
            }
        )
        self._order_repo.add_history(
            order_id=order.id,
            status=OrderStatus.PENDING,
            notes="Order created",
            user_id=dto.user_id,
        )

        log.info("order.created", order_id=str(order.id), total=str(order.total_amount))
        self._publish_on_commit(OrderCreated(aggregate_id=order.id))
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_status(
        self,
        order_id: UUID,
        new_status: str,
        notes: str = "",
        actor: Optional[Identity] = None,
    ) -> Order:
        """Transition an order to a new status.

        Acquires a row-level lock (``SELECT FOR UPDATE``) on the order
        before validating the transition, so concurrent updates of the
        same order are serialised.  Entering ``cancelled`` releases the
        car; if the car has been deleted meanwhile the order is still
        cancelled and the release is skipped.

        Raises:
            InvalidOrderStatus: unknown status or transition not allowed.
            OrderNotFound: order does not exist.
        """
        if new_status not in OrderStatus.values:
            logger.warning("order.unknown_status", order_id=str(order_id), status=new_status)
            raise InvalidOrderStatus(f"'{new_status}' is not a valid order status.")

        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(
            order_id=str(order_id),
            current_status=order.status,
            new_status=new_status,
        )

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {order.status} to {new_status}."
            )

        old_status = order.status
        order.status = new_status
        self._order_repo.save(order)

        if new_status == OrderStatus.CANCELLED:
            self._release_car(order)

        self._order_repo.add_history(
            order_id=order.id,
            status=new_status,
            notes=notes,
            old_status=old_status,
            user_id=actor.user_id if actor else None,
        )

        log.info("order.status_updated")
        if new_status == OrderStatus.CANCELLED:
            event: DomainEvent = OrderCancelled(aggregate_id=order.id)
        else:
            event = OrderStatusChanged(
                aggregate_id=order.id, old_status=old_status, new_status=new_status
            )
        self._publish_on_commit(event)
        return self._order_repo.get_by_id(str(order_id)) or order

    def cancel_order(self, order_id: UUID, identity: Identity, notes: str = "") -> Order:
        """Cancel on behalf of ``identity`` (the owner or an admin).

        Raises:
            OrderNotFound: order does not exist.
            OrderAccessDenied: caller may not act on this order.
            InvalidOrderStatus: order is already processing or finished.
        """
        self.get_order_for(str(order_id), identity)
        return self.update_status(
            order_id,
            OrderStatus.CANCELLED,
            notes=notes or "Order cancelled",
            actor=identity,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def get_order_for(self, order_id: str, identity: Identity) -> Order:
        """Retrieve an order the caller is allowed to see.

        Admins see every order; users see their own.  Guest orders are
        only reachable by admins.

        Raises:
            OrderNotFound: if the order does not exist.
            OrderAccessDenied: if the caller is not allowed.
        """
        order = self.get_order(order_id)
        if identity.is_authenticated and identity.is_admin:
            return order
        if not identity.is_authenticated or order.user_id != identity.user_id:
            logger.warning(
                "order.access_denied",
                order_id=str(order.id),
                user_id=str(identity.user_id) if identity.user_id else None,
            )
            raise OrderAccessDenied("You do not have access to this order.")
        return order

    def get_summary(self, order: Order) -> OrderSummaryDTO:
        return OrderSummaryDTO.from_entity(order)

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """Return orders newest first, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _release_car(self, order: Order) -> None:
        log = logger.bind(order_id=str(order.id), car_id=str(order.car_id))
        if order.car_id is None or self._car_repo.set_availability(order.car_id, True) is None:
            log.warning("order.car_release_skipped", reason="car_deleted")
            return
        log.info("order.car_released")

    def _publish_on_commit(self, event: DomainEvent) -> None:
        """Publish after commit; a failing subscriber is logged, never raised."""

        def publish() -> None:
            try:
                event_bus.publish(event)
            except Exception:
                logger.exception(
                    "order.event_publish_failed",
                    event_name=event.event_name,
                    order_id=str(event.aggregate_id),
                )

        transaction.on_commit(publish)
