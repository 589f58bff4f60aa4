"""Event handlers for Orders domain events.

New and cancelled orders fan out to the staff notification channels;
other transitions are only logged.
"""

from __future__ import annotations

import structlog

from modules.notifications.dispatcher import dispatch_order_notification
from modules.notifications.messages import NotificationKind
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info("order.event.created", order_id=str(event.aggregate_id))
        dispatch_order_notification(NotificationKind.NEW_ORDER, event.aggregate_id)


class OrderCancelledHandler(IEventHandler[OrderCancelled]):
    def handle(self, event: OrderCancelled) -> None:
        logger.info("order.event.cancelled", order_id=str(event.aggregate_id))
        dispatch_order_notification(NotificationKind.ORDER_CANCELLED, event.aggregate_id)


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.event.status_changed",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


order_created_handler = OrderCreatedHandler()
order_cancelled_handler = OrderCancelledHandler()
order_status_changed_handler = OrderStatusChangedHandler()
