"""Celery tasks delivering order notifications, one task per channel.

Each task loads the order, renders the messages and hands them to its
channel.  Delivery failures are logged and reported in the task result;
they are never raised, so one channel cannot affect another.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from celery import shared_task

from modules.notifications.channels import CHANNELS
from modules.notifications.exceptions import NotificationChannelFailure
from modules.notifications.messages import render_order_messages
from modules.orders.repositories.django_repository import OrderDjangoRepository

logger = structlog.get_logger(__name__)


def deliver(channel_name: str, kind: str, order_id: str) -> Dict[str, Any]:
    log = logger.bind(channel=channel_name, kind=kind, order_id=order_id)
    channel = CHANNELS[channel_name]

    if not channel.is_configured():
        log.info("notification.channel_not_configured")
        return {"status": "skipped", "channel": channel_name, "reason": "not_configured"}

    order = OrderDjangoRepository().get_by_id(order_id)
    if order is None:
        log.warning("notification.order_missing")
        return {"status": "skipped", "channel": channel_name, "reason": "order_missing"}

    try:
        channel.send(render_order_messages(kind, order))
    except NotificationChannelFailure as exc:
        log.error("notification.delivery_failed", error=str(exc))
        return {"status": "failed", "channel": channel_name, "error": str(exc)}

    log.info("notification.delivered")
    return {"status": "sent", "channel": channel_name}


@shared_task(name="notifications.send_email")
def send_email_notification(
    kind: str, order_id: str, correlation_id: Optional[str] = None
) -> Dict[str, Any]:
    with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
        return deliver("email", kind, order_id)


@shared_task(name="notifications.send_telegram")
def send_telegram_notification(
    kind: str, order_id: str, correlation_id: Optional[str] = None
) -> Dict[str, Any]:
    with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
        return deliver("telegram", kind, order_id)


@shared_task(name="notifications.send_sms")
def send_sms_notification(
    kind: str, order_id: str, correlation_id: Optional[str] = None
) -> Dict[str, Any]:
    with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
        return deliver("sms", kind, order_id)
