"""Fan-out of an order notification to every channel.

Each channel task is enqueued on its own: if the broker refuses one,
the error is logged and the remaining channels are still enqueued.
Nothing here raises into the caller.  The request correlation id travels
with each task so its log lines can be matched to the originating request.
"""

from __future__ import annotations

from typing import Dict, Optional
from uuid import UUID

import structlog

from modules.core.middleware import correlation_id_var
from modules.notifications.messages import NotificationKind
from modules.notifications.tasks import (
    send_email_notification,
    send_sms_notification,
    send_telegram_notification,
)

logger = structlog.get_logger(__name__)

CHANNEL_TASKS = {
    "email": send_email_notification,
    "telegram": send_telegram_notification,
    "sms": send_sms_notification,
}


def dispatch_order_notification(
    kind: NotificationKind | str, order_id: UUID | str
) -> Dict[str, Optional[str]]:
    """Enqueue one delivery task per channel.

    Returns the task id per channel (``None`` where enqueueing failed).
    """
    kind = NotificationKind(kind).value
    order_id = str(order_id)
    correlation_id = correlation_id_var.get() or None
    task_ids: Dict[str, Optional[str]] = {}

    for channel, task in CHANNEL_TASKS.items():
        try:
            result = task.delay(kind, order_id, correlation_id=correlation_id)
        except Exception:
            logger.exception(
                "notification.enqueue_failed", channel=channel, kind=kind, order_id=order_id
            )
            task_ids[channel] = None
            continue
        task_ids[channel] = result.id

    logger.info("notification.dispatched", kind=kind, order_id=order_id, channels=task_ids)
    return task_ids
