"""Rendering of order notifications.

Each kind of notification is rendered once per channel from the order
summary: an HTML e-mail (with subject), an HTML-formatted chat message
and a short SMS text.  Templates live in ``templates/notifications/``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Dict

from django.conf import settings
from django.template.loader import render_to_string

from modules.orders.dtos import OrderSummaryDTO

if TYPE_CHECKING:
    from modules.orders.models import Order


class NotificationKind(StrEnum):
    NEW_ORDER = "new_order"
    ORDER_CANCELLED = "order_cancelled"


_SUBJECTS = {
    NotificationKind.NEW_ORDER: "New Car Order - {car_title}",
    NotificationKind.ORDER_CANCELLED: "Order Cancelled - {car_title}",
}


@dataclass(frozen=True)
class OrderMessages:
    subject: str
    email_html: str
    telegram_text: str
    sms_text: str


def _context(order: Order) -> Dict[str, Any]:
    return {
        "summary": OrderSummaryDTO.from_entity(order),
        "order": order,
        "telegram_channel": settings.TELEGRAM_CHANNEL,
    }


def render_order_messages(kind: NotificationKind | str, order: Order) -> OrderMessages:
    """Render every channel's message for ``kind``.

    Raises ``ValueError`` for an unknown kind.
    """
    kind = NotificationKind(kind)
    context = _context(order)
    prefix = f"notifications/{kind.value}"
    return OrderMessages(
        subject=_SUBJECTS[kind].format(car_title=context["summary"].car_title),
        email_html=render_to_string(f"{prefix}_email.html", context).strip(),
        telegram_text=render_to_string(f"{prefix}_telegram.html", context).strip(),
        sms_text=" ".join(render_to_string(f"{prefix}_sms.txt", context).split()),
    )
