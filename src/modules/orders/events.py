"""Domain events for the Orders bounded context.

Published on the in-process bus after the order transaction commits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created (its car is now reserved)."""


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    """Raised when an order is cancelled (its car was released)."""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised on any other status transition."""

    old_status: Optional[str] = None
    new_status: Optional[str] = None
