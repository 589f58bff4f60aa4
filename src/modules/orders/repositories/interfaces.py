"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the Order aggregate
needs: row-locked reads for status changes, status history tracking
and the per-car counts used by the inventory policy.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderStatusHistory records.
    There is no delete path: orders are permanent.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert a new ``pending`` order from plain field values."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its car, user and status history."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order holding a row-level lock until commit."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Order]":
        """List orders, newest first, with optional ORM filters."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        user_id: Optional[UUID] = None,
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""

    @abstractmethod
    def count_for_car(self, car_id: UUID, statuses: Iterable[str]) -> int:
        """Number of orders for ``car_id`` whose status is in ``statuses``."""
