"""Back-office statistics.

Read-only aggregation over cars, orders and users; every number comes
from a single ``COUNT`` query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderSummaryDTO

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IUserRepository
    from modules.cars.models import Car
    from modules.cars.repositories.interfaces import ICarRepository
    from modules.orders.repositories.interfaces import IOrderRepository

RECENT_LIMIT = 5


@dataclass(frozen=True)
class DashboardStats:
    total_cars: int
    available_cars: int
    total_orders: int
    pending_orders: int
    completed_orders: int
    total_users: int
    recent_orders: List[OrderSummaryDTO]
    recent_cars: List[Car]


class DashboardService:
    def __init__(
        self,
        car_repository: ICarRepository,
        order_repository: IOrderRepository,
        user_repository: IUserRepository,
    ) -> None:
        self._cars = car_repository
        self._orders = order_repository
        self._users = user_repository

    def get_stats(self) -> DashboardStats:
        orders = self._orders.list()
        cars = self._cars.list()
        return DashboardStats(
            total_cars=cars.count(),
            available_cars=cars.filter(is_available=True).count(),
            total_orders=orders.count(),
            pending_orders=orders.filter(status=OrderStatus.PENDING).count(),
            completed_orders=orders.filter(status=OrderStatus.COMPLETED).count(),
            total_users=self._users.list().count(),
            recent_orders=[
                OrderSummaryDTO.from_entity(order) for order in orders[:RECENT_LIMIT]
            ],
            recent_cars=list(cars[:RECENT_LIMIT]),
        )
