"""Admin dashboard view."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.cars.serializers import CarListSerializer
from modules.core.permissions import IsAdmin
from modules.dashboard.services import DashboardService
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSummarySerializer


class DashboardView(APIView):
    """GET /api/v1/admin/dashboard/"""

    permission_classes = [IsAdmin]

    def get(self, request: Request) -> Response:
        service = DashboardService(
            car_repository=CarDjangoRepository(),
            order_repository=OrderDjangoRepository(),
            user_repository=UserDjangoRepository(),
        )
        stats = service.get_stats()
        return Response(
            {
                "stats": {
                    "total_cars": stats.total_cars,
                    "available_cars": stats.available_cars,
                    "total_orders": stats.total_orders,
                    "pending_orders": stats.pending_orders,
                    "completed_orders": stats.completed_orders,
                    "total_users": stats.total_users,
                },
                "recent_orders": OrderSummarySerializer(stats.recent_orders, many=True).data,
                "recent_cars": CarListSerializer(stats.recent_cars, many=True).data,
            }
        )
