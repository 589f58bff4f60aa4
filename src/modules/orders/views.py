"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; generic exceptions are never swallowed.

Access:
- ``create``: anyone (guest orders allowed), throttled.
- ``retrieve`` / ``summary`` / ``cancel``: the order owner or an admin.
- ``list`` / ``partial_update``: admins only.
"""

from __future__ import annotations

from uuid import UUID

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.permissions import AllowAny, BasePermission, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.cars.exceptions import CarNotFound
from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.core.identity import Identity
from modules.core.pagination import AdminPagination
from modules.core.permissions import IsAdmin
from modules.orders.dtos import CreateOrderDTO, CustomerInfoDTO
from modules.orders.exceptions import (
    CarUnavailable,
    InvalidOrderStatus,
    OrderAccessDenied,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CancelOrderSerializer,
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    OrderSummarySerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService

_NOT_FOUND = {"detail": "Order not found."}
_INVALID_ID = {"detail": "Invalid order ID format."}


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    pagination_class = AdminPagination
    filterset_class = OrderFilter
    search_fields = ["customer_name", "customer_email", "car__make", "car__model"]
    ordering_fields = ["created_at", "total_amount", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            car_repository=CarDjangoRepository(),
        )

    def get_permissions(self) -> list[BasePermission]:
        if self.action == "create":
            return [AllowAny()]
        if self.action in {"list", "partial_update"}:
            return [IsAdmin()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttling scopes per action."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Reserves the car; returns 409 if another order already holds it.
        """
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)
        data = create_serializer.validated_data

        identity = Identity.from_user(request.user)
        try:
            dto = CreateOrderDTO(
                car_id=data["car_id"],
                customer=CustomerInfoDTO(
                    name=data["customer_name"],
                    email=data["customer_email"],
                    phone=data["customer_phone"],
                    address=data["customer_address"],
                ),
                payment_method=data["payment_method"],
                notes=data.get("notes", ""),
                user_id=identity.user_id,
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.create_order(dto)
        except CarNotFound:
            return Response(
                {"detail": "Car not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except CarUnavailable:
            return Response(
                {"detail": "This car is no longer available."},
                status=status.HTTP_409_CONFLICT,
            )

        out = OrderSerializer(order).data
        out["summary"] = OrderSummarySerializer(self._service.get_summary(order)).data
        return Response(out, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_orders()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (status, payment method, car, user, date range, total
        range) is handled by ``OrderFilter``; ordering by
        ``OrderingFilter``.  Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        result = self._visible_order(request, pk)
        if isinstance(result, Response):
            return result
        return Response(OrderSerializer(result).data)

    @action(detail=True, methods=["get"])
    def summary(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/summary/"""
        result = self._visible_order(request, pk)
        if isinstance(result, Response):
            return result
        return Response(OrderSummarySerializer(self._service.get_summary(result)).data)

    # ------------------------------------------------------------------
    # Status Update (admin)
    # ------------------------------------------------------------------

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/ ``{"status": ..., "notes": ...}``"""
        payload = UpdateOrderStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            order_id = UUID(str(pk))
        except ValueError:
            return Response(_INVALID_ID, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.update_status(
                order_id=order_id,
                new_status=payload.validated_data["status"],
                notes=payload.validated_data["notes"],
                actor=Identity.from_user(request.user),
            )
        except OrderNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Cancel (owner or admin)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/cancel/

        Cancels a pending or confirmed order and releases its car.
        """
        payload = CancelOrderSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            order_id = UUID(str(pk))
        except ValueError:
            return Response(_INVALID_ID, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.cancel_order(
                order_id=order_id,
                identity=Identity.from_user(request.user),
                notes=payload.validated_data["notes"],
            )
        except OrderNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except OrderAccessDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidOrderStatus as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _visible_order(self, request: Request, pk: str | None) -> Order | Response:
        try:
            return self._service.get_order_for(str(pk), Identity.from_user(request.user))
        except OrderNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except OrderAccessDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
