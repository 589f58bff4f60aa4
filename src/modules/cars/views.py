"""Car API views.

``CarViewSet`` is the public catalogue: only available cars are listed
or shown.  ``AdminCarViewSet`` is the back-office inventory, restricted
to staff.  Both go through ``CarService``; domain exceptions are caught
and translated into HTTP status codes here.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.cars.dtos import CarSearchDTO, CreateCarDTO, UpdateCarDTO
from modules.cars.exceptions import CarHasOpenOrders, CarNotFound
from modules.cars.filters import CarFilter
from modules.cars.models import Car
from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.cars.serializers import (
    CarAvailabilitySerializer,
    CarListSerializer,
    CarSearchSerializer,
    CarSerializer,
    CarWriteSerializer,
)
from modules.cars.services import CarService
from modules.cars.storage import store_images, validate_images
from modules.core.pagination import AdminPagination, PublicCarsPagination
from modules.core.permissions import IsAdmin
from modules.orders.repositories.django_repository import OrderDjangoRepository

_NOT_FOUND = {"detail": "Car not found."}


def _build_service() -> CarService:
    return CarService(
        repository=CarDjangoRepository(),
        order_repository=OrderDjangoRepository(),
    )


class CarViewSet(GenericViewSet):
    """Public, read-only catalogue of available cars."""

    permission_classes = [AllowAny]
    queryset = Car.objects.filter(is_available=True)
    serializer_class = CarListSerializer
    pagination_class = PublicCarsPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def list(self, request: Request) -> Response:
        """GET /api/v1/cars/

        Optional filters: make, model, year, min_price, max_price,
        fuel_type, transmission.  Newest first.
        """
        params = CarSearchSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        try:
            dto = CarSearchDTO(**params.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        queryset = self._service.search_cars(dto)
        page = self.paginate_queryset(queryset)
        serializer = CarListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/cars/{pk}/, with up to four similar cars."""
        try:
            car = self._service.get_available_car(pk)
        except CarNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        data = CarSerializer(car).data
        data["similar"] = CarListSerializer(self._service.similar_cars(car), many=True).data
        return Response(data)

    @action(detail=False, methods=["get"])
    def featured(self, request: Request) -> Response:
        """GET /api/v1/cars/featured/"""
        cars = self._service.featured_cars()
        return Response(CarListSerializer(cars, many=True).data)

    @action(detail=False, methods=["get"], url_path="filter-options")
    def filter_options(self, request: Request) -> Response:
        """GET /api/v1/cars/filter-options/"""
        return Response(self._service.filter_options())


class AdminCarViewSet(GenericViewSet):
    """Back-office inventory management (staff only)."""

    permission_classes = [IsAdmin]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    queryset = Car.objects.all()
    serializer_class = CarSerializer
    pagination_class = AdminPagination
    filterset_class = CarFilter
    search_fields = ["make", "model", "description"]
    ordering_fields = ["created_at", "price", "year", "mileage"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def get_queryset(self):
        return self._service.list_cars()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/admin/cars/"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = CarSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/admin/cars/{pk}/"""
        try:
            car = self._service.get_car(pk)
        except CarNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CarSerializer(car).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/admin/cars/ (multipart, ``images`` required)"""
        payload = CarWriteSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = dict(payload.validated_data)
        uploads = data.pop("images", [])

        try:
            validate_images(uploads)
            # Validate every field before anything is written to storage.
            dto = CreateCarDTO(**data, images=[upload.name for upload in uploads])
        except DjangoValidationError as exc:
            return Response({"detail": exc.messages}, status=status.HTTP_400_BAD_REQUEST)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        dto = dto.model_copy(update={"images": store_images(uploads)})
        car = self._service.create_car(dto)
        return Response(CarSerializer(car).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/admin/cars/{pk}/. New images are appended."""
        payload = CarWriteSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = dict(payload.validated_data)
        uploads = data.pop("images", [])

        try:
            validate_images(uploads)
            dto = UpdateCarDTO(**data)
        except DjangoValidationError as exc:
            return Response({"detail": exc.messages}, status=status.HTTP_400_BAD_REQUEST)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            self._service.get_car(pk)
        except CarNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        if uploads:
            dto = dto.model_copy(update={"new_images": store_images(uploads)})
        car = self._service.update_car(pk, dto)
        return Response(CarSerializer(car).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/admin/cars/{pk}/"""
        try:
            self._service.delete_car(pk)
        except CarNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except CarHasOpenOrders as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"])
    def toggle(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/admin/cars/{pk}/toggle/"""
        return self._availability_response(lambda: self._service.toggle_availability(pk))

    @action(detail=True, methods=["patch"])
    def availability(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/admin/cars/{pk}/availability/ ``{"is_available": bool}``"""
        payload = CarAvailabilitySerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        value = payload.validated_data["is_available"]
        return self._availability_response(
            lambda: self._service.set_availability(pk, value)
        )

    def _availability_response(self, operation) -> Response:
        try:
            car = operation()
        except CarNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except CarHasOpenOrders as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(CarSerializer(car).data)
