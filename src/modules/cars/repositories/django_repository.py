"""Django ORM implementation of the Car repository.

Satisfies ``ICarRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a
missing car into a domain exception.

Availability changes are issued as ``UPDATE ... WHERE`` statements
rather than read-modify-save, which makes each flip atomic at the
database level on every supported backend.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Q

from modules.cars.constants import SIMILAR_PRICE_WINDOW
from modules.cars.dtos import CarSearchDTO
from modules.cars.models import Car
from modules.cars.repositories.interfaces import ICarRepository
from modules.core.models import touch_fields

logger = structlog.get_logger(__name__)


class CarDjangoRepository(ICarRepository):
    """Concrete Car repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Car]:
        """Retrieve a car by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Car.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Car]:
        """Retrieve a car with a row-level lock (SELECT FOR UPDATE).

        Must run inside a transaction.  A concurrent ``reserve`` of the same
        car waits for the lock, so availability checks made after this call
        stay valid until commit.
        """
        try:
            return Car.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Car]:
        """List cars with optional Django ORM look-ups.

        Examples of valid filters::

            {"is_available": False}
            {"make__icontains": "honda"}
        """
        queryset = Car.objects.all().order_by("-created_at", "-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def search(self, filters: CarSearchDTO) -> models.QuerySet[Car]:
        queryset = Car.objects.filter(is_available=True)

        if filters.make:
            queryset = queryset.filter(make__icontains=filters.make)
        if filters.model:
            queryset = queryset.filter(model__icontains=filters.model)
        if filters.year is not None:
            queryset = queryset.filter(year=filters.year)
        if filters.min_price is not None:
            queryset = queryset.filter(price__gte=filters.min_price)
        if filters.max_price is not None:
            queryset = queryset.filter(price__lte=filters.max_price)
        if filters.fuel_type:
            queryset = queryset.filter(fuel_type=filters.fuel_type.value)
        if filters.transmission:
            queryset = queryset.filter(transmission=filters.transmission.value)

        return queryset.order_by("-created_at", "-id")

    def featured(self, limit: int) -> List[Car]:
        return list(Car.objects.filter(is_available=True).order_by("-created_at", "-id")[:limit])

    def similar(self, car: Car, limit: int) -> List[Car]:
        price_window = Q(
            price__gte=car.price - SIMILAR_PRICE_WINDOW,
            price__lte=car.price + SIMILAR_PRICE_WINDOW,
        )
        queryset = (
            Car.objects.filter(is_available=True)
            .exclude(id=car.id)
            .filter(Q(make__iexact=car.make) | price_window)
            .order_by("-created_at", "-id")
        )
        return list(queryset[:limit])

    def filter_options(self) -> Dict[str, List[Any]]:
        available = Car.objects.filter(is_available=True)

        def distinct(field: str, descending: bool = False) -> List[Any]:
            order = f"-{field}" if descending else field
            return list(
                available.order_by(order).values_list(field, flat=True).distinct()
            )

        return {
            "makes": distinct("make"),
            "years": distinct("year", descending=True),
            "fuel_types": distinct("fuel_type"),
            "transmissions": distinct("transmission"),
        }

    # ------------------------------------------------------------------
    # Availability (atomic single-row updates)
    # ------------------------------------------------------------------

    def reserve(self, id: UUID) -> bool:
        """Compare-and-set: only the caller that sees ``is_available=True`` wins."""
        updated = Car.objects.filter(id=id, is_available=True).update(
            **touch_fields(is_available=False)
        )
        logger.info("car.reserve_attempted", car_id=str(id), reserved=bool(updated))
        return updated == 1

    def set_availability(self, id: UUID, available: bool) -> Optional[Car]:
        """Idempotent: writing the current value still refreshes ``updated_at``."""
        updated = Car.objects.filter(id=id).update(**touch_fields(is_available=available))
        if not updated:
            return None
        logger.info("car.availability_set", car_id=str(id), is_available=available)
        return Car.objects.get(id=id)

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Car, update_fields: Optional[List[str]] = None) -> Car:
        """Persist (create or update) a car.

        ``update_fields`` restricts an update to the given columns so that
        admin edits never write back a stale ``is_available``.
        """
        entity.save(update_fields=update_fields)
        logger.info("car.saved", car_id=str(entity.id), title=entity.title)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete a car by ID.

        Returns ``True`` if the car was found and deleted, ``False`` if no
        car exists with the given ID.
        """
        car = self.get_by_id(id)
        if not car:
            return False
        car.delete()
        logger.info("car.deleted", car_id=str(id))
        return True
