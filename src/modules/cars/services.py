"""Car service layer (Use Cases).

Orchestrates inventory use-cases for the Car aggregate, delegating
persistence to the injected ``ICarRepository``.

Business rules enforced here:
- Only available cars are visible to the public (search, detail,
  featured, similar).
- A car held by an open order (pending / confirmed / processing) cannot
  be deleted.
- An admin cannot mark a car available while an active order still
  holds it; marking a car unavailable is always allowed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.cars.constants import FEATURED_LIMIT, SIMILAR_LIMIT
from modules.cars.exceptions import CarHasOpenOrders, CarNotFound
from modules.cars.models import Car
from modules.orders.constants import ACTIVE_STATES, OPEN_STATES

if TYPE_CHECKING:
    from django.db import models

    from modules.cars.dtos import CarSearchDTO, CreateCarDTO, UpdateCarDTO
    from modules.cars.repositories.interfaces import ICarRepository
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

_EDITABLE_FIELDS = (
    "make",
    "model",
    "year",
    "price",
    "mileage",
    "fuel_type",
    "transmission",
    "description",
    "features",
)


class CarService:
    """Application service for Car use-cases.

    Receives repositories via constructor injection (DIP).  The order
    repository is only read, to enforce the delete/release policy.
    """

    def __init__(
        self,
        repository: ICarRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._repo = repository
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_car(self, dto: CreateCarDTO) -> Car:
        car = Car(
            make=dto.make,
            model=dto.model,
            year=dto.year,
            price=dto.price,
            mileage=dto.mileage,
            fuel_type=dto.fuel_type.value,
            transmission=dto.transmission.value,
            description=dto.description,
            images=list(dto.images),
            features=list(dto.features),
        )
        car = self._repo.save(car)
        logger.info("car.created", car_id=str(car.id), price=str(car.price))
        return car

    @transaction.atomic
    def update_car(self, id: str, dto: UpdateCarDTO) -> Car:
        """Update the supplied fields; ``is_available`` is never touched here.

        Raises:
            CarNotFound: if the car does not exist.
        """
        car = self._get_or_raise(id)

        for field in _EDITABLE_FIELDS:
            value = getattr(dto, field)
            if value is None:
                continue
            if field in ("fuel_type", "transmission"):
                value = value.value
            setattr(car, field, list(value) if field == "features" else value)

        if dto.new_images:
            car.images = list(car.images) + list(dto.new_images)

        # Only the edited columns: a concurrent reservation must not be
        # overwritten with a stale is_available.
        car = self._repo.save(car, update_fields=[*_EDITABLE_FIELDS, "images"])
        logger.info("car.updated", car_id=str(car.id))
        return car

    @transaction.atomic
    def delete_car(self, id: str) -> None:
        """Hard-delete a car; past orders keep their record with no car.

        Raises:
            CarNotFound: if the car does not exist.
            CarHasOpenOrders: if an open order still holds the car.
        """
        car = self._lock_or_raise(id)
        open_orders = self._order_repo.count_for_car(car.id, OPEN_STATES)
        if open_orders:
            logger.warning("car.delete_refused", car_id=str(car.id), open_orders=open_orders)
            raise CarHasOpenOrders(
                f"Car {car.id} has {open_orders} open order(s) and cannot be deleted."
            )
        self._repo.delete(str(car.id))
        logger.info("car.deleted", car_id=str(car.id))

    @transaction.atomic
    def set_availability(self, id: str, available: bool) -> Car:
        """Admin override of the availability flag.

        Raises:
            CarNotFound: if the car does not exist.
            CarHasOpenOrders: when releasing a car an active order holds.
        """
        return self._set_locked_availability(self._lock_or_raise(id), available)

    @transaction.atomic
    def toggle_availability(self, id: str) -> Car:
        car = self._lock_or_raise(id)
        return self._set_locked_availability(car, not car.is_available)

    def _set_locked_availability(self, car: Car, available: bool) -> Car:
        if available:
            holders = self._order_repo.count_for_car(car.id, ACTIVE_STATES)
            if holders:
                logger.warning("car.release_refused", car_id=str(car.id), orders=holders)
                raise CarHasOpenOrders(
                    f"Car {car.id} is held by an order and cannot be made available."
                )
        updated = self._repo.set_availability(car.id, available)
        if updated is None:
            raise CarNotFound(f"Car {car.id} not found.")
        return updated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_car(self, id: str) -> Car:
        """Retrieve any car (admin view).

        Raises:
            CarNotFound: if the car does not exist.
        """
        return self._get_or_raise(id)

    def get_available_car(self, id: str) -> Car:
        """Retrieve a car for the public catalogue.

        Raises:
            CarNotFound: if the car does not exist or is already sold.
        """
        car = self._get_or_raise(id)
        if not car.is_available:
            raise CarNotFound(f"Car {id} is not available.")
        return car

    def search_cars(self, filters: CarSearchDTO) -> models.QuerySet[Car]:
        return self._repo.search(filters)

    def list_cars(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Car]:
        return self._repo.list(filters)

    def featured_cars(self) -> List[Car]:
        return self._repo.featured(FEATURED_LIMIT)

    def similar_cars(self, car: Car) -> List[Car]:
        return self._repo.similar(car, SIMILAR_LIMIT)

    def filter_options(self) -> Dict[str, List[Any]]:
        return self._repo.filter_options()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, id: str) -> Car:
        car = self._repo.get_by_id(id)
        if not car:
            raise CarNotFound(f"Car {id} not found.")
        return car

    def _lock_or_raise(self, id: str) -> Car:
        # A concurrent reservation of this car blocks until commit.
        car = self._repo.get_for_update(id)
        if not car:
            raise CarNotFound(f"Car {id} not found.")
        return car
