"""Car repository interface.

Extends ``IRepository[Car]`` with the inventory operations the order
lifecycle depends on: atomic availability flips and the public search.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.cars.dtos import CarSearchDTO
    from modules.cars.models import Car


class ICarRepository(IRepository["Car"]):
    """Repository contract for the Car aggregate.

    ``is_available`` must only be mutated through ``reserve`` and
    ``set_availability``: both are single-statement updates, so two
    concurrent writers can never both observe the same old value.
    """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Car]:
        """Fetch a car and lock its row until the transaction ends."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Car]":
        """List every car (available or not), newest first."""

    @abstractmethod
    def save(self, entity: Car, update_fields: Optional[List[str]] = None) -> Car:
        """Persist a car; ``update_fields`` limits an update to those columns."""

    @abstractmethod
    def search(self, filters: CarSearchDTO) -> "models.QuerySet[Car]":
        """Available cars matching ``filters``, newest first."""

    @abstractmethod
    def reserve(self, id: UUID) -> bool:
        """Flip ``is_available`` true -> false; ``False`` if already taken."""

    @abstractmethod
    def set_availability(self, id: UUID, available: bool) -> Optional[Car]:
        """Set ``is_available`` unconditionally; ``None`` if the car is gone."""

    @abstractmethod
    def featured(self, limit: int) -> List[Car]:
        """Most recently added available cars."""

    @abstractmethod
    def similar(self, car: Car, limit: int) -> List[Car]:
        """Other available cars of the same make or a close price."""

    @abstractmethod
    def filter_options(self) -> Dict[str, List[Any]]:
        """Distinct makes, years, fuel types and transmissions on sale."""
