"""Car repositories package."""

from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.cars.repositories.interfaces import ICarRepository

__all__ = ["ICarRepository", "CarDjangoRepository"]
