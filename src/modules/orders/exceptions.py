"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.cars.exceptions import CarNotFound

__all__ = [
    "CarNotFound",
    "CarUnavailable",
    "InvalidOrderStatus",
    "OrderAccessDenied",
    "OrderDeletionNotAllowed",
    "OrderNotFound",
]


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InvalidOrderStatus(Exception):
    """The status is unknown or the transition is not allowed."""


class CarUnavailable(Exception):
    """The car is already reserved by another order."""


class OrderAccessDenied(Exception):
    """The caller is neither the order owner nor an admin."""


class OrderDeletionNotAllowed(Exception):
    """Orders are permanent records and cannot be deleted."""
