"""Car domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class CarNotFound(Exception):
    """The requested car does not exist (or is not visible to the caller)."""


class CarHasOpenOrders(Exception):
    """The car is held by an order and cannot be deleted or released."""
