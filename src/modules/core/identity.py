"""Caller identity passed from the API layer to services.

Services never read ``request.user`` directly: views build an
``Identity`` and the service applies its authorisation rules on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    user_id: Optional[UUID] = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def anonymous(cls) -> Identity:
        return cls()

    @classmethod
    def from_user(cls, user: Any) -> Identity:
        """Build an identity from a Django user (anonymous users included)."""
        if user is None or not getattr(user, "is_authenticated", False):
            return cls.anonymous()
        return cls(user_id=user.pk, is_admin=bool(user.is_staff))
