"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.models import User


class IUserRepository(IRepository["User"]):
    @abstractmethod
    def create_user(self, username: str, email: str, password: str, **extra) -> User:
        """Create a user with a hashed password."""

    @abstractmethod
    def exists(self, username: str, email: str) -> bool:
        """Whether the username or the e-mail is taken (case-insensitive)."""

    @abstractmethod
    def admin_exists(self) -> bool:
        """Whether at least one admin account exists."""
