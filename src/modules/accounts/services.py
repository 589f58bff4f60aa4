"""Account service layer (Use Cases).

Business rules enforced here:
- Username and e-mail are unique (case-insensitive).
- Admin accounts cannot be deleted through the back-office.
- ``create_admin`` bootstraps the first admin only once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction

from modules.accounts.exceptions import (
    CannotDeleteAdmin,
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
)

if TYPE_CHECKING:
    from django.db import models

    from modules.accounts.dtos import RegisterUserDTO
    from modules.accounts.models import User
    from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class AccountService:
    """Application service for account use-cases."""

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def register(self, dto: RegisterUserDTO) -> User:
        """Create a regular (non-admin) account.

        Raises:
            UserAlreadyExists: username or e-mail already registered.
        """
        if self._repo.exists(dto.username, dto.email):
            logger.warning("user.duplicate", username=dto.username)
            raise UserAlreadyExists("User with this email or username already exists.")
        try:
            return self._repo.create_user(
                username=dto.username,
                email=dto.email,
                password=dto.password,
                phone=dto.phone or "",
            )
        except IntegrityError as exc:
            raise UserAlreadyExists(
                "User with this email or username already exists."
            ) from exc

    def authenticate(self, request: Any, identifier: str, password: str) -> User:
        """Resolve credentials through the configured auth backends.

        Raises:
            InvalidCredentials: unknown identifier, wrong password or
                inactive account.
        """
        user = authenticate(request, username=identifier, password=password)
        if user is None:
            logger.warning("user.login_failed")
            raise InvalidCredentials("Invalid email/phone or password.")
        logger.info("user.logged_in", user_id=str(user.pk))
        return user

    @transaction.atomic
    def create_admin(
        self, username: str, email: str, password: str, phone: str = ""
    ) -> Optional[User]:
        """Create the first admin; returns ``None`` if one already exists."""
        if self._repo.admin_exists():
            logger.info("user.admin_exists")
            return None
        return self._repo.create_user(
            username=username,
            email=email,
            password=password,
            phone=phone,
            is_staff=True,
            is_superuser=True,
        )

    def list_users(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[User]:
        return self._repo.list(filters)

    @transaction.atomic
    def delete_user(self, id: str) -> None:
        """Raises ``UserNotFound`` or ``CannotDeleteAdmin``."""
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        if user.is_staff:
            logger.warning("user.delete_admin_refused", user_id=str(user.id))
            raise CannotDeleteAdmin("Cannot delete admin users.")
        self._repo.delete(str(user.id))
