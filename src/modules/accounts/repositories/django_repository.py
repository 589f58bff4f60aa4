"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Q

from modules.accounts.models import User
from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    def get_by_id(self, id: str) -> Optional[User]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return User.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[User]:
        queryset = User.objects.all().order_by("-date_joined")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def exists(self, username: str, email: str) -> bool:
        return User.objects.filter(
            Q(username__iexact=username) | Q(email__iexact=email)
        ).exists()

    def admin_exists(self) -> bool:
        return User.objects.filter(is_staff=True).exists()

    @transaction.atomic
    def create_user(self, username: str, email: str, password: str, **extra) -> User:
        user = User.objects.create_user(username=username, email=email, password=password, **extra)
        logger.info("user.created", user_id=str(user.id), is_staff=user.is_staff)
        return user

    @transaction.atomic
    def save(self, entity: User) -> User:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        user = self.get_by_id(id)
        if not user:
            return False
        user.delete()
        logger.info("user.deleted", user_id=str(id))
        return True
