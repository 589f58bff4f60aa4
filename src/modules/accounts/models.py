"""Custom user model.

Business rules implemented:
- E-mail is required and unique; login accepts username, e-mail or phone.
- ``is_staff`` marks admins (the back-office).
- UUIDv7 primary key, like every other aggregate.
"""

from __future__ import annotations

import uuid6
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    email = models.EmailField(
        unique=True,
        error_messages={"unique": "A user with that email already exists."},
    )
    phone = models.CharField(max_length=30, blank=True, default="")

    class Meta(AbstractUser.Meta):
        db_table = "users"
        ordering = ["-date_joined"]
        swappable = "AUTH_USER_MODEL"

    @property
    def is_admin(self) -> bool:
        return self.is_staff
