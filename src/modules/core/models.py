"""Base abstract model shared by every bounded context.

Provides ``BaseModel``: UUIDv7 primary key + ``created_at`` / ``updated_at``
timestamps.  ``save()`` guarantees ``updated_at`` is included when
``update_fields`` is specified (Django skips ``auto_now`` fields otherwise).
Repositories that mutate rows through ``QuerySet.update()`` must set
``updated_at`` themselves (see ``touch_fields``).
"""

from __future__ import annotations

from typing import Any, Dict

import uuid6
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


def touch_fields(**changes: Any) -> Dict[str, Any]:
    """Return ``changes`` plus a fresh ``updated_at`` for ``QuerySet.update()``."""
    return {**changes, "updated_at": timezone.now()}
