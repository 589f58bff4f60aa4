"""Car image storage.

Uploaded images are validated (content type, size, count) and written
through Django's ``default_storage`` under ``cars/``.  Only the stored
names are kept on the ``Car`` record.
"""

from __future__ import annotations

import os
from typing import Iterable, List

import structlog
import uuid6
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

logger = structlog.get_logger(__name__)

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
UPLOAD_DIR = "cars"


def validate_images(files: Iterable[UploadedFile]) -> List[UploadedFile]:
    files = list(files)
    if len(files) > settings.CAR_IMAGE_MAX_COUNT:
        raise ValidationError(
            f"At most {settings.CAR_IMAGE_MAX_COUNT} images can be uploaded at once."
        )
    for upload in files:
        if upload.content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(f"{upload.name}: only image files are allowed.")
        if upload.size > settings.CAR_IMAGE_MAX_BYTES:
            raise ValidationError(f"{upload.name}: image exceeds the size limit.")
    return files


def store_images(files: Iterable[UploadedFile]) -> List[str]:
    """Persist uploads and return their storage names, in upload order."""
    names = []
    for upload in validate_images(files):
        extension = os.path.splitext(upload.name)[1].lower() or ".jpg"
        name = default_storage.save(f"{UPLOAD_DIR}/{uuid6.uuid7().hex}{extension}", upload)
        names.append(name)
    logger.info("car.images_stored", count=len(names))
    return names


def image_url(name: str) -> str:
    return default_storage.url(name)
