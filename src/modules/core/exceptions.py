"""Exception handler customisation for drf-standardized-errors.

Framework errors are rendered as ``{type, errors: [{code, detail, attr}]}``.
Database failures (connection lost, lock timeout, write conflict) abort
the request with a generic 503 so no internal detail reaches the client.
"""

from __future__ import annotations

import structlog
from django.db import DatabaseError
from drf_standardized_errors.handler import ExceptionHandler as BaseExceptionHandler
from rest_framework import exceptions, status

logger = structlog.get_logger(__name__)


class PersistenceUnavailable(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The service is temporarily unavailable. Please try again."
    default_code = "persistence_unavailable"


class ExceptionHandler(BaseExceptionHandler):
    def convert_known_exceptions(self, exc: Exception) -> Exception:
        if isinstance(exc, DatabaseError):
            logger.error("persistence.failure", error_type=type(exc).__name__)
            return PersistenceUnavailable()
        return super().convert_known_exceptions(exc)
