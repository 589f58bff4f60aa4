"""Request correlation and access logging."""

import time
from contextvars import ContextVar
from typing import Callable

import structlog
import uuid6
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)

QUIET_PATHS = ("/health", "/static/", "/media/")


class CorrelationIdMiddleware:
    """Tag every request with an ``X-Request-ID``.

    An incoming ``X-Request-ID`` header is reused so a browser session,
    the API and the Celery notification tasks it triggers can be traced
    together; otherwise a fresh UUIDv7 is issued.  The id is bound to
    structlog's context vars and echoed back in the response header.
    Health probes and static/media files are not access-logged.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid6.uuid7())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        quiet = request.path.startswith(QUIET_PATHS)
        start = time.monotonic()
        if not quiet:
            logger.info("request.started", method=request.method, path=request.path)

        response = self.get_response(request)

        if not quiet:
            logger.info(
                "request.finished",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )

        response["X-Request-ID"] = cid
        return response
