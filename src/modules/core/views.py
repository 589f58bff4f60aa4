"""Liveness probe: database, cache and notification channel status."""

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.notifications.channels import CHANNELS

logger = structlog.get_logger(__name__)

HEALTH_CACHE_KEY = "_health_check"


def _ping_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set(HEALTH_CACHE_KEY, "ok", 10)
    if cache.get(HEALTH_CACHE_KEY) != "ok":
        raise ConnectionError("Cache read failed")


PROBES: Dict[str, Callable[[], None]] = {
    "database": _ping_database,
    "cache": _ping_cache,
}


def _run_probe(name: str, probe: Callable[[], None]) -> Dict[str, Any]:
    started = time.monotonic()
    try:
        probe()
    except Exception as exc:
        logger.error("health_check.probe_failed", probe=name, error_type=type(exc).__name__)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health

    503 when the database or the cache is unreachable.  Notification
    channels are reported but never make the service unhealthy.
    """
    services: Dict[str, Any] = {name: _run_probe(name, probe) for name, probe in PROBES.items()}
    healthy = all(result["status"] == "up" for result in services.values())

    services["notifications"] = {
        name: ("configured" if channel.is_configured() else "not_configured")
        for name, channel in CHANNELS.items()
    }

    overall = "healthy" if healthy else "unhealthy"
    logger.info("health_check_completed", status=overall)
    return JsonResponse(
        {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
