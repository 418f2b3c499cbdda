import logging

from prometheus_client import Counter
from slowapi import Limiter
from slowapi.util import get_remote_address

from lankainvoice.core.config import settings

logger = logging.getLogger(__name__)

_PROM_RATE_LIMIT = Counter("lankainvoice_rate_limit_exceeded_events", "Rate limit exceeded events (handler invocations)")

# Tracking endpoints are public and unauthenticated, so limits key on client IP
limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")

RATE_LIMITS = {
    "tracking_open": settings.TRACKING_RATE_LIMIT,
    "tracking_click": settings.TRACKING_RATE_LIMIT,
}


def increment_rate_limit_exceeded():
    _PROM_RATE_LIMIT.inc()
    logger.warning("Tracking rate limit exceeded")
