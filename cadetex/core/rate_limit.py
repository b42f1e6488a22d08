"""Rate limiting for credential endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from cadetex.core.config import settings

LOGIN_LIMIT = f"{max(settings.RATE_LIMIT_LOGIN, 1)}/minute"

# In-memory counters are per process; good enough for a login throttle.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    enabled=settings.RATE_LIMIT_LOGIN > 0,
)
