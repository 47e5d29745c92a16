"""Rate limiting / Rate limiter.

Limite par IP des exports de rapports (slowapi) ; desactivable via RATE_LIMIT_ENABLED.
Per-IP limit on report exports (slowapi); can be turned off with RATE_LIMIT_ENABLED.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fleetops.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
