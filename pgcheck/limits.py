"""Rate limiting for manual check triggers.

Each manual check costs up to two requests to the third-party site, so
POST /check is limited per client (PGCHECK_RATE_LIMIT, default 10 per minute).
"""

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(get_remote_address, default_limits=[], storage_uri='memory://')


def manual_check_limit() -> str:
    return current_app.extensions['pgcheck']['config'].rate_limit
