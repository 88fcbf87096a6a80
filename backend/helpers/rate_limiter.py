"""Rate limiter configuration module.

This module is separate from main.py to avoid circular imports when routers
need to access the limiter.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from helpers.request_utils import get_client_ip


def client_ip_key(request: Request) -> str:
    """Rate limit key: the proxy-aware client IP."""
    return get_client_ip(request) or get_remote_address(request)


# Create rate limiter - imported by routers and main.py
limiter = Limiter(key_func=client_ip_key)
