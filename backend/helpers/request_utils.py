"""
Request utilities for extracting client information.

Provides helpers to extract the client IP address and user agent from
HTTP requests, handling proxy headers correctly.
"""

from typing import Optional

from fastapi import Request

from helpers.ip_utils import is_valid_ip


def get_client_ip(request: Request) -> Optional[str]:
    """
    Extract the client's real IP address from the request.

    Handles common proxy headers in order of precedence:
    1. CF-Connecting-IP (Cloudflare)
    2. X-Real-IP (nginx)
    3. X-Forwarded-For (standard proxy header, first IP)
    4. Direct client.host

    Header values that are not IP addresses are skipped.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address or None if not available
    """
    # Cloudflare
    cf_ip = (request.headers.get("CF-Connecting-IP") or "").strip()
    if is_valid_ip(cf_ip):
        return cf_ip

    # nginx proxy
    real_ip = (request.headers.get("X-Real-IP") or "").strip()
    if is_valid_ip(real_ip):
        return real_ip

    # Standard proxy header (comma-separated, first is client)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first_ip = forwarded_for.split(",")[0].strip()
        if is_valid_ip(first_ip):
            return first_ip

    # Direct connection
    if request.client:
        return request.client.host

    return None


def get_user_agent(request: Request) -> Optional[str]:
    """
    Extract the user agent string from the request.

    Truncates to 500 characters to keep log lines bounded.
    """
    user_agent = request.headers.get("User-Agent")
    if user_agent:
        return user_agent[:500]
    return None


def get_request_metadata(request: Request) -> dict:
    """
    Extract common metadata from a request for security logging.

    Returns:
        Dictionary with 'ip_address' and 'user_agent' keys
    """
    return {
        "ip_address": get_client_ip(request) or "unknown",
        "user_agent": get_user_agent(request),
    }
