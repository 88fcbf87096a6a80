"""
Correlation ID generation and context management.

Every request gets a short ID that appears in log lines, Sentry tags, the
X-Correlation-ID response header and error bodies, so a visitor reporting
a failed submission can be matched with the server-side logs.
"""

import re
import uuid
from contextvars import ContextVar

# Context variable for request-scoped correlation ID
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

# Inbound IDs end up in log lines; anything else is replaced
_INBOUND_ID_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,64}$")


def generate_correlation_id() -> str:
    """
    Generate a short, unique correlation ID.

    Returns:
        8-character hexadecimal string (e.g., "abc123de").
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Get current request's correlation ID, or empty string if not set."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID for current request context."""
    correlation_id_var.set(correlation_id)


def resolve_correlation_id(inbound: str | None) -> str:
    """
    Pick the correlation ID for a request.

    Reuses the ID supplied by the frontend when it is a plain token,
    otherwise generates a new one.

    Args:
        inbound: Value of the X-Correlation-ID request header, if any.

    Returns:
        The correlation ID to use for this request.
    """
    if inbound and _INBOUND_ID_PATTERN.match(inbound):
        return inbound
    return generate_correlation_id()
