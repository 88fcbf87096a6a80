"""
IP address and email utilities for privacy-aware logging.

Provides IP validation for proxy headers and email hashing so submitter
addresses never appear in clear text in the logs.
"""

import hashlib
import ipaddress
from typing import Optional


def is_valid_ip(ip: Optional[str]) -> bool:
    """
    Validate an IP address string.

    Args:
        ip: IP address string to validate

    Returns:
        True if valid IPv4 or IPv6 address, False otherwise
    """
    if ip is None:
        return False

    try:
        ipaddress.ip_address(ip)
        return True
    except ValueError:
        return False


def hash_email_for_audit(email: str, salt: str = "contact_form") -> str:
    """
    Hash an email address for logging.

    Preserves the domain for pattern analysis while hashing the local part.
    Format: first 8 chars of hash + @domain.tld

    Args:
        email: Email address to hash
        salt: Salt for hashing (use consistent salt for matching)

    Returns:
        Hashed email in format "a3f2c1d4...@example.com"
    """
    if not email or "@" not in email:
        return "invalid@unknown"

    local_part, domain = email.rsplit("@", 1)

    # Hash the local part with salt
    hash_input = f"{salt}:{local_part}".encode("utf-8")
    hash_value = hashlib.sha256(hash_input).hexdigest()

    # Return first 8 chars of hash + domain
    return f"{hash_value[:8]}...@{domain}"
