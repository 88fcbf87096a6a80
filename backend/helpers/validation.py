"""
Helpers for turning pydantic validation errors into caller-facing messages.

Only the first error is reported: the form is rejected as a whole and the
frontend highlights one field at a time.
"""

from collections.abc import Sequence
from typing import Any

VALUE_ERROR_PREFIX = "Value error, "


def _field_name(loc: Sequence[Any]) -> str:
    """Return the field name from an error location, skipping the 'body' root."""
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) if parts else "body"


def describe_validation_error(error: dict[str, Any]) -> tuple[str, str]:
    """
    Build a human-readable message for a single pydantic error.

    Args:
        error: One entry of ``ValidationError.errors()``

    Returns:
        Tuple of (field name, message)
    """
    error_type = error.get("type", "")
    field = _field_name(error.get("loc", ()))
    ctx = error.get("ctx") or {}

    if error_type == "json_invalid":
        return "body", "Request body must be valid JSON"
    if error_type == "missing":
        return field, f"{field} is required"
    if error_type == "string_too_short":
        if ctx.get("min_length") == 1:
            return field, f"{field} must not be empty"
        return field, f"{field} must be at least {ctx.get('min_length')} characters"
    if error_type == "string_too_long":
        return field, f"{field} must be at most {ctx.get('max_length')} characters"
    if error_type == "string_pattern_mismatch":
        return field, f"{field} has an invalid format"
    if error_type == "string_type":
        return field, f"{field} must be a string"

    message = str(error.get("msg", "is invalid"))
    if message.startswith(VALUE_ERROR_PREFIX):
        message = message[len(VALUE_ERROR_PREFIX) :]
    return field, f"{field}: {message}"


def first_validation_error(errors: Sequence[dict[str, Any]]) -> tuple[str, str]:
    """Describe the first error of a validation failure."""
    if not errors:
        return "body", "Invalid request"
    return describe_validation_error(errors[0])
