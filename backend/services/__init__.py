"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .contact_service import ContactService
from .email_service import EmailProvider, get_email_provider
from .recaptcha_service import RecaptchaService, get_recaptcha_service

__all__ = [
    "ContactService",
    "EmailProvider",
    "RecaptchaService",
    "get_email_provider",
    "get_recaptcha_service",
]
