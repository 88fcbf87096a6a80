"""
Custom domain exceptions for the application.

These exceptions are raised by the service layer and converted to HTTP responses
by centralized exception handlers in main.py, keeping services HTTP-agnostic.

Each exception carries a correlation ID so a user-reported failure can be
matched with the server logs and Sentry events.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message (safe to show to the caller).
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        # Use request correlation ID if available, otherwise generate new one
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class AuthenticationException(DomainException):
    """Raised when the caller could not be authenticated."""

    pass


class ServerException(DomainException):
    """Raised for failures the caller cannot fix (configuration, delivery)."""

    pass


# ============================================================================
# Bot Verification Exceptions
# ============================================================================


class SecurityVerificationRequiredException(ValidationException):
    """Raised when a submission arrives without a reCAPTCHA token."""

    def __init__(self, message: str = "Security verification is required"):
        super().__init__(message, field="recaptchaToken")


class VerificationFailedException(AuthenticationException):
    """Raised when the reCAPTCHA assessment rejects the submission.

    The message is deliberately vague: score and reasons stay server-side.
    """

    def __init__(
        self, message: str = "Security verification failed. Please try again."
    ):
        super().__init__(message)


# ============================================================================
# Server-side Exceptions
# ============================================================================


class ConfigurationException(ServerException):
    """Raised when a required setting is missing."""

    def __init__(self, setting: str):
        super().__init__(f"{setting} is not configured")
        self.setting = setting


class EmailDeliveryException(ServerException):
    """Raised when the operator notification fails to send."""

    def __init__(self, message: str = "Failed to process contact form submission"):
        super().__init__(message)
