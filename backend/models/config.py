import os
import sys
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    For local development, load `.env` automatically so reCAPTCHA credentials
    and the operator address can be provided from `backend/.env`.

    Do NOT auto-load `.env` when running under pytest or in CI (so tests
    that validate missing configuration keep failing the way production would).
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    # Environment configuration
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', 'production' or 'test'",
    )

    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (comma-separated in env var)",
    )

    # Performance settings
    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )

    # Contact form settings
    # ADMIN_EMAIL is checked per request so a missing value surfaces as a
    # server error instead of preventing startup.
    ADMIN_EMAIL: str = Field(
        default="",
        description="Operator address receiving contact form notifications",
    )
    MAIL_FROM_EMAIL: str = Field(
        default="",
        description="Sender address for both emails (defaults to ADMIN_EMAIL)",
    )
    SITE_NAME: str = Field(
        default="Pet Sitting Services",
        description="Business name used in email subjects and signatures",
    )
    CONTACT_RATE_LIMIT: str = Field(
        default="5/hour",
        description="slowapi rate limit for contact form submissions per client IP",
    )

    # reCAPTCHA Enterprise settings
    RECAPTCHA_PROJECT_ID: str = Field(
        default="",
        description="Google Cloud project hosting the reCAPTCHA Enterprise key",
    )
    RECAPTCHA_API_KEY: str = Field(
        default="",
        description="API key used to create reCAPTCHA Enterprise assessments",
    )
    RECAPTCHA_SITE_KEY: str = Field(
        default="",
        description="reCAPTCHA site key the frontend token was issued for",
    )
    RECAPTCHA_EXPECTED_ACTION: str = Field(
        default="contact_form",
        description="Action name the frontend passes to grecaptcha.enterprise.execute",
    )
    RECAPTCHA_MIN_SCORE: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum risk score (0.0 = bot, 1.0 = human) accepted",
    )
    RECAPTCHA_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        description="Timeout for the reCAPTCHA assessment HTTP call",
    )
    RECAPTCHA_API_URL: str = Field(
        default="https://recaptchaenterprise.googleapis.com/v1",
        description="Base URL of the reCAPTCHA Enterprise API",
    )

    # Email Provider Settings
    EMAIL_PROVIDER: str = Field(
        default="console",
        description="Email provider: 'smtp', 'sendgrid', 'console'",
    )
    SMTP_HOST: str = Field(
        default="localhost",
        description="SMTP server hostname",
    )
    SMTP_PORT: int = Field(
        default=587,
        description="SMTP server port",
    )
    SMTP_USER: str = Field(
        default="",
        description="SMTP username",
    )
    SMTP_PASSWORD: str = Field(
        default="",
        description="SMTP password",
    )
    SMTP_FROM_NAME: str = Field(
        default="Pet Sitting Services",
        description="From display name",
    )
    SMTP_USE_TLS: bool = Field(
        default=True,
        description="Use STARTTLS for SMTP connection (port 587)",
    )
    SMTP_USE_SSL: bool = Field(
        default=False,
        description="Use implicit SSL for SMTP connection (port 465)",
    )
    SMTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Socket timeout for SMTP connections",
    )

    # SendGrid (alternative provider)
    SENDGRID_API_KEY: str = Field(
        default="",
        description="SendGrid API key (if using SendGrid provider)",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def sender_email(self) -> str:
        """Address both contact emails are sent from."""
        return self.MAIL_FROM_EMAIL or self.ADMIN_EMAIL

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars (e.g., SENTRY_DSN) without validation errors
    )


settings = Settings()
