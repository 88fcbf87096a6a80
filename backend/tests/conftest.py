"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["ENVIRONMENT"] = "test"
os.environ["CORS_ORIGINS"] = '["http://localhost:3000"]'
os.environ["ADMIN_EMAIL"] = "owner@petsitter.test"
os.environ["RECAPTCHA_PROJECT_ID"] = "test-project"
os.environ["RECAPTCHA_API_KEY"] = "test-api-key"
os.environ["RECAPTCHA_SITE_KEY"] = "test-site-key"
os.environ["EMAIL_PROVIDER"] = "console"
os.environ.pop("SENTRY_DSN", None)

from models.exceptions import SecurityVerificationRequiredException  # noqa: E402
from services.email_service import EmailProvider, get_email_provider  # noqa: E402
from services.recaptcha_service import get_recaptcha_service  # noqa: E402

ADMIN_EMAIL = "owner@petsitter.test"


class RecordingProvider(EmailProvider):
    """Email provider that records sends instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self.fail_for: set[str] = set()
        self.raise_for: set[str] = set()

    def send(
        self,
        to_email: str,
        from_email: str,
        subject: str,
        text_body: str,
    ) -> bool:
        self.sent.append(
            {
                "to": to_email,
                "from": from_email,
                "subject": subject,
                "body": text_body,
            }
        )
        if to_email in self.raise_for:
            raise ConnectionError(f"cannot reach mail server for {to_email}")
        return to_email not in self.fail_for

    @property
    def recipients(self) -> list[str]:
        return [message["to"] for message in self.sent]


class StubGate:
    """Verification gate returning a fixed decision."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls: list[tuple[Optional[str], Optional[str], float]] = []

    async def verify(
        self,
        token: Optional[str],
        expected_action: Optional[str] = None,
        min_score: float = 0.5,
    ) -> bool:
        if not token:
            raise SecurityVerificationRequiredException()
        self.calls.append((token, expected_action, min_score))
        return self.result


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def gate() -> StubGate:
    return StubGate()


@pytest.fixture
def valid_payload() -> dict[str, str]:
    """A contact form body as the frontend posts it."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "JANE@x.com ",
        "phone": "555-1234",
        "petType": "dog",
        "dates": "Jul 1-5",
        "message": "Looking for someone to walk Rex twice a day.",
        "recaptchaToken": "tok123",
    }


@pytest.fixture(scope="function")
def client(provider: RecordingProvider, gate: StubGate):
    """Create a test client with the gate and mail provider replaced."""
    from main import app
    from helpers.rate_limiter import limiter

    # Reset rate limiter storage before each test to prevent rate limit errors
    limiter.reset()

    app.dependency_overrides[get_recaptcha_service] = lambda: gate
    app.dependency_overrides[get_email_provider] = lambda: provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
