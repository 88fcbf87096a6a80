"""Tests for Sentry event filtering."""

from unittest.mock import patch

import pytest

from core.sentry_config import (
    _before_send,
    _before_send_transaction,
    _traces_sampler,
    init_sentry,
)


class TestBeforeSend:
    def test_scrubs_contact_form_body(self) -> None:
        event = {
            "request": {
                "data": {
                    "firstName": "Jane",
                    "lastName": "Doe",
                    "email": "jane@x.com",
                    "phone": "555-1234",
                    "message": "Hello",
                    "recaptchaToken": "tok123",
                    "petType": "dog",
                },
                "cookies": {"session": "abc"},
                "headers": {"Authorization": "Bearer secret"},
            }
        }

        result = _before_send(event, {})

        data = result["request"]["data"]
        for field in ("firstName", "lastName", "email", "phone", "message", "recaptchaToken"):
            assert data[field] == "[Filtered]"
        assert data["petType"] == "dog"
        assert "cookies" not in result["request"]
        assert result["request"]["headers"]["Authorization"] == "[Filtered]"

    def test_scrubs_user(self) -> None:
        event = {
            "user": {"email": "jane@x.com", "username": "jane", "ip_address": "1.2.3.4"}
        }

        result = _before_send(event, {})

        assert result["user"] == {"ip_address": "{{auto}}"}

    def test_event_without_request(self) -> None:
        assert _before_send({"message": "hi"}, {}) == {"message": "hi"}


class TestBeforeSendTransaction:
    @pytest.mark.parametrize("name", ["/api/health", "GET /health"])
    def test_health_dropped(self, name: str) -> None:
        assert _before_send_transaction({"transaction": name}, {}) is None

    def test_other_kept(self) -> None:
        event = {"transaction": "send_mail"}

        assert _before_send_transaction(event, {}) is event


class TestTracesSampler:
    def test_parent_decision_honoured(self) -> None:
        assert _traces_sampler({"parent_sampled": True}) == 1.0

    def test_health_not_sampled(self) -> None:
        assert _traces_sampler({"asgi_scope": {"path": "/api/health"}}) == 0.0

    def test_mail_always_sampled(self) -> None:
        assert _traces_sampler({"asgi_scope": {"path": "/mail/send"}}) == 1.0

    def test_default_rate(self) -> None:
        assert _traces_sampler({"asgi_scope": {"path": "/docs"}}) == 0.2


class TestInitSentry:
    def test_disabled_without_dsn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SENTRY_DSN", raising=False)

        with patch("sentry_sdk.init") as mock_init:
            init_sentry()

            mock_init.assert_not_called()

    def test_enabled_with_dsn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example/1")

        with patch("sentry_sdk.init") as mock_init:
            init_sentry()

            kwargs = mock_init.call_args[1]
            assert kwargs["dsn"] == "https://key@sentry.example/1"
            assert kwargs["send_default_pii"] is False
