"""Tests for IP and email helpers."""

import pytest

from helpers.ip_utils import hash_email_for_audit, is_valid_ip


@pytest.mark.parametrize(
    "ip,expected",
    [
        ("192.168.1.1", True),
        ("2001:db8::1", True),
        ("not-an-ip", False),
        ("", False),
        (None, False),
        ("256.1.1.1", False),
    ],
)
def test_is_valid_ip(ip, expected: bool) -> None:
    assert is_valid_ip(ip) is expected


class TestHashEmailForAudit:
    def test_keeps_domain_hides_local_part(self) -> None:
        hashed = hash_email_for_audit("jane@x.com")

        assert hashed.endswith("...@x.com")
        assert "jane" not in hashed

    def test_stable_for_same_input(self) -> None:
        assert hash_email_for_audit("jane@x.com") == hash_email_for_audit("jane@x.com")

    def test_salt_changes_hash(self) -> None:
        assert hash_email_for_audit("jane@x.com") != hash_email_for_audit(
            "jane@x.com", salt="other"
        )

    @pytest.mark.parametrize("email", ["", "no-at-sign"])
    def test_invalid(self, email: str) -> None:
        assert hash_email_for_audit(email) == "invalid@unknown"
