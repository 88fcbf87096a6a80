"""Tests for sanitization helpers."""

import pytest

from helpers.sanitization import mask_token, sanitize_plain_text


class TestSanitizePlainText:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("<script>alert(1)</script>Title", "alert(1)Title"),
            ("<b>Cats</b> & dogs", "Cats & dogs"),
            ("  plain  ", "plain"),
            ("Fish < 3 > birds", "Fish < 3 > birds"),
            ("<p></p>", ""),
        ],
    )
    def test_strips_markup(self, raw: str, expected: str) -> None:
        assert sanitize_plain_text(raw) == expected

    def test_typed_entities_are_decoded(self) -> None:
        cleaned = sanitize_plain_text("I typed &lt;b&gt; literally")

        assert cleaned == "I typed <b> literally"

    def test_none_passes_through(self) -> None:
        assert sanitize_plain_text(None) is None


class TestMaskToken:
    def test_long_token_is_truncated(self) -> None:
        assert mask_token("03AGdBq24PBCbwiDRa") == "03AGdBq2..."

    def test_short_token_fully_hidden(self) -> None:
        assert mask_token("abc") == "***"

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing(self, token) -> None:
        assert mask_token(token) == "<none>"
