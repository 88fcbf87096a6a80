"""Tests for validation error formatting."""

import pytest

from helpers.validation import describe_validation_error, first_validation_error


@pytest.mark.parametrize(
    "error,expected",
    [
        (
            {"type": "missing", "loc": ("body", "firstName"), "msg": "Field required"},
            ("firstName", "firstName is required"),
        ),
        (
            {
                "type": "string_too_short",
                "loc": ("body", "dates"),
                "ctx": {"min_length": 1},
            },
            ("dates", "dates must not be empty"),
        ),
        (
            {
                "type": "string_too_short",
                "loc": ("body", "phone"),
                "ctx": {"min_length": 7},
            },
            ("phone", "phone must be at least 7 characters"),
        ),
        (
            {
                "type": "string_too_long",
                "loc": ("body", "message"),
                "ctx": {"max_length": 5000},
            },
            ("message", "message must be at most 5000 characters"),
        ),
        (
            {"type": "string_pattern_mismatch", "loc": ("body", "phone")},
            ("phone", "phone has an invalid format"),
        ),
        (
            {"type": "string_type", "loc": ("body", "petType")},
            ("petType", "petType must be a string"),
        ),
        (
            {"type": "json_invalid", "loc": ("body", 7)},
            ("body", "Request body must be valid JSON"),
        ),
        (
            {
                "type": "value_error",
                "loc": ("body", "phone"),
                "msg": "Value error, must contain at least 7 digits",
            },
            ("phone", "phone: must contain at least 7 digits"),
        ),
    ],
)
def test_describe_validation_error(error: dict, expected: tuple[str, str]) -> None:
    assert describe_validation_error(error) == expected


def test_body_level_error_uses_body_as_field() -> None:
    field, message = describe_validation_error({"type": "missing", "loc": ("body",)})

    assert field == "body"
    assert message == "body is required"


def test_first_error_wins() -> None:
    errors = [
        {"type": "missing", "loc": ("body", "lastName")},
        {"type": "missing", "loc": ("body", "email")},
    ]

    assert first_validation_error(errors) == ("lastName", "lastName is required")


def test_no_errors() -> None:
    assert first_validation_error([]) == ("body", "Invalid request")
