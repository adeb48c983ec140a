"""Tests for free-text sanitizers."""

import pytest

from safeform.core.validation import (
    Sanitized,
    format_phone_number,
    sanitize_input,
    validate_email,
    validate_phone,
    validate_unique_id,
)


class TestSanitizeInput:
    @pytest.mark.parametrize(
        ("raw", "clean"),
        [
            ("  hello  ", "hello"),
            ("hi<script>alert('x')</script>there", "hithere"),
            ("<b>bold</b>", "bold"),
            ("JavaScript:alert(1)", "alert(1)"),
            ("x onclick=steal()", "x steal()"),
        ],
    )
    def test_strips_markup(self, raw: str, clean: str) -> None:
        assert sanitize_input(raw) == clean


class TestContactHelpers:
    def test_email(self) -> None:
        assert validate_email("  <i>Jane@X.com</i> ") == Sanitized(is_valid=True, sanitized="jane@x.com")
        assert validate_email("jane") == Sanitized(is_valid=False, error="Please enter a valid email address")

    def test_phone(self) -> None:
        assert validate_phone(" (555) 123-4567 ").sanitized == "(555) 123-4567"
        assert validate_phone("555").error == "Please enter a valid phone number"

    def test_unique_id(self) -> None:
        assert validate_unique_id("0123456789").is_valid is True
        assert validate_unique_id("01234").error == "Unique ID must be exactly 10 digits"


class TestFormatPhoneNumber:
    @pytest.mark.parametrize(
        ("raw", "formatted"),
        [
            ("5551234567", "(555) 123-4567"),
            ("555.123.4567", "(555) 123-4567"),
            ("15551234567", "+1 (555) 123-4567"),
            ("25551234567", "25551234567"),
            ("12345", "12345"),
        ],
    )
    def test_formats(self, raw: str, formatted: str) -> None:
        assert format_phone_number(raw) == formatted
