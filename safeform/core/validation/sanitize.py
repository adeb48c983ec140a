"""Input sanitizers for free-text contact fields.

Each ``validate_*`` helper strips markup first, then checks the shape of
what is left. The cleaned text is only returned when it passes.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from .patterns import EMAIL_RE, PHONE_RE, UNIQUE_ID_RE

_SCRIPT_BLOCK_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_JS_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+=", re.IGNORECASE)
_NON_DIGIT_RE = re.compile(r"\D")


@dataclass(frozen=True, slots=True)
class Sanitized:
    is_valid: bool
    sanitized: str | None = None
    error: str | None = None


def sanitize_input(text: str) -> str:
    """Remove script blocks, tags, ``javascript:`` schemes and inline ``on*=`` handlers."""
    text = _SCRIPT_BLOCK_RE.sub("", text.strip())
    text = _TAG_RE.sub("", text)
    text = _JS_SCHEME_RE.sub("", text)
    return _EVENT_HANDLER_RE.sub("", text)


def _checked(cleaned: str, pattern: re.Pattern, error: str) -> Sanitized:
    if not pattern.fullmatch(cleaned):
        return Sanitized(is_valid=False, error=error)
    return Sanitized(is_valid=True, sanitized=cleaned)


def validate_email(email: str) -> Sanitized:
    return _checked(sanitize_input(email).lower().strip(), EMAIL_RE, "Please enter a valid email address")


def validate_phone(phone: str) -> Sanitized:
    return _checked(sanitize_input(phone).strip(), PHONE_RE, "Please enter a valid phone number")


def validate_unique_id(unique_id: str) -> Sanitized:
    return _checked(sanitize_input(unique_id).strip(), UNIQUE_ID_RE, "Unique ID must be exactly 10 digits")


def format_phone_number(phone: str) -> str:
    """Format 10-digit and 1-prefixed 11-digit numbers for display; anything else is returned as given."""
    digits = _NON_DIGIT_RE.sub("", phone)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits[0] == "1":
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return phone
