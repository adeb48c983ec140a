"""Field rules shared by several application schemas."""
from __future__ import annotations

from safeform.core.validation import (
    EMAIL_RE,
    OTP_RE,
    PERSON_NAME_RE,
    PHONE_RE,
    UNIQUE_ID_RE,
    Check,
    EmailValidator,
    FieldSpec,
    RegexPattern,
    Required,
    StringLength,
    lowercase,
    trim,
)

INVALID_EMAIL = "Please enter a valid email address"
INVALID_PHONE = "Please enter a valid phone number"
INVALID_OTP = "OTP must be exactly 6 digits"


def email_field() -> FieldSpec:
    return FieldSpec(
        Required().with_message("Email is required"),
        EmailValidator().with_message(INVALID_EMAIL),
        transforms=(trim, lowercase),
    )


def person_name_field(optional: bool = False) -> FieldSpec:
    return FieldSpec(
        Required().with_message("Full name is required"),
        StringLength(min_length=2).with_message("Name must be at least 2 characters"),
        StringLength(max_length=50).with_message("Name must be less than 50 characters"),
        RegexPattern(PERSON_NAME_RE, "letters and spaces").with_message("Name can only contain letters and spaces"),
        transforms=(trim,),
        optional=optional,
    )


def phone_field() -> FieldSpec:
    return FieldSpec(
        Required().with_message("Phone number is required"),
        RegexPattern(PHONE_RE, "phone number").with_message(INVALID_PHONE),
        transforms=(trim,),
    )


def otp_field(required_message: str = "OTP is required") -> FieldSpec:
    return FieldSpec(
        Required().with_message(required_message),
        RegexPattern(OTP_RE, "6 digits").with_message(INVALID_OTP),
        StringLength(min_length=6, max_length=6).with_message(INVALID_OTP),
    )


def is_contact(value: str) -> bool:
    """True for an email address, a phone number or a 10-digit unique ID."""
    return any(pattern.fullmatch(value) for pattern in (EMAIL_RE, PHONE_RE, UNIQUE_ID_RE))


contact_check = Check(is_contact, "Please enter a valid email, phone, or unique ID", name="is_valid_contact")
