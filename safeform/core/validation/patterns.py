"""Shared regular expressions for contact and identity fields."""
import re

# Optional country code, optional parenthesised area code, 3-3-4 digits
PHONE_RE = re.compile(r"^(\+\d{1,3}[- ]?)?\(?\d{3}\)?[- ]?\d{3}[- ]?\d{4}$")

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# 10-digit identifier users share to connect with each other
UNIQUE_ID_RE = re.compile(r"^\d{10}$")

OTP_RE = re.compile(r"^\d{6}$")

PERSON_NAME_RE = re.compile(r"^[a-zA-Z\s]+$")
