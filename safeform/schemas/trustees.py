"""Schemas for finding and adding a trustee.

A trustee is added either by searching for an existing user by contact
(email, phone or unique ID) or by entering their details by hand. A manual
entry needs at least one way to reach the person.
"""
from __future__ import annotations

from typing import Any, Mapping

from safeform.core.validation import (
    PHONE_RE,
    UNIQUE_ID_RE,
    EmailValidator,
    FieldSpec,
    FormSchema,
    ObjectTest,
    RegexPattern,
    Required,
    StringLength,
    lowercase,
    trim,
)

from ._fields import INVALID_EMAIL, INVALID_PHONE, contact_check, person_name_field

CONTACT_FIELDS = ("phone", "email", "uniqueId")

trustee_search_schema = FormSchema(
    "trustee_search",
    {
        "searchQuery": FieldSpec(
            Required().with_message("Search query is required"),
            contact_check,
            transforms=(trim,),
        ),
    },
)


def has_contact_info(values: Mapping[str, Any], context: Mapping[str, Any]) -> bool:
    return any(values.get(name) for name in CONTACT_FIELDS)


trustee_manual_schema = FormSchema(
    "trustee_manual",
    {
        "name": person_name_field(),
        "phone": FieldSpec(
            RegexPattern(PHONE_RE, "phone number").with_message(INVALID_PHONE),
            transforms=(trim,),
            optional=True,
        ),
        "email": FieldSpec(
            EmailValidator().with_message(INVALID_EMAIL),
            transforms=(trim, lowercase),
            optional=True,
        ),
        "uniqueId": FieldSpec(
            RegexPattern(UNIQUE_ID_RE, "10 digits").with_message("Unique ID must be exactly 10 digits"),
            transforms=(trim,),
            optional=True,
        ),
        "relationship": FieldSpec(
            Required().with_message("Relationship is required"),
            StringLength(min_length=2).with_message("Relationship must be at least 2 characters"),
            StringLength(max_length=30).with_message("Relationship must be less than 30 characters"),
            transforms=(trim,),
        ),
    },
    tests=[ObjectTest(has_contact_info, "Please provide at least phone, email, or unique ID", name="has_contact_info")],
)
