from __future__ import annotations

from safeform.core.validation import FieldSpec, FormSchema, OneOf, Required

from ._fields import email_field, person_name_field, phone_field

GENDERS = ("male", "female", "other", "prefer-not-to-say")

profile_schema = FormSchema(
    "profile",
    {
        "name": person_name_field(),
        "phone": phone_field(),
        "email": email_field(),
        "gender": FieldSpec(
            Required().with_message("Gender is required"),
            OneOf(*GENDERS).with_message("Please select a valid gender"),
        ),
    },
)
