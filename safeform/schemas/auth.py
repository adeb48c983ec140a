"""Sign-in, sign-up and one-time-code schemas.

Sign-up and sign-in share ``signup_schema``; name and phone only carry
rules when the form context has ``is_sign_up`` set.
"""
from __future__ import annotations

from safeform.core.validation import FieldSpec, FormSchema, When

from ._fields import email_field, otp_field, person_name_field, phone_field

SIGN_UP_CONTEXT_KEY = "is_sign_up"

login_schema = FormSchema("login", {"email": email_field()})

signup_schema = FormSchema(
    "signup",
    {
        "name": When(SIGN_UP_CONTEXT_KEY, then=person_name_field(), otherwise=FieldSpec(optional=True)),
        "phone": When(SIGN_UP_CONTEXT_KEY, then=phone_field(), otherwise=FieldSpec(optional=True)),
        "email": email_field(),
    },
)

otp_schema = FormSchema("otp", {"otp": otp_field()})
