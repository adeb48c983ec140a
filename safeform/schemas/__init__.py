"""Application form schemas."""
from safeform.schemas.auth import SIGN_UP_CONTEXT_KEY, login_schema, signup_schema, otp_schema
from safeform.schemas.profile import GENDERS, profile_schema
from safeform.schemas.trustees import CONTACT_FIELDS, trustee_search_schema, trustee_manual_schema
from safeform.schemas.community import RatedLocation, SafetyRating, message_schema, safety_rating_schema
from safeform.schemas.sos import sos_deactivation_schema

__all__ = [
    "SIGN_UP_CONTEXT_KEY",
    "login_schema",
    "signup_schema",
    "otp_schema",
    "GENDERS",
    "profile_schema",
    "CONTACT_FIELDS",
    "trustee_search_schema",
    "trustee_manual_schema",
    "RatedLocation",
    "SafetyRating",
    "message_schema",
    "safety_rating_schema",
    "sos_deactivation_schema",
]
