from __future__ import annotations

from safeform.core.validation import FormSchema

from ._fields import otp_field

# Deactivating an active SOS alert requires the one-time code sent to the user
sos_deactivation_schema = FormSchema("sos_deactivation", {"otp": otp_field("OTP is required to deactivate SOS")})
