"""Passwordless sign-in / sign-up screen.

The user enters their details, receives a one-time code by email and
types it in. Sign-up and sign-in share one details form; the mode only
changes which fields the schema requires.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from safeform.core.errors import operation_not_allowed, otp_request_failed, raise_error
from safeform.core.invoke import invoke
from safeform.core.logging import flow_logger
from safeform.engines import ValidatedForm
from safeform.schemas import SIGN_UP_CONTEXT_KEY, otp_schema, signup_schema
from safeform.services import OtpGateway, OtpResult

log = flow_logger()


class AuthStage(str, Enum):
    ENTER_DETAILS = "enter-details"
    ENTER_OTP = "enter-otp"
    VERIFIED = "verified"


class AuthFlow:
    """Controller for the auth screen's two forms.

    ``on_verified(email, is_sign_up)`` (sync or async) runs once the code
    checks out, e.g. to store the session.
    """

    __slots__ = ('gateway', 'stage', 'is_sign_up', 'email', 'last_message',
        'details_form', 'otp_form', '_on_verified')

    def __init__(
        self,
        gateway: OtpGateway,
        *,
        is_sign_up: bool = True,
        on_verified: Callable[[str, bool], Any] | None = None,
    ):
        self.gateway = gateway
        self.stage = AuthStage.ENTER_DETAILS
        self.is_sign_up = is_sign_up
        self.email: str | None = None
        self.last_message: str | None = None
        self._on_verified = on_verified
        self.details_form = ValidatedForm(
            signup_schema,
            {"name": "", "phone": "", "email": ""},
            self._submit_details,
            validate_on_change=False,
            validate_on_blur=True,
            context={SIGN_UP_CONTEXT_KEY: is_sign_up},
        )
        self.otp_form = ValidatedForm(otp_schema, {"otp": ""}, self._submit_otp)

    def switch_mode(self) -> None:
        self.is_sign_up = not self.is_sign_up
        self.details_form.context = {SIGN_UP_CONTEXT_KEY: self.is_sign_up}
        self.details_form.reset_form()
        log.debug("auth_mode_switched", is_sign_up=self.is_sign_up)

    def back_to_details(self) -> None:
        self.stage = AuthStage.ENTER_DETAILS
        self.otp_form.reset_form()

    async def resend_otp(self) -> OtpResult:
        if self.stage is not AuthStage.ENTER_OTP or self.email is None:
            raise_error(operation_not_allowed("resend code", "no code has been requested", origin="flow.auth"))
        result = await self.gateway.request_otp(self.is_sign_up, self.email)
        self.last_message = result.message
        if result.success:
            self.otp_form.reset_form()
        log.info("otp_resent", success=result.success)
        return result

    async def _submit_details(self, data: dict[str, Any]) -> None:
        result = await self.gateway.request_otp(
            self.is_sign_up, data["email"], data.get("name") or None, data.get("phone") or None)
        if not result.success:
            raise_error(otp_request_failed(result.message, origin="flow.auth"))
        self.email = data["email"]
        self.last_message = result.message
        self.stage = AuthStage.ENTER_OTP
        log.info("auth_stage_changed", stage=self.stage.value)

    async def _submit_otp(self, data: dict[str, Any]) -> None:
        result = await self.gateway.verify_otp(self.email or "", data["otp"])
        self.last_message = result.message
        if not result.success:
            self.otp_form.reset_form()
            log.info("otp_verification_failed")
            return
        self.stage = AuthStage.VERIFIED
        log.info("auth_stage_changed", stage=self.stage.value)
        if self._on_verified is not None:
            await invoke(self._on_verified, self.email, self.is_sign_up)
