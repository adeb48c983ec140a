"""In-process stand-ins for the OTP and user directory backends.

Both simulate network latency with ``asyncio.sleep``. Pass ``latency=0`` in
tests.
"""
from __future__ import annotations

import asyncio

from safeform.core.config import Settings, get_settings
from safeform.core.logging import service_logger

from .protocols import FoundUser, OtpResult

log = service_logger()

FOUND_USER_ID = "found-user"
FOUND_USER_UNIQUE_ID = "9876543210"
FOUND_USER_NAME = "Found User"
FOUND_USER_EMAIL = "user@example.com"
FOUND_USER_PHONE = "+1 (555) 999-8888"
FOUND_USER_IMAGE = "https://images.pexels.com/photos/1239291/pexels-photo-1239291.jpeg"


class MockOtpGateway:
    """Always sends; verifies only the configured code."""

    __slots__ = ('_latency', '_valid_code')

    def __init__(self, settings: Settings | None = None, *, latency: float | None = None):
        settings = settings or get_settings()
        self._latency = settings.MOCK_LATENCY_SECONDS if latency is None else latency
        self._valid_code = settings.MOCK_OTP_CODE

    async def request_otp(
        self, is_sign_up: bool, email: str, name: str | None = None, phone: str | None = None,
    ) -> OtpResult:
        log.info("otp_requested", mode="sign_up" if is_sign_up else "sign_in", email=email)
        await asyncio.sleep(self._latency)
        return OtpResult(success=True, message="OTP sent successfully!")

    async def verify_otp(self, email: str, otp: str) -> OtpResult:
        await asyncio.sleep(self._latency)
        if otp == self._valid_code:
            log.info("otp_verified", email=email)
            return OtpResult(success=True, message="Verification successful!")
        log.info("otp_rejected", email=email)
        return OtpResult(success=False, message="Invalid OTP. Please try again.")


class MockContactDirectory:
    """Resolves any contact containing '@' or '+' to one synthetic user."""

    __slots__ = ('_latency',)

    def __init__(self, settings: Settings | None = None, *, latency: float | None = None):
        settings = settings or get_settings()
        self._latency = settings.MOCK_LATENCY_SECONDS if latency is None else latency

    async def find_user_by_contact(self, contact: str) -> FoundUser | None:
        await asyncio.sleep(self._latency)
        if "@" not in contact and "+" not in contact:
            log.info("contact_not_found")
            return None
        log.info("contact_found", user_id=FOUND_USER_ID)
        return FoundUser(
            id=FOUND_USER_ID,
            unique_id=FOUND_USER_UNIQUE_ID,
            name=FOUND_USER_NAME,
            email=contact if "@" in contact else FOUND_USER_EMAIL,
            phone=contact if "+" in contact else FOUND_USER_PHONE,
            profile_image=FOUND_USER_IMAGE,
        )
