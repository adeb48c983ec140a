"""Collaborators the screen flows depend on.

Flows take these as constructor arguments so the form engine and its tests
never reach a concrete network or mock implementation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class OtpResult:
    success: bool
    message: str


@dataclass(frozen=True, slots=True)
class FoundUser:
    """An existing app user located by one of their contact details."""
    id: str
    unique_id: str
    name: str
    email: str
    phone: str
    profile_image: str | None = None


@runtime_checkable
class OtpGateway(Protocol):
    async def request_otp(
        self, is_sign_up: bool, email: str, name: str | None = None, phone: str | None = None,
    ) -> OtpResult: ...

    async def verify_otp(self, email: str, otp: str) -> OtpResult: ...


@runtime_checkable
class ContactDirectory(Protocol):
    async def find_user_by_contact(self, contact: str) -> FoundUser | None: ...
