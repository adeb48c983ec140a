"""Add-trustee screen: find an existing user or enter someone by hand."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from safeform.core.invoke import invoke
from safeform.core.logging import flow_logger
from safeform.engines import ValidatedForm
from safeform.schemas import trustee_manual_schema, trustee_search_schema
from safeform.services import ContactDirectory, FoundUser

log = flow_logger()


class TrusteeMode(str, Enum):
    SEARCH = "search"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class NewTrustee:
    name: str
    relationship: str
    phone: str = ""
    email: str = ""
    unique_id: str = ""
    is_active: bool = False
    is_verified: bool = False  # found through the directory
    profile_image: str | None = None


class AddTrusteeFlow:
    """Controller for the add-trustee modal.

    A search hit pre-fills the manual form and leaves only the relationship
    for the user; a miss switches to manual entry. Submitting the manual
    form hands a ``NewTrustee`` to ``on_add_trustee`` and starts over.
    """

    __slots__ = ('directory', 'mode', 'found_user', 'search_form', 'manual_form', '_on_add_trustee')

    def __init__(self, directory: ContactDirectory, on_add_trustee: Callable[[NewTrustee], Any]):
        self.directory = directory
        self.mode = TrusteeMode.SEARCH
        self.found_user: FoundUser | None = None
        self._on_add_trustee = on_add_trustee
        self.search_form = ValidatedForm(trustee_search_schema, {"searchQuery": ""}, self._search)
        self.manual_form = ValidatedForm(
            trustee_manual_schema,
            {"name": "", "phone": "", "email": "", "relationship": "", "uniqueId": ""},
            self._add,
        )

    def switch_to_manual(self) -> None:
        self.mode = TrusteeMode.MANUAL

    def back_to_search(self) -> None:
        self.mode = TrusteeMode.SEARCH
        self.found_user = None
        self.manual_form.reset_form()

    def reset(self) -> None:
        self.mode = TrusteeMode.SEARCH
        self.found_user = None
        self.search_form.reset_form()
        self.manual_form.reset_form()

    async def _search(self, data: dict[str, Any]) -> None:
        found = await self.directory.find_user_by_contact(data["searchQuery"])
        if found is None:
            log.info("trustee_not_found")
            self.mode = TrusteeMode.MANUAL
            return
        self.found_user = found
        self.manual_form.set_field_values({
            "name": found.name,
            "phone": found.phone,
            "email": found.email,
            "uniqueId": found.unique_id,
            "relationship": "",
        })
        log.info("trustee_found", user_id=found.id)

    async def _add(self, data: dict[str, Any]) -> None:
        found = self.found_user
        trustee = NewTrustee(
            name=data["name"],
            relationship=data["relationship"],
            phone=data.get("phone") or "",
            email=data.get("email") or "",
            unique_id=data.get("uniqueId") or "",
            is_active=False,
            is_verified=found is not None,
            profile_image=found.profile_image if found is not None else None,
        )
        await invoke(self._on_add_trustee, trustee)
        log.info("trustee_added", verified=trustee.is_verified)
        self.reset()
