"""Shared fixtures: fresh settings per test and gate-controlled schemas."""

import asyncio
from typing import Any, Mapping

import pytest

from safeform.core.config import get_settings
from safeform.core.validation import (
    EmailValidator,
    FieldSpec,
    FormSchema,
    Required,
    SchemaOutcome,
    trim,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def contact_schema() -> FormSchema:
    """Name must be present; email must be present and well formed."""
    return FormSchema(
        "contact",
        {
            "name": FieldSpec(Required().with_message("Name is required"), transforms=(trim,)),
            "email": FieldSpec(
                Required().with_message("Email is required"),
                EmailValidator().with_message("Enter a valid email"),
                transforms=(trim,),
            ),
        },
    )


class GatedSchema:
    """Wraps a schema so each single-field check waits for its value's gate.

    Tests release gates in whatever order they need to simulate slow or
    out-of-order validation responses. Setting ``hold_check`` holds the
    whole-object check until that event is set.
    """

    def __init__(self, inner: Any):
        self.inner = inner
        self.name = f"gated_{inner.name}"
        self.gates: dict[Any, asyncio.Event] = {}
        self.checked: list[Any] = []
        self.hold_check: asyncio.Event | None = None

    @property
    def field_names(self) -> tuple[str, ...]:
        return self.inner.field_names

    def gate(self, value: Any) -> asyncio.Event:
        return self.gates.setdefault(value, asyncio.Event())

    async def check_field(self, field: str, value: Any, context: Mapping[str, Any] | None = None) -> str | None:
        self.checked.append(value)
        await self.gate(value).wait()
        return await self.inner.check_field(field, value, context)

    async def check(self, values: Mapping[str, Any], context: Mapping[str, Any] | None = None) -> SchemaOutcome:
        if self.hold_check is not None:
            await self.hold_check.wait()
        return await self.inner.check(values, context)


@pytest.fixture
def gated_contact_schema(contact_schema: FormSchema) -> GatedSchema:
    return GatedSchema(contact_schema)
