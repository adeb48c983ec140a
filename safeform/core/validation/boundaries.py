"""Validation at the Form Boundary

The two calls every form engine makes into a schema:

- ``validate_field``: one field in isolation; never reports problems found
  on other fields.
- ``validate_data``: the whole object; reports every failing field at once
  and, on success, hands back the cleaned data.

Invalid input is a return value. Anything raised from here is a schema
misconfiguration or a fault inside a rule and propagates to the caller.

Usage:
    from safeform.core.validation import validate_field, validate_data

    outcome = await validate_field(login_schema, "email", "nope")
    outcome.error       # "Please enter a valid email address"

    outcome = await validate_data(login_schema, {"email": " Jane@X.com "})
    outcome.is_valid    # True
    outcome.data        # {"email": "jane@x.com"}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from safeform.core.logging import validation_logger

from .schema import Schema

log = validation_logger()


@dataclass(frozen=True, slots=True)
class FieldValidation:
    """Outcome of a single-field check. ``error`` is None when the value passes."""
    error: str | None = None

    @property
    def is_valid(self) -> bool: return self.error is None


@dataclass(frozen=True, slots=True)
class DataValidation:
    """Outcome of a whole-object check.

    Valid: ``errors`` is empty and ``data`` holds the cleaned values.
    Invalid: ``errors`` has one message per failing field and ``data`` is None.
    """
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.is_valid: return {"valid": True, "data": self.data}
        return {"valid": False, "errors": dict(self.errors)}


async def validate_field(
    schema: Schema,
    field: str,
    value: Any,
    context: Mapping[str, Any] | None = None,
) -> FieldValidation:
    """Check one field's value against its rules."""
    error = await schema.check_field(field, value, context or {})
    log.debug("field_checked", schema=schema.name, field=field, valid=error is None)
    return FieldValidation(error=error)


async def validate_data(
    schema: Schema,
    values: Mapping[str, Any],
    context: Mapping[str, Any] | None = None,
) -> DataValidation:
    """Check the whole object and collect every field's first error."""
    outcome = await schema.check(values, context or {})
    if outcome.errors:
        log.debug("data_invalid", schema=schema.name, fields=sorted(outcome.errors))
        return DataValidation(is_valid=False, errors=dict(outcome.errors))
    log.debug("data_valid", schema=schema.name)
    return DataValidation(is_valid=True, data=dict(outcome.data))
