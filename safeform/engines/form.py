"""Form State Engine

Owns one form session's mutable state (values, errors, touched flags and
the submitting/validating flags) and calls into a schema only through
``validate_field`` / ``validate_data``.

Every per-field validation carries a token: the form's reset generation
plus a per-field sequence number bumped on every edit of that field. A
result is applied only while its token is still the newest for the field,
the field still holds the value that was checked, and no reset happened
in between. Results arriving late are dropped.

Usage:
    form = ValidatedForm(login_schema, {"email": ""}, on_submit=send_code)

    await form.set_field_value("email", "jane@x.com")
    await form.set_field_touched("email")
    status = await form.handle_submit()
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from functools import partial
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping

from safeform.core.config import get_settings
from safeform.core.errors import (
    AppError,
    AppErrorException,
    ErrorCode,
    raise_error,
    schema_misconfigured,
    try_result_async,
    unknown_field,
)
from safeform.core.invoke import invoke
from safeform.core.logging import bind_context, form_logger, unbind_context
from safeform.core.validation import FORM_ERROR_KEY, DataValidation, Schema, validate_data, validate_field

log = form_logger()

SubmitHandler = Callable[[dict[str, Any]], Any]  # sync or async


class SubmitStatus(str, Enum):
    """Which way a submit attempt returned to idle."""
    REJECTED = "rejected"      # validation failed, handler not called
    SUBMITTED = "submitted"
    FAILED = "failed"          # handler raised
    CANCELLED = "cancelled"    # form reset before the handler could run


@dataclass(frozen=True, slots=True)
class FieldProps:
    """Everything a view needs to render and wire up one input."""
    name: str
    value: Any
    error: str | None
    on_change: Callable[[Any], Awaitable[None]]
    on_blur: Callable[[], Awaitable[None]]


def _failure_message(error: AppError) -> str:
    """User-facing text for a failed submit; typed errors raised by handlers keep their own message."""
    if isinstance(error.cause, AppErrorException):
        error = error.cause.error
    return error.message or "Submission failed"


class ValidatedForm:
    """Validated form session over a fixed set of fields."""

    __slots__ = (
        'schema', 'name', 'validate_on_change', 'validate_on_blur', 'submit_error_key',
        '_on_submit', '_context', '_initial', '_values', '_errors', '_touched',
        '_is_submitting', '_pending', '_generation', '_field_seq',
    )

    def __init__(
        self,
        schema: Schema,
        initial_values: Mapping[str, Any],
        on_submit: SubmitHandler,
        *,
        validate_on_change: bool | None = None,
        validate_on_blur: bool | None = None,
        context: Mapping[str, Any] | None = None,
        name: str | None = None,
    ):
        settings = get_settings()
        self.schema = schema
        self.name = name or schema.name
        self.validate_on_change = settings.FORM_VALIDATE_ON_CHANGE if validate_on_change is None else validate_on_change
        self.validate_on_blur = settings.FORM_VALIDATE_ON_BLUR if validate_on_blur is None else validate_on_blur
        self.submit_error_key = settings.FORM_SUBMIT_ERROR_KEY

        uncovered = sorted(set(initial_values) - set(schema.field_names))
        if uncovered:
            raise_error(schema_misconfigured(
                schema.name, f"no rules for fields {', '.join(uncovered)}", origin=f"form.{self.name}"))

        self._on_submit = on_submit
        self._context: dict[str, Any] = dict(context or {})
        self._initial: dict[str, Any] = copy.deepcopy(dict(initial_values))
        self._values: dict[str, Any] = copy.deepcopy(self._initial)
        self._errors: dict[str, str] = {}
        self._touched: dict[str, bool] = {}
        self._is_submitting = False
        self._pending = 0
        self._generation = 0
        self._field_seq: dict[str, int] = {}
        log.debug("form_created", form=self.name, fields=list(self._values),
            validate_on_change=self.validate_on_change, validate_on_blur=self.validate_on_blur)

    def __repr__(self) -> str:
        return f"ValidatedForm({self.name!r}, fields={list(self._values)})"

    # ========================================================================
    # State
    # ========================================================================

    @property
    def values(self) -> Mapping[str, Any]: return MappingProxyType(self._values)

    @property
    def errors(self) -> Mapping[str, str]: return MappingProxyType(self._errors)

    @property
    def touched(self) -> Mapping[str, bool]: return MappingProxyType(self._touched)

    @property
    def initial_values(self) -> Mapping[str, Any]: return MappingProxyType(self._initial)

    @property
    def is_submitting(self) -> bool: return self._is_submitting

    @property
    def is_validating(self) -> bool: return self._pending > 0

    @property
    def is_valid(self) -> bool: return not self._errors

    @property
    def is_dirty(self) -> bool: return self._values != self._initial

    @property
    def context(self) -> Mapping[str, Any]: return MappingProxyType(self._context)

    @context.setter
    def context(self, value: Mapping[str, Any]) -> None:
        self._context = dict(value)

    def _require_field(self, field: str) -> None:
        if field not in self._values:
            raise_error(unknown_field(field, list(self._values), origin=f"form.{self.name}"))

    def _require_error_key(self, key: str) -> None:
        if key not in (self.submit_error_key, FORM_ERROR_KEY):
            self._require_field(key)

    def _next_seq(self, field: str) -> int:
        seq = self._field_seq[field] = self._field_seq.get(field, 0) + 1
        return seq

    # ========================================================================
    # Field operations
    # ========================================================================

    async def set_field_value(self, field: str, value: Any) -> None:
        """Replace one value; validates that field when validate_on_change is set."""
        self._require_field(field)
        self._values[field] = value
        seq = self._next_seq(field)
        if self.validate_on_change:
            await self._validate_field(field, seq)

    async def set_field_touched(self, field: str, touched: bool = True) -> None:
        """Mark a field (un)touched; touching validates it when validate_on_blur is set."""
        self._require_field(field)
        self._touched[field] = touched
        if touched and self.validate_on_blur:
            await self._validate_field(field, self._next_seq(field))

    def set_field_values(self, partial_values: Mapping[str, Any]) -> None:
        """Merge values without validating or touching (programmatic pre-fill)."""
        for field in partial_values:
            self._require_field(field)
        for field, value in partial_values.items():
            self._values[field] = value
            self._next_seq(field)

    def set_field_error(self, field: str, message: str) -> None:
        self._require_error_key(field)
        self._errors[field] = message

    def clear_field_error(self, field: str) -> None:
        self._require_error_key(field)
        self._errors.pop(field, None)

    def clear_errors(self) -> None:
        self._errors = {}

    def get_field_props(self, field: str) -> FieldProps:
        """Derived view of one field; its error only shows once the field is touched."""
        self._require_field(field)
        return FieldProps(
            name=field,
            value=self._values[field],
            error=self._errors.get(field) if self._touched.get(field) else None,
            on_change=partial(self.set_field_value, field),
            on_blur=partial(self.set_field_touched, field),
        )

    async def _validate_field(self, field: str, seq: int) -> None:
        generation = self._generation
        value = self._values[field]
        self._pending += 1
        try:
            outcome = await validate_field(self.schema, field, value, self._context)
        finally:
            if generation == self._generation:
                self._pending -= 1

        if generation != self._generation or self._field_seq.get(field) != seq or self._values.get(field) != value:
            log.debug("field_validation_stale", form=self.name, field=field, seq=seq)
            return
        if outcome.error is None:
            self._errors.pop(field, None)
        else:
            self._errors[field] = outcome.error

    # ========================================================================
    # Whole-form operations
    # ========================================================================

    async def validate(self) -> DataValidation:
        """Validate every field at once and replace ``errors`` with the result."""
        generation = self._generation
        self._pending += 1
        try:
            result = await validate_data(self.schema, dict(self._values), self._context)
        finally:
            if generation == self._generation:
                self._pending -= 1

        if generation == self._generation:
            self._errors = dict(result.errors)
        else:
            log.debug("form_validation_stale", form=self.name)
        return result

    def reset_form(self) -> None:
        """Restore initial values, clear errors and flags, and orphan in-flight work."""
        self._generation += 1
        self._values = copy.deepcopy(self._initial)
        self._errors = {}
        self._touched = {}
        self._is_submitting = False
        self._pending = 0
        log.debug("form_reset", form=self.name, generation=self._generation)

    async def handle_submit(self) -> SubmitStatus:
        """Touch every field, validate the whole form, and call on_submit only when valid.

        A failing on_submit never propagates: its message is stored under the
        submit error key. Faults raised by the schema itself do propagate.
        """
        generation = self._generation
        for field in self._values:
            self._touched[field] = True
        self._is_submitting = True
        bind_context(form=self.name)
        try:
            result = await self.validate()
            if generation != self._generation:
                log.debug("submit_stale", generation=generation)
                return SubmitStatus.CANCELLED
            if not result.is_valid:
                log.info("submit_rejected", fields=sorted(result.errors))
                return SubmitStatus.REJECTED

            outcome = await try_result_async(
                lambda: invoke(self._on_submit, result.data),
                code=ErrorCode.E5030_SUBMISSION_FAILED,
                origin=f"form.{self.name}",
            )
            if outcome.is_err():
                error = outcome.unwrap_err()
                if generation == self._generation:
                    self._errors[self.submit_error_key] = _failure_message(error)
                log.warning("submit_failed", error_code=error.code.name,
                    correlation_id=error.context.correlation_id,
                    exception_type=error.metadata.get("exception_type"))
                return SubmitStatus.FAILED

            log.info("form_submitted")
            return SubmitStatus.SUBMITTED
        finally:
            unbind_context("form")
            if generation == self._generation:
                self._is_submitting = False
