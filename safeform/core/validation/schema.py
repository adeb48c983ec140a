"""Declarative Form Schemas

A schema describes valid values per field and for the object as a whole.
It can check one named field in isolation or the entire value set, given
an optional out-of-band context (e.g. ``{"is_sign_up": True}``).

Usage:
    from safeform.core.validation import FormSchema, FieldSpec, When, ObjectTest, Required, trim

    signup = FormSchema(
        "signup",
        {
            "name": When("is_sign_up",
                then=FieldSpec(Required().with_message("Full name is required"), transforms=(trim,)),
                otherwise=FieldSpec(optional=True)),
            "email": FieldSpec(Required().with_message("Email is required"), transforms=(trim, lowercase)),
        },
    )

    error = await signup.check_field("email", "", {"is_sign_up": True})
    outcome = await signup.check({"name": "", "email": "a@b.co"}, {"is_sign_up": False})

Any object satisfying the ``Schema`` protocol can back a form; see
``PydanticSchema`` for pydantic models.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Protocol, Sequence, runtime_checkable

from safeform.core.errors import raise_error, unknown_field

from .transforms import Transform
from .validators import AtomicValidator, resolve

# Errors from rules that span several fields and name none of them
FORM_ERROR_KEY = "_form"


@dataclass(frozen=True, slots=True)
class SchemaOutcome:
    """Raw outcome of a whole-object check: errors (empty when valid) and cleaned data."""
    errors: dict[str, str]
    data: dict[str, Any]


@runtime_checkable
class Schema(Protocol):
    """Contract every schema implementation honors.

    ``check_field`` returns the first error message for one field (or None)
    and never reports problems found on other fields. ``check`` returns one
    message per failing field plus the cleaned data. Invalid input is a
    return value; only misconfiguration or rule faults raise.
    """

    name: str

    @property
    def field_names(self) -> tuple[str, ...]: ...

    async def check_field(self, field: str, value: Any, context: Mapping[str, Any] | None = None) -> str | None: ...

    async def check(self, values: Mapping[str, Any], context: Mapping[str, Any] | None = None) -> SchemaOutcome: ...


# ============================================================================
# Field rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Rules for one field: transforms first, then validators in order.

    The first failing validator's message is the field's error. With
    ``optional=True`` validators are skipped when the transformed value is
    empty (None or "").
    """
    validators: tuple[AtomicValidator, ...] = ()
    transforms: tuple[Transform, ...] = ()
    optional: bool = False

    def __init__(self, *validators: AtomicValidator, transforms: Sequence[Transform] = (), optional: bool = False):
        object.__setattr__(self, "validators", tuple(validators))
        object.__setattr__(self, "transforms", tuple(transforms))
        object.__setattr__(self, "optional", optional)

    def clean(self, value: Any) -> Any:
        for transform in self.transforms:
            value = transform(value)
        return value

    async def run(self, value: Any) -> tuple[Any, str | None]:
        """Return the cleaned value and the first error message, if any."""
        cleaned = self.clean(value)
        if self.optional and (cleaned is None or cleaned == ""):
            return cleaned, None
        for validator in self.validators:
            result = await resolve(validator.validate(cleaned))
            if not result.is_valid:
                return cleaned, result.error_message or "Invalid value"
        return cleaned, None

    def for_context(self, context: Mapping[str, Any]) -> FieldSpec:
        return self


@dataclass(frozen=True, slots=True)
class When:
    """Context-conditional field rules (e.g. name required only when signing up)."""
    key: str
    then: FieldSpec
    otherwise: FieldSpec = field(default_factory=FieldSpec)
    is_: Any = True

    def for_context(self, context: Mapping[str, Any]) -> FieldSpec:
        matched = context.get(self.key) == self.is_
        return self.then if matched else self.otherwise


@dataclass(frozen=True, slots=True)
class ObjectTest:
    """Whole-object rule over cleaned values; predicate is sync or async.

    Runs only during whole-object checks. Its message is recorded under
    ``path`` (or ``FORM_ERROR_KEY``) unless that key already has an error.
    """
    predicate: Callable[[Mapping[str, Any], Mapping[str, Any]], bool | Awaitable[bool]]
    message: str
    path: str | None = None
    name: str = "object_test"

    async def passes(self, values: Mapping[str, Any], context: Mapping[str, Any]) -> bool:
        outcome = self.predicate(values, context)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return bool(outcome)


# ============================================================================
# FormSchema
# ============================================================================

class FormSchema:
    """Named set of field rules plus cross-field tests."""

    __slots__ = ("name", "_fields", "_tests")

    def __init__(
        self,
        name: str,
        fields: Mapping[str, FieldSpec | When],
        *,
        tests: Sequence[ObjectTest] = (),
    ):
        self.name = name
        self._fields = dict(fields)
        self._tests = tuple(tests)

    def __repr__(self) -> str:
        return f"FormSchema({self.name!r}, fields={list(self._fields)})"

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def _spec(self, field: str, context: Mapping[str, Any]) -> FieldSpec:
        if (rules := self._fields.get(field)) is None:
            raise_error(unknown_field(field, self.field_names, origin=f"schema.{self.name}"))
        return rules.for_context(context)

    async def check_field(self, field: str, value: Any, context: Mapping[str, Any] | None = None) -> str | None:
        _, error = await self._spec(field, context or {}).run(value)
        return error

    async def check(self, values: Mapping[str, Any], context: Mapping[str, Any] | None = None) -> SchemaOutcome:
        context = context or {}
        errors: dict[str, str] = {}
        data: dict[str, Any] = dict(values)

        for name in self._fields:
            cleaned, error = await self._spec(name, context).run(values.get(name))
            data[name] = cleaned
            if error is not None:
                errors[name] = error

        for test in self._tests:
            key = test.path or FORM_ERROR_KEY
            if key in errors:
                continue
            if not await test.passes(data, context):
                errors[key] = test.message

        return SchemaOutcome(errors=errors, data=data)
