"""Compositional Validator System

Atomic validators combine via AND/OR/NOT combinators. Custom validators
integrate seamlessly with primitive combinators.

A validator's ``validate()`` returns a ``ValidationResult``. Predicate-based
validators (``Check``, ``CustomValidator``) may wrap async callables; their
``validate()`` then returns an awaitable, and every combinator propagates
that, so ``await resolve(v.validate(value))`` works for any validator.

Invalid input is a result, never an exception: anything raised from a
validator is a fault in the validator itself and propagates to the caller.
"""
from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Awaitable, Callable, Sequence

from safeform.core.errors import ErrorCode

from .patterns import EMAIL_RE


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of a validation check with rich context."""
    is_valid: bool
    error_message: str | None = None
    error_code: ErrorCode | None = None
    constraint: str | None = None
    expected: Any = None
    actual: Any = None

    @classmethod
    def valid(cls) -> ValidationResult: return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str, code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC, *,
                constraint: str | None = None, expected: Any = None, actual: Any = None) -> ValidationResult:
        return cls(is_valid=False, error_message=message, error_code=code, constraint=constraint,
            expected=expected, actual=actual)

    def to_dict(self) -> dict[str, Any]:
        if self.is_valid: return {"valid": True}
        return {"valid": False, "message": self.error_message, "code": self.error_code.name if self.error_code else None,
            "constraint": self.constraint, "expected": self.expected, "actual": self.actual}


async def resolve(outcome: ValidationResult | Awaitable[ValidationResult]) -> ValidationResult:
    """Await an outcome if the validator produced an awaitable."""
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome


def _then(outcome: Any, fn: Callable[[ValidationResult], ValidationResult]) -> Any:
    """Apply ``fn`` now, or after the awaitable resolves."""
    if inspect.isawaitable(outcome):
        async def _chain() -> ValidationResult:
            return fn(await outcome)
        return _chain()
    return fn(outcome)


def _type_error(value: Any, expected: str) -> ValidationResult:
    return ValidationResult.invalid(f"Expected {expected}, got {type(value).__name__}",
        ErrorCode.E2004_INVALID_TYPE, constraint=expected, expected=expected, actual=type(value).__name__)


class AtomicValidator(ABC):
    """Base class for atomic validators.

    Validators are immutable and composable via operators:
    - & (AND): both must pass
    - | (OR): at least one must pass
    - ~ (NOT): negates the validator
    """

    __slots__ = ()

    @abstractmethod
    def validate(self, value: Any) -> ValidationResult:
        """Validate a value. Returns ValidationResult (or an awaitable of one)."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Human-readable constraint name for error messages."""

    def __call__(self, value: Any) -> ValidationResult: return self.validate(value)

    def __and__(self, other: AtomicValidator) -> And: return And(self, other)

    def __or__(self, other: AtomicValidator) -> Or: return Or(self, other)

    def __invert__(self) -> Not: return Not(self)

    def with_message(self, message: str) -> WithMessage: return WithMessage(self, message)


# ============================================================================
# Presence
# ============================================================================

@dataclass(frozen=True, slots=True)
class Required(AtomicValidator):
    """Value must be present: not None, not blank, not an empty collection."""

    @property
    def constraint_name(self) -> str: return "required"

    def validate(self, value: Any) -> ValidationResult:
        missing = (value is None or (isinstance(value, str) and not value.strip())
            or (isinstance(value, (list, tuple, dict, set)) and not value))
        if missing:
            return ValidationResult.invalid("This field is required", ErrorCode.E2001_REQUIRED_FIELD_MISSING,
                constraint=self.constraint_name, expected="a value", actual=value)
        return ValidationResult.valid()


# ============================================================================
# String Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringLength(AtomicValidator):
    """Validate string length constraints."""
    min_length: int | None = None
    max_length: int | None = None

    @property
    def constraint_name(self) -> str:
        if self.min_length is not None and self.max_length is not None:
            return f"length[{self.min_length},{self.max_length}]"
        if self.min_length is not None:
            return f"min_length[{self.min_length}]"
        if self.max_length is not None:
            return f"max_length[{self.max_length}]"
        return "string_length"

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str): return _type_error(value, "string")

        length = len(value)

        if self.min_length is not None and length < self.min_length:
            return ValidationResult.invalid(
                f"Must be at least {self.min_length} characters",
                ErrorCode.E2003_OUT_OF_RANGE,
                constraint=self.constraint_name,
                expected=f">= {self.min_length} characters",
                actual=f"{length} characters",
            )

        if self.max_length is not None and length > self.max_length:
            return ValidationResult.invalid(
                f"Must be at most {self.max_length} characters",
                ErrorCode.E2003_OUT_OF_RANGE,
                constraint=self.constraint_name,
                expected=f"<= {self.max_length} characters",
                actual=f"{length} characters",
            )

        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class RegexPattern(AtomicValidator):
    """Validate string against regex pattern."""
    pattern: str | re.Pattern
    description: str | None = None
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    @property
    def constraint_name(self) -> str:
        return self.description or f"pattern[{self._compiled.pattern}]"

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str): return _type_error(value, "string")

        if not self._compiled.match(value):
            return ValidationResult.invalid(
                f"Value does not match pattern: {self.description or self._compiled.pattern}",
                ErrorCode.E2002_INVALID_FORMAT,
                constraint=self.constraint_name,
                expected=f"match pattern '{self._compiled.pattern}'",
                actual=value[:50] + ("..." if len(value) > 50 else ""),
            )

        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class EmailValidator(AtomicValidator):
    """Validate email address format (structure, not deliverability)."""

    @property
    def constraint_name(self) -> str: return "email"

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str): return _type_error(value, "string")
        if not EMAIL_RE.fullmatch(value):
            return ValidationResult.invalid(f"Invalid email format: {value}", ErrorCode.E2010_INVALID_EMAIL,
                constraint=self.constraint_name, expected="valid email address", actual=value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class OneOf(AtomicValidator):
    """Validate value is one of allowed options."""
    options: frozenset[str]
    case_sensitive: bool = True

    def __init__(self, *options: str, case_sensitive: bool = True):
        object.__setattr__(self, "options", frozenset(options)); object.__setattr__(self, "case_sensitive", case_sensitive)

    @property
    def constraint_name(self) -> str:
        opts = sorted(self.options)[:5]
        suffix = f"... +{len(self.options) - 5}" if len(self.options) > 5 else ""
        return f"one_of[{', '.join(opts)}{suffix}]"

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str): return _type_error(value, "string")

        check_value = value if self.case_sensitive else value.lower()
        check_options = self.options if self.case_sensitive else frozenset(o.lower() for o in self.options)

        if check_value not in check_options:
            return ValidationResult.invalid(f"Must be one of: {', '.join(sorted(self.options))}",
                ErrorCode.E2005_CONSTRAINT_VIOLATION, constraint=self.constraint_name,
                expected=sorted(self.options), actual=value)
        return ValidationResult.valid()


# ============================================================================
# Numeric Validators
# ============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class NumericRange(AtomicValidator):
    """Validate inclusive numeric bounds."""
    min_value: float | int | None = None
    max_value: float | int | None = None

    @property
    def constraint_name(self) -> str:
        parts = []
        if self.min_value is not None: parts.append(f">={self.min_value}")
        if self.max_value is not None: parts.append(f"<={self.max_value}")
        return f"range[{', '.join(parts)}]" if parts else "numeric"

    def validate(self, value: Any) -> ValidationResult:
        if not _is_number(value): return _type_error(value, "number")

        if self.min_value is not None and value < self.min_value:
            return ValidationResult.invalid(f"Must be at least {self.min_value}", ErrorCode.E2003_OUT_OF_RANGE,
                constraint=self.constraint_name, expected=f">= {self.min_value}", actual=value)
        if self.max_value is not None and value > self.max_value:
            return ValidationResult.invalid(f"Must be at most {self.max_value}", ErrorCode.E2003_OUT_OF_RANGE,
                constraint=self.constraint_name, expected=f"<= {self.max_value}", actual=value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class IsInteger(AtomicValidator):
    """Validate number has no fractional part."""

    @property
    def constraint_name(self) -> str: return "integer"

    def validate(self, value: Any) -> ValidationResult:
        if not _is_number(value): return _type_error(value, "number")
        if value != int(value):
            return ValidationResult.invalid("Must be a whole number", ErrorCode.E2005_CONSTRAINT_VIOLATION,
                constraint=self.constraint_name, expected="integer", actual=value)
        return ValidationResult.valid()


# ============================================================================
# Predicate Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Check(AtomicValidator):
    """Boolean predicate with a fixed message; predicate may be async.

    Usage:
        Check(lambda v: not v or PHONE_RE.match(v), "Please enter a valid phone number")
    """
    predicate: Callable[[Any], bool | Awaitable[bool]]
    message: str
    name: str = "check"

    @property
    def constraint_name(self) -> str: return self.name

    def validate(self, value: Any) -> ValidationResult:
        outcome = self.predicate(value)
        if inspect.isawaitable(outcome):
            async def _finish() -> ValidationResult:
                return self._judge(await outcome, value)
            return _finish()
        return self._judge(outcome, value)

    def _judge(self, passed: Any, value: Any) -> ValidationResult:
        if passed: return ValidationResult.valid()
        return ValidationResult.invalid(self.message, ErrorCode.E2005_CONSTRAINT_VIOLATION,
            constraint=self.name, actual=value)


@dataclass(frozen=True, slots=True)
class CustomValidator(AtomicValidator):
    """Custom validator from function returning ValidationResult (sync or async).

    Usage:
        async def not_blocked(contact: str) -> ValidationResult:
            if await blocklist.contains(contact):
                return ValidationResult.invalid("This contact cannot be added")
            return ValidationResult.valid()

        validator = CustomValidator(not_blocked, name="not_blocked")
    """
    validator_fn: Callable[[Any], ValidationResult | Awaitable[ValidationResult]]
    name: str = "custom"

    @property
    def constraint_name(self) -> str: return self.name

    def validate(self, value: Any) -> ValidationResult:
        return self.validator_fn(value)


def custom(name: str) -> Callable[[Callable[[Any], ValidationResult]], CustomValidator]:
    """Decorator to create custom validator from function."""
    return lambda fn: CustomValidator(fn, name=name)


# ============================================================================
# Combinators
# ============================================================================

def _first_failure(validators: Sequence[AtomicValidator], value: Any) -> Any:
    """Short-circuit AND over validators, going async only when one does."""
    for index, validator in enumerate(validators):
        outcome = validator.validate(value)
        if inspect.isawaitable(outcome):
            return _first_failure_async(outcome, validators[index + 1:], value)
        if not outcome.is_valid: return outcome
    return ValidationResult.valid()


async def _first_failure_async(pending: Awaitable[ValidationResult], rest: Sequence[AtomicValidator],
                               value: Any) -> ValidationResult:
    if not (result := await pending).is_valid: return result
    for validator in rest:
        if not (result := await resolve(validator.validate(value))).is_valid: return result
    return ValidationResult.valid()


def _first_success(validators: Sequence[AtomicValidator], value: Any) -> Any:
    """Lazy OR over validators; returns the list of failures or None on success."""
    failures: list[ValidationResult] = []
    for index, validator in enumerate(validators):
        outcome = validator.validate(value)
        if inspect.isawaitable(outcome):
            return _first_success_async(outcome, validators[index + 1:], value, failures)
        if outcome.is_valid: return None
        failures.append(outcome)
    return failures


async def _first_success_async(pending: Awaitable[ValidationResult], rest: Sequence[AtomicValidator],
                               value: Any, failures: list[ValidationResult]) -> list[ValidationResult] | None:
    if (result := await pending).is_valid: return None
    failures.append(result)
    for validator in rest:
        if (result := await resolve(validator.validate(value))).is_valid: return None
        failures.append(result)
    return failures


@dataclass(frozen=True, slots=True)
class And(AtomicValidator):
    """AND combinator: all validators must pass (short-circuit on first failure)."""
    left: AtomicValidator
    right: AtomicValidator

    @property
    def constraint_name(self) -> str:
        return f"({self.left.constraint_name} AND {self.right.constraint_name})"

    def validate(self, value: Any) -> ValidationResult:
        return _first_failure((self.left, self.right), value)


@dataclass(frozen=True, slots=True)
class AnyOf(AtomicValidator):
    """At least one validator must pass."""
    validators: tuple[AtomicValidator, ...]

    def __init__(self, *validators: AtomicValidator):
        object.__setattr__(self, "validators", tuple(validators))

    @property
    def constraint_name(self) -> str:
        return f"any_of[{', '.join(v.constraint_name for v in self.validators)}]"

    def validate(self, value: Any) -> ValidationResult:
        return _then(_first_success(self.validators, value), self._summarize)

    def _summarize(self, failures: list[ValidationResult] | None) -> ValidationResult:
        if failures is None: return ValidationResult.valid()
        return ValidationResult.invalid(
            f"No constraint satisfied: {'; '.join(f.error_message or '' for f in failures)}",
            ErrorCode.E2000_VALIDATION_GENERIC, constraint=self.constraint_name)


class Or(AnyOf):
    """OR combinator: at least one of two validators must pass (lazy evaluation)."""

    __slots__ = ()

    def __init__(self, left: AtomicValidator, right: AtomicValidator):
        super().__init__(left, right)

    @property
    def constraint_name(self) -> str:
        left, right = self.validators
        return f"({left.constraint_name} OR {right.constraint_name})"


@dataclass(frozen=True, slots=True)
class Not(AtomicValidator):
    """NOT combinator: negates validator."""
    validator: AtomicValidator
    message: str | None = None

    @property
    def constraint_name(self) -> str:
        return f"NOT({self.validator.constraint_name})"

    def validate(self, value: Any) -> ValidationResult:
        return _then(self.validator.validate(value), self._negate)

    def _negate(self, result: ValidationResult) -> ValidationResult:
        if result.is_valid:
            return ValidationResult.invalid(self.message or f"Value should not satisfy: {self.validator.constraint_name}",
                ErrorCode.E2005_CONSTRAINT_VIOLATION, constraint=self.constraint_name)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class WithMessage(AtomicValidator):
    """Wrapper to override error message."""
    validator: AtomicValidator
    message: str

    @property
    def constraint_name(self) -> str:
        return self.validator.constraint_name

    def validate(self, value: Any) -> ValidationResult:
        return _then(self.validator.validate(value), self._rewrite)

    def _rewrite(self, result: ValidationResult) -> ValidationResult:
        if result.is_valid: return result
        return ValidationResult.invalid(self.message, result.error_code or ErrorCode.E2000_VALIDATION_GENERIC,
            constraint=result.constraint, expected=result.expected, actual=result.actual)
