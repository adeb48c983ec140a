"""Tests for atomic validators and combinators."""

import pytest

from safeform.core.errors import ErrorCode
from safeform.core.validation import (
    AnyOf,
    Check,
    CustomValidator,
    EmailValidator,
    IsInteger,
    NumericRange,
    OneOf,
    RegexPattern,
    Required,
    StringLength,
    ValidationResult,
    custom,
    resolve,
)


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", "   ", [], {}])
    def test_missing_values(self, value: object) -> None:
        result = Required().validate(value)
        assert result.is_valid is False
        assert result.error_code is ErrorCode.E2001_REQUIRED_FIELD_MISSING

    @pytest.mark.parametrize("value", ["x", 0, False, [1]])
    def test_present_values(self, value: object) -> None:
        assert Required().validate(value).is_valid is True


class TestStringLength:
    def test_bounds(self) -> None:
        rule = StringLength(min_length=2, max_length=4)
        assert rule.validate("a").error_message == "Must be at least 2 characters"
        assert rule.validate("abcde").error_message == "Must be at most 4 characters"
        assert rule.validate("abc").is_valid is True

    def test_exact_length(self) -> None:
        rule = StringLength(min_length=6, max_length=6)
        assert rule.validate("123456").is_valid is True
        assert rule.validate("12345").is_valid is False
        assert rule.constraint_name == "length[6,6]"

    def test_non_string_is_type_error(self) -> None:
        result = StringLength(min_length=1).validate(5)
        assert result.error_code is ErrorCode.E2004_INVALID_TYPE


class TestFormatValidators:
    def test_regex_pattern(self) -> None:
        rule = RegexPattern(r"^\d{6}$", "6 digits")
        assert rule.validate("123456").is_valid is True
        result = rule.validate("12a456")
        assert result.error_code is ErrorCode.E2002_INVALID_FORMAT
        assert rule.constraint_name == "6 digits"

    @pytest.mark.parametrize("value", ["jane@x.com", "a.b+c@mail.example.org"])
    def test_valid_emails(self, value: str) -> None:
        assert EmailValidator().validate(value).is_valid is True

    @pytest.mark.parametrize("value", ["jane", "jane@", "jane@x", "jane@x.c", "jane@x.com\n"])
    def test_invalid_emails(self, value: str) -> None:
        result = EmailValidator().validate(value)
        assert result.is_valid is False
        assert result.error_code is ErrorCode.E2010_INVALID_EMAIL

    def test_one_of(self) -> None:
        rule = OneOf("male", "female")
        assert rule.validate("male").is_valid is True
        assert rule.validate("Male").is_valid is False
        assert OneOf("male", case_sensitive=False).validate("MALE").is_valid is True


class TestNumericValidators:
    def test_range_is_inclusive(self) -> None:
        rule = NumericRange(min_value=1, max_value=5)
        assert rule.validate(1).is_valid is True
        assert rule.validate(5).is_valid is True
        assert rule.validate(0).error_message == "Must be at least 1"
        assert rule.validate(6).error_message == "Must be at most 5"

    def test_bool_is_not_a_number(self) -> None:
        assert NumericRange(min_value=0).validate(True).error_code is ErrorCode.E2004_INVALID_TYPE

    def test_is_integer(self) -> None:
        assert IsInteger().validate(4.0).is_valid is True
        assert IsInteger().validate(4.5).error_message == "Must be a whole number"


class TestPredicates:
    def test_check(self) -> None:
        rule = Check(lambda v: v != "admin", "That name is reserved", name="not_reserved")
        assert rule.validate("jane").is_valid is True
        result = rule.validate("admin")
        assert result.error_message == "That name is reserved"
        assert result.constraint == "not_reserved"

    async def test_async_check_returns_awaitable(self) -> None:
        async def available(value: str) -> bool:
            return value != "taken"

        rule = Check(available, "Already taken")
        assert (await resolve(rule.validate("free"))).is_valid is True
        assert (await resolve(rule.validate("taken"))).error_message == "Already taken"

    def test_custom_decorator(self) -> None:
        @custom("even")
        def even(value: int) -> ValidationResult:
            return ValidationResult.valid() if value % 2 == 0 else ValidationResult.invalid("Must be even")

        assert isinstance(even, CustomValidator)
        assert even.constraint_name == "even"
        assert even(3).error_message == "Must be even"

    def test_to_dict(self) -> None:
        assert ValidationResult.valid().to_dict() == {"valid": True}
        payload = Required().validate("").to_dict()
        assert payload["valid"] is False
        assert payload["code"] == "E2001_REQUIRED_FIELD_MISSING"


class TestCombinators:
    def test_and_short_circuits(self) -> None:
        rule = Required() & StringLength(min_length=3)
        assert rule.validate("").error_message == "This field is required"
        assert rule.validate("ab").error_message == "Must be at least 3 characters"
        assert rule.validate("abc").is_valid is True

    def test_or_needs_one_success(self) -> None:
        rule = EmailValidator() | RegexPattern(r"^\d{10}$")
        assert rule.validate("jane@x.com").is_valid is True
        assert rule.validate("0123456789").is_valid is True
        assert rule.validate("nope").is_valid is False

    def test_combinators_have_no_instance_dict(self) -> None:
        for rule in (Required() | OneOf("a"), Required() & OneOf("a"), ~Required(), Required().with_message("x")):
            assert not hasattr(rule, "__dict__")

    def test_any_of(self) -> None:
        rule = AnyOf(OneOf("a"), OneOf("b"), OneOf("c"))
        assert rule.validate("c").is_valid is True
        assert rule.validate("d").error_message.startswith("No constraint satisfied")

    def test_not(self) -> None:
        rule = ~OneOf("admin")
        assert rule.validate("jane").is_valid is True
        assert rule.validate("admin").is_valid is False

    def test_with_message_keeps_code(self) -> None:
        rule = EmailValidator().with_message("Please enter a valid email address")
        result = rule.validate("nope")
        assert result.error_message == "Please enter a valid email address"
        assert result.error_code is ErrorCode.E2010_INVALID_EMAIL
        assert rule.validate("jane@x.com").is_valid is True

    async def test_async_member_makes_combinator_async(self) -> None:
        async def not_blocked(value: str) -> bool:
            return value != "blocked@x.com"

        rule = EmailValidator() & Check(not_blocked, "This contact cannot be added")
        assert (await resolve(rule.validate("jane@x.com"))).is_valid is True
        assert (await resolve(rule.validate("blocked@x.com"))).error_message == "This contact cannot be added"
        # the sync failure short-circuits before the async rule runs
        assert not (await resolve(rule.validate("nope"))).is_valid

    async def test_async_or_and_not(self) -> None:
        async def is_vip(value: str) -> bool:
            return value == "vip"

        either = OneOf("a") | Check(is_vip, "not vip")
        assert (await resolve(either.validate("vip"))).is_valid is True
        assert (await resolve(either.validate("b"))).is_valid is False

        negated = ~Check(is_vip, "not vip")
        assert (await resolve(negated.validate("vip"))).is_valid is False
