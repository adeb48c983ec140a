"""Tests for FormSchema rules and the validate_field / validate_data boundary."""

import pytest

from safeform.core.errors import AppErrorException, ErrorCode
from safeform.core.validation import (
    FORM_ERROR_KEY,
    Check,
    DataValidation,
    FieldSpec,
    FieldValidation,
    FormSchema,
    ObjectTest,
    Required,
    Schema,
    StringLength,
    When,
    lowercase,
    trim,
    validate_data,
    validate_field,
)


@pytest.fixture
def schema() -> FormSchema:
    return FormSchema(
        "account",
        {
            "name": When(
                "is_sign_up",
                then=FieldSpec(
                    Required().with_message("Full name is required"),
                    StringLength(min_length=2).with_message("Name must be at least 2 characters"),
                    transforms=(trim,),
                ),
                otherwise=FieldSpec(optional=True),
            ),
            "email": FieldSpec(Required().with_message("Email is required"), transforms=(trim, lowercase)),
            "phone": FieldSpec(StringLength(min_length=7).with_message("Too short"), optional=True),
            "backup": FieldSpec(optional=True),
        },
        tests=[
            ObjectTest(lambda v, ctx: bool(v.get("phone") or v.get("backup")), "Provide a phone or a backup"),
        ],
    )


class TestFieldSpec:
    async def test_transforms_run_before_validators(self) -> None:
        spec = FieldSpec(StringLength(max_length=3), transforms=(trim,))
        cleaned, error = await spec.run("  abc  ")
        assert cleaned == "abc"
        assert error is None

    async def test_first_failure_wins(self) -> None:
        spec = FieldSpec(Required().with_message("first"), StringLength(min_length=3).with_message("second"))
        assert (await spec.run(""))[1] == "first"
        assert (await spec.run("ab"))[1] == "second"

    async def test_optional_skips_empty(self) -> None:
        spec = FieldSpec(StringLength(min_length=3).with_message("Too short"), transforms=(trim,), optional=True)
        assert (await spec.run("   "))[1] is None
        assert (await spec.run(None))[1] is None
        assert (await spec.run("ab"))[1] == "Too short"

    async def test_async_validator_is_awaited(self) -> None:
        async def free(value: str) -> bool:
            return value != "taken"

        spec = FieldSpec(Check(free, "Already taken"))
        assert (await spec.run("taken"))[1] == "Already taken"


class TestFormSchema:
    def test_satisfies_schema_protocol(self, schema: FormSchema) -> None:
        assert isinstance(schema, Schema)
        assert schema.field_names == ("name", "email", "phone", "backup")

    async def test_when_follows_context(self, schema: FormSchema) -> None:
        assert await schema.check_field("name", "", {"is_sign_up": True}) == "Full name is required"
        assert await schema.check_field("name", "", {"is_sign_up": False}) is None
        assert await schema.check_field("name", "") is None

    async def test_check_field_ignores_object_tests(self, schema: FormSchema) -> None:
        assert await schema.check_field("email", "jane@x.com") is None

    async def test_unknown_field_raises(self, schema: FormSchema) -> None:
        with pytest.raises(AppErrorException) as exc_info:
            await schema.check_field("nickname", "J")
        assert exc_info.value.code is ErrorCode.E2006_UNKNOWN_FIELD

    async def test_check_reports_every_failing_field(self, schema: FormSchema) -> None:
        outcome = await schema.check({"name": "", "email": "", "phone": "123", "backup": ""}, {"is_sign_up": True})
        assert outcome.errors == {
            "name": "Full name is required",
            "email": "Email is required",
            "phone": "Too short",
        }

    async def test_object_test_reported_under_form_key(self, schema: FormSchema) -> None:
        outcome = await schema.check({"name": "", "email": "jane@x.com", "phone": "", "backup": ""})
        assert outcome.errors == {FORM_ERROR_KEY: "Provide a phone or a backup"}

    async def test_object_test_with_path_does_not_overwrite(self) -> None:
        schema = FormSchema(
            "pair",
            {"a": FieldSpec(Required().with_message("A is required")), "b": FieldSpec(optional=True)},
            tests=[ObjectTest(lambda v, ctx: v.get("a") == v.get("b"), "Must match", path="a")],
        )
        assert (await schema.check({"a": "", "b": "x"})).errors == {"a": "A is required"}
        assert (await schema.check({"a": "y", "b": "x"})).errors == {"a": "Must match"}

    async def test_object_test_sees_cleaned_values_and_context(self) -> None:
        seen: list = []

        async def record(values, context) -> bool:
            seen.append((dict(values), dict(context)))
            return True

        schema = FormSchema("s", {"a": FieldSpec(transforms=(trim,))}, tests=[ObjectTest(record, "never")])
        await schema.check({"a": " x "}, {"mode": 1})
        assert seen == [({"a": "x"}, {"mode": 1})]

    async def test_unknown_keys_pass_through_and_missing_keys_are_none(self, schema: FormSchema) -> None:
        outcome = await schema.check({"email": " Jane@X.com ", "phone": "5550000", "extra": 1})
        assert outcome.errors == {}
        assert outcome.data == {"email": "jane@x.com", "phone": "5550000", "extra": 1, "name": None, "backup": None}


class TestBoundaries:
    async def test_validate_field_shapes(self, schema: FormSchema) -> None:
        ok = await validate_field(schema, "email", "jane@x.com")
        assert ok == FieldValidation()
        assert ok.is_valid is True
        bad = await validate_field(schema, "email", "  ")
        assert bad.error == "Email is required"
        assert bad.is_valid is False

    async def test_validate_data_success_has_data(self, schema: FormSchema) -> None:
        result = await validate_data(schema, {"name": "Jane", "email": "JANE@x.com", "phone": "5550000", "backup": ""},
            {"is_sign_up": True})
        assert result == DataValidation(
            is_valid=True,
            errors={},
            data={"name": "Jane", "email": "jane@x.com", "phone": "5550000", "backup": ""},
        )
        assert result.to_dict()["valid"] is True

    async def test_validate_data_failure_has_no_data(self, schema: FormSchema) -> None:
        result = await validate_data(schema, {"name": "", "email": "", "phone": "", "backup": ""}, {"is_sign_up": True})
        assert result.is_valid is False
        assert result.data is None
        assert set(result.errors) == {"name", "email", FORM_ERROR_KEY}
        assert result.to_dict() == {"valid": False, "errors": result.errors}

    async def test_rule_faults_propagate(self) -> None:
        def broken(value: object) -> bool:
            raise KeyError("bug")

        schema = FormSchema("broken", {"a": FieldSpec(Check(broken, "never"))})
        with pytest.raises(KeyError):
            await validate_field(schema, "a", "x")
        with pytest.raises(KeyError):
            await validate_data(schema, {"a": "x"})
