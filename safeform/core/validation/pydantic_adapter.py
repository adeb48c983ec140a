"""Pydantic models as form schemas.

``PydanticSchema`` lets any pydantic v2 ``BaseModel`` back a form:

    class SafetyRating(BaseModel):
        rating: int = Field(ge=1, le=5, json_schema_extra={"messages": {"less_than_equal": "Too many stars"}})
        comment: Annotated[str, Field(max_length=500), Trimmed] = ""

    schema = PydanticSchema(SafetyRating)
    outcome = await schema.check({"rating": 7, "comment": ""})
    # outcome.errors == {"rating": "Too many stars"}

Whole-object checks run ``model_validate`` (model validators included, with
the form's context available as ``info.context``). Single-field checks validate
``{field: value}`` against the same model and keep only the errors located
under that field, so its constraints and ``@field_validator`` rules apply
while missing siblings and model-level rules never surface.

Messages come from pydantic unless the model supplies its own through
``json_schema_extra={"messages": {"<error type>": "..."}}`` on the field.
"""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel
from pydantic.fields import FieldInfo
from pydantic import ValidationError as PydanticValidationError

from safeform.core.errors import raise_error, unknown_field

from .schema import FORM_ERROR_KEY, SchemaOutcome


class PydanticSchema:
    """Adapter from a pydantic model class to the ``Schema`` protocol."""

    __slots__ = ("model", "name")

    def __init__(self, model: type[BaseModel], *, name: str | None = None):
        self.model = model
        self.name = name or model.__name__

    def __repr__(self) -> str:
        return f"PydanticSchema({self.model.__name__})"

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.model.model_fields)

    def _require_field(self, field: str) -> None:
        if field not in self.model.model_fields:
            raise_error(unknown_field(field, self.field_names, origin=f"schema.{self.name}"))

    async def check_field(self, field: str, value: Any, context: Mapping[str, Any] | None = None) -> str | None:
        self._require_field(field)
        try:
            self.model.model_validate({field: value}, context=dict(context or {}))
        except PydanticValidationError as exc:
            for error in exc.errors():
                loc = error.get("loc", ())
                if loc and loc[0] == field:
                    return self._message(loc, error)
        return None

    async def check(self, values: Mapping[str, Any], context: Mapping[str, Any] | None = None) -> SchemaOutcome:
        try:
            instance = self.model.model_validate(dict(values), context=dict(context or {}))
        except PydanticValidationError as exc:
            errors: dict[str, str] = {}
            for error in exc.errors():
                loc = error.get("loc", ())
                key = str(loc[0]) if loc else FORM_ERROR_KEY
                if key not in errors:
                    errors[key] = self._message(loc, error)
            return SchemaOutcome(errors=errors, data={})
        return SchemaOutcome(errors={}, data=instance.model_dump())

    def _field_info(self, loc: tuple) -> FieldInfo | None:
        """Follow an error location through nested models to the field it names."""
        model: Any = self.model
        info = None
        for part in loc:
            if not (isinstance(model, type) and issubclass(model, BaseModel)):
                return None
            if (info := model.model_fields.get(str(part))) is None:
                return None
            model = info.annotation
        return info

    def _message(self, loc: tuple, error: Mapping[str, Any]) -> str:
        """Prefer a field-declared message, then the raw ValueError text, then pydantic's."""
        info = self._field_info(loc)
        extra = info.json_schema_extra if info is not None else None
        if isinstance(extra, dict) and isinstance(messages := extra.get("messages"), dict):
            if (custom := messages.get(error.get("type", ""))) is not None:
                return custom
        if error.get("type") == "value_error" and (cause := error.get("ctx", {}).get("error")) is not None:
            return str(cause)
        return error.get("msg", "Invalid value")
