"""Community chat messages and location safety ratings."""
from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from safeform.core.validation import FieldSpec, FormSchema, PydanticSchema, Required, StringLength, trim

message_schema = FormSchema(
    "message",
    {
        "text": FieldSpec(
            Required().with_message("Message cannot be empty"),
            StringLength(min_length=1).with_message("Message cannot be empty"),
            StringLength(max_length=1000).with_message("Message must be less than 1000 characters"),
            transforms=(trim,),
        ),
    },
)


# ============================================================================
# Safety rating
# ============================================================================

def _messages(**by_error_type: str) -> dict[str, Any]:
    return {"messages": by_error_type}


def _required_text(message: str) -> BeforeValidator:
    def check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(message)
        return value.strip() if isinstance(value, str) else value
    return BeforeValidator(check)


def _bounded(low: float, high: float, below: str, above: str | None = None) -> AfterValidator:
    def check(value: float) -> float:
        if value < low:
            raise ValueError(below)
        if value > high:
            raise ValueError(above or below)
        return value
    return AfterValidator(check)


def _optional_text(value: Any) -> Any:
    return "" if value is None else trim(value)


class RatedLocation(BaseModel):
    latitude: Annotated[float, _bounded(-90, 90, "Invalid latitude")] = Field(
        json_schema_extra=_messages(missing="Latitude is required", float_type="Latitude is required"))
    longitude: Annotated[float, _bounded(-180, 180, "Invalid longitude")] = Field(
        json_schema_extra=_messages(missing="Longitude is required", float_type="Longitude is required"))
    address: Annotated[str, Field(min_length=5, max_length=200), _required_text("Address is required")] = Field(
        json_schema_extra=_messages(
            missing="Address is required",
            string_too_short="Address must be at least 5 characters",
            string_too_long="Address must be less than 200 characters",
        ),
    )


class SafetyRating(BaseModel):
    """A 1-5 star rating of how safe a place felt, with an optional comment."""

    rating: Annotated[int, _bounded(1, 5, "Rating must be at least 1 star", "Rating must be at most 5 stars")] = Field(
        json_schema_extra=_messages(
            missing="Rating is required",
            int_type="Rating is required",
            int_parsing="Rating is required",
            int_from_float="Rating must be a whole number",
        ),
    )
    comment: Annotated[str, Field(max_length=500), BeforeValidator(_optional_text)] = Field(
        default="",
        json_schema_extra=_messages(string_too_long="Comment must be less than 500 characters"),
    )
    location: RatedLocation = Field(json_schema_extra=_messages(
        missing="Location is required",
        model_type="Location is required",
    ))


safety_rating_schema = PydanticSchema(SafetyRating, name="safety_rating")
