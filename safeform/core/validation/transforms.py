"""Value Transforms

Transforms normalize a raw field value before its validators run; the
transformed value is what a successful whole-form validation hands back.

Plain callables are used by ``FieldSpec(transforms=...)``. The Annotated
forms wrap the same callables for pydantic models:

    class SafetyRating(BaseModel):
        comment: Annotated[str, Trimmed] = ""
"""
from __future__ import annotations

from typing import Any, Callable

from pydantic import BeforeValidator

Transform = Callable[[Any], Any]


def trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def lowercase(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


Trimmed = BeforeValidator(trim)
