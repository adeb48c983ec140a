"""Schema Validator

Schemas describe valid values per field and for the object as a whole.
Forms reach them only through ``validate_field`` / ``validate_data``, so any
object honoring the ``Schema`` protocol can back a form.

Key Features:
- Compositional validators (AND/OR/NOT combinators), sync or async
- FieldSpec transforms (trim, lowercase) whose output becomes the cleaned data
- Context-conditional rules (When) and cross-field rules (ObjectTest)
- PydanticSchema for forms backed by pydantic models
- Sanitizers for free-text contact input

Usage:
    from safeform.core.validation import (
        FormSchema, FieldSpec, Required, EmailValidator, trim, lowercase,
        validate_field, validate_data,
    )

    login = FormSchema("login", {
        "email": FieldSpec(
            Required().with_message("Email is required"),
            EmailValidator().with_message("Please enter a valid email address"),
            transforms=(trim, lowercase),
        ),
    })

    outcome = await validate_data(login, {"email": "Jane@X.com"})
"""

from .validators import (
    ValidationResult,
    AtomicValidator,
    resolve,
    Required,
    StringLength,
    RegexPattern,
    EmailValidator,
    OneOf,
    NumericRange,
    IsInteger,
    Check,
    CustomValidator,
    custom,
    And,
    AnyOf,
    Or,
    Not,
    WithMessage,
)

from .transforms import (
    Transform,
    trim,
    lowercase,
    Trimmed,
)

from .schema import (
    FORM_ERROR_KEY,
    Schema,
    SchemaOutcome,
    FieldSpec,
    When,
    ObjectTest,
    FormSchema,
)

from .pydantic_adapter import PydanticSchema

from .boundaries import (
    FieldValidation,
    DataValidation,
    validate_field,
    validate_data,
)

from .sanitize import (
    Sanitized,
    sanitize_input,
    validate_email,
    validate_phone,
    validate_unique_id,
    format_phone_number,
)

from .patterns import EMAIL_RE, PHONE_RE, UNIQUE_ID_RE, OTP_RE, PERSON_NAME_RE

__all__ = [
    # Validators
    "ValidationResult",
    "AtomicValidator",
    "resolve",
    "Required",
    "StringLength",
    "RegexPattern",
    "EmailValidator",
    "OneOf",
    "NumericRange",
    "IsInteger",
    "Check",
    "CustomValidator",
    "custom",
    "And",
    "AnyOf",
    "Or",
    "Not",
    "WithMessage",
    # Transforms
    "Transform",
    "trim",
    "lowercase",
    "Trimmed",
    # Schemas
    "FORM_ERROR_KEY",
    "Schema",
    "SchemaOutcome",
    "FieldSpec",
    "When",
    "ObjectTest",
    "FormSchema",
    "PydanticSchema",
    # Boundaries
    "FieldValidation",
    "DataValidation",
    "validate_field",
    "validate_data",
    # Sanitizers
    "Sanitized",
    "sanitize_input",
    "validate_email",
    "validate_phone",
    "validate_unique_id",
    "format_phone_number",
    # Patterns
    "EMAIL_RE",
    "PHONE_RE",
    "UNIQUE_ID_RE",
    "OTP_RE",
    "PERSON_NAME_RE",
]
