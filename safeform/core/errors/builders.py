"""Domain-Specific Error Builders

Ergonomic constructors for typed errors. Each builder creates an AppError
with the appropriate code and context, wrapped in Err.
"""
from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"field": field, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def unknown_field(field: str, known: tuple[str, ...] | list[str], origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Unknown field '{field}' (known fields: {', '.join(known)})",
        code=ErrorCode.E2006_UNKNOWN_FIELD,
        field=field,
        origin=origin,
    )


# =============================================================================
# Form / Business Errors (E5xxx)
# =============================================================================

def business_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E5000_BUSINESS_GENERIC,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata=metadata,
    ))


def otp_request_failed(message: str, origin: str = "") -> Err[AppError]:
    return business_error(message, code=ErrorCode.E5031_OTP_REQUEST_FAILED, origin=origin)


def operation_not_allowed(operation: str, reason: str, origin: str = "") -> Err[AppError]:
    return business_error(
        f"Cannot {operation}: {reason}",
        code=ErrorCode.E5001_OPERATION_NOT_ALLOWED,
        origin=origin,
        operation=operation,
    )


# =============================================================================
# Internal Errors (E9xxx)
# =============================================================================

def internal_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create internal/unexpected error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=cause,
    ))


def schema_misconfigured(schema: str, reason: str, origin: str = "") -> Err[AppError]:
    return internal_error(
        f"Schema '{schema}' is misconfigured: {reason}",
        code=ErrorCode.E9004_SCHEMA_MISCONFIGURED,
        schema=schema,
        origin=origin,
    )
