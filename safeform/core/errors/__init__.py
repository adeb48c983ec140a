"""Monadic Error Handling System

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction
- AppErrorException: raising bridge for programmer/configuration faults

Usage:
    from safeform.core.errors import Ok, Err, try_result_async

    match await try_result_async(lambda: gateway.request_otp(True, email)):
        case Ok(result):
            ...
        case Err(error):
            log.warning("otp_request_failed", code=error.code.name)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    from_exception,
    try_result_async,
)

from .builders import (
    validation_error,
    unknown_field,
    business_error,
    otp_request_failed,
    operation_not_allowed,
    internal_error,
    schema_misconfigured,
)

from .handlers import (
    AppErrorException,
    raise_error,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "try_result_async",
    # Builders
    "validation_error",
    "unknown_field",
    "business_error",
    "otp_request_failed",
    "operation_not_allowed",
    "internal_error",
    "schema_misconfigured",
    # Handlers
    "AppErrorException",
    "raise_error",
]
