"""Raising bridge for the Result-based error system.

Programmer and configuration faults (unknown field names, schemas that do
not cover a form's values) cannot be handled by the caller as user input,
so they leave the Result world here and propagate as exceptions.
"""
from __future__ import annotations

from typing import NoReturn

from safeform.core.logging import get_logger

from .types import AppError, Err

log = get_logger("errors.handlers")


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when you need to raise an AppError in code that
    doesn't use the Result monad.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self):
        return self.error.code


def raise_error(error: AppError | Err[AppError]) -> NoReturn:
    """Log and raise an AppError as AppErrorException."""
    if isinstance(error, Err):
        error = error.error
    log.error(
        "app_error_raised",
        error_code=error.code.name,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )
    raise AppErrorException(error)

