"""Validation error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

import traceback
from enum import StrEnum

import msgspec
import msgspec.structs

from fieldcheck.result import Err, Ok

__all__ = [
    'ErrorKind',
    'ValidationError',
    'ValidationException',
    'fault_message',
    'from_fault',
    'invalid',
    'valid',
]


class ErrorKind(StrEnum):
    """What produced a validation error.

    Errors keep the kind they were created with while they travel down a
    chain, so a failure that entered upstream is reported with its original
    kind.
    """

    # Core step operations
    FIELD_INIT = 'field_init'
    CHECK = 'check'
    TRY_MAP = 'try_map'
    BIND = 'bind'

    # Validator library
    EMPTY = 'empty'
    LENGTH = 'length'
    PATTERN = 'pattern'
    EMAIL = 'email'
    URL = 'url'
    UUID = 'uuid'
    PHONE = 'phone'
    DATE = 'date'
    NOT_A_NUMBER = 'not_a_number'
    MIN_VALUE = 'min_value'
    MAX_VALUE = 'max_value'
    RANGE = 'range'
    PARITY = 'parity'
    SIGN = 'sign'
    NOT_ALLOWED = 'not_allowed'
    NULL = 'null'


class ValidationError(msgspec.Struct, frozen=True):
    """A field failed validation - struct variant for Result[T, ValidationError].

    Attributes:
        field_name: The field under validation.
        message: Human-readable reason, preserved verbatim.
        kind: The operation or validator that produced the error.
        context: Formatted traceback for captured faults, debugging only.
    """

    field_name: str
    message: str
    kind: ErrorKind = ErrorKind.BIND
    context: str | None = None

    def with_field(self, field_name: str) -> ValidationError:
        """Return a copy labelled with another field name."""
        if field_name == self.field_name:
            return self
        return msgspec.structs.replace(self, field_name=field_name)

    def to_exception(self) -> ValidationException:
        """Convert to exception for raise-based code."""
        return ValidationException(self)

    def __str__(self) -> str:
        return f'{self.field_name}: {self.message}'


class ValidationException(Exception):  # noqa: N818
    """A field failed validation - exception variant.

    Raised by the terminal ``validate()`` operations. The struct it was
    built from is available as ``error``.
    """

    def __init__(self, error: ValidationError) -> None:
        self.error = error
        super().__init__(str(error))

    @property
    def field_name(self) -> str:
        return self.error.field_name

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def to_struct(self) -> ValidationError:
        """Convert to struct for Result-based code."""
        return self.error


def valid[T](value: T) -> Ok[T]:
    """Wrap a value that passed a rule."""
    return Ok(value)


def invalid(
    field_name: str,
    message: str,
    kind: ErrorKind = ErrorKind.BIND,
) -> Err[ValidationError]:
    """Build the Err a rule returns when a value is rejected.

    Example:
        ```python
        def adult(value: int, field_name: str) -> Result[int, ValidationError]:
            if value < 18:
                return invalid(field_name, f'{field_name} must be an adult')
            return valid(value)
        ```
    """
    return Err(ValidationError(field_name, message, kind))


def fault_message(exc: BaseException) -> str:
    """Render a caught exception as an error message."""
    text = str(exc)
    if not text:
        return type(exc).__name__
    return f'{type(exc).__name__}: {text}'


def from_fault(
    field_name: str,
    exc: Exception,
    kind: ErrorKind,
    *,
    message: str | None = None,
    capture_context: bool = True,
) -> ValidationError:
    """Convert an exception raised by user code into a ValidationError.

    Without an explicit ``message`` a ValidationException keeps its own
    message and kind and is only relabelled with ``field_name``.
    """
    if message is None and isinstance(exc, ValidationException):
        return exc.error.with_field(field_name)
    context = None
    if capture_context:
        context = ''.join(traceback.format_exception(exc))
    return ValidationError(
        field_name,
        message if message is not None else fault_message(exc),
        kind,
        context,
    )
