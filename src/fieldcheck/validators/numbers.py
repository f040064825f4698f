"""Numeric and membership rules.

Bounds are written as the condition a value must satisfy, so NaN, which
compares False with everything, fails every bound and sign rule.
"""

from __future__ import annotations

from collections.abc import Collection

from fieldcheck.decorators.rule import rule
from fieldcheck.errors import ErrorKind, ValidationError, invalid, valid
from fieldcheck.result import Result

__all__ = [
    'in_range',
    'is_even',
    'is_negative',
    'is_non_negative',
    'is_odd',
    'is_port',
    'is_positive',
    'max_value',
    'min_value',
    'none_of',
    'one_of',
]

type Number = int | float

MIN_PORT = 1
MAX_PORT = 65535


@rule
def min_value[N: Number](value: N, field_name: str, minimum: Number) -> Result[N, ValidationError]:
    if not value >= minimum:
        return invalid(
            field_name,
            f'Value {value} of field {field_name} must be greater than or equal to {minimum}',
            ErrorKind.MIN_VALUE,
        )
    return valid(value)


@rule
def max_value[N: Number](value: N, field_name: str, maximum: Number) -> Result[N, ValidationError]:
    if not value <= maximum:
        return invalid(
            field_name,
            f'Value {value} of field {field_name} must be less than or equal to {maximum}',
            ErrorKind.MAX_VALUE,
        )
    return valid(value)


@rule
def in_range[N: Number](
    value: N, field_name: str, minimum: Number, maximum: Number
) -> Result[N, ValidationError]:
    """Require ``minimum <= value <= maximum``."""
    if not minimum <= value <= maximum:
        return invalid(
            field_name,
            f'Value {value} of field {field_name} must be between {minimum} and {maximum}',
            ErrorKind.RANGE,
        )
    return valid(value)


@rule
def is_even(value: int, field_name: str) -> Result[int, ValidationError]:
    if value % 2 != 0:
        return invalid(field_name, f'Value {value} of field {field_name} must be even', ErrorKind.PARITY)
    return valid(value)


@rule
def is_odd(value: int, field_name: str) -> Result[int, ValidationError]:
    if value % 2 == 0:
        return invalid(field_name, f'Value {value} of field {field_name} must be odd', ErrorKind.PARITY)
    return valid(value)


@rule
def is_positive[N: Number](value: N, field_name: str) -> Result[N, ValidationError]:
    if not value > 0:
        return invalid(field_name, f'{field_name} must be positive', ErrorKind.SIGN)
    return valid(value)


@rule
def is_non_negative[N: Number](value: N, field_name: str) -> Result[N, ValidationError]:
    if not value >= 0:
        return invalid(field_name, f'{field_name} must be non-negative', ErrorKind.SIGN)
    return valid(value)


@rule
def is_negative[N: Number](value: N, field_name: str) -> Result[N, ValidationError]:
    if not value < 0:
        return invalid(field_name, f'{field_name} must be negative', ErrorKind.SIGN)
    return valid(value)


@rule
def is_port(value: int, field_name: str) -> Result[int, ValidationError]:
    if not MIN_PORT <= value <= MAX_PORT:
        return invalid(
            field_name,
            f'{field_name} must be a valid port number ({MIN_PORT}-{MAX_PORT})',
            ErrorKind.RANGE,
        )
    return valid(value)


@rule
def one_of[T](value: T, field_name: str, allowed: Collection[T]) -> Result[T, ValidationError]:
    if value not in allowed:
        listing = ', '.join(str(item) for item in allowed)
        return invalid(field_name, f'{field_name} must be one of: {listing}', ErrorKind.NOT_ALLOWED)
    return valid(value)


@rule
def none_of[T](value: T, field_name: str, forbidden: Collection[T]) -> Result[T, ValidationError]:
    if value in forbidden:
        listing = ', '.join(str(item) for item in forbidden)
        return invalid(field_name, f'{field_name} must not be one of: {listing}', ErrorKind.NOT_ALLOWED)
    return valid(value)
