"""String rules.

Every rule takes a step holding a ``str`` and returns the extended step.
Rules never coerce other types to ``str``; a non-string value fails the step
with the TypeError raised by the check. Use ``to_int`` / ``to_float`` to
convert explicitly.
"""

from __future__ import annotations

import datetime as dt
import math
import re

from fieldcheck.decorators.rule import rule
from fieldcheck.errors import ErrorKind, ValidationError, invalid, valid
from fieldcheck.result import Result

__all__ = [
    'contains',
    'ends_with',
    'is_alphanumeric',
    'is_digits',
    'is_email',
    'is_iso_date',
    'is_phone',
    'is_url',
    'is_uuid',
    'matches',
    'max_length',
    'min_length',
    'not_empty',
    'starts_with',
    'to_float',
    'to_int',
]

EMAIL_PATTERN = re.compile(r'[^@]+@[^@]+\.[^@]+')
URL_PATTERN = re.compile(r'https?://\S+')
PHONE_PATTERN = re.compile(r'\+?[1-9]\d{0,15}', re.ASCII)
UUID_PATTERN = re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', re.IGNORECASE)
ALPHANUMERIC_PATTERN = re.compile(r'[a-zA-Z0-9]+')
DIGITS_PATTERN = re.compile(r'[0-9]+')
ISO_DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)
INTEGER_PATTERN = re.compile(r'[+-]?\d+', re.ASCII)
DECIMAL_PATTERN = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)


def _full_match(
    pattern: re.Pattern[str], value: str, field_name: str, message: str, kind: ErrorKind
) -> Result[str, ValidationError]:
    if pattern.fullmatch(value) is None:
        return invalid(field_name, message, kind)
    return valid(value)


@rule
def not_empty(value: str, field_name: str) -> Result[str, ValidationError]:
    if not value:
        return invalid(field_name, f'Field {field_name} is empty', ErrorKind.EMPTY)
    return valid(value)


@rule
def min_length(value: str, field_name: str, length: int) -> Result[str, ValidationError]:
    if len(value) < length:
        return invalid(field_name, f'{field_name} must be at least {length} characters long', ErrorKind.LENGTH)
    return valid(value)


@rule
def max_length(value: str, field_name: str, length: int) -> Result[str, ValidationError]:
    if len(value) > length:
        return invalid(field_name, f'{field_name} must be no more than {length} characters long', ErrorKind.LENGTH)
    return valid(value)


@rule
def matches(
    value: str, field_name: str, pattern: str | re.Pattern[str], description: str | None = None
) -> Result[str, ValidationError]:
    """Require the whole value to match ``pattern``.

    ``description`` names the expected format in the message, e.g.
    ``'a ticket id'``.
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    expected = description or f'match the pattern {compiled.pattern!r}'
    return _full_match(compiled, value, field_name, f'{field_name} must {expected}', ErrorKind.PATTERN)


@rule
def is_email(value: str, field_name: str) -> Result[str, ValidationError]:
    return _full_match(EMAIL_PATTERN, value, field_name, f'{field_name} must be a valid email address', ErrorKind.EMAIL)


@rule
def is_url(value: str, field_name: str) -> Result[str, ValidationError]:
    return _full_match(URL_PATTERN, value, field_name, f'{field_name} must be a valid URL', ErrorKind.URL)


@rule
def is_phone(value: str, field_name: str) -> Result[str, ValidationError]:
    return _full_match(PHONE_PATTERN, value, field_name, f'{field_name} must be a valid phone number', ErrorKind.PHONE)


@rule
def is_uuid(value: str, field_name: str) -> Result[str, ValidationError]:
    return _full_match(UUID_PATTERN, value, field_name, f'{field_name} must be a valid UUID', ErrorKind.UUID)


@rule
def is_alphanumeric(value: str, field_name: str) -> Result[str, ValidationError]:
    return _full_match(
        ALPHANUMERIC_PATTERN,
        value,
        field_name,
        f'{field_name} must contain only alphanumeric characters',
        ErrorKind.PATTERN,
    )


@rule
def is_digits(value: str, field_name: str) -> Result[str, ValidationError]:
    return _full_match(DIGITS_PATTERN, value, field_name, f'{field_name} must contain only digits', ErrorKind.PATTERN)


@rule
def contains(value: str, field_name: str, substring: str) -> Result[str, ValidationError]:
    if substring not in value:
        return invalid(field_name, f'{field_name} must contain "{substring}"', ErrorKind.PATTERN)
    return valid(value)


@rule
def starts_with(value: str, field_name: str, prefix: str) -> Result[str, ValidationError]:
    if not value.startswith(prefix):
        return invalid(field_name, f'{field_name} must start with "{prefix}"', ErrorKind.PATTERN)
    return valid(value)


@rule
def ends_with(value: str, field_name: str, suffix: str) -> Result[str, ValidationError]:
    if not value.endswith(suffix):
        return invalid(field_name, f'{field_name} must end with "{suffix}"', ErrorKind.PATTERN)
    return valid(value)


@rule
def is_iso_date(value: str, field_name: str) -> Result[str, ValidationError]:
    """Require a real calendar date written as YYYY-MM-DD."""
    if ISO_DATE_PATTERN.fullmatch(value) is None:
        return invalid(field_name, f'{field_name} must be in ISO date format (YYYY-MM-DD)', ErrorKind.DATE)
    try:
        dt.date.fromisoformat(value)
    except ValueError:
        return invalid(field_name, f'{field_name} must be a valid date', ErrorKind.DATE)
    return valid(value)


@rule
def to_int(value: str, field_name: str) -> Result[int, ValidationError]:
    """Parse an optionally signed run of ASCII digits; surrounding whitespace is ignored.

    Underscores, non-ASCII digits and other forms ``int()`` would accept are
    rejected.
    """
    text = value.strip()
    if INTEGER_PATTERN.fullmatch(text) is None:
        return invalid(field_name, f'Value {value} for field {field_name} is not a number', ErrorKind.NOT_A_NUMBER)
    return valid(int(text))


@rule
def to_float(value: str, field_name: str) -> Result[float, ValidationError]:
    """Parse a finite ASCII decimal such as ``-1.5`` or ``2e3``.

    ``nan``, ``inf`` and values that overflow to infinity are rejected.
    """
    text = value.strip()
    if DECIMAL_PATTERN.fullmatch(text) is not None:
        parsed = float(text)
        if math.isfinite(parsed):
            return valid(parsed)
    return invalid(field_name, f'Value {value} for field {field_name} is not a number', ErrorKind.NOT_A_NUMBER)
