"""Ready-made rules, applied with ``step.pipe(rule, *args)``."""

from fieldcheck.validators.nullable import if_present, not_none
from fieldcheck.validators.numbers import (
    in_range,
    is_even,
    is_negative,
    is_non_negative,
    is_odd,
    is_port,
    is_positive,
    max_value,
    min_value,
    none_of,
    one_of,
)
from fieldcheck.validators.strings import (
    contains,
    ends_with,
    is_alphanumeric,
    is_digits,
    is_email,
    is_iso_date,
    is_phone,
    is_url,
    is_uuid,
    matches,
    max_length,
    min_length,
    not_empty,
    starts_with,
    to_float,
    to_int,
)

__all__ = [
    'contains',
    'ends_with',
    'if_present',
    'in_range',
    'is_alphanumeric',
    'is_digits',
    'is_email',
    'is_even',
    'is_iso_date',
    'is_negative',
    'is_non_negative',
    'is_odd',
    'is_phone',
    'is_port',
    'is_positive',
    'is_url',
    'is_uuid',
    'matches',
    'max_length',
    'max_value',
    'min_length',
    'min_value',
    'none_of',
    'not_empty',
    'not_none',
    'one_of',
    'starts_with',
    'to_float',
    'to_int',
]
