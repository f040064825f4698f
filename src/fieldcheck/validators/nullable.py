"""Rules for optional values."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fieldcheck.decorators.rule import rule
from fieldcheck.errors import ErrorKind, ValidationError, invalid, valid
from fieldcheck.result import Result
from fieldcheck.step import SyncStep, ValidationStep

__all__ = ['if_present', 'not_none']


@rule
def not_none[T](value: T | None, field_name: str) -> Result[T, ValidationError]:
    if value is None:
        return invalid(field_name, f'Field {field_name} is null', ErrorKind.NULL)
    return valid(value)


@rule
def if_present(
    value: Any,
    field_name: str,
    inner: Callable[..., ValidationStep[Any]],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Apply ``inner`` only when the value is not None.

    Example:
        ```python
        field(form.get('nickname'), 'Nickname').pipe(if_present, min_length, 3)
        ```
    """
    if value is None:
        return valid(None)
    return inner(SyncStep.ok(value, field_name), *args, **kwargs).validate_result()
