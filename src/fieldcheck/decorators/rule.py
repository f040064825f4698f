"""@rule decorator: build step-to-step validators from plain functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

from fieldcheck.errors import ValidationError
from fieldcheck.result import Result
from fieldcheck.step import ValidationStep

__all__ = ['rule']


def rule[R](
    func: Callable[..., Result[R, ValidationError]],
) -> Callable[..., ValidationStep[R]]:
    """Decorator that turns a value rule into a step rule.

    The decorated function receives the current value and the field name,
    followed by any extra arguments, and returns Ok or Err. The wrapper takes
    a step instead of the value and binds the function into it, so the rule
    works on SyncStep and AsyncStep alike and is skipped once the step has
    failed.

    Example:
        ```python
        @rule
        def min_length(value: str, field_name: str, n: int) -> Result[str, ValidationError]:
            if len(value) < n:
                return invalid(field_name, f'{field_name} is too short', ErrorKind.LENGTH)
            return valid(value)

        field('secret', 'Password').pipe(min_length, 8)
        min_length(field('secret', 'Password'), 8)
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Result[R, ValidationError]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> ValidationStep[R]:
        if not args or not isinstance(args[0], ValidationStep):
            got = type(args[0]).__name__ if args else 'nothing'
            msg = f'{wrapped.__name__}() expects a validation step, got {got}'
            raise TypeError(msg)
        step, *rest = args
        return step.bind(lambda value: wrapped(value, step.field_name, *rest, **kwargs))

    return wrapper(func)  # type: ignore[return-value]
