"""Entry points that start a validation chain for one field."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from typing import Any, overload

from fieldcheck.errors import ValidationError
from fieldcheck.result import Result
from fieldcheck.step import AsyncStep, SyncStep

__all__ = ['field', 'from_async_result', 'from_result']


@overload
def field[T](value: Awaitable[T], field_name: str) -> AsyncStep[T]: ...


@overload
def field[T](value: T, field_name: str) -> SyncStep[T]: ...


def field(value: Any, field_name: str) -> SyncStep[Any] | AsyncStep[Any]:
    """Start validating ``value`` under the label ``field_name``.

    Plain values give a SyncStep in the Ok state. Awaitables (coroutines,
    tasks, futures) give an AsyncStep that resolves the value when run; if
    resolving raises, the step fails with a FIELD_INIT error instead.

    Example:
        ```python
        field('user@example.com', 'Email').pipe(is_email).validate()

        await field(fetch_email(user_id), 'Email').pipe(is_email).validate()
        ```
    """
    if inspect.isawaitable(value):
        return AsyncStep.from_awaitable(value, field_name)
    return SyncStep.ok(value, field_name)


def from_result[T](result: Result[T, ValidationError], field_name: str) -> SyncStep[T]:
    """Start a chain from an already computed Result.

    An Err is relabelled with ``field_name`` so the error is attributed to
    the field being validated.
    """
    return SyncStep.ok(result, field_name).bind(lambda inner: inner)


def from_async_result[T](
    pending: Awaitable[Result[T, ValidationError]], field_name: str
) -> AsyncStep[T]:
    """Start a chain from a deferred Result, e.g. an AsyncResult.

    Behaves like ``from_result`` once resolved; a raise while resolving
    becomes a FIELD_INIT error.
    """
    return AsyncStep.from_awaitable_result(pending, field_name)
