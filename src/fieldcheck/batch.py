"""Combine many field steps into one all-or-first-error result.

Sync steps are already resolved, so the sync combinators just read them in
order. The async combinators lift every step into an AsyncStep, run them all
concurrently and to completion, then scan the outcomes in input order. The
reported error is always the one from the earliest failing step by position,
never the first to finish.

Example:
    ```python
    values = await async_validate_all([
        field('user@example.com', 'Email').pipe(is_email),
        field(load_password(), 'Password').pipe(min_length, 8),
        field('30', 'Age').pipe(to_int).pipe(min_value, 18),
    ])
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fieldcheck._logging import get_logger
from fieldcheck.async_.itertools import async_gather_results
from fieldcheck.config import get_config
from fieldcheck.errors import ValidationError
from fieldcheck.result import Err, Result, collect
from fieldcheck.step import AsyncStep, SyncStep, ValidationStep

__all__ = [
    'async_validate_all',
    'async_validate_all_result',
    'validate_all',
    'validate_all_result',
]

logger = get_logger(__name__)


def _first_failure[T](results: list[Result[T, ValidationError]]) -> Result[list[T], ValidationError]:
    outcome = collect(results)
    if isinstance(outcome, Err):
        logger.debug(
            'batch_failed',
            field=outcome.error.field_name,
            index=results.index(outcome),
            total=len(results),
        )
    return outcome


def validate_all_result[T](steps: Iterable[SyncStep[T]]) -> Result[list[T], ValidationError]:
    """Combine sync steps into Ok(values) or the first Err by position.

    Raises:
        TypeError: If an AsyncStep is passed; use async_validate_all_result.
    """
    results: list[Result[T, ValidationError]] = []
    for step in steps:
        if not isinstance(step, SyncStep):
            msg = f'validate_all_result() takes SyncStep only, got {type(step).__name__}; use async_validate_all_result()'
            raise TypeError(msg)
        results.append(step.validate_result())
    return _first_failure(results)


def validate_all[T](steps: Iterable[SyncStep[T]]) -> list[T]:
    """Return the values of all sync steps in order.

    Raises:
        ValidationException: For the first failing step by position.
        TypeError: If an AsyncStep is passed; use async_validate_all.
    """
    return validate_all_result(steps).unwrap()


async def async_validate_all_result[T](
    steps: Iterable[ValidationStep[T]],
    *,
    limit: int | None = None,
) -> Result[list[T], ValidationError]:
    """Run sync and async steps concurrently; Ok(values) or the first Err by position.

    Every step runs to completion even after another has failed; in-flight
    steps are never cancelled.

    Args:
        steps: Steps in the order their values should be returned.
        limit: Maximum number of steps in flight. Defaults to the configured
            ``batch_limit`` (unbounded unless set).
    """
    lifted: list[AsyncStep[Any]] = [step.to_async() for step in steps]
    if limit is None:
        limit = get_config().batch_limit
    results = await async_gather_results(lifted, limit=limit)
    return _first_failure(results)


async def async_validate_all[T](
    steps: Iterable[ValidationStep[T]],
    *,
    limit: int | None = None,
) -> list[T]:
    """Return the values of all steps in order, running async steps concurrently.

    Raises:
        ValidationException: For the first failing step by position.
    """
    result = await async_validate_all_result(steps, limit=limit)
    return result.unwrap()
