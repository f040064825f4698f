"""AsyncResult: the deferred state of an async validation step.

An AsyncResult wraps an awaitable that produces a Result. Transformations
return new AsyncResults and nothing runs until the outermost one is awaited,
so building an async chain never suspends.

Example:
    ```python
    async def lookup(user_id: int) -> Result[User, ValidationError]:
        ...

    result = await (
        AsyncResult(lookup(1))
        .and_then(check_active)
        .and_then(check_not_banned)
    )
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from fieldcheck.result import Err, Result

__all__ = ['AsyncResult']


class AsyncResult[T, E]:
    """Awaitable Result with chainable transformations.

    Note:
        Single-shot when built on a coroutine: awaiting it a second time
        raises RuntimeError. Wrap a Task if the outcome must be read twice.
    """

    __slots__ = ('_pending',)

    def __init__(self, pending: Awaitable[Result[T, E]]) -> None:
        self._pending = pending

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        return self._pending.__await__()

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """An AsyncResult that resolves to ``result`` without suspending."""

        async def _resolved() -> Result[T, E]:
            return result

        return cls(_resolved())

    @classmethod
    def catching(
        cls,
        pending: Awaitable[Result[T, E]],
        on_fault: Callable[[Exception], E],
    ) -> AsyncResult[T, E]:
        """Wrap an awaitable whose resolution may raise.

        Any Exception raised while awaiting becomes Err(on_fault(exc)).
        Cancellation is not an Exception and still propagates.

        Args:
            pending: Awaitable producing a Result.
            on_fault: Converts the raised exception into an error value.
        """

        async def _guarded() -> Result[T, E]:
            try:
                return await pending
            except Exception as exc:  # noqa: BLE001
                return Err(on_fault(exc))

        return cls(_guarded())

    def and_then[U](
        self, f: Callable[[T], Result[U, E] | Awaitable[Result[U, E]]]
    ) -> AsyncResult[U, E]:
        """Continue with f if Ok; f may return a Result or an awaitable of one.

        On Err, f is never called and the Err is passed through.
        """

        async def _chained() -> Result[U, E]:
            result = await self._pending
            if isinstance(result, Err):
                return result
            outcome = f(result.value)
            if inspect.isawaitable(outcome):
                return await outcome
            return outcome

        return AsyncResult(_chained())

    def close(self) -> None:
        """Discard an AsyncResult that will not be awaited.

        Closes the outermost pending coroutine. Coroutines it captured but
        never started are not reachable from here.
        """
        if isinstance(self._pending, AsyncResult):
            self._pending.close()
        elif inspect.iscoroutine(self._pending):
            self._pending.close()

    def __repr__(self) -> str:
        return f'AsyncResult({self._pending!r})'
