"""Validation steps: a field name plus an Ok/Err state, chained with bind.

A step is created for one field, extended by operations that each return a
new step, and consumed by a terminal operation. Two forms share one
interface:

- SyncStep holds a Result computed eagerly.
- AsyncStep holds an AsyncResult that resolves when awaited.

Once a step holds an Err no later user function runs; the error travels to
the terminal operation unchanged. Exceptions raised by user functions are
caught where they are invoked and become Err, so chain operations never raise.

Example:
    ```python
    from fieldcheck import field
    from fieldcheck.validators import max_value, min_value

    age = (
        field(' 25', 'Age')
        .try_map(lambda v: int(v.strip()), lambda name: f'{name} must be a number')
        .pipe(min_value, 18)
        .pipe(max_value, 65)
        .validate()
    )
    # 25
    ```
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from fieldcheck._logging import get_logger
from fieldcheck.async_.result import AsyncResult
from fieldcheck.config import get_config
from fieldcheck.errors import ErrorKind, ValidationError, from_fault
from fieldcheck.result import Err, Ok, Result

__all__ = ['AsyncStep', 'SyncStep', 'ValidationStep']

logger = get_logger(__name__)

type MessageFactory = Callable[[str], str]


def _discard(awaitable: object) -> None:
    """Close a coroutine, AsyncResult or AsyncStep that will never be awaited."""
    if isinstance(awaitable, (AsyncResult, AsyncStep)):
        awaitable.close()
    elif inspect.iscoroutine(awaitable):
        awaitable.close()


def _reject_awaitable(outcome: object, alternative: str) -> None:
    if inspect.isawaitable(outcome):
        _discard(outcome)
        msg = f'got an awaitable in a sync step; use {alternative}() instead'
        raise TypeError(msg)


def _capture(
    field_name: str, exc: Exception, kind: ErrorKind, message: str | None = None
) -> ValidationError:
    """Turn an exception raised by user code into an error for field_name."""
    error = from_fault(
        field_name,
        exc,
        kind,
        message=message,
        capture_context=get_config().capture_context,
    )
    logger.debug(
        'fault_captured',
        field=field_name,
        kind=str(error.kind),
        exc_type=type(exc).__name__,
    )
    return error


class ValidationStep[T](ABC):
    """Base class of SyncStep and AsyncStep.

    Attributes:
        field_name: Label carried by every error this step can produce.
    """

    __slots__ = ('_field_name',)

    def __init__(self, field_name: str) -> None:
        self._field_name = field_name

    @property
    def field_name(self) -> str:
        return self._field_name

    @abstractmethod
    def bind[R](self, f: Callable[[T], Any]) -> ValidationStep[R]: ...

    @abstractmethod
    def check(self, predicate: Callable[[T], Any], on_false: MessageFactory) -> ValidationStep[T]: ...

    @abstractmethod
    def try_map[R](self, f: Callable[[T], Any], on_fail: MessageFactory | None = None) -> ValidationStep[R]: ...

    @abstractmethod
    def to_async(self) -> AsyncStep[T]: ...

    def pipe[S](self, rule: Callable[..., S], /, *args: Any, **kwargs: Any) -> S:
        """Apply a free-function rule to this step.

        ``step.pipe(min_value, 18)`` is ``min_value(step, 18)``; it only
        exists so that rule chains read left to right.
        """
        return rule(self, *args, **kwargs)

    def _fail(self, message: str, kind: ErrorKind) -> Err[ValidationError]:
        return Err(ValidationError(self._field_name, message, kind))

    def _fault(self, exc: Exception, kind: ErrorKind, message: str | None = None) -> ValidationError:
        return _capture(self._field_name, exc, kind, message)

    def _map_fault(self, exc: Exception, on_fail: MessageFactory | None) -> ValidationError:
        """TRY_MAP error for exc, using on_fail for the message when given.

        If on_fail itself raises, that exception is reported instead.
        """
        message = None
        if on_fail is not None:
            try:
                message = on_fail(self._field_name)
            except Exception as message_exc:  # noqa: BLE001
                return self._fault(message_exc, ErrorKind.TRY_MAP)
        return self._fault(exc, ErrorKind.TRY_MAP, message)

    def _normalize[R](self, outcome: object) -> Result[R, ValidationError]:
        """Coerce what a bind function returned into this field's Result.

        Errs are relabelled with this step's field name; a bare string or
        exception inside Err becomes the message of a BIND error.
        """
        if isinstance(outcome, Ok):
            return outcome
        if isinstance(outcome, Err):
            error = outcome.error
            if isinstance(error, ValidationError):
                if error.field_name == self._field_name:
                    return outcome
                return Err(error.with_field(self._field_name))
            if isinstance(error, Exception):
                return Err(self._fault(error, ErrorKind.BIND))
            return self._fail(str(error), ErrorKind.BIND)
        msg = f'bind function must return Ok or Err, got {type(outcome).__name__}'
        raise TypeError(msg)


class SyncStep[T](ValidationStep[T]):
    """A validation step whose state is available immediately."""

    __slots__ = ('_result',)

    def __init__(self, result: Result[T, ValidationError], field_name: str) -> None:
        super().__init__(field_name)
        self._result = result

    @classmethod
    def ok(cls, value: T, field_name: str) -> SyncStep[T]:
        """Start a chain from a value."""
        return cls(Ok(value), field_name)

    @classmethod
    def err(cls, error: ValidationError) -> SyncStep[Any]:
        """Start a chain that has already failed."""
        return cls(Err(error), error.field_name)

    @property
    def result(self) -> Result[T, ValidationError]:
        return self._result

    def bind[R](self, f: Callable[[T], Result[R, ValidationError]]) -> SyncStep[R]:
        """Apply f to the value if Ok; its Result becomes the new state.

        Args:
            f: Function from the current value to a Result.

        Returns:
            A new step. Err steps are returned unchanged and f is not called.
        """
        if isinstance(self._result, Err):
            return self  # type: ignore[return-value]
        try:
            outcome = f(self._result.value)
            _reject_awaitable(outcome, 'bind_async')
            new: Result[R, ValidationError] = self._normalize(outcome)
        except Exception as exc:  # noqa: BLE001
            new = Err(self._fault(exc, ErrorKind.BIND))
        return SyncStep(new, self._field_name)

    def bind_async[R](
        self, f: Callable[[T], Awaitable[Result[R, ValidationError]]]
    ) -> AsyncStep[R]:
        """Upgrade to an AsyncStep and chain an async Result function."""
        return self.to_async().bind_async(f)

    def check(self, predicate: Callable[[T], bool], on_false: MessageFactory) -> SyncStep[T]:
        """Keep the value if predicate holds, fail with on_false(field_name) otherwise.

        An exception raised by the predicate becomes the error message.
        """

        def _check(value: T) -> Result[T, ValidationError]:
            try:
                passed = predicate(value)
                _reject_awaitable(passed, 'check_async')
                if passed:
                    return Ok(value)
                message = on_false(self._field_name)
            except Exception as exc:  # noqa: BLE001
                return Err(self._fault(exc, ErrorKind.CHECK))
            return self._fail(message, ErrorKind.CHECK)

        return self.bind(_check)

    def check_async(
        self, predicate: Callable[[T], Awaitable[bool]], on_false: MessageFactory
    ) -> AsyncStep[T]:
        """Upgrade to an AsyncStep and check with an async predicate."""
        return self.to_async().check(predicate, on_false)

    def try_map[R](self, f: Callable[[T], R], on_fail: MessageFactory | None = None) -> SyncStep[R]:
        """Transform the value with f, failing if f raises.

        Args:
            f: Conversion that may raise, e.g. ``int``.
            on_fail: Builds the message from the field name. Without it the
                exception text is used.
        """

        def _map(value: T) -> Result[R, ValidationError]:
            try:
                mapped = f(value)
                _reject_awaitable(mapped, 'try_map_async')
            except Exception as exc:  # noqa: BLE001
                return Err(self._map_fault(exc, on_fail))
            return Ok(mapped)

        return self.bind(_map)

    def try_map_async[R](
        self, f: Callable[[T], Awaitable[R]], on_fail: MessageFactory | None = None
    ) -> AsyncStep[R]:
        """Upgrade to an AsyncStep and transform with an async function."""
        return self.to_async().try_map(f, on_fail)

    def to_async(self) -> AsyncStep[T]:
        """Lift into an AsyncStep with an already-resolved state."""
        return AsyncStep(AsyncResult.from_result(self._result), self._field_name)

    def validate(self) -> T:
        """Return the value, or raise ValidationException."""
        return self._result.unwrap()

    def validate_result(self) -> Result[T, ValidationError]:
        """Return Ok(value) or Err(error). Never raises."""
        return self._result

    def error_message_or_none(self) -> str | None:
        """Return None on success, the error message otherwise."""
        if isinstance(self._result, Err):
            return self._result.error.message
        return None

    as_form_validator = error_message_or_none

    def __repr__(self) -> str:
        return f'SyncStep({self._field_name!r}, {self._result!r})'


class AsyncStep[T](ValidationStep[T]):
    """A validation step whose state resolves when awaited.

    Chain operations accept sync or async callables and never suspend.
    Awaiting the step (or any terminal operation) runs the chain.

    Note:
        A step built from a coroutine is single-shot: run it once.
    """

    __slots__ = ('_result',)

    def __init__(self, result: AsyncResult[T, ValidationError], field_name: str) -> None:
        super().__init__(field_name)
        self._result = result

    @classmethod
    def from_awaitable(cls, pending: Awaitable[T], field_name: str) -> AsyncStep[T]:
        """Start a chain from a deferred value.

        Any exception raised while the value resolves becomes a FIELD_INIT
        error for this field.
        """

        async def _resolve() -> Result[T, ValidationError]:
            return Ok(await pending)

        return cls(
            AsyncResult.catching(_resolve(), lambda exc: _capture(field_name, exc, ErrorKind.FIELD_INIT)),
            field_name,
        )

    @classmethod
    def from_awaitable_result(
        cls, pending: Awaitable[Result[T, ValidationError]], field_name: str
    ) -> AsyncStep[T]:
        """Start a chain from a deferred Result, relabelling Err with field_name."""
        return cls.from_awaitable(pending, field_name).bind(lambda result: result)

    def __await__(self) -> Generator[Any, Any, Result[T, ValidationError]]:
        return self._result.__await__()

    def bind[R](
        self,
        f: Callable[[T], Result[R, ValidationError] | Awaitable[Result[R, ValidationError]]],
    ) -> AsyncStep[R]:
        """Apply f to the value if Ok; its Result (or awaited Result) becomes the new state."""

        async def _bound(value: T) -> Result[R, ValidationError]:
            try:
                outcome = f(value)
                if inspect.isawaitable(outcome):
                    outcome = await outcome
                return self._normalize(outcome)
            except Exception as exc:  # noqa: BLE001
                return Err(self._fault(exc, ErrorKind.BIND))

        return AsyncStep(self._result.and_then(_bound), self._field_name)

    def bind_async[R](
        self, f: Callable[[T], Awaitable[Result[R, ValidationError]]]
    ) -> AsyncStep[R]:
        """Chain an async Result function."""
        return self.bind(f)

    def check(
        self, predicate: Callable[[T], bool | Awaitable[bool]], on_false: MessageFactory
    ) -> AsyncStep[T]:
        """Keep the value if predicate holds, fail with on_false(field_name) otherwise."""

        async def _check(value: T) -> Result[T, ValidationError]:
            try:
                passed = predicate(value)
                if inspect.isawaitable(passed):
                    passed = await passed
                if passed:
                    return Ok(value)
                message = on_false(self._field_name)
            except Exception as exc:  # noqa: BLE001
                return Err(self._fault(exc, ErrorKind.CHECK))
            return self._fail(message, ErrorKind.CHECK)

        return self.bind(_check)

    def check_async(
        self, predicate: Callable[[T], Awaitable[bool]], on_false: MessageFactory
    ) -> AsyncStep[T]:
        return self.check(predicate, on_false)

    def try_map[R](
        self, f: Callable[[T], R | Awaitable[R]], on_fail: MessageFactory | None = None
    ) -> AsyncStep[R]:
        """Transform the value with f (sync or async), failing if it raises."""

        async def _map(value: T) -> Result[R, ValidationError]:
            try:
                mapped = f(value)
                if inspect.isawaitable(mapped):
                    mapped = await mapped
            except Exception as exc:  # noqa: BLE001
                return Err(self._map_fault(exc, on_fail))
            return Ok(mapped)

        return self.bind(_map)

    def try_map_async[R](
        self, f: Callable[[T], Awaitable[R]], on_fail: MessageFactory | None = None
    ) -> AsyncStep[R]:
        return self.try_map(f, on_fail)

    def then[R](self, f: Callable[[SyncStep[T]], ValidationStep[R]]) -> AsyncStep[R]:
        """Run a sub-chain on the resolved value.

        f receives a SyncStep holding the value and returns the extended
        step; its outcome becomes this step's state.

        Example:
            ```python
            step = field(fetch_age(), 'Age').then(
                lambda s: s.try_map(int).pipe(min_value, 18)
            )
            ```
        """

        def _sub_chain(value: T) -> Result[R, ValidationError] | Awaitable[Result[R, ValidationError]]:
            return f(SyncStep.ok(value, self._field_name)).validate_result()

        return self.bind(_sub_chain)

    def to_async(self) -> AsyncStep[T]:
        return self

    def close(self) -> None:
        """Discard a step that will not be run."""
        self._result.close()

    async def validate(self) -> T:
        """Return the value, or raise ValidationException."""
        return (await self._result).unwrap()

    async def validate_result(self) -> Result[T, ValidationError]:
        """Return Ok(value) or Err(error). Never raises a validation failure."""
        return await self._result

    async def error_message_or_none(self) -> str | None:
        """Return None on success, the error message otherwise."""
        result = await self._result
        if isinstance(result, Err):
            return result.error.message
        return None

    as_form_validator = error_message_or_none

    def __repr__(self) -> str:
        return f'AsyncStep({self._field_name!r})'
