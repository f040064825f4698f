"""Result type: Ok[T] | Err[E], the state carried by every validation step.

Ok holds the value validated so far, Err holds the ValidationError that
stopped the chain. Both are frozen msgspec structs, so results compare by
value and serialize directly.

Example:
    ```python
    from fieldcheck.result import Ok, Err, collect

    Ok('42').map(int)
    # Ok(value=42)

    collect([Ok(1), Err('fail'), Ok(3)])
    # Err(error='fail')
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import NoReturn, TypeIs

import msgspec

__all__ = ['Err', 'Ok', 'Result', 'collect']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """A value that passed every rule applied so far.

    Examples:
        >>> Ok(42).unwrap()
        42
        >>> Ok(2).and_then(lambda x: Ok(x + 1))
        Ok(value=3)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the value; f must not fail."""
        return Ok(f(self.value))

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Continue with a function that may itself fail."""
        return f(self.value)

    def ok(self) -> T:
        return self.value

    def err(self) -> None:
        return None


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """The first failure of a chain.

    Examples:
        >>> Err('too short').unwrap_or('')
        ''
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[object]]:
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the error.

        Errors that know their raise-based form (``to_exception()``) are
        raised as that exception; anything else is wrapped in RuntimeError.
        """
        to_exception = getattr(self.error, 'to_exception', None)
        if to_exception is not None:
            raise to_exception()
        raise RuntimeError(f'Called unwrap on Err: {self.error!r}')

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map[T, U](self, _f: Callable[[T], U]) -> Err[E]:
        return self

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[E]]) -> Err[E]:
        return self

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self.error


type Result[T, E = Exception] = Ok[T] | Err[E]


def collect[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Gather Results into Ok(list) or the first Err, in iteration order.

    Examples:
        >>> collect([Ok(1), Ok(2)])
        Ok(value=[1, 2])
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
