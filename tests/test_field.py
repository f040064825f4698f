"""Tests for the field entry points and Result adapters."""

import asyncio

import pytest

from fieldcheck import (
    AsyncResult,
    AsyncStep,
    Err,
    ErrorKind,
    Ok,
    SyncStep,
    ValidationError,
    field,
    from_async_result,
    from_result,
)
from fieldcheck.validators import is_email, min_length


async def fetch(value):
    await asyncio.sleep(0)
    return value


class TestField:
    """Tests for field()."""

    def test_plain_value(self):
        assert isinstance(field('x', 'Name'), SyncStep)

    def test_none_is_a_plain_value(self):
        assert field(None, 'Name').validate() is None

    @pytest.mark.asyncio
    async def test_coroutine(self):
        step = field(fetch('user@example.com'), 'Email')
        assert isinstance(step, AsyncStep)
        assert await step.pipe(is_email).validate() == 'user@example.com'

    @pytest.mark.asyncio
    async def test_task(self):
        task = asyncio.ensure_future(fetch('secret-password'))
        step = field(task, 'Password').pipe(min_length, 8)
        assert await step.validate() == 'secret-password'

    @pytest.mark.asyncio
    async def test_failing_awaitable_becomes_field_init(self):
        async def failing():
            raise ConnectionError('db down')

        result = await field(failing(), 'Email').validate_result()
        assert result.error.kind == ErrorKind.FIELD_INIT
        assert result.error.message == 'ConnectionError: db down'


class TestFromResult:
    """Tests for from_result()."""

    def test_ok(self):
        assert from_result(Ok(3), 'N').validate() == 3

    def test_err_is_relabelled(self):
        step = from_result(Err(ValidationError('parsed', 'bad input', ErrorKind.PATTERN)), 'Code')
        assert step.validate_result() == Err(ValidationError('Code', 'bad input', ErrorKind.PATTERN))

    def test_plain_err(self):
        assert from_result(Err('missing'), 'Code').error_message_or_none() == 'missing'

    def test_round_trip(self):
        """A step's result can start a new chain for the same field."""
        original = field('abc', 'Name').pipe(min_length, 5)
        again = from_result(original.validate_result(), 'Name')
        assert again.validate_result() == original.validate_result()


class TestFromAsyncResult:
    """Tests for from_async_result()."""

    @pytest.mark.asyncio
    async def test_ok(self):
        step = from_async_result(AsyncResult.from_result(Ok(7)), 'N')
        assert await step.validate() == 7

    @pytest.mark.asyncio
    async def test_err_is_relabelled(self):
        pending = AsyncResult.from_result(Err(ValidationError('lookup', 'not found', ErrorKind.BIND)))
        result = await from_async_result(pending, 'User').validate_result()
        assert result == Err(ValidationError('User', 'not found', ErrorKind.BIND))

    @pytest.mark.asyncio
    async def test_coroutine_of_result(self):
        async def lookup():
            return Ok('bob')

        assert await from_async_result(lookup(), 'User').validate() == 'bob'

    @pytest.mark.asyncio
    async def test_raise_becomes_field_init(self):
        async def lookup():
            raise TimeoutError('slow')

        result = await from_async_result(lookup(), 'User').validate_result()
        assert result.error.kind == ErrorKind.FIELD_INIT
        assert result.error.message == 'TimeoutError: slow'
