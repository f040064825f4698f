"""Tests for ValidationError, ValidationException and fault conversion."""

import msgspec
import pytest
from hypothesis import given

from fieldcheck import ErrorKind, ValidationError, ValidationException, invalid, valid
from fieldcheck.errors import fault_message, from_fault
from fieldcheck.result import Err, Ok
from tests.strategies import exceptions, field_names, validation_errors


class TestValidationError:
    """Tests for the struct variant."""

    def test_defaults(self):
        error = ValidationError('Email', 'bad')
        assert error.kind == ErrorKind.BIND
        assert error.context is None

    def test_str(self):
        assert str(ValidationError('Email', 'Email must be a valid email address')) == (
            'Email: Email must be a valid email address'
        )

    def test_frozen(self):
        error = ValidationError('Email', 'bad')
        with pytest.raises(AttributeError):
            error.message = 'other'  # type: ignore[misc]

    def test_with_field_relabels(self):
        error = ValidationError('Other', 'bad', ErrorKind.LENGTH)
        relabelled = error.with_field('Email')
        assert relabelled.field_name == 'Email'
        assert relabelled.message == 'bad'
        assert relabelled.kind == ErrorKind.LENGTH
        assert error.field_name == 'Other'

    def test_with_same_field_returns_self(self):
        error = ValidationError('Email', 'bad')
        assert error.with_field('Email') is error

    def test_json_roundtrip(self):
        """Errors serialize with msgspec, e.g. for API responses."""
        error = ValidationError('Age', 'Age must be positive', ErrorKind.SIGN)
        decoded = msgspec.json.decode(msgspec.json.encode(error), type=ValidationError)
        assert decoded == error

    @given(validation_errors)
    def test_exception_roundtrip(self, error: ValidationError):
        assert error.to_exception().to_struct() == error


class TestValidationException:
    """Tests for the exception variant."""

    def test_properties(self):
        exc = ValidationError('Age', 'too young', ErrorKind.MIN_VALUE).to_exception()
        assert isinstance(exc, Exception)
        assert exc.field_name == 'Age'
        assert exc.message == 'too young'
        assert exc.kind == ErrorKind.MIN_VALUE
        assert str(exc) == 'Age: too young'


class TestHelpers:
    """Tests for valid(), invalid() and fault conversion."""

    def test_valid(self):
        assert valid(3) == Ok(3)

    def test_invalid(self):
        assert invalid('Name', 'Field Name is empty', ErrorKind.EMPTY) == Err(
            ValidationError('Name', 'Field Name is empty', ErrorKind.EMPTY)
        )

    def test_fault_message(self):
        assert fault_message(ValueError('boom')) == 'ValueError: boom'

    def test_fault_message_without_text(self):
        assert fault_message(ValueError()) == 'ValueError'

    def test_from_fault_captures_context(self):
        try:
            raise RuntimeError('boom')
        except RuntimeError as exc:
            error = from_fault('Email', exc, ErrorKind.BIND)
        assert error.message == 'RuntimeError: boom'
        assert error.kind == ErrorKind.BIND
        assert error.context is not None
        assert 'Traceback' in error.context

    def test_from_fault_without_context(self):
        error = from_fault('Email', RuntimeError('boom'), ErrorKind.CHECK, capture_context=False)
        assert error.context is None
        assert error.kind == ErrorKind.CHECK

    def test_from_fault_explicit_message(self):
        error = from_fault('Age', ValueError('x'), ErrorKind.TRY_MAP, message='Age must be a number')
        assert error.message == 'Age must be a number'

    def test_from_fault_keeps_validation_exception(self):
        """A raised ValidationException keeps its message and kind."""
        exc = ValidationError('Other', 'Other must be even', ErrorKind.PARITY).to_exception()
        error = from_fault('Number', exc, ErrorKind.BIND)
        assert error == ValidationError('Number', 'Other must be even', ErrorKind.PARITY)

    @given(field_names, exceptions)
    def test_from_fault_message_names_type(self, name: str, exc: Exception):
        error = from_fault(name, exc, ErrorKind.BIND, capture_context=False)
        assert error.field_name == name
        assert error.message.startswith(type(exc).__name__)
