"""Pytest configuration and shared fixtures for fieldcheck tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from hypothesis import HealthCheck, settings

from fieldcheck import config
from fieldcheck._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def clean_runtime(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test from default configuration and no log hooks."""
    monkeypatch.delenv('FIELDCHECK_CAPTURE_CONTEXT', raising=False)
    monkeypatch.delenv('FIELDCHECK_BATCH_LIMIT', raising=False)
    config.reset()
    clear_log_hooks()
    yield
    config.reset()
    clear_log_hooks()


@pytest.fixture
def failed_step():
    """A sync step that already failed on the Age field."""
    from fieldcheck import ErrorKind, SyncStep, ValidationError

    return SyncStep.err(ValidationError('Age', 'Age is required', ErrorKind.EMPTY))


settings.register_profile('fieldcheck', suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile('fieldcheck')
