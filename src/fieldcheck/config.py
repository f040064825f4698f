"""Library configuration: ValidationConfig, init() and environment detection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fieldcheck._logging import configure_logging

__all__ = [
    'ValidationConfig',
    'get_config',
    'init',
    'reset',
]

_TRUE = frozenset({'1', 'true', 'yes', 'on'})
_FALSE = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class ValidationConfig:
    """Configuration for fieldcheck.

    Attributes:
        capture_context: Store a formatted traceback on errors built from
            captured exceptions.
        batch_limit: Default concurrency cap for async batches. None = unbounded.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
    """

    capture_context: bool = True
    batch_limit: int | None = None
    log_level: str | None = None


_config: ValidationConfig | None = None


def _detect_capture_context() -> bool:
    """Read FIELDCHECK_CAPTURE_CONTEXT, defaulting to True."""
    raw = os.environ.get('FIELDCHECK_CAPTURE_CONTEXT', '').strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    if raw:
        logging.warning("Unknown FIELDCHECK_CAPTURE_CONTEXT value '%s', defaulting to true", raw)
    return True


def _detect_batch_limit() -> int | None:
    """Read FIELDCHECK_BATCH_LIMIT, defaulting to unbounded."""
    raw = os.environ.get('FIELDCHECK_BATCH_LIMIT', '').strip()
    if not raw:
        return None
    try:
        return max(1, int(raw))
    except ValueError:
        logging.warning("Invalid FIELDCHECK_BATCH_LIMIT value '%s', ignoring", raw)
        return None


def init(
    capture_context: bool | None = None,
    batch_limit: int | None = None,
    log_level: str | None = None,
) -> ValidationConfig:
    """Initialize fieldcheck with the given configuration.

    Args:
        capture_context: Keep tracebacks on captured faults. Read from the
            environment if None.
        batch_limit: Default concurrency cap for async batches. Read from the
            environment if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The ValidationConfig that was set.

    Raises:
        ValueError: If batch_limit is not a positive integer.

    Example:
        ```python
        from fieldcheck.config import init

        init(batch_limit=8, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    if batch_limit is not None and batch_limit < 1:
        msg = f'batch_limit must be >= 1, got {batch_limit}'
        raise ValueError(msg)

    _config = ValidationConfig(
        capture_context=_detect_capture_context() if capture_context is None else capture_context,
        batch_limit=_detect_batch_limit() if batch_limit is None else batch_limit,
        log_level=log_level,
    )

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> ValidationConfig:
    """Get the current configuration, resolving defaults on first use.

    Example:
        ```python
        from fieldcheck.config import init, get_config

        init(batch_limit=4)
        get_config().batch_limit  # 4
        ```
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = ValidationConfig(
            capture_context=_detect_capture_context(),
            batch_limit=_detect_batch_limit(),
        )
    return _config


def reset() -> None:
    """Forget the current configuration."""
    global _config  # noqa: PLW0603

    _config = None
