"""fieldcheck: fluent, Result-based validation of single fields for Python 3.13+.

Flat imports (preferred):
    from fieldcheck import field, validate_all, async_validate_all
    from fieldcheck import ValidationError, ValidationException, Ok, Err

Submodule imports (for organization):
    from fieldcheck.step import SyncStep, AsyncStep
    from fieldcheck.validators import is_email, min_length
    from fieldcheck.decorators import rule
"""

# Result types
from fieldcheck.result import Err, Ok, Result, collect

# Errors
from fieldcheck.errors import (
    ErrorKind,
    ValidationError,
    ValidationException,
    invalid,
    valid,
)

# Steps
from fieldcheck.field import field, from_async_result, from_result
from fieldcheck.step import AsyncStep, SyncStep, ValidationStep

# Batch
from fieldcheck.batch import (
    async_validate_all,
    async_validate_all_result,
    validate_all,
    validate_all_result,
)

# Decorators
from fieldcheck.decorators import rule

# Async
from fieldcheck.async_ import AsyncResult

# Runtime
from fieldcheck._logging import add_log_hook, clear_log_hooks, configure_logging, remove_log_hook
from fieldcheck.config import ValidationConfig, get_config, init

__all__ = [
    "AsyncResult",
    "AsyncStep",
    "Err",
    "ErrorKind",
    "Ok",
    "Result",
    "SyncStep",
    "ValidationConfig",
    "ValidationError",
    "ValidationException",
    "ValidationStep",
    "add_log_hook",
    "async_validate_all",
    "async_validate_all_result",
    "clear_log_hooks",
    "collect",
    "configure_logging",
    "field",
    "from_async_result",
    "from_result",
    "get_config",
    "init",
    "invalid",
    "remove_log_hook",
    "rule",
    "valid",
    "validate_all",
    "validate_all_result",
]

__version__ = "0.1.0"
