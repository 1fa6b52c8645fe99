"""
Error handling for i18n-keylint.

- Structured error hierarchy
- Per-run error bookkeeping
"""

from .exceptions import (
    KeyLintError,
    ConfigurationError,
    ParseError,
)

from .handlers import (
    ErrorContextManager,
)

__all__ = [
    # Exceptions
    "KeyLintError",
    "ConfigurationError",
    "ParseError",

    # Handlers
    "ErrorContextManager",
]
