"""
Error hierarchy for i18n-keylint.

Every error raised while checking a file is file-scoped: the runner turns it
into a diagnostic and moves on to the next file.
"""

from typing import Any, Dict, Optional
from datetime import datetime


class KeyLintError(Exception):
    """
    Base exception for all i18n-keylint errors.

    Carries a stable error code and structured context so the runner can log
    and report errors without inspecting the message text.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        previous_error: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.previous_error = previous_error
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }


class ConfigurationError(KeyLintError):
    """No usable locale source, or an invalid configuration file."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            context={"config_key": config_key},
            **kwargs
        )


class ParseError(KeyLintError):
    """Locale JSON or a source file could not be parsed."""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={"filename": filename, "line": line, "column": column},
            **kwargs
        )

    @property
    def filename(self) -> Optional[str]:
        return self.context.get("filename")

