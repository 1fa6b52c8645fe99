"""
Error bookkeeping for a lint run.

Errors never abort a run; they are recorded here so the CLI can summarize
what went wrong and tests can assert on isolation.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
import structlog

from .exceptions import KeyLintError

logger = structlog.get_logger(__name__)


class ErrorContextManager:
    """
    Records file-scoped errors across one run.

    Tracks error history and per-type counts for the run summary.
    """

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self.error_history: List[Dict[str, Any]] = []
        self.error_counts: Dict[str, int] = {}

    def record_error(self, error: KeyLintError, context: Optional[Dict[str, Any]] = None):
        """Record an error occurrence with context."""
        error_record = {
            "timestamp": datetime.utcnow(),
            "error_type": error.__class__.__name__,
            "message": error.message,
            "error_code": error.error_code,
            "context": {**error.context, **(context or {})},
        }

        self.error_history.append(error_record)

        # Maintain history size
        if len(self.error_history) > self.max_history:
            self.error_history.pop(0)

        error_type = error.__class__.__name__
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        logger.warning(
            "Error recorded",
            error_type=error_type,
            message=error.message,
            context=error_record["context"],
            total_count=self.error_counts[error_type]
        )

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics for the run."""
        return {
            "total_errors": len(self.error_history),
            "error_counts": self.error_counts.copy(),
            "most_common": max(self.error_counts.items(), key=lambda x: x[1]) if self.error_counts else None,
        }

    def has_errors(self, error_type: Optional[str] = None) -> bool:
        if error_type is None:
            return bool(self.error_history)
        return self.error_counts.get(error_type, 0) > 0
