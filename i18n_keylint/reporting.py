"""Diagnostic records handed to whatever prints or collects them."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    """1-based line, 0-based column."""
    line: int
    column: int


# Errors that are not tied to a token are reported here.
UNEXPECTED_ERROR_LOCATION = SourceLocation(line=1, column=0)


@dataclass(frozen=True)
class Diagnostic:
    rule: str
    message: str
    location: SourceLocation
    filename: Optional[str] = None

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def format(self) -> str:
        """Render as `file:line:column  message  rule` (column shown 1-based)."""
        prefix = f"{self.filename}:" if self.filename else ""
        return f"{prefix}{self.line}:{self.column + 1}  {self.message}  {self.rule}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule,
            "filename": self.filename,
            "message": self.message,
            "location": {"line": self.line, "column": self.column},
        }
