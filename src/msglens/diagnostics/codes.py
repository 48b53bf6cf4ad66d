"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Settings errors (configuration surface values)
        2000-2999: Locale-data errors (loading, lookup, navigation)
        3000-3999: Extraction errors (selection, key generation, writes)
    """

    # Settings errors (1000-1999)
    INVALID_LOCALE_CODE = 1001
    INVALID_UPDATE_DELAY = 1002
    INVALID_ACCESSOR = 1003
    INVALID_SETTING_TYPE = 1004

    # Locale-data errors (2000-2999)
    LOCALE_FILE_NOT_FOUND = 2001
    LOCALE_FILE_INVALID = 2002
    KEY_NOT_FOUND = 2003
    UNSAFE_LOCALE_PATH = 2004

    # Extraction errors (3000-3999)
    EMPTY_SELECTION = 3001
    UNSUPPORTED_DOCUMENT = 3002
    LOCALE_WRITE_FAILED = 3003
    NO_PROJECT_ROOT = 3004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        path: File involved in the error, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic for logs and terminal output.

        Example output:
            error[LOCALE_FILE_NOT_FOUND]: Locale file not found for 'fr'
              --> messages/fr.json
              = help: Create the file or add 'fr' to project.inlang/settings.json

        Returns:
            Formatted error message
        """
        # repr()[1:-1] escapes control characters without quoting the text
        lines = [f"{self.severity}[{self.code.name}]: {repr(self.message)[1:-1]}"]
        if self.path:
            lines.append(f"  --> {self.path}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
