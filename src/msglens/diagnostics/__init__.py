"""Diagnostic system for msglens errors.

Provides structured error diagnostics with codes, hints and file paths.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import ExtractionError, LocaleDataError, MsglensError, SettingsError
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "ExtractionError",
    "LocaleDataError",
    "MsglensError",
    "SettingsError",
]
