"""msglens exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.
Passive resolution never raises these: loaders fail soft and unresolved keys
are a result status, not an exception. They surface only from explicit
operations (settings validation, extraction, key navigation).

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class MsglensError(Exception):
    """Base exception for all msglens errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MsglensError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class SettingsError(MsglensError, ValueError):
    """Invalid value on the configuration surface.

    Subclasses ValueError so callers validating user input can catch either.
    """


class LocaleDataError(MsglensError):
    """A locale-data file or key could not be used for an explicit operation.

    Raised by navigation ("open key location"), never by the resolution path.
    """


class ExtractionError(MsglensError):
    """Extraction of a selection into the locale files failed.

    Locale files written before the failure are left as written; there is
    no rollback.

    Attributes:
        written_paths: Locale files already written when the failure occurred
    """

    def __init__(
        self, message: str | Diagnostic, *, written_paths: tuple[str, ...] = ()
    ) -> None:
        """Initialize ExtractionError.

        Args:
            message: Error message string OR Diagnostic object
            written_paths: Locale files already written before the failure
        """
        super().__init__(message)
        self.written_paths = written_paths
