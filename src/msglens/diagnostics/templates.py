"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All user-facing error messages are created here so that exception
    constructors never build f-strings inline.
    """

    @staticmethod
    def invalid_locale_code(locale: str) -> Diagnostic:
        """Locale override does not match the accepted code pattern.

        Args:
            locale: The rejected locale code

        Returns:
            Diagnostic for INVALID_LOCALE_CODE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOCALE_CODE,
            message=f"Invalid locale code: {locale!r}",
            hint="Locale must be in format 'en' or 'en-US'",
        )

    @staticmethod
    def invalid_update_delay(delay: object, minimum: int, maximum: int) -> Diagnostic:
        """Debounce delay outside its accepted bounds.

        Args:
            delay: The rejected value
            minimum: Lower bound (inclusive, milliseconds)
            maximum: Upper bound (inclusive, milliseconds)

        Returns:
            Diagnostic for INVALID_UPDATE_DELAY
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_UPDATE_DELAY,
            message=f"Update delay must be an integer between {minimum} and {maximum} ms, "
            f"got {delay!r}",
        )

    @staticmethod
    def invalid_accessor(accessor: str) -> Diagnostic:
        """Accessor is not a valid identifier.

        Args:
            accessor: The rejected accessor name

        Returns:
            Diagnostic for INVALID_ACCESSOR
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_ACCESSOR,
            message=f"Accessor must be an identifier, got {accessor!r}",
            hint="Use the name your message module is imported as, e.g. 'm'",
        )

    @staticmethod
    def invalid_setting_type(name: str, expected: str, value: object) -> Diagnostic:
        """Setting value has the wrong type.

        Args:
            name: Setting name as read from the host mapping
            expected: Expected type name
            value: The rejected value

        Returns:
            Diagnostic for INVALID_SETTING_TYPE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_SETTING_TYPE,
            message=f"Setting '{name}' must be {expected}, got {type(value).__name__}",
        )

    @staticmethod
    def locale_file_not_found(locale: str, path: str) -> Diagnostic:
        """Locale-data file missing for an explicit operation.

        Args:
            locale: Locale whose file is missing
            path: Resolved file path

        Returns:
            Diagnostic for LOCALE_FILE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_NOT_FOUND,
            message=f"Translation file not found for locale '{locale}'",
            hint="Create the file or check pathPattern in project.inlang/settings.json",
            path=path,
        )

    @staticmethod
    def locale_file_invalid(locale: str, path: str, reason: str) -> Diagnostic:
        """Locale-data file exists but cannot be read.

        Args:
            locale: Locale whose file is unreadable
            path: Resolved file path
            reason: Underlying error text

        Returns:
            Diagnostic for LOCALE_FILE_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_INVALID,
            message=f"Cannot read translation file for locale '{locale}': {reason}",
            path=path,
        )

    @staticmethod
    def key_not_found(key: str, path: str) -> Diagnostic:
        """Key absent from a locale-data file.

        Args:
            key: The missing key
            path: Locale-data file that was searched

        Returns:
            Diagnostic for KEY_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=f"Key '{key}' not found in translation file",
            path=path,
        )

    @staticmethod
    def unsafe_locale_path(locale: str) -> Diagnostic:
        """Locale code would escape the locale-data directory.

        Args:
            locale: The rejected locale code

        Returns:
            Diagnostic for UNSAFE_LOCALE_PATH
        """
        return Diagnostic(
            code=DiagnosticCode.UNSAFE_LOCALE_PATH,
            message=f"Path separators and traversal sequences not allowed in locale: {locale!r}",
        )

    @staticmethod
    def empty_selection() -> Diagnostic:
        """Nothing to extract.

        Returns:
            Diagnostic for EMPTY_SELECTION
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_SELECTION,
            message="Please select text to extract",
        )

    @staticmethod
    def unsupported_document(language_kind: str) -> Diagnostic:
        """Extraction requested in a document kind that has no call syntax.

        Args:
            language_kind: Host language identifier of the document

        Returns:
            Diagnostic for UNSUPPORTED_DOCUMENT
        """
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_DOCUMENT,
            message=f"Text extraction is not supported in '{language_kind}' documents",
            hint="Supported kinds: javascript, typescript, svelte",
        )

    @staticmethod
    def locale_write_failed(locale: str, path: str, reason: str) -> Diagnostic:
        """Writing a locale-data file during extraction failed.

        Args:
            locale: Locale being written
            path: Target file
            reason: Underlying error text

        Returns:
            Diagnostic for LOCALE_WRITE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_WRITE_FAILED,
            message=f"Failed to update locale file for '{locale}': {reason}",
            path=path,
            hint="Files written before this one were kept; review them before retrying",
        )

    @staticmethod
    def no_project_root(doc_id: str) -> Diagnostic:
        """Extraction requested in a document outside any project.

        Args:
            doc_id: Identity of the document

        Returns:
            Diagnostic for NO_PROJECT_ROOT
        """
        return Diagnostic(
            code=DiagnosticCode.NO_PROJECT_ROOT,
            message="No workspace folder found",
            path=doc_id,
        )
