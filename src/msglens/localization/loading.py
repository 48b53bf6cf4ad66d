"""Locale-data loading infrastructure.

Provides the protocol for locale-data loaders, a filesystem implementation
that fails soft, and result/summary data structures for tracking load
attempts.

Components:
    LocaleDataLoader - Protocol for loading locale documents (structural typing)
    PathLocaleDataLoader - Disk-based JSON loader
    LoadResult - Immutable result of a single load attempt
    LoadSummary - Immutable aggregate of load results

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from msglens.enums import LoadStatus
from msglens.localization.types import LocaleCode, LocaleDocument

logger = logging.getLogger(__name__)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "LocaleDataLoader",
    # Concrete loader
    "PathLocaleDataLoader",
    # Load result types
    "LoadResult",
    "LoadSummary",
]


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Result of loading a single locale-data file.

    Attributes:
        locale: Locale code for this file
        path: Path that was read
        status: Load status (success, not_found, error)
        document: Parsed document if status is SUCCESS, None otherwise
        error: Exception if status is ERROR, None otherwise
    """

    locale: LocaleCode
    path: Path
    status: LoadStatus
    document: LocaleDocument | None = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the file loaded and parsed."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the file does not exist (expected for untranslated locales)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the file exists but could not be read or parsed."""
        return self.status == LoadStatus.ERROR


class LocaleDataLoader(Protocol):
    """Protocol for loading locale documents.

    Implementations must never raise for missing or malformed data; they
    report the outcome through the returned LoadResult.

    This is a Protocol (structural typing) rather than ABC so tests and
    hosts can supply in-memory loaders.

    Example:
        >>> class MemoryLoader:
        ...     def __init__(self, docs: dict[str, dict]) -> None:
        ...         self.docs = docs
        ...     def load(self, path: Path, locale: str) -> LoadResult:
        ...         if locale not in self.docs:
        ...             return LoadResult(locale, path, LoadStatus.NOT_FOUND)
        ...         return LoadResult(locale, path, LoadStatus.SUCCESS, self.docs[locale])
    """

    def load(self, path: Path, locale: LocaleCode) -> LoadResult:
        """Load the locale document at path.

        Args:
            path: Resolved locale-data file path
            locale: Locale code the file belongs to

        Returns:
            LoadResult describing the outcome
        """


class PathLocaleDataLoader:
    """File system loader for UTF-8 JSON locale-data files.

    Fails soft: a missing file, an OS error, malformed JSON or a JSON root
    that is not an object all produce a non-success LoadResult.

    Example:
        >>> loader = PathLocaleDataLoader()
        >>> result = loader.load(Path("messages/en.json"), "en")
        >>> result.document if result.is_success else None
    """

    __slots__ = ()

    def load(self, path: Path, locale: LocaleCode) -> LoadResult:
        """Read and parse one locale-data file.

        Args:
            path: Locale-data file path
            locale: Locale code the file belongs to

        Returns:
            LoadResult with the parsed document on success
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Locale file not found for '%s': %s", locale, path)
            return LoadResult(locale, path, LoadStatus.NOT_FOUND)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read locale file %s: %s", path, e)
            return LoadResult(locale, path, LoadStatus.ERROR, error=e)

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON in locale file %s: %s", path, e)
            return LoadResult(locale, path, LoadStatus.ERROR, error=e)

        if not isinstance(document, dict):
            err = ValueError(
                f"Locale file root must be a JSON object, got {type(document).__name__}"
            )
            logger.warning("Ignoring locale file %s: %s", path, err)
            return LoadResult(locale, path, LoadStatus.ERROR, error=err)

        logger.info("Loaded locale '%s' from %s (%d top-level keys)", locale, path, len(document))
        return LoadResult(locale, path, LoadStatus.SUCCESS, document=document)


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of locale-data load results.

    All statistics are computed properties derived from the ``results`` tuple.

    Attributes:
        results: Individual load results (immutable tuple)

    Example:
        >>> summary = store.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.locale} {result.path}: {result.error}")
    """

    results: tuple[LoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of files not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any file failed to load with an error."""
        return self.errors > 0

    def get_errors(self) -> tuple[LoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_by_locale(self, locale: LocaleCode) -> tuple[LoadResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)
