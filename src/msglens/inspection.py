"""Key overview and key navigation.

Data behind the key list UI (every key used by a document with its value in
each locale) and behind "open key location" (where a key's value sits in a
locale file).

Python 3.13+.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from msglens.constants import KEY_SEPARATOR, VARIANT_MARKER
from msglens.diagnostics import ErrorTemplate, LocaleDataError
from msglens.localization.project import LocaleConfigResolver
from msglens.localization.store import TranslationStore
from msglens.localization.types import LocaleCode, MessageKey
from msglens.scanner import CallSiteScanner, compute_line_col

__all__ = [
    "KeyLocation",
    "KeyOverview",
    "LocaleValue",
    "build_key_overview",
    "find_key_location",
    "is_locale_data_file",
    "locate_key",
]


@dataclass(frozen=True, slots=True)
class LocaleValue:
    """Value of a key in one locale."""

    locale: LocaleCode
    value: str


@dataclass(frozen=True, slots=True)
class KeyOverview:
    """One key used by a document and its values across locales.

    Attributes:
        key: Message key
        values: Values in declared locale order; locales lacking the key are absent
    """

    key: MessageKey
    values: tuple[LocaleValue, ...]

    def value_for(self, locale: LocaleCode) -> str | None:
        """Value in one locale, or None if that locale lacks the key."""
        for entry in self.values:
            if entry.locale == locale:
                return entry.value
        return None


def build_key_overview(
    text: str,
    root: Path,
    store: TranslationStore,
    *,
    scanner: CallSiteScanner | None = None,
) -> tuple[KeyOverview, ...]:
    """Collect the values of every key used in text, per configured locale.

    Keys are listed once, in first-occurrence order. Empty values (the
    untranslated placeholder) count as absent. Keys absent from every locale
    are omitted.
    """
    scanner = scanner if scanner is not None else CallSiteScanner()
    keys = dict.fromkeys(site.key for site in scanner.scan(text))
    if not keys:
        return ()

    locales = store.resolver.available_locales(root)
    documents = {locale: store.document_for(root, locale) for locale in locales}

    overview: list[KeyOverview] = []
    for key in keys:
        values = tuple(
            LocaleValue(locale, value)
            for locale in locales
            if (value := store.get(documents[locale], key))
        )
        if values:
            overview.append(KeyOverview(key, values))
    return tuple(overview)


@dataclass(frozen=True, slots=True)
class KeyLocation:
    """Span of a key's value (or, failing that, of the key) in a locale file.

    Attributes:
        start: Character offset of the span start
        end: Character offset just past the span
        line: 1-indexed line of start
        column: 1-indexed column of start
        on_value: True if the span covers the value, False if the quoted key
    """

    start: int
    end: int
    line: int
    column: int
    on_value: bool


def _span(file_text: str, start: int, end: int, on_value: bool) -> KeyLocation:
    line, column = compute_line_col(file_text, start)
    return KeyLocation(start, end, line, column, on_value)


def locate_key(file_text: str, key: MessageKey, value: str | None) -> KeyLocation | None:
    """Find where a key's value appears in raw locale-file text.

    The value is searched as a JSON string literal (variant marker removed)
    and the returned span excludes the quotes. When the value is not found,
    the quoted key itself is located instead (for a dotted key, its last
    segment). Returns None when neither appears.

    Example:
        >>> locate_key('{\\n  "hi": "Hello"\\n}', "hi", "Hello")
        KeyLocation(start=11, end=16, line=2, column=10, on_value=True)
    """
    if value:
        search = value.removesuffix(VARIANT_MARKER)
        if search:
            literal = json.dumps(search, ensure_ascii=False)
            idx = file_text.find(literal)
            if idx >= 0:
                return _span(file_text, idx + 1, idx + len(literal) - 1, on_value=True)

    for candidate in dict.fromkeys((key, key.rsplit(KEY_SEPARATOR, 1)[-1])):
        literal = json.dumps(candidate, ensure_ascii=False)
        idx = file_text.find(literal)
        if idx >= 0:
            return _span(file_text, idx, idx + len(literal), on_value=False)
    return None


def is_locale_data_file(path: Path, root: Path, resolver: LocaleConfigResolver) -> bool:
    """Check whether path is the data file of one of the project's locales."""
    return resolver.is_locale_data_file(path, root)


def find_key_location(
    root: Path, locale: LocaleCode, key: MessageKey, store: TranslationStore
) -> tuple[Path, KeyLocation]:
    """Locate a key in a locale's data file for navigation.

    Returns:
        The locale file and the span to reveal in it

    Raises:
        LocaleDataError: If the locale is unusable as a path segment, its file
            is missing or unreadable, or the key appears nowhere in it
    """
    try:
        path = store.resolver.resolve_locale_path(root, locale)
    except ValueError as e:
        raise LocaleDataError(ErrorTemplate.unsafe_locale_path(locale)) from e

    try:
        file_text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise LocaleDataError(ErrorTemplate.locale_file_not_found(locale, str(path))) from e
    except (OSError, UnicodeDecodeError) as e:
        raise LocaleDataError(ErrorTemplate.locale_file_invalid(locale, str(path), str(e))) from e

    value = store.get(store.document_for(root, locale), key)
    location = locate_key(file_text, key, value)
    if location is None:
        raise LocaleDataError(ErrorTemplate.key_not_found(key, str(path)))
    return path, location
