"""Translation store: locale-document loading, caching and key lookup.

The store is the only component that reads locale-data files. It never
raises on missing or malformed data; lookups on an unavailable document
simply return None.

Caching:
    Documents are cached per (project root, locale). Each entry remembers
    the file's (mtime_ns, size) at load time and is reloaded when the file
    on disk no longer matches, so an external change is reflected on the
    next call even when no invalidation event arrived. Explicit
    ``invalidate`` calls drop entries immediately.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Any

from msglens.constants import KEY_SEPARATOR, VARIANT_MARKER
from msglens.localization.loading import (
    LoadResult,
    LoadSummary,
    LocaleDataLoader,
    PathLocaleDataLoader,
)
from msglens.localization.project import LocaleConfigResolver
from msglens.localization.types import LocaleCode, LocaleDocument, MessageKey

logger = logging.getLogger(__name__)

__all__ = ["TranslationStore", "project_value"]

# Number of recent load attempts kept for get_load_summary().
_LOAD_HISTORY_SIZE = 128

type _Signature = tuple[int, int] | None


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    path: Path
    signature: _Signature
    document: LocaleDocument | None


def _file_signature(path: Path) -> _Signature:
    try:
        stat = path.stat()
    except OSError:
        return None
    return (stat.st_mtime_ns, stat.st_size)


def project_value(node: Any) -> str | None:
    """Project a resolved locale-data node to a display string.

    Strings are returned verbatim. A variant list yields the first value of
    the first variant's ``match`` mapping with the variant marker appended.
    Every other shape is unsupported and yields None.

    Example:
        >>> project_value("Hello")
        'Hello'
        >>> project_value([{"match": {"count": "1 item"}}, {"match": {"count": "many"}}])
        '1 item*'
        >>> project_value([]) is None
        True
    """
    if isinstance(node, str):
        return node
    if isinstance(node, list):
        if not node or not isinstance(node[0], dict):
            return None
        match = node[0].get("match")
        if not isinstance(match, dict) or not match:
            return None
        first = next(iter(match.values()))
        if not isinstance(first, str):
            return None
        return f"{first}{VARIANT_MARKER}"
    return None


class TranslationStore:
    """Load, cache and query locale-data documents.

    Thread Safety:
        Cache and load history are protected by an RLock. The sync controller
        runs resolution cycles in worker threads via asyncio.to_thread.

    Example:
        >>> store = TranslationStore()
        >>> doc = store.document_for(Path("/app"), "en")
        >>> store.get(doc, "login.email")
        'Email'
    """

    __slots__ = ("_cache", "_history", "_loader", "_lock", "_resolver")

    def __init__(
        self,
        resolver: LocaleConfigResolver | None = None,
        loader: LocaleDataLoader | None = None,
    ) -> None:
        """Initialize store.

        Args:
            resolver: Locale configuration resolver used to find locale files
            loader: Locale-data loader (defaults to disk JSON loader)
        """
        self._resolver = resolver if resolver is not None else LocaleConfigResolver()
        self._loader: LocaleDataLoader = loader if loader is not None else PathLocaleDataLoader()
        self._cache: dict[tuple[Path, LocaleCode], _CacheEntry] = {}
        self._history: deque[LoadResult] = deque(maxlen=_LOAD_HISTORY_SIZE)
        self._lock = RLock()

    @property
    def resolver(self) -> LocaleConfigResolver:
        """Locale configuration resolver shared with the store."""
        return self._resolver

    def load(self, path: Path, locale: LocaleCode) -> LocaleDocument | None:
        """Load one locale-data file, bypassing the cache.

        Args:
            path: Locale-data file path
            locale: Locale the file belongs to

        Returns:
            Parsed document, or None if the file is missing or malformed
        """
        result = self._loader.load(path, locale)
        with self._lock:
            self._history.append(result)
        return result.document if result.is_success else None

    @staticmethod
    def get(document: LocaleDocument | None, key: MessageKey) -> str | None:
        """Look up a key in a document.

        A key present literally at the top level is used first. Otherwise a
        dotted key is traversed segment by segment; a missing segment or a
        non-object intermediate yields None.

        Returns:
            Display value (see ``project_value``), or None
        """
        if document is None:
            return None
        if key in document:
            return project_value(document[key])
        if KEY_SEPARATOR not in key:
            return None

        node: Any = document
        for segment in key.split(KEY_SEPARATOR):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return project_value(node)

    def document_for(self, root: Path, locale: LocaleCode) -> LocaleDocument | None:
        """Get the document for (root, locale), loading or reloading as needed.

        Returns:
            Parsed document, or None if unavailable or the locale is unsafe
        """
        try:
            path = self._resolver.resolve_locale_path(root, locale)
        except ValueError as e:
            logger.warning("Skipping locale %r: %s", locale, e)
            return None

        cache_key = (root, locale)
        with self._lock:
            signature = _file_signature(path)
            entry = self._cache.get(cache_key)
            if entry is not None and entry.path == path and entry.signature == signature:
                return entry.document

            if entry is not None:
                logger.debug("Reloading stale locale '%s' from %s", locale, path)
            document = self.load(path, locale)
            self._cache[cache_key] = _CacheEntry(path, signature, document)
            return document

    def invalidate(self, root: Path | None = None, locale: LocaleCode | None = None) -> None:
        """Drop cached documents.

        Args:
            root: Only entries for this project root (None for all roots)
            locale: Only entries for this locale (None for all locales)
        """
        with self._lock:
            stale = [
                cache_key
                for cache_key in self._cache
                if (root is None or cache_key[0] == root)
                and (locale is None or cache_key[1] == locale)
            ]
            for cache_key in stale:
                del self._cache[cache_key]
        if stale:
            logger.debug("Invalidated %d cached locale documents", len(stale))

    def get_load_summary(self) -> LoadSummary:
        """Summary of recent load attempts."""
        with self._lock:
            return LoadSummary(tuple(self._history))
