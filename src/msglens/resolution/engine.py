"""Resolution of call sites against locale documents with fallback search.

For each call site, in order:
    1. Look the key up in the active locale's document -> RESOLVED
    2. Search the other configured locales in declared order, skipping the
       active one; the first hit wins -> RESOLVED_ELSEWHERE(locale)
    3. Otherwise -> UNRESOLVED

An empty-string value counts as a miss in every step: it is the
untranslated placeholder that extraction writes into non-base locales.

Other-locale documents are obtained through an injected provider and
fetched at most once per ``resolve_all`` pass. A provider failure for one
locale is treated as "no match" and the search continues.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from msglens.enums import ResolutionStatus
from msglens.localization.store import TranslationStore
from msglens.localization.types import LocaleCode, LocaleDocument, MessageKey
from msglens.scanner import CallSite

from .results import FallbackInfo, ResolutionResult

logger = logging.getLogger(__name__)

__all__ = ["DocumentProvider", "ResolutionEngine"]

type DocumentProvider = Callable[[LocaleCode], LocaleDocument | None]
"""Returns the document for a locale, or None. May raise OSError/ValueError."""

_MISSING = object()


def _lookup(document: LocaleDocument | None, key: MessageKey) -> str | None:
    value = TranslationStore.get(document, key)
    # "" is the untranslated placeholder
    return value or None


class ResolutionEngine:
    """Resolve call sites to classified display values.

    Example:
        >>> engine = ResolutionEngine(lambda locale: docs.get(locale))
        >>> results = engine.resolve_all(sites, docs["en"], ("en", "es"), "en")
        >>> [r.status for r in results]
        [<ResolutionStatus.RESOLVED: 'resolved'>]
    """

    __slots__ = ("_document_provider", "_on_fallback")

    def __init__(
        self,
        document_provider: DocumentProvider,
        *,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            document_provider: Fetches other-locale documents during fallback search
            on_fallback: Optional callback invoked for each RESOLVED_ELSEWHERE result
        """
        self._document_provider = document_provider
        self._on_fallback = on_fallback

    def resolve_all(
        self,
        call_sites: Iterable[CallSite],
        current_document: LocaleDocument | None,
        locales: Sequence[LocaleCode],
        active_locale: LocaleCode,
    ) -> tuple[ResolutionResult, ...]:
        """Resolve every call site, preserving input order.

        Args:
            call_sites: Call sites from one scan
            current_document: Active locale's document (None if unavailable)
            locales: Configured locales in declared order
            active_locale: Locale of current_document

        Returns:
            One ResolutionResult per call site
        """
        fallback_locales = tuple(loc for loc in locales if loc != active_locale)
        documents: dict[LocaleCode, LocaleDocument | None] = {}
        results = tuple(
            self._resolve_one(site, current_document, fallback_locales, active_locale, documents)
            for site in call_sites
        )
        logger.debug(
            "Resolved %d call sites for locale '%s' (%d fallback documents fetched)",
            len(results),
            active_locale,
            len(documents),
        )
        return results

    def _resolve_one(
        self,
        site: CallSite,
        current_document: LocaleDocument | None,
        fallback_locales: tuple[LocaleCode, ...],
        active_locale: LocaleCode,
        documents: dict[LocaleCode, LocaleDocument | None],
    ) -> ResolutionResult:
        value = _lookup(current_document, site.key)
        if value is not None:
            return ResolutionResult(site, value, ResolutionStatus.RESOLVED, active_locale)

        for locale in fallback_locales:
            value = _lookup(self._document(locale, documents), site.key)
            if value is None:
                continue
            if self._on_fallback is not None:
                self._on_fallback(
                    FallbackInfo(
                        requested_locale=active_locale, resolved_locale=locale, key=site.key
                    )
                )
            return ResolutionResult(site, value, ResolutionStatus.RESOLVED_ELSEWHERE, locale)

        return ResolutionResult(site, None, ResolutionStatus.UNRESOLVED)

    def _document(
        self, locale: LocaleCode, documents: dict[LocaleCode, LocaleDocument | None]
    ) -> LocaleDocument | None:
        cached = documents.get(locale, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        try:
            document = self._document_provider(locale)
        except (OSError, ValueError) as e:
            logger.warning("Locale '%s' unavailable during fallback search: %s", locale, e)
            document = None
        documents[locale] = document
        return document
