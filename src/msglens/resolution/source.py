"""Scan-and-resolve pipeline for one source text.

Combines the scanner, the locale configuration and the translation store:
the single blocking unit of work behind every sync cycle, the key overview
and the terminal ``annotate`` command.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from msglens.localization.store import TranslationStore
from msglens.localization.types import LocaleCode, LocaleDocument
from msglens.scanner import CallSiteScanner

from .engine import ResolutionEngine
from .results import FallbackInfo, ResolutionResult

__all__ = ["resolve_source"]


def resolve_source(
    text: str,
    root: Path | None,
    store: TranslationStore,
    *,
    override: str = "",
    scanner: CallSiteScanner | None = None,
    on_fallback: Callable[[FallbackInfo], None] | None = None,
) -> tuple[ResolutionResult, ...]:
    """Scan text and resolve every call site for the project at root.

    Without a project root no locale data can be located, so every call
    site is unresolved.

    Args:
        text: Source text to scan
        root: Project root, or None
        store: Translation store (also provides the locale resolver)
        override: User locale override ("" for none)
        scanner: Scanner to use (defaults to accessor "m")
        on_fallback: Forwarded to the resolution engine

    Returns:
        One result per call site, in source order
    """
    scanner = scanner if scanner is not None else CallSiteScanner()
    sites = scanner.scan(text)
    if not sites:
        return ()

    resolver = store.resolver
    active = resolver.resolve_active_locale(root, override)

    if root is None:
        locales: tuple[LocaleCode, ...] = (active,)
        current: LocaleDocument | None = None

        def provider(locale: LocaleCode) -> LocaleDocument | None:
            return None

    else:
        project_root = root
        locales = resolver.available_locales(project_root)
        current = store.document_for(project_root, active)

        def provider(locale: LocaleCode) -> LocaleDocument | None:
            return store.document_for(project_root, locale)

    engine = ResolutionEngine(provider, on_fallback=on_fallback)
    return engine.resolve_all(sites, current, locales, active)
