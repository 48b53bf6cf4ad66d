"""Extraction of a selected literal into the locale-data files.

Flow for one selection:
    1. Trim and strip one layer of matching quotes.
    2. Reuse the key of an identical base-locale string, if any (no writes).
    3. Otherwise generate a fresh ``adjective_noun`` key.
    4. Write the base locale with the real value, wait the settle delay, then
       write every other configured locale with an empty placeholder.
    5. Return the call expression that replaces the selection.

Writes for one coordinator are serialized by an asyncio.Lock, so the base
write (including its settle delay) always completes before any other-locale
write of the same or a later extraction begins. There is no rollback:
files written before a failure stay written.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from msglens.constants import (
    DEFAULT_ACCESSOR,
    EXTRACTION_SETTLE_DELAY,
    SUPPORTED_LANGUAGE_KINDS,
    TEMPLATE_LANGUAGE_KINDS,
)
from msglens.diagnostics import ErrorTemplate, ExtractionError
from msglens.enums import Interpolation
from msglens.localization.store import TranslationStore
from msglens.localization.types import LocaleCode, MessageKey
from msglens.localization.writer import (
    read_locale_document,
    set_nested_value,
    write_locale_document,
)

from .keys import (
    find_key_for_value,
    format_call_expression,
    generate_unique_key,
    random_word_key,
    strip_matching_quotes,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractionCoordinator",
    "ExtractionOutcome",
    "ExtractionPlan",
    "default_interpolation",
]


@dataclass(frozen=True, slots=True)
class ExtractionPlan:
    """Key chosen for a selection, before anything is written.

    Attributes:
        text: Cleaned selection (the value for the base locale)
        key: Existing or newly generated key
        reused: True if key already holds text in the base locale
    """

    text: str
    key: MessageKey
    reused: bool


@dataclass(frozen=True, slots=True)
class ExtractionOutcome:
    """Result of a completed extraction.

    Attributes:
        key: Key the selection now refers to
        replacement: Call expression to put in place of the selection
        reused: True if an existing key was reused (nothing written)
        written_paths: Locale files written, in write order
    """

    key: MessageKey
    replacement: str
    reused: bool
    written_paths: tuple[Path, ...] = ()


def default_interpolation(language_kind: str) -> Interpolation:
    """Interpolation recommended for a document kind."""
    if language_kind in TEMPLATE_LANGUAGE_KINDS:
        return Interpolation.TEMPLATE
    return Interpolation.CODE


class ExtractionCoordinator:
    """Turn selections into locale keys and call expressions.

    Example:
        >>> coordinator = ExtractionCoordinator(store)
        >>> outcome = await coordinator.extract('"Sign in"', Path("/app"), "svelte")
        >>> outcome.replacement
        '{m.brave_falcon()}'
    """

    __slots__ = (
        "_accessor",
        "_clock",
        "_key_source",
        "_lock",
        "_settle_delay",
        "_sleep",
        "_store",
    )

    def __init__(
        self,
        store: TranslationStore | None = None,
        *,
        settle_delay: float = EXTRACTION_SETTLE_DELAY,
        accessor: str = DEFAULT_ACCESSOR,
        key_source: Callable[[], str] = random_word_key,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize coordinator.

        Args:
            store: Translation store whose cache is invalidated after writes
            settle_delay: Seconds between the base write and the other writes
            accessor: Accessor used in generated call expressions
            key_source: Random key generator
            sleep: Awaitable delay (replaced in tests)
            clock: Epoch seconds for the collision fallback suffix

        Raises:
            ValueError: If settle_delay is negative
        """
        if settle_delay < 0:
            msg = f"settle_delay must be >= 0, got {settle_delay}"
            raise ValueError(msg)
        self._store = store if store is not None else TranslationStore()
        self._settle_delay = settle_delay
        self._accessor = accessor
        self._key_source = key_source
        self._sleep = sleep
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def accessor(self) -> str:
        """Accessor used in generated call expressions."""
        return self._accessor

    def plan(self, selected_text: str, project_root: Path) -> ExtractionPlan:
        """Clean the selection and choose its key.

        Raises:
            ExtractionError: If the selection is empty after cleaning
        """
        text = strip_matching_quotes(selected_text.strip())
        if not text:
            raise ExtractionError(ErrorTemplate.empty_selection())

        resolver = self._store.resolver
        base_locale = resolver.base_locale(project_root)
        base_document = self._store.document_for(project_root, base_locale)

        existing = find_key_for_value(base_document, text)
        if existing is not None:
            logger.info("Reusing key '%s' for extracted text", existing)
            return ExtractionPlan(text=text, key=existing, reused=True)

        key = generate_unique_key(
            frozenset(base_document or ()),
            word_source=self._key_source,
            clock=self._clock,
        )
        return ExtractionPlan(text=text, key=key, reused=False)

    async def apply(
        self,
        plan: ExtractionPlan,
        project_root: Path,
        interpolation: Interpolation = Interpolation.CODE,
    ) -> ExtractionOutcome:
        """Write a planned key into the locale files.

        Raises:
            ExtractionError: If any locale file cannot be written
        """
        replacement = format_call_expression(plan.key, interpolation, self._accessor)
        if plan.reused:
            return ExtractionOutcome(plan.key, replacement, reused=True)

        resolver = self._store.resolver
        base_locale = resolver.base_locale(project_root)
        others = tuple(
            loc for loc in resolver.available_locales(project_root) if loc != base_locale
        )
        written: list[Path] = []

        async with self._lock:
            self._write(project_root, base_locale, plan.key, plan.text, written)
            if others:
                await self._sleep(self._settle_delay)
            for locale in others:
                self._write(project_root, locale, plan.key, "", written)

        logger.info(
            "Extracted key '%s' into %d locale files under %s",
            plan.key,
            len(written),
            project_root,
        )
        return ExtractionOutcome(plan.key, replacement, reused=False, written_paths=tuple(written))

    async def extract(
        self,
        selected_text: str,
        project_root: Path,
        language_kind: str,
        *,
        interpolation: Interpolation | None = None,
    ) -> ExtractionOutcome:
        """Plan and apply an extraction in one step.

        Args:
            selected_text: Raw selected source text
            project_root: Root of the project owning the document
            language_kind: Host language identifier of the document
            interpolation: Call shape; None picks the kind's default

        Raises:
            ExtractionError: On an unsupported document, an empty selection,
                or a failed write
        """
        if language_kind not in SUPPORTED_LANGUAGE_KINDS:
            raise ExtractionError(ErrorTemplate.unsupported_document(language_kind))
        plan = self.plan(selected_text, project_root)
        if interpolation is None:
            interpolation = default_interpolation(language_kind)
        return await self.apply(plan, project_root, interpolation)

    def _write(
        self,
        root: Path,
        locale: LocaleCode,
        key: MessageKey,
        value: str,
        written: list[Path],
    ) -> None:
        try:
            path = self._store.resolver.resolve_locale_path(root, locale)
        except ValueError as e:
            raise ExtractionError(
                ErrorTemplate.locale_write_failed(locale, locale, str(e)),
                written_paths=tuple(str(p) for p in written),
            ) from e

        try:
            document = read_locale_document(path)
            set_nested_value(document, key, value)
            write_locale_document(path, document)
        except (OSError, ValueError) as e:
            logger.warning("Extraction write failed for '%s': %s", locale, e)
            raise ExtractionError(
                ErrorTemplate.locale_write_failed(locale, str(path), str(e)),
                written_paths=tuple(str(p) for p in written),
            ) from e
        finally:
            self._store.invalidate(root=root, locale=locale)
        written.append(path)
