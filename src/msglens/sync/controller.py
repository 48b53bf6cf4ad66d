"""Sync controller: keeps published annotations consistent with edits.

Turns host events (content changes, saves, focus changes, locale-data and
configuration changes) into resolution cycles. A cycle re-scans the latest
document text, resolves every call site and hands the results to the
annotation sink.

Per-document state:
    IDLE            no timer pending
    PENDING_RESCAN  a debounce timer is pending (owned by DebounceScheduler)

Staleness:
    Each document has a generation counter incremented when a cycle starts.
    Scanning and resolution run in a worker thread (asyncio.to_thread); when
    the thread returns, the cycle publishes only if no newer cycle for the
    same document started meanwhile. A slow older read therefore never
    overwrites newer results.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Iterable, Sequence
from pathlib import Path
from typing import Any

from msglens.enums import SyncState
from msglens.localization.store import TranslationStore
from msglens.resolution import FallbackInfo, ResolutionResult, resolve_source
from msglens.scanner import CallSiteScanner
from msglens.settings import Settings

from .documents import AnnotationSink, TrackedDocument, is_supported_document
from .relevance import DocumentChange, is_relevant_change
from .scheduler import DebounceScheduler

logger = logging.getLogger(__name__)

__all__ = ["SyncController"]


class SyncController:
    """Event-driven owner of resolution cycles and debounce timers.

    Example:
        >>> controller = SyncController(sink, settings=Settings(update_delay_ms=300))
        >>> await controller.on_active_document_changed(doc)   # immediate cycle
        >>> controller.on_content_changed(doc, [DocumentChange("m.")])  # debounced
        True
        >>> await controller.on_saved(doc)  # cancels the timer, immediate cycle
    """

    __slots__ = (
        "_active",
        "_displayed",
        "_generations",
        "_on_fallback",
        "_scanner",
        "_scheduler",
        "_settings",
        "_sink",
        "_store",
        "_tasks",
    )

    def __init__(
        self,
        sink: AnnotationSink,
        *,
        store: TranslationStore | None = None,
        settings: Settings | None = None,
        scheduler: DebounceScheduler | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize controller.

        Args:
            sink: Receiver of published results
            store: Translation store (a fresh one if None)
            settings: Initial settings (defaults if None)
            scheduler: Debounce scheduler (loop-backed if None)
            on_fallback: Optional callback forwarded to the resolution engine
        """
        self._sink = sink
        self._store = store if store is not None else TranslationStore()
        self._settings = settings if settings is not None else Settings()
        self._scheduler = scheduler if scheduler is not None else DebounceScheduler()
        self._scanner = CallSiteScanner(self._settings.accessor)
        self._on_fallback = on_fallback
        self._generations: dict[str, int] = {}
        self._displayed: TrackedDocument | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._active = True

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def settings(self) -> Settings:
        """Current settings."""
        return self._settings

    @property
    def store(self) -> TranslationStore:
        """Translation store shared with commands and inspection."""
        return self._store

    @property
    def displayed_document(self) -> TrackedDocument | None:
        """Document whose annotations are currently shown."""
        return self._displayed

    def state(self, doc_id: str) -> SyncState:
        """Sync state of a document."""
        if self._scheduler.is_pending(doc_id):
            return SyncState.PENDING_RESCAN
        return SyncState.IDLE

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_content_changed(
        self, document: TrackedDocument, changes: Iterable[DocumentChange]
    ) -> bool:
        """Handle an edit; (re)start the debounce timer if relevant.

        Returns:
            True if a debounced cycle was scheduled
        """
        if not self._active or not self._settings.live_updates:
            return False
        if not is_supported_document(document):
            return False
        if not is_relevant_change(changes, self._settings.accessor):
            return False

        self._scheduler.schedule(
            document.doc_id,
            self._settings.update_delay,
            lambda: self._on_timer_expired(document),
        )
        return True

    async def on_saved(self, document: TrackedDocument) -> tuple[ResolutionResult, ...] | None:
        """Handle a save: cancel any pending timer, run an immediate cycle."""
        if not is_supported_document(document):
            return None
        self._scheduler.cancel(document.doc_id)
        return await self.run_cycle(document)

    async def on_active_document_changed(
        self, document: TrackedDocument | None
    ) -> tuple[ResolutionResult, ...] | None:
        """Handle a focus change.

        Supported documents get an immediate cycle and become the displayed
        document. Focusing a locale-data file keeps the current view so the
        user can edit translations while watching their effect. Anything
        else clears the view.
        """
        if document is not None and is_supported_document(document):
            self._displayed = document
            return await self.run_cycle(document)

        if self._displayed is not None and self._is_locale_data_document(document):
            logger.debug("Locale file focused; keeping annotations for %s", self._displayed.doc_id)
            return None

        self._displayed = None
        self._clear(None)
        return None

    async def on_locale_data_changed(
        self, locale: str | None = None
    ) -> tuple[ResolutionResult, ...] | None:
        """Handle a locale-data file change (create, modify, delete).

        Args:
            locale: Locale whose file changed (None for unknown/all)
        """
        self._store.invalidate(locale=locale)
        logger.info("Locale data changed (%s); refreshing", locale or "all locales")
        return await self.refresh()

    async def on_locale_selection_changed(self) -> tuple[ResolutionResult, ...] | None:
        """Handle a change of the active locale (override or project base)."""
        self._store.invalidate()
        return await self.refresh()

    async def on_project_config_changed(
        self, root: Path
    ) -> tuple[ResolutionResult, ...] | None:
        """Handle a change of the project settings file under root."""
        self._store.resolver.invalidate(root)
        self._store.invalidate(root=root)
        logger.info("Project settings changed under %s; refreshing", root)
        return await self.refresh()

    def update_settings(self, settings: Settings) -> None:
        """Replace settings.

        Disabling live updates cancels every pending timer. A new delay
        applies to timers scheduled from now on. A new locale override takes
        effect on the next cycle; hosts follow up with
        ``on_locale_selection_changed`` to refresh immediately.
        """
        previous = self._settings
        self._settings = settings
        if previous.live_updates and not settings.live_updates:
            cancelled = self._scheduler.cancel_all()
            logger.info("Live updates disabled; cancelled %d pending rescans", cancelled)
        if settings.accessor != previous.accessor:
            self._scanner = CallSiteScanner(settings.accessor)
        if settings.update_delay_ms != previous.update_delay_ms:
            logger.debug("Update delay changed to %d ms", settings.update_delay_ms)

    def deactivate(self) -> None:
        """Cancel every timer and in-flight cycle; publish nothing further."""
        self._active = False
        self._scheduler.cancel_all()
        for task in list(self._tasks):
            task.cancel()
        self._generations.clear()

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    async def refresh(self) -> tuple[ResolutionResult, ...] | None:
        """Run an immediate cycle for the displayed document, if any."""
        if self._displayed is None:
            return None
        self._scheduler.cancel(self._displayed.doc_id)
        return await self.run_cycle(self._displayed)

    async def run_cycle(
        self, document: TrackedDocument
    ) -> tuple[ResolutionResult, ...] | None:
        """Scan, resolve and publish one document.

        Returns:
            Published results, or None if the cycle was superseded by a newer
            one for the same document (or the controller was deactivated)
        """
        if not self._active:
            return None
        doc_id = document.doc_id
        generation = self._generations.get(doc_id, 0) + 1
        self._generations[doc_id] = generation

        text = document.text
        settings = self._settings
        results = await asyncio.to_thread(
            resolve_source,
            text,
            document.project_root,
            self._store,
            override=settings.locale_override,
            scanner=self._scanner,
            on_fallback=self._on_fallback,
        )

        if not self._active or self._generations.get(doc_id) != generation:
            logger.debug("Dropping superseded cycle %d for %s", generation, doc_id)
            return None

        self._publish(document, results)
        return results

    async def wait_idle(self) -> None:
        """Wait until every debounced cycle started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_timer_expired(self, document: TrackedDocument) -> None:
        if not self._settings.live_updates:
            logger.debug("Discarding rescan of %s: live updates disabled", document.doc_id)
            return
        self._spawn(self._run_debounced(document))

    async def _run_debounced(self, document: TrackedDocument) -> None:
        try:
            await self.run_cycle(document)
        except asyncio.CancelledError:
            raise
        except Exception:
            # Timer-driven cycles have no caller to propagate to
            logger.exception("Debounced cycle failed for %s", document.doc_id)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _publish(self, document: TrackedDocument, results: Sequence[ResolutionResult]) -> None:
        try:
            self._sink.publish(document, results)
        except Exception:
            logger.exception("Annotation sink failed to publish %s", document.doc_id)
            return
        logger.debug("Published %d results for %s", len(results), document.doc_id)

    def _clear(self, document: TrackedDocument | None) -> None:
        try:
            self._sink.clear(document)
        except Exception:
            logger.exception("Annotation sink failed to clear view")

    def _is_locale_data_document(self, document: TrackedDocument | None) -> bool:
        if document is None or document.path is None or document.project_root is None:
            return False
        return self._store.resolver.is_locale_data_file(document.path, document.project_root)

