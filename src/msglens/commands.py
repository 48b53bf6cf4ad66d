"""User-invoked commands.

Each command drives the sync controller and the extraction coordinator and
talks to the user only through a ``CommandHost``. Commands never raise
msglens errors to the host: failures are reported with ``host.error`` and
the command returns None.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from msglens.constants import DEFAULT_LOCALE
from msglens.diagnostics import (
    ErrorTemplate,
    ExtractionError,
    LocaleDataError,
    MsglensError,
    SettingsError,
)
from msglens.enums import Interpolation
from msglens.extraction import (
    ExtractionCoordinator,
    ExtractionOutcome,
    default_interpolation,
    format_call_expression,
)
from msglens.inspection import KeyLocation, find_key_location
from msglens.locale_utils import describe_locale
from msglens.localization.types import LocaleCode, MessageKey
from msglens.resolution import ResolutionResult
from msglens.sync import SyncController, TrackedDocument, is_supported_document

logger = logging.getLogger(__name__)

__all__ = ["CommandHost", "Commands", "TextRange"]

_INTERPOLATION_HINTS = {
    Interpolation.TEMPLATE: "For Svelte template",
    Interpolation.CODE: "For JavaScript/TypeScript code",
}


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open character range [start, end) within a document's text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate range bounds.

        Raises:
            ValueError: If start is negative or end precedes start
        """
        if self.start < 0 or self.end < self.start:
            msg = f"Invalid text range [{self.start}, {self.end})"
            raise ValueError(msg)

    @property
    def is_empty(self) -> bool:
        """True if the range selects nothing."""
        return self.start == self.end


class CommandHost(Protocol):
    """Editor services the commands rely on."""

    async def prompt(self, message: str, *, value: str = "", placeholder: str = "") -> str | None:
        """Ask for a line of text; None if the user cancelled."""
        ...

    async def pick(self, title: str, options: Sequence[str]) -> str | None:
        """Ask the user to choose one option; None if cancelled."""
        ...

    def notify(self, message: str) -> None:
        """Show an informational message."""
        ...

    def error(self, message: str) -> None:
        """Show an error message."""
        ...

    async def replace_selection(
        self, document: TrackedDocument, selection: TextRange, text: str
    ) -> None:
        """Replace the selected range of document with text."""
        ...

    async def reveal(self, path: Path, location: KeyLocation) -> None:
        """Open path and select the given span."""
        ...

    async def update_override(self, locale: LocaleCode) -> None:
        """Persist a new locale override in the host's configuration."""
        ...


class Commands:
    """Change locale, extract selection, open key location, refresh."""

    __slots__ = ("_controller", "_coordinator", "_host")

    def __init__(
        self,
        controller: SyncController,
        host: CommandHost,
        *,
        coordinator: ExtractionCoordinator | None = None,
    ) -> None:
        """Initialize commands.

        Args:
            controller: Sync controller owning the displayed document
            host: Editor services
            coordinator: Extraction coordinator (one sharing the controller's
                store and accessor if None)
        """
        self._controller = controller
        self._host = host
        self._coordinator = (
            coordinator
            if coordinator is not None
            else ExtractionCoordinator(controller.store, accessor=controller.settings.accessor)
        )

    async def change_locale(self, project_root: Path | None = None) -> LocaleCode | None:
        """Prompt for a new active locale and apply it.

        The prompt is prefilled with the current active locale. An unchanged
        or cancelled entry does nothing.

        Args:
            project_root: Project used to compute the current locale; defaults
                to the displayed document's project

        Returns:
            The new locale, or None if nothing changed
        """
        controller = self._controller
        if project_root is None and controller.displayed_document is not None:
            project_root = controller.displayed_document.project_root
        current = controller.store.resolver.resolve_active_locale(
            project_root, controller.settings.locale_override
        )

        entered = await self._host.prompt(
            "Enter the locale code (e.g., en, es, fr)",
            value=current,
            placeholder=DEFAULT_LOCALE,
        )
        if entered is None:
            return None
        locale = entered.strip()
        if not locale or locale == current:
            return None

        try:
            settings = controller.settings.with_locale_override(locale)
        except SettingsError as e:
            self._report(e)
            return None

        await self._host.update_override(locale)
        controller.update_settings(settings)
        await controller.on_locale_selection_changed()
        self._host.notify(f"Locale changed to: {describe_locale(locale)}")
        logger.info("Active locale override set to '%s'", locale)
        return locale

    async def extract_selection(
        self, document: TrackedDocument, selection: TextRange
    ) -> ExtractionOutcome | None:
        """Extract the selected literal into the locale files.

        A selection whose text already exists in the base locale reuses that
        key with the document's default interpolation. A new key asks the
        host which interpolation to use (recommended option first); a
        cancelled choice writes nothing.

        Returns:
            The outcome, or None if the command failed or was cancelled
        """
        if not is_supported_document(document):
            self._host.error(ErrorTemplate.unsupported_document(document.language_kind).message)
            return None
        root = document.project_root
        if root is None:
            self._host.error(ErrorTemplate.no_project_root(document.doc_id).message)
            return None
        if selection.is_empty:
            self._host.error(ErrorTemplate.empty_selection().message)
            return None

        coordinator = self._coordinator
        try:
            plan = coordinator.plan(document.text[selection.start : selection.end], root)
            if plan.reused:
                interpolation: Interpolation | None = default_interpolation(
                    document.language_kind
                )
            else:
                interpolation = await self._choose_interpolation(document.language_kind, plan.key)
            if interpolation is None:
                logger.debug("Extraction cancelled at interpolation choice")
                return None
            outcome = await coordinator.apply(plan, root, interpolation)
        except ExtractionError as e:
            self._report(e)
            return None

        await self._host.replace_selection(document, selection, outcome.replacement)
        if outcome.reused:
            self._host.notify(f"Reused existing key '{outcome.key}'")
        else:
            self._host.notify("Text extracted successfully to locale files")
        return outcome

    async def open_key_location(
        self, project_root: Path, locale: LocaleCode, key: MessageKey
    ) -> KeyLocation | None:
        """Reveal where a key's value sits in a locale file.

        Returns:
            The revealed span, or None if the file or key was not found
        """
        try:
            path, location = find_key_location(project_root, locale, key, self._controller.store)
        except LocaleDataError as e:
            self._report(e)
            return None
        await self._host.reveal(path, location)
        return location

    async def refresh(self) -> tuple[ResolutionResult, ...] | None:
        """Force a cycle for the displayed document."""
        return await self._controller.refresh()

    async def _choose_interpolation(
        self, language_kind: str, key: MessageKey
    ) -> Interpolation | None:
        recommended = default_interpolation(language_kind)
        ordered = sorted(Interpolation, key=lambda kind: kind != recommended)
        choices: dict[str, Interpolation] = {}
        for kind in ordered:
            call = format_call_expression(key, kind, self._coordinator.accessor)
            label = f"{call} - {_INTERPOLATION_HINTS[kind]}"
            if kind == recommended:
                label += " (recommended)"
            choices[label] = kind

        picked = await self._host.pick(
            "Choose interpolation format for the extracted text", list(choices)
        )
        if picked is None:
            return None
        return choices.get(picked)

    def _report(self, error: MsglensError) -> None:
        logger.warning("Command failed: %s", error)
        diagnostic = error.diagnostic
        self._host.error(diagnostic.message if diagnostic is not None else str(error))
