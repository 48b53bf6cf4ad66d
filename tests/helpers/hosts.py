"""Test doubles for host-facing interfaces.

- RecordingSink: AnnotationSink that records publish/clear calls
- ManualTimers: TimerFactory whose timers fire only when told to
- ScriptedHost: CommandHost with canned prompt/pick answers
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from msglens.commands import TextRange
    from msglens.inspection import KeyLocation
    from msglens.resolution import ResolutionResult
    from msglens.sync import TrackedDocument


class RecordingSink:
    """AnnotationSink that records every call."""

    def __init__(self) -> None:
        self.published: list[tuple[str, tuple[ResolutionResult, ...]]] = []
        self.cleared: list[str | None] = []

    def publish(self, document: TrackedDocument, results: Sequence[ResolutionResult]) -> None:
        self.published.append((document.doc_id, tuple(results)))

    def clear(self, document: TrackedDocument | None) -> None:
        self.cleared.append(None if document is None else document.doc_id)

    @property
    def last_results(self) -> tuple[ResolutionResult, ...]:
        """Results of the most recent publish."""
        assert self.published, "nothing published"
        return self.published[-1][1]

    def labels(self) -> list[tuple[str, str | None]]:
        """(key, value) pairs of the most recent publish."""
        return [(r.key, r.value) for r in self.last_results]


class FailingSink(RecordingSink):
    """Sink whose publish always raises."""

    def publish(self, document: TrackedDocument, results: Sequence[ResolutionResult]) -> None:
        super().publish(document, results)
        msg = "renderer crashed"
        raise RuntimeError(msg)


@dataclass
class ManualTimer:
    """Pending callback created by ManualTimers."""

    delay: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualTimers:
    """Deterministic TimerFactory: timers run only via fire_all()."""

    timers: list[ManualTimer] = field(default_factory=list)

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        """Timers neither cancelled nor fired."""
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire_all(self) -> int:
        """Fire every pending timer; returns how many fired."""
        due = self.pending
        for timer in due:
            timer.fired = True
            timer.callback()
        return len(due)

    def fire_stale(self) -> None:
        """Fire cancelled timers too (simulates a cancel racing with expiry)."""
        for timer in self.timers:
            if not timer.fired:
                timer.fired = True
                timer.callback()


@dataclass
class ScriptedHost:
    """CommandHost with canned answers that records every interaction."""

    prompt_answer: str | None = None
    pick_index: int | None = 0
    prompts: list[tuple[str, str]] = field(default_factory=list)
    picks: list[tuple[str, list[str]]] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    replacements: list[tuple[str, TextRange, str]] = field(default_factory=list)
    revealed: list[tuple[Path, KeyLocation]] = field(default_factory=list)
    overrides: list[str] = field(default_factory=list)

    async def prompt(self, message: str, *, value: str = "", placeholder: str = "") -> str | None:
        self.prompts.append((message, value))
        return self.prompt_answer

    async def pick(self, title: str, options: Sequence[str]) -> str | None:
        self.picks.append((title, list(options)))
        if self.pick_index is None:
            return None
        return options[self.pick_index]

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    async def replace_selection(
        self, document: TrackedDocument, selection: TextRange, text: str
    ) -> None:
        self.replacements.append((document.doc_id, selection, text))

    async def reveal(self, path: Path, location: KeyLocation) -> None:
        self.revealed.append((path, location))

    async def update_override(self, locale: str) -> None:
        self.overrides.append(locale)
