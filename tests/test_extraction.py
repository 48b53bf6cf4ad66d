"""Tests for ExtractionCoordinator: planning, write ordering and failures.

The settle delay is replaced by a recording coroutine, so tests never wait
and can inspect the files at the moment the delay would have elapsed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from msglens.diagnostics import DiagnosticCode, ExtractionError
from msglens.enums import Interpolation
from msglens.extraction import ExtractionCoordinator, default_interpolation
from msglens.localization import TranslationStore
from tests.helpers.project import read_locale, write_project, write_settings


class RecordingSleep:
    """Awaitable sleep replacement that snapshots locale files."""

    def __init__(self, root: Path, locales: tuple[str, ...] = ("en", "es")) -> None:
        self.root = root
        self.locales = locales
        self.delays: list[float] = []
        self.snapshots: list[dict[str, Any]] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        snapshot: dict[str, Any] = {}
        for locale in self.locales:
            path = self.root / "messages" / f"{locale}.json"
            snapshot[locale] = read_locale(self.root, locale) if path.exists() else None
        self.snapshots.append(snapshot)


def _coordinator(
    store: TranslationStore, sleep: RecordingSleep, *keys: str, settle_delay: float = 2.0
) -> ExtractionCoordinator:
    source = iter(keys or ("fresh_key",))
    return ExtractionCoordinator(
        store, settle_delay=settle_delay, key_source=source.__next__, sleep=sleep
    )


class TestNewKey:
    """Extraction that creates a key."""

    def test_writes_base_value_and_empty_placeholders(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """Base gets the text; other locales get ""."""
        write_project(tmp_path, {"en": {"a": "A", "b": "B"}, "es": {"a": ""}, "fr": {}})
        sleep = RecordingSleep(tmp_path)

        outcome = asyncio.run(
            _coordinator(store, sleep, "brave_falcon").extract(
                '"Sign in"', tmp_path, "typescript"
            )
        )

        assert outcome.key == "brave_falcon"
        assert outcome.replacement == "m.brave_falcon()"
        assert not outcome.reused
        assert read_locale(tmp_path, "en") == {"a": "A", "b": "B", "brave_falcon": "Sign in"}
        assert read_locale(tmp_path, "es") == {"a": "", "brave_falcon": ""}
        assert read_locale(tmp_path, "fr") == {"brave_falcon": ""}
        assert [p.name for p in outcome.written_paths] == ["en.json", "es.json", "fr.json"]

    def test_existing_key_order_preserved(self, tmp_path: Path, store: TranslationStore) -> None:
        """New keys are appended after existing ones."""
        write_project(tmp_path, {"en": {"zeta": "Z", "alpha": "A"}})

        asyncio.run(_coordinator(store, RecordingSleep(tmp_path)).extract("x", tmp_path, "svelte"))

        assert list(read_locale(tmp_path, "en")) == ["zeta", "alpha", "fresh_key"]

    def test_base_written_before_settle_delay(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """Other locales are untouched while the settle delay runs."""
        write_project(tmp_path, {"en": {}, "es": {}})
        sleep = RecordingSleep(tmp_path)

        asyncio.run(_coordinator(store, sleep).extract("Hello", tmp_path, "javascript"))

        assert sleep.delays == [2.0]
        assert sleep.snapshots == [{"en": {"fresh_key": "Hello"}, "es": {}}]

    def test_no_settle_delay_without_other_locales(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """A single-locale project does not wait."""
        write_project(tmp_path, {"en": {}})
        sleep = RecordingSleep(tmp_path)

        outcome = asyncio.run(_coordinator(store, sleep).extract("Hi", tmp_path, "typescript"))

        assert sleep.delays == []
        assert len(outcome.written_paths) == 1

    def test_missing_locale_files_created(self, tmp_path: Path, store: TranslationStore) -> None:
        """Declared locales without files get new files."""
        write_settings(tmp_path, base_locale="en", locales=["en", "de"])

        asyncio.run(_coordinator(store, RecordingSleep(tmp_path)).extract("Hi", tmp_path, "svelte"))

        assert read_locale(tmp_path, "en") == {"fresh_key": "Hi"}
        assert read_locale(tmp_path, "de") == {"fresh_key": ""}

    def test_base_locale_from_settings(self, tmp_path: Path, store: TranslationStore) -> None:
        """The value goes to baseLocale, not the first listed locale."""
        write_project(tmp_path, {"es": {}, "fr": {}}, base_locale="fr")

        asyncio.run(_coordinator(store, RecordingSleep(tmp_path)).extract("Salut", tmp_path, "svelte"))

        assert read_locale(tmp_path, "fr") == {"fresh_key": "Salut"}
        assert read_locale(tmp_path, "es") == {"fresh_key": ""}

    def test_generated_key_avoids_base_keys(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """A candidate already in the base locale is skipped."""
        write_project(tmp_path, {"en": {"taken_key": "Other"}})

        outcome = asyncio.run(
            _coordinator(store, RecordingSleep(tmp_path), "taken_key", "new_key").extract(
                "Text", tmp_path, "typescript"
            )
        )

        assert outcome.key == "new_key"
        assert read_locale(tmp_path, "en")["taken_key"] == "Other"

    def test_store_sees_new_key(self, tmp_path: Path, store: TranslationStore) -> None:
        """The store cache is invalidated after writing."""
        write_project(tmp_path, {"en": {}})
        assert store.get(store.document_for(tmp_path, "en"), "fresh_key") is None

        asyncio.run(_coordinator(store, RecordingSleep(tmp_path)).extract("Hi", tmp_path, "svelte"))

        assert store.get(store.document_for(tmp_path, "en"), "fresh_key") == "Hi"


class TestReuse:
    """Extraction of text that already has a key."""

    def test_existing_key_reused_without_writes(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """Nothing is written and no delay runs."""
        write_project(tmp_path, {"en": {"greet": {"hello": "Hello"}}, "es": {}})
        before = (tmp_path / "messages" / "es.json").read_text(encoding="utf-8")
        sleep = RecordingSleep(tmp_path)

        outcome = asyncio.run(_coordinator(store, sleep).extract("'Hello'", tmp_path, "svelte"))

        assert outcome.reused
        assert outcome.key == "greet.hello"
        assert outcome.replacement == '{m["greet.hello"]()}'
        assert outcome.written_paths == ()
        assert sleep.delays == []
        assert (tmp_path / "messages" / "es.json").read_text(encoding="utf-8") == before

    def test_plan_reports_reuse(self, tmp_path: Path, store: TranslationStore) -> None:
        """plan() decides before anything is written."""
        write_project(tmp_path, {"en": {"hi": "Hello"}})
        coordinator = _coordinator(store, RecordingSleep(tmp_path))

        plan = coordinator.plan('  "Hello"  ', tmp_path)

        assert (plan.text, plan.key, plan.reused) == ("Hello", "hi", True)


class TestInterpolation:
    """Call shape of the replacement."""

    def test_defaults_by_kind(self) -> None:
        """Svelte documents default to template form."""
        assert default_interpolation("svelte") == Interpolation.TEMPLATE
        assert default_interpolation("typescript") == Interpolation.CODE
        assert default_interpolation("javascript") == Interpolation.CODE

    def test_explicit_interpolation(self, tmp_path: Path, store: TranslationStore) -> None:
        """An explicit choice overrides the default."""
        write_project(tmp_path, {"en": {}})

        outcome = asyncio.run(
            _coordinator(store, RecordingSleep(tmp_path)).extract(
                "Hi", tmp_path, "svelte", interpolation=Interpolation.CODE
            )
        )

        assert outcome.replacement == "m.fresh_key()"

    def test_custom_accessor(self, tmp_path: Path, store: TranslationStore) -> None:
        """The coordinator's accessor appears in the call."""
        write_project(tmp_path, {"en": {}})
        coordinator = ExtractionCoordinator(
            store, accessor="msg", key_source=lambda: "key_one", sleep=RecordingSleep(tmp_path)
        )

        outcome = asyncio.run(coordinator.extract("Hi", tmp_path, "svelte"))

        assert outcome.replacement == "{msg.key_one()}"
        assert coordinator.accessor == "msg"


class TestFailures:
    """Rejected selections and failed writes."""

    @pytest.mark.parametrize("selection", ["", "   ", '""', "``", '  "" '])
    def test_empty_selection(
        self, tmp_path: Path, store: TranslationStore, selection: str
    ) -> None:
        """Empty text after cleaning is rejected before any write."""
        write_project(tmp_path, {"en": {}})

        with pytest.raises(ExtractionError, match="Please select text to extract"):
            asyncio.run(
                _coordinator(store, RecordingSleep(tmp_path)).extract(
                    selection, tmp_path, "svelte"
                )
            )

        assert read_locale(tmp_path, "en") == {}

    def test_unsupported_document(self, tmp_path: Path, store: TranslationStore) -> None:
        """Only javascript, typescript and svelte documents are accepted."""
        with pytest.raises(ExtractionError) as exc_info:
            asyncio.run(
                _coordinator(store, RecordingSleep(tmp_path)).extract("Hi", tmp_path, "python")
            )

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNSUPPORTED_DOCUMENT

    def test_malformed_other_locale_not_overwritten(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """A corrupt file fails the extraction; earlier writes remain."""
        write_project(tmp_path, {"en": {}, "es": "{ broken"})

        with pytest.raises(ExtractionError) as exc_info:
            asyncio.run(
                _coordinator(store, RecordingSleep(tmp_path, ("en",))).extract(
                    "Hi", tmp_path, "typescript"
                )
            )

        error = exc_info.value
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.LOCALE_WRITE_FAILED
        assert [Path(p).name for p in error.written_paths] == ["en.json"]
        assert read_locale(tmp_path, "en") == {"fresh_key": "Hi"}
        assert (tmp_path / "messages" / "es.json").read_text(encoding="utf-8") == "{ broken"

    def test_malformed_base_locale(self, tmp_path: Path, store: TranslationStore) -> None:
        """A corrupt base file fails with nothing written."""
        write_project(tmp_path, {"en": "[]", "es": {}})

        with pytest.raises(ExtractionError) as exc_info:
            asyncio.run(
                _coordinator(store, RecordingSleep(tmp_path, ())).extract("Hi", tmp_path, "svelte")
            )

        assert exc_info.value.written_paths == ()
        assert read_locale(tmp_path, "es") == {}

    def test_unsafe_configured_locale(self, tmp_path: Path, store: TranslationStore) -> None:
        """A locale that would escape the project is not written."""
        write_settings(tmp_path, base_locale="en", locales=["en", "../evil"])

        with pytest.raises(ExtractionError) as exc_info:
            asyncio.run(
                _coordinator(store, RecordingSleep(tmp_path, ())).extract("Hi", tmp_path, "svelte")
            )

        assert len(exc_info.value.written_paths) == 1
        assert not (tmp_path / "evil.json").exists()

    def test_negative_settle_delay(self, store: TranslationStore) -> None:
        """The settle delay cannot be negative."""
        with pytest.raises(ValueError, match="settle_delay"):
            ExtractionCoordinator(store, settle_delay=-1)


class TestSerializedWrites:
    """Concurrent extractions on one coordinator."""

    def test_second_extraction_waits_for_first(
        self, tmp_path: Path, store: TranslationStore
    ) -> None:
        """All writes of one extraction finish before the next base write."""
        write_project(tmp_path, {"en": {}, "es": {}})
        sleep = RecordingSleep(tmp_path)
        coordinator = _coordinator(store, sleep, "first_key", "second_key")

        async def scenario() -> None:
            await asyncio.gather(
                coordinator.extract("One", tmp_path, "svelte"),
                coordinator.extract("Two", tmp_path, "svelte"),
            )

        asyncio.run(scenario())

        assert sleep.snapshots == [
            {"en": {"first_key": "One"}, "es": {}},
            {"en": {"first_key": "One", "second_key": "Two"}, "es": {"first_key": ""}},
        ]
        assert read_locale(tmp_path, "es") == {"first_key": "", "second_key": ""}
