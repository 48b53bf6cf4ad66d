"""Configuration surface for msglens.

Provides a single frozen dataclass that encapsulates the user-facing options
(locale override, live updates, debounce delay, accessor name). Hosts own
persistence; they build a Settings from their own configuration store with
``Settings.from_mapping`` and hand replacements to the sync controller.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from msglens.constants import (
    DEFAULT_ACCESSOR,
    DEFAULT_UPDATE_DELAY_MS,
    MAX_UPDATE_DELAY_MS,
    MIN_UPDATE_DELAY_MS,
)
from msglens.diagnostics import ErrorTemplate, SettingsError
from msglens.locale_utils import is_valid_locale_code
from msglens.scanner.lexer import is_identifier

__all__ = ["Settings"]


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable user configuration.

    All fields have defaults; ``Settings()`` is a usable configuration.

    Attributes:
        locale_override: Explicit active locale. Empty string means "not set",
            falling through to the project base locale, then "en".
        live_updates: Re-resolve while typing (debounced). When False,
            annotations refresh only on save, focus and locale changes.
        update_delay_ms: Debounce delay in milliseconds (100-2000).
        accessor: Identifier the message module is bound to in source files.

    Example:
        >>> settings = Settings(locale_override="es", update_delay_ms=500)
        >>> settings.update_delay
        0.5
        >>> Settings.from_mapping({"defaultLocale": "fr", "realtimeUpdates": False})
        Settings(locale_override='fr', live_updates=False, update_delay_ms=300, accessor='m')
    """

    locale_override: str = ""
    live_updates: bool = True
    update_delay_ms: int = DEFAULT_UPDATE_DELAY_MS
    accessor: str = DEFAULT_ACCESSOR

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            SettingsError: If the override is not a locale code, the delay is
                out of bounds, or the accessor is not an identifier.
        """
        if self.locale_override and not is_valid_locale_code(self.locale_override):
            raise SettingsError(ErrorTemplate.invalid_locale_code(self.locale_override))
        # bool is an int subclass; True/False are not delays
        if (
            isinstance(self.update_delay_ms, bool)
            or not isinstance(self.update_delay_ms, int)
            or not MIN_UPDATE_DELAY_MS <= self.update_delay_ms <= MAX_UPDATE_DELAY_MS
        ):
            raise SettingsError(
                ErrorTemplate.invalid_update_delay(
                    self.update_delay_ms, MIN_UPDATE_DELAY_MS, MAX_UPDATE_DELAY_MS
                )
            )
        if not is_identifier(self.accessor):
            raise SettingsError(ErrorTemplate.invalid_accessor(self.accessor))

    @property
    def update_delay(self) -> float:
        """Debounce delay in seconds, as consumed by timers."""
        return self.update_delay_ms / 1000

    def with_locale_override(self, locale: str) -> Settings:
        """Return a copy with a new locale override (validated)."""
        return replace(self, locale_override=locale)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> Settings:
        """Build settings from host configuration keys.

        Recognized keys: ``defaultLocale`` (str), ``realtimeUpdates`` (bool),
        ``updateDelay`` (int milliseconds; integral floats accepted since JSON
        hosts often store numbers as floats), ``accessor`` (str). Unknown keys
        are ignored; absent keys keep their defaults.

        Raises:
            SettingsError: If a recognized key has the wrong type or value
        """
        kwargs: dict[str, object] = {}

        if "defaultLocale" in values:
            locale = values["defaultLocale"]
            if locale is None:
                locale = ""
            if not isinstance(locale, str):
                raise SettingsError(
                    ErrorTemplate.invalid_setting_type("defaultLocale", "a string", locale)
                )
            kwargs["locale_override"] = locale.strip()

        if "realtimeUpdates" in values:
            live = values["realtimeUpdates"]
            if not isinstance(live, bool):
                raise SettingsError(
                    ErrorTemplate.invalid_setting_type("realtimeUpdates", "a boolean", live)
                )
            kwargs["live_updates"] = live

        if "updateDelay" in values:
            delay = values["updateDelay"]
            if isinstance(delay, float) and delay.is_integer():
                delay = int(delay)
            kwargs["update_delay_ms"] = delay

        if "accessor" in values:
            accessor = values["accessor"]
            if not isinstance(accessor, str):
                raise SettingsError(
                    ErrorTemplate.invalid_setting_type("accessor", "a string", accessor)
                )
            kwargs["accessor"] = accessor

        return cls(**kwargs)  # type: ignore[arg-type]
