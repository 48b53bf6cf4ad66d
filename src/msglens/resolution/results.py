"""Resolution result types.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from msglens.enums import ResolutionStatus
from msglens.localization.types import LocaleCode, MessageKey
from msglens.scanner import CallSite

__all__ = ["FallbackInfo", "ResolutionResult"]


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Classified outcome of resolving one call site.

    Derived and ephemeral: recomputed on every cycle, never cached.

    Attributes:
        call_site: The call site that was resolved
        value: Display value, or None when unresolved
        status: Exactly one of RESOLVED, RESOLVED_ELSEWHERE, UNRESOLVED
        locale: Locale the value came from (None when unresolved)
    """

    call_site: CallSite
    value: str | None
    status: ResolutionStatus
    locale: LocaleCode | None = None

    def __post_init__(self) -> None:
        """Enforce consistency between status, value and locale.

        Raises:
            ValueError: If an unresolved result carries a value or locale, or a
                resolved result lacks one
        """
        if self.status == ResolutionStatus.UNRESOLVED:
            if self.value is not None or self.locale is not None:
                msg = "Unresolved result must not carry a value or locale"
                raise ValueError(msg)
        elif self.value is None or self.locale is None:
            msg = f"{self.status} result requires a value and a locale"
            raise ValueError(msg)

    @property
    def key(self) -> MessageKey:
        """Key of the resolved call site."""
        return self.call_site.key

    @property
    def is_resolved(self) -> bool:
        """Check if found in the active locale."""
        return self.status == ResolutionStatus.RESOLVED

    @property
    def is_resolved_elsewhere(self) -> bool:
        """Check if found only in another configured locale."""
        return self.status == ResolutionStatus.RESOLVED_ELSEWHERE

    @property
    def is_unresolved(self) -> bool:
        """Check if found in no configured locale."""
        return self.status == ResolutionStatus.UNRESOLVED


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when a key missing from the
    active locale is resolved from another configured locale.

    Attributes:
        requested_locale: The active locale
        resolved_locale: The locale that actually contained the key
        key: The key that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> engine = ResolutionEngine(provider, on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    key: MessageKey
