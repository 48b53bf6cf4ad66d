"""Enumerations for msglens type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class KeyForm(StrEnum):
    """Syntactic form of a message call site.

    StrEnum provides automatic string conversion: str(KeyForm.FLAT) == "flat"
    """

    FLAT = "flat"
    """Dot form: m.hello_world()"""

    BRACKETED = "bracketed"
    """Bracket form: m["login.email"]()"""


class ResolutionStatus(StrEnum):
    """Outcome of resolving one call site.

    StrEnum provides automatic string conversion: str(ResolutionStatus.RESOLVED) == "resolved"
    """

    RESOLVED = "resolved"
    """Found in the active locale."""

    RESOLVED_ELSEWHERE = "resolved_elsewhere"
    """Missing in the active locale, found in another configured locale."""

    UNRESOLVED = "unresolved"
    """Not found in any configured locale."""


class LoadStatus(StrEnum):
    """Outcome of loading one locale-data file."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


class SyncState(StrEnum):
    """Per-document state of the sync controller."""

    IDLE = "idle"
    PENDING_RESCAN = "pending_rescan"


class Interpolation(StrEnum):
    """Shape of the call expression written back by extraction."""

    CODE = "code"
    """Plain expression: m.key()"""

    TEMPLATE = "template"
    """Markup interpolation: {m.key()}"""


__all__ = [
    "Interpolation",
    "KeyForm",
    "LoadStatus",
    "ResolutionStatus",
    "SyncState",
]
