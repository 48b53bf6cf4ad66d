"""Inline annotation text and styling for resolution results.

Renderer-neutral: hosts turn ``Annotation`` records into whatever inline
hint their editor supports, anchored just after the call expression.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from msglens.enums import ResolutionStatus
from msglens.resolution import ResolutionResult

__all__ = [
    "Annotation",
    "Severity",
    "annotation_color",
    "annotation_label",
    "annotation_severity",
    "build_annotations",
]

type Severity = Literal["info", "warning", "error"]

NO_LOCALE_LABEL = "No locale defined"

_SEVERITY: dict[ResolutionStatus, Severity] = {
    ResolutionStatus.RESOLVED: "info",
    ResolutionStatus.RESOLVED_ELSEWHERE: "warning",
    ResolutionStatus.UNRESOLVED: "error",
}

_COLOR: dict[ResolutionStatus, str] = {
    ResolutionStatus.RESOLVED: "#888888",
    ResolutionStatus.RESOLVED_ELSEWHERE: "#d4a574",
    ResolutionStatus.UNRESOLVED: "#cc6666",
}


@dataclass(frozen=True, slots=True)
class Annotation:
    """One inline hint.

    Attributes:
        offset: Character offset the hint is anchored at (end of the call)
        label: Text to display
        severity: "info", "warning" or "error"
        color: Suggested foreground color (hex)
    """

    offset: int
    label: str
    severity: Severity
    color: str


def annotation_label(result: ResolutionResult) -> str:
    """Display text for a result.

    Example:
        >>> annotation_label(resolved)               # doctest: +SKIP
        '"Hello World"'
        >>> annotation_label(resolved_elsewhere)     # doctest: +SKIP
        '"Hola Mundo" (locales missing)'
        >>> annotation_label(unresolved)             # doctest: +SKIP
        'No locale defined'
    """
    match result.status:
        case ResolutionStatus.RESOLVED:
            return f'"{result.value}"'
        case ResolutionStatus.RESOLVED_ELSEWHERE:
            return f'"{result.value}" (locales missing)'
        case _:
            return NO_LOCALE_LABEL


def annotation_severity(result: ResolutionResult) -> Severity:
    """Severity of a result: info, warning (other locale) or error (nowhere)."""
    return _SEVERITY[result.status]


def annotation_color(result: ResolutionResult) -> str:
    """Suggested hex color for a result."""
    return _COLOR[result.status]


def build_annotations(results: Iterable[ResolutionResult]) -> tuple[Annotation, ...]:
    """Turn results into anchored annotations, one per result, in order."""
    return tuple(
        Annotation(
            offset=result.call_site.end,
            label=annotation_label(result),
            severity=annotation_severity(result),
            color=annotation_color(result),
        )
        for result in results
    )
