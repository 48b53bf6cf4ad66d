"""Edit-relevance heuristic.

Decides whether a content change could move or alter a message call and
therefore warrants a debounced re-scan. Irrelevant changes (typing plain
text inside a line) produce no work at all.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from msglens.constants import DEFAULT_ACCESSOR

__all__ = ["DocumentChange", "is_relevant_change"]


@dataclass(frozen=True, slots=True)
class DocumentChange:
    """One content change reported by the host editor.

    Attributes:
        text: Inserted text (empty for a pure deletion)
        range_length: Number of characters replaced or deleted
        start_line: First line of the replaced range (0-based)
        end_line: Last line of the replaced range (0-based)
    """

    text: str
    range_length: int = 0
    start_line: int = 0
    end_line: int = 0

    @property
    def spans_lines(self) -> bool:
        """Check if the replaced range covers more than one line."""
        return self.end_line > self.start_line


def is_relevant_change(changes: Iterable[DocumentChange], accessor: str = DEFAULT_ACCESSOR) -> bool:
    """Check whether any change could affect call sites or their positions.

    A change is relevant when it spans several lines, inserts a line break,
    deletes text, or inserts text containing "<accessor>." or "()".

    Example:
        >>> is_relevant_change([DocumentChange("x")])
        False
        >>> is_relevant_change([DocumentChange("m.")])
        True
        >>> is_relevant_change([])
        False
    """
    accessor_dot = f"{accessor}."
    for change in changes:
        if change.spans_lines or "\n" in change.text or "\r" in change.text:
            return True
        if change.range_length > 0:
            return True
        if accessor_dot in change.text or "()" in change.text:
            return True
    return False
