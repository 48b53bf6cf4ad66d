"""Call-site records produced by the lexer.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from msglens.enums import KeyForm

from .cursor import compute_line_col

__all__ = ["CallSite"]


@dataclass(frozen=True, slots=True)
class CallSite:
    """One message call found in source text.

    Produced fresh on every scan and never persisted. Offsets are character
    offsets into the scanned string (Python str indices), end exclusive.

    Attributes:
        key: Translation key, flat ("hello_world") or dot-nested ("login.email")
        arguments_text: Raw text between the call parentheses, trimmed, unparsed
        start: Offset of the accessor identifier
        end: Offset just past the closing parenthesis
        key_form: Which call syntax produced the site
    """

    key: str
    arguments_text: str
    start: int
    end: int
    key_form: KeyForm

    def __post_init__(self) -> None:
        """Validate offsets.

        Raises:
            ValueError: If start is negative or end does not follow start
        """
        if self.start < 0:
            msg = f"CallSite.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end <= self.start:
            msg = f"CallSite.end ({self.end}) must be > start ({self.start})"
            raise ValueError(msg)

    @property
    def has_arguments(self) -> bool:
        """Whether anything was passed to the call."""
        return bool(self.arguments_text)

    def line_col(self, source: str) -> tuple[int, int]:
        """1-indexed (line, column) of the call start within source."""
        return compute_line_col(source, self.start)
