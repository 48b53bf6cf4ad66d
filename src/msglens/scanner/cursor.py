"""Immutable cursor for lexical scanning of source text.

Implements the immutable cursor pattern used by the call-site lexer.
Python 3.13+. Zero external dependencies.

Design:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns a NEW cursor, so a rule that fails to match
      simply drops its cursor and the caller's position is untouched
    - Line:column computed on-demand (only for reporting)

Line Ending Support:
    LF and CRLF are supported (\\n is the line delimiter). CR-only files
    produce incorrect line numbers.
"""

from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult", "compute_line_col"]

# ECMAScript WhiteSpace and LineTerminator characters commonly seen in source.
_WHITESPACE = frozenset(" \t\n\r\f\v\u00a0\ufeff\u2028\u2029")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("m.hello()", 0)
        >>> cursor.current
        'm'
        >>> cursor.advance().current
        '.'
        >>> cursor.pos  # Original unchanged (immutability)
        0
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def seek(self, pos: int) -> "Cursor":
        """Return new cursor at an absolute position (clamped at EOF)."""
        return Cursor(self.source, min(max(pos, 0), len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def skip_whitespace(self) -> "Cursor":
        """Skip whitespace, including line terminators.

        Example:
            >>> Cursor("  \\n\\t(", 0).skip_whitespace().current
            '('
        """
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("(x)", 0).expect("(").pos
            1
            >>> Cursor("(x)", 0).expect("[") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def find(self, char: str) -> int:
        """Return the offset of the next occurrence of char, or -1."""
        return self.source.find(char, self.pos)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute (line, column) for current position, 1-indexed."""
        return compute_line_col(self.source, self.pos)


def compute_line_col(source: str, offset: int) -> tuple[int, int]:
    """Compute 1-indexed (line, column) for a character offset.

    Example:
        >>> compute_line_col("a\\nbc", 3)
        (2, 2)
    """
    line = source.count("\n", 0, offset) + 1
    last_newline = source.rfind("\n", 0, offset)
    col = offset - last_newline if last_newline >= 0 else offset + 1
    return line, col


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Every lexer primitive has the signature
    ``def parse_foo(cursor: Cursor) -> ParseResult[Foo] | None`` and returns
    None when the input at the cursor does not have the expected shape.
    """

    value: T
    cursor: Cursor
