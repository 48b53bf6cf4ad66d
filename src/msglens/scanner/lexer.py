"""Call-site lexer for message accessor calls.

Finds the two call forms a message module exposes in JavaScript, TypeScript
and Svelte sources:

    m.hello_world(args)          dot form      -> KeyForm.FLAT
    m["login.email"](args)       bracket form  -> KeyForm.BRACKETED

The lexer does not parse the host language. It walks the text looking for
the accessor identifier at an identifier boundary and tries each call rule
in turn at that position. A successful match consumes its whole span, so the
returned sites are ordered by start offset and never overlap.

Arguments are captured verbatim up to the first ")" after the opening
parenthesis. Nested parentheses are not balanced: ``m.a(fn(x))`` yields the
arguments text ``fn(x``. This is a best-effort lexical scan.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Callable

from msglens.constants import DEFAULT_ACCESSOR
from msglens.enums import KeyForm

from .cursor import Cursor, ParseResult
from .sites import CallSite

__all__ = [
    "CALL_RULES",
    "CallRule",
    "CallSiteScanner",
    "is_identifier",
    "match_bracket_call",
    "match_dot_call",
    "parse_identifier",
    "scan",
]

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_QUOTES = frozenset("\"'")

type CallRule = Callable[[Cursor, int], CallSite | None]
"""Rule signature: cursor just past the accessor, offset of the accessor."""


def _is_identifier_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch in "_$")


def _is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "_$")


def is_identifier(name: str) -> bool:
    """Check whether name is an ASCII identifier usable as an accessor or key.

    Example:
        >>> is_identifier("hello_world")
        True
        >>> is_identifier("login.email")
        False
    """
    return _IDENTIFIER_RE.fullmatch(name) is not None


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse identifier: [a-zA-Z_$][a-zA-Z0-9_$]*

    Returns:
        ParseResult with the identifier text, or None if the cursor is not
        at an identifier start
    """
    if cursor.is_eof or not _is_identifier_start(cursor.current):
        return None

    start_pos = cursor.pos
    cursor = cursor.advance()
    while not cursor.is_eof and _is_identifier_char(cursor.current):
        cursor = cursor.advance()

    return ParseResult(Cursor(cursor.source, start_pos).slice_to(cursor.pos), cursor)


def _parse_call_arguments(cursor: Cursor) -> ParseResult[str] | None:
    """Parse ``( ... )`` starting at the opening parenthesis.

    Captures everything up to the first closing parenthesis, trimmed.
    """
    after_open = cursor.expect("(")
    if after_open is None:
        return None
    close = after_open.find(")")
    if close < 0:
        return None
    return ParseResult(after_open.slice_to(close).strip(), after_open.seek(close + 1))


def _parse_quoted_key(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a single- or double-quoted key literal.

    The key may not contain a newline or an unescaped quote of the same kind.
    Escape sequences are kept as written.
    """
    if cursor.is_eof or cursor.current not in _QUOTES:
        return None
    quote = cursor.current
    start = cursor.advance()
    c = start
    while not c.is_eof:
        ch = c.current
        if ch == quote:
            return ParseResult(start.slice_to(c.pos), c.advance())
        if ch in "\r\n":
            return None
        if ch == "\\":
            nxt = c.peek(1)
            if nxt is None or nxt in "\r\n":
                return None
            c = c.advance(2)
            continue
        c = c.advance()
    return None


def match_dot_call(cursor: Cursor, start: int) -> CallSite | None:
    """Match ``.identifier ( args )`` after the accessor."""
    c = cursor.expect(".")
    if c is None:
        return None
    ident = parse_identifier(c)
    if ident is None:
        return None
    args = _parse_call_arguments(ident.cursor.skip_whitespace())
    if args is None:
        return None
    return CallSite(
        key=ident.value,
        arguments_text=args.value,
        start=start,
        end=args.cursor.pos,
        key_form=KeyForm.FLAT,
    )


def match_bracket_call(cursor: Cursor, start: int) -> CallSite | None:
    """Match ``[ "key" ] ( args )`` after the accessor."""
    c = cursor.expect("[")
    if c is None:
        return None
    key = _parse_quoted_key(c.skip_whitespace())
    if key is None:
        return None
    c = key.cursor.skip_whitespace().expect("]")
    if c is None:
        return None
    args = _parse_call_arguments(c.skip_whitespace())
    if args is None:
        return None
    return CallSite(
        key=key.value,
        arguments_text=args.value,
        start=start,
        end=args.cursor.pos,
        key_form=KeyForm.BRACKETED,
    )


CALL_RULES: tuple[CallRule, ...] = (match_dot_call, match_bracket_call)
"""Default rule registry, tried in order at each accessor occurrence."""


class CallSiteScanner:
    """Scanner for message call sites bound to one accessor identifier.

    Rules are pluggable: each takes a cursor positioned just past the
    accessor and returns a CallSite or None. The first rule that matches
    wins and scanning resumes at the end of its span.

    Example:
        >>> scanner = CallSiteScanner()
        >>> [site.key for site in scanner.scan('m.title(); m["nav.home"]()')]
        ['title', 'nav.home']
    """

    __slots__ = ("_accessor", "_rules")

    def __init__(
        self,
        accessor: str = DEFAULT_ACCESSOR,
        rules: tuple[CallRule, ...] = CALL_RULES,
    ) -> None:
        """Initialize scanner.

        Args:
            accessor: Identifier the message module is bound to
            rules: Call rules to try at each accessor occurrence

        Raises:
            ValueError: If accessor is not an identifier
        """
        if not is_identifier(accessor):
            msg = f"Accessor must be an identifier, got {accessor!r}"
            raise ValueError(msg)
        self._accessor = accessor
        self._rules = rules

    @property
    def accessor(self) -> str:
        """Accessor identifier this scanner matches."""
        return self._accessor

    def scan(self, text: str) -> tuple[CallSite, ...]:
        """Find every call site in text.

        Returns:
            Call sites sorted by start offset, non-overlapping. Empty when
            the text contains no recognizable call.
        """
        sites: list[CallSite] = []
        accessor = self._accessor
        width = len(accessor)
        pos = 0

        while True:
            idx = text.find(accessor, pos)
            if idx < 0:
                break
            # Accessor must start an identifier: "item.x()" is not "m.x()"
            if idx > 0 and _is_identifier_char(text[idx - 1]):
                pos = idx + 1
                continue

            cursor = Cursor(text, idx + width)
            site: CallSite | None = None
            for rule in self._rules:
                site = rule(cursor, idx)
                if site is not None:
                    break

            if site is None:
                pos = idx + 1
                continue
            sites.append(site)
            pos = site.end

        return tuple(sites)


def scan(text: str, accessor: str = DEFAULT_ACCESSOR) -> tuple[CallSite, ...]:
    """Scan text for message call sites with the default rules.

    Example:
        >>> [(s.key, s.arguments_text) for s in scan("m.greet({ name })")]
        [('greet', '{ name }')]
    """
    return CallSiteScanner(accessor).scan(text)
