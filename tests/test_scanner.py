"""Tests for the call-site scanner: cursor, call rules and CallSiteScanner."""

from __future__ import annotations

import pytest

from msglens.enums import KeyForm
from msglens.scanner import (
    CALL_RULES,
    CallSite,
    CallSiteScanner,
    Cursor,
    compute_line_col,
    is_identifier,
    scan,
)
from msglens.scanner.lexer import parse_identifier


class TestCursor:
    """Immutable cursor primitives."""

    def test_advance_returns_new_cursor(self) -> None:
        """advance() leaves the original cursor untouched."""
        cursor = Cursor("abc", 0)
        moved = cursor.advance()

        assert cursor.pos == 0
        assert moved.pos == 1
        assert moved.current == "b"

    def test_advance_clamps_at_eof(self) -> None:
        """Advancing past the end stops at EOF."""
        cursor = Cursor("ab", 1).advance(5)

        assert cursor.is_eof
        assert cursor.pos == 2

    def test_current_at_eof_raises(self) -> None:
        """Reading past the end raises EOFError."""
        with pytest.raises(EOFError):
            _ = Cursor("", 0).current

    def test_peek_beyond_eof_is_none(self) -> None:
        """peek() past the end returns None."""
        assert Cursor("a", 0).peek(1) is None
        assert Cursor("ab", 0).peek(1) == "b"

    def test_skip_whitespace_includes_line_breaks(self) -> None:
        """Whitespace skipping crosses newlines and tabs."""
        assert Cursor(" \n\t\r(", 0).skip_whitespace().current == "("

    def test_expect(self) -> None:
        """expect() consumes only a matching character."""
        assert Cursor("(x", 0).expect("(") == Cursor("(x", 1)
        assert Cursor("(x", 0).expect("[") is None
        assert Cursor("", 0).expect("(") is None

    def test_compute_line_col(self) -> None:
        """Line and column are 1-indexed."""
        assert compute_line_col("abc", 0) == (1, 1)
        assert compute_line_col("a\nbc", 3) == (2, 2)
        assert Cursor("x\n\ny", 3).compute_line_col() == (3, 1)


class TestIdentifiers:
    """Identifier recognition shared by keys and accessors."""

    @pytest.mark.parametrize("name", ["m", "hello_world", "$t", "_x1", "Title"])
    def test_valid(self, name: str) -> None:
        """ASCII identifiers with _ and $ are accepted."""
        assert is_identifier(name)

    @pytest.mark.parametrize("name", ["", "1abc", "login.email", "a-b", "héllo", "a b"])
    def test_invalid(self, name: str) -> None:
        """Digits first, dots, hyphens, non-ASCII and spaces are rejected."""
        assert not is_identifier(name)

    def test_parse_identifier_stops_at_non_identifier(self) -> None:
        """parse_identifier consumes the longest identifier prefix."""
        result = parse_identifier(Cursor("abc_1(x)", 0))

        assert result is not None
        assert result.value == "abc_1"
        assert result.cursor.pos == 5


class TestDotForm:
    """m.key(args)"""

    def test_simple_call(self) -> None:
        """A plain call produces one flat site spanning the whole expression."""
        sites = scan("m.hello()")

        assert sites == (CallSite("hello", "", 0, 9, KeyForm.FLAT),)

    def test_arguments_are_trimmed_raw_text(self) -> None:
        """Arguments are captured verbatim, trimmed, unparsed."""
        (site,) = scan("m.greet(  { name: user.name }  )")

        assert site.arguments_text == "{ name: user.name }"
        assert site.has_arguments

    def test_whitespace_before_parenthesis(self) -> None:
        """Whitespace (including newlines) is allowed before the parenthesis."""
        text = "m.title \n ( )"
        (site,) = scan(text)

        assert site.key == "title"
        assert site.end == len(text)
        assert not site.has_arguments

    def test_whitespace_after_dot_is_not_a_call(self) -> None:
        """The key must follow the dot directly."""
        assert scan("m. title()") == ()

    def test_arguments_end_at_first_closing_parenthesis(self) -> None:
        """Nested parentheses are not balanced."""
        (site,) = scan("m.a(fn(x))")

        assert site.arguments_text == "fn(x"
        assert site.end == len("m.a(fn(x)")

    def test_unterminated_call_is_skipped(self) -> None:
        """A call without a closing parenthesis yields nothing."""
        assert scan("m.hello(") == ()
        assert scan("m.hello") == ()

    def test_dollar_and_underscore_keys(self) -> None:
        """Keys may contain $ and _."""
        assert [s.key for s in scan("m.$count() m._private()")] == ["$count", "_private"]


class TestBracketForm:
    """m["key"](args) and m['key'](args)"""

    def test_double_quoted_key(self) -> None:
        """Dotted keys are written in bracket form."""
        (site,) = scan('m["login.email"]()')

        assert site.key == "login.email"
        assert site.key_form == KeyForm.BRACKETED
        assert site.start == 0
        assert site.end == len('m["login.email"]()')

    def test_single_quoted_key_with_inner_whitespace(self) -> None:
        """Whitespace is allowed inside the brackets and before the call."""
        (site,) = scan("m[ 'nav.home' ] ( id )")

        assert site.key == "nav.home"
        assert site.arguments_text == "id"

    def test_other_quote_kind_inside_key(self) -> None:
        """A quote of the other kind is part of the key."""
        (site,) = scan('m["it\'s"]()')

        assert site.key == "it's"

    def test_escaped_quote_is_kept_as_written(self) -> None:
        """Escape sequences are not decoded."""
        (site,) = scan('m["a\\"b"]()')

        assert site.key == 'a\\"b'

    def test_newline_inside_key_is_rejected(self) -> None:
        """A key literal may not span lines."""
        assert scan('m["a\nb"]()') == ()

    def test_unterminated_key_is_rejected(self) -> None:
        """Missing closing quote or bracket yields nothing."""
        assert scan('m["abc') == ()
        assert scan('m["abc"()') == ()
        assert scan('m["abc"]') == ()


class TestScannerBoundaries:
    """Accessor boundaries, ordering and custom accessors."""

    def test_accessor_inside_identifier_is_ignored(self) -> None:
        """item.x() and $m.x() are not message calls."""
        assert scan("item.x() $m.y() _m.z() m2.w()") == ()

    def test_accessor_after_punctuation_matches(self) -> None:
        """Punctuation before the accessor is a valid boundary."""
        assert [s.key for s in scan("(m.a()) {m.b()} x=m.c()")] == ["a", "b", "c"]

    def test_sites_are_ordered_and_non_overlapping(self) -> None:
        """Scanning resumes after each matched call."""
        sites = scan('m.a(m.b()) m["c"]()')

        assert [s.key for s in sites] == ["a", "c"]
        assert sites[0].end <= sites[1].start

    def test_offsets_are_character_offsets(self) -> None:
        """Non-ASCII text before a call counts one per character."""
        text = "é€ m.a()"
        (site,) = scan(text)

        assert text[site.start : site.end] == "m.a()"

    def test_custom_accessor(self) -> None:
        """Only the configured accessor is recognized."""
        scanner = CallSiteScanner("t")

        assert scanner.accessor == "t"
        assert [s.key for s in scanner.scan("t.x() m.y()")] == ["x"]

    @pytest.mark.parametrize("accessor", ["", "1m", "m.x", "a b"])
    def test_invalid_accessor_raises(self, accessor: str) -> None:
        """Accessors must be identifiers."""
        with pytest.raises(ValueError, match="Accessor must be an identifier"):
            CallSiteScanner(accessor)

    def test_no_calls(self) -> None:
        """Text without calls yields an empty tuple."""
        assert scan("") == ()
        assert scan("const m = 1;") == ()

    def test_line_col(self) -> None:
        """Sites report 1-indexed line and column of their start."""
        text = "x\n  m.a()"
        (site,) = scan(text)

        assert site.line_col(text) == (2, 3)


class TestRuleRegistry:
    """Adding a call form is a single-point extension."""

    def test_extra_rule(self) -> None:
        """A custom rule is tried after the built-in ones."""

        def match_colon_form(cursor: Cursor, start: int) -> CallSite | None:
            after = cursor.expect(":")
            if after is None:
                return None
            ident = parse_identifier(after)
            if ident is None:
                return None
            return CallSite(ident.value, "", start, ident.cursor.pos, KeyForm.FLAT)

        scanner = CallSiteScanner(rules=(*CALL_RULES, match_colon_form))

        assert [s.key for s in scanner.scan("m:hello m.world()")] == ["hello", "world"]

    def test_empty_registry_matches_nothing(self) -> None:
        """Without rules nothing is recognized."""
        assert CallSiteScanner(rules=()).scan("m.a()") == ()


class TestCallSiteValidation:
    """CallSite offset invariants."""

    def test_negative_start_rejected(self) -> None:
        """start must be non-negative."""
        with pytest.raises(ValueError, match="start"):
            CallSite("k", "", -1, 3, KeyForm.FLAT)

    def test_empty_span_rejected(self) -> None:
        """end must follow start."""
        with pytest.raises(ValueError, match="end"):
            CallSite("k", "", 5, 5, KeyForm.FLAT)
