"""Key selection and call formatting for extraction.

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Container, Iterator

from coolname import generate_slug

from msglens.constants import (
    DEFAULT_ACCESSOR,
    KEY_GENERATION_ATTEMPTS,
    KEY_SEPARATOR,
    KEY_WORD_COUNT,
)
from msglens.enums import Interpolation
from msglens.localization.types import LocaleDocument, MessageKey
from msglens.scanner import is_identifier

logger = logging.getLogger(__name__)

__all__ = [
    "find_key_for_value",
    "format_call_expression",
    "generate_unique_key",
    "iter_string_leaves",
    "random_word_key",
    "strip_matching_quotes",
]

_QUOTE_CHARS = ("\"", "'", "`")


def strip_matching_quotes(text: str) -> str:
    """Remove one layer of matching outer quotes.

    Example:
        >>> strip_matching_quotes('"Hello"')
        'Hello'
        >>> strip_matching_quotes("'Hello\"")  # mismatched
        '\'Hello"'
        >>> strip_matching_quotes("`a`")
        'a'
    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTE_CHARS:
        return text[1:-1]
    return text


def iter_string_leaves(
    document: LocaleDocument, prefix: str = ""
) -> Iterator[tuple[MessageKey, str]]:
    """Yield (dotted key, value) for every string leaf, depth-first.

    Traversal follows document insertion order. Variant lists and other
    non-object values are not descended into.
    """
    for name, value in document.items():
        key = f"{prefix}{KEY_SEPARATOR}{name}" if prefix else name
        if isinstance(value, str):
            yield key, value
        elif isinstance(value, dict):
            yield from iter_string_leaves(value, key)


def find_key_for_value(document: LocaleDocument | None, text: str) -> MessageKey | None:
    """Find an existing key whose string value equals text.

    When several keys hold the same string, the first one in depth-first
    insertion order wins.

    Example:
        >>> find_key_for_value({"a": {"b": "Hi"}, "c": "Hi"}, "Hi")
        'a.b'
    """
    if document is None:
        return None
    for key, value in iter_string_leaves(document):
        if value == text:
            return key
    return None


def random_word_key() -> MessageKey:
    """Generate a lowercase ``adjective_noun`` key.

    Example:
        >>> random_word_key()  # doctest: +SKIP
        'shiny_tortoise'
    """
    return generate_slug(KEY_WORD_COUNT).replace("-", "_")


def generate_unique_key(
    existing: Container[str],
    *,
    word_source: Callable[[], str] = random_word_key,
    clock: Callable[[], float] = time.time,
) -> MessageKey:
    """Generate a key not present in existing.

    Tries ``KEY_GENERATION_ATTEMPTS`` random keys; if every one collides,
    appends an epoch-milliseconds suffix to a fresh one.

    Args:
        existing: Keys already used in the base locale
        word_source: Random key generator
        clock: Seconds since the epoch (for the suffix)
    """
    for _ in range(KEY_GENERATION_ATTEMPTS):
        key = word_source()
        if is_identifier(key) and key not in existing:
            return key
    key = f"{word_source()}_{int(clock() * 1000)}"
    logger.debug("Random keys collided %d times; using %s", KEY_GENERATION_ATTEMPTS, key)
    return key


def format_call_expression(
    key: MessageKey,
    interpolation: Interpolation = Interpolation.CODE,
    accessor: str = DEFAULT_ACCESSOR,
) -> str:
    """Build the source text that replaces an extracted selection.

    Example:
        >>> format_call_expression("hello")
        'm.hello()'
        >>> format_call_expression("login.email", Interpolation.TEMPLATE)
        '{m["login.email"]()}'
    """
    if is_identifier(key):
        call = f"{accessor}.{key}()"
    else:
        call = f'{accessor}["{key}"]()'
    if interpolation == Interpolation.TEMPLATE:
        return f"{{{call}}}"
    return call

