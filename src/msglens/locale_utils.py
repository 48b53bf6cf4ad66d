"""Locale code utilities.

Centralizes locale code validation and normalization used by the settings
surface, the locale-data path resolver and the locale picker. Display names
come from Babel's CLDR data.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING

from msglens.constants import LOCALE_CODE_PATTERN

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "describe_locale",
    "get_babel_locale",
    "is_safe_locale_segment",
    "is_valid_locale_code",
    "normalize_locale",
]

_LOCALE_CODE_RE = re.compile(LOCALE_CODE_PATTERN)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def is_valid_locale_code(locale_code: str) -> bool:
    """Check a locale override against the accepted "en" / "en-US" shape.

    Example:
        >>> is_valid_locale_code("pt-BR")
        True
        >>> is_valid_locale_code("pt_br")
        False
    """
    return _LOCALE_CODE_RE.fullmatch(locale_code) is not None


def is_safe_locale_segment(locale_code: str) -> bool:
    """Check that a locale code can be substituted into a path template.

    Configured locales are not restricted to the override pattern (inlang
    projects use codes such as "zh-Hant"), but they must not contain path
    separators or traversal sequences.

    Example:
        >>> is_safe_locale_segment("zh-Hant")
        True
        >>> is_safe_locale_segment("../secrets")
        False
    """
    if not locale_code or locale_code != locale_code.strip():
        return False
    if ".." in locale_code:
        return False
    return "/" not in locale_code and "\\" not in locale_code


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def describe_locale(locale_code: str, display_locale: str = "en") -> str:
    """Return a human-readable label for a locale code.

    Used by the locale picker and the CLI. Unknown or malformed codes are
    returned unchanged rather than raising, since configured locales come
    from user files.

    Args:
        locale_code: Locale to describe
        display_locale: Language the label is written in

    Returns:
        Label such as "es (Spanish)", or the bare code if Babel cannot describe it

    Example:
        >>> describe_locale("es")
        'es (Spanish)'
        >>> describe_locale("xx-unknown")
        'xx-unknown'
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(locale_code)
        name = locale.get_display_name(normalize_locale(display_locale))
    except (UnknownLocaleError, ValueError, TypeError):
        return locale_code
    if not name:
        return locale_code
    return f"{locale_code} ({name})"
