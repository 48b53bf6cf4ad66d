"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by host code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import Any

__all__ = [
    "LocaleCode",
    "LocaleDocument",
    "MessageKey",
    "PathTemplate",
]

type MessageKey = str
"""Translation key, flat ('hello_world') or dot-nested ('login.email')."""

type LocaleCode = str
"""Locale code as declared by the project (e.g., 'en', 'pt-BR', 'zh-Hant')."""

type PathTemplate = str
"""Locale-data path template containing a '{locale}' placeholder."""

type LocaleDocument = dict[str, Any]
"""Parsed locale-data JSON object: string leaves, nested objects, variant lists."""
