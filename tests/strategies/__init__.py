"""Hypothesis strategies for msglens property-based testing.

Strategies are organized by domain:

- source: identifiers, message keys, call expressions and source texts
- locales: locale codes, locale lists and locale documents

Usage:
    from tests.strategies import source_texts, locale_documents
    from tests.strategies.source import call_expressions
    from tests.strategies.locales import override_locale_codes

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - call_expressions, source_texts
    - locale_lists, locale_documents
"""

from .locales import (
    LOCALE_POOL,
    display_values,
    locale_documents,
    locale_lists,
    override_locale_codes,
    variant_lists,
)
from .source import (
    FILLER_CHARS,
    IDENTIFIER_FIRST_CHARS,
    IDENTIFIER_REST_CHARS,
    arbitrary_source,
    argument_texts,
    call_expressions,
    identifiers,
    message_keys,
    source_texts,
)

__all__ = [
    "FILLER_CHARS",
    "IDENTIFIER_FIRST_CHARS",
    "IDENTIFIER_REST_CHARS",
    "LOCALE_POOL",
    "arbitrary_source",
    "argument_texts",
    "call_expressions",
    "display_values",
    "identifiers",
    "locale_documents",
    "locale_lists",
    "message_keys",
    "override_locale_codes",
    "source_texts",
    "variant_lists",
]
