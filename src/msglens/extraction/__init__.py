"""Extraction of selected literals into locale keys.

Python 3.13+.
"""

from .coordinator import (
    ExtractionCoordinator,
    ExtractionOutcome,
    ExtractionPlan,
    default_interpolation,
)
from .keys import (
    find_key_for_value,
    format_call_expression,
    generate_unique_key,
    random_word_key,
    strip_matching_quotes,
)

__all__ = [
    "ExtractionCoordinator",
    "ExtractionOutcome",
    "ExtractionPlan",
    "default_interpolation",
    "find_key_for_value",
    "format_call_expression",
    "generate_unique_key",
    "random_word_key",
    "strip_matching_quotes",
]
