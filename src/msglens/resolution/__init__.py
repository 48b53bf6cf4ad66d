"""Call-site resolution with cross-locale fallback search.

Python 3.13+.
"""

from .engine import DocumentProvider, ResolutionEngine
from .results import FallbackInfo, ResolutionResult
from .source import resolve_source

__all__ = [
    "DocumentProvider",
    "FallbackInfo",
    "ResolutionEngine",
    "ResolutionResult",
    "resolve_source",
]
