"""Lexical scanning of source files for message call sites.

Python 3.13+. Zero external dependencies.
"""

from .cursor import Cursor, ParseResult, compute_line_col
from .lexer import CALL_RULES, CallRule, CallSiteScanner, is_identifier, scan
from .sites import CallSite

__all__ = [
    "CALL_RULES",
    "CallRule",
    "CallSite",
    "CallSiteScanner",
    "Cursor",
    "ParseResult",
    "compute_line_col",
    "is_identifier",
    "scan",
]
