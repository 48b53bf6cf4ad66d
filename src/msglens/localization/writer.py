"""Order-preserving locale-data writes.

Only the extraction path writes locale data. Existing keys keep their
position; new keys are appended. Files are written as UTF-8 JSON with
2-space indentation, non-ASCII characters kept as-is, and a trailing
newline.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from msglens.constants import JSON_INDENT, KEY_SEPARATOR
from msglens.localization.types import LocaleDocument, MessageKey

logger = logging.getLogger(__name__)

__all__ = [
    "read_locale_document",
    "serialize_locale_document",
    "set_nested_value",
    "write_locale_document",
]


def set_nested_value(document: LocaleDocument, key: MessageKey, value: Any) -> None:
    """Set a (possibly dotted) key in place, creating intermediate objects.

    An intermediate segment holding a non-object value is replaced by an
    object. Existing keys are never reordered; new keys are appended.

    Example:
        >>> doc = {"a": 1}
        >>> set_nested_value(doc, "login.email", "Email")
        >>> doc
        {'a': 1, 'login': {'email': 'Email'}}
    """
    segments = key.split(KEY_SEPARATOR)
    node = document
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value


def serialize_locale_document(document: LocaleDocument) -> str:
    """Serialize a document the way locale files are stored on disk."""
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False) + "\n"


def read_locale_document(path: Path) -> LocaleDocument:
    """Read a locale file for modification.

    A missing file starts from an empty document. A file that exists but is
    not a JSON object is never overwritten.

    Raises:
        OSError: If the file exists but cannot be read
        ValueError: If the file is not valid JSON or its root is not an object
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("Creating new locale file %s", path)
        return {}
    document = json.loads(text)
    if not isinstance(document, dict):
        msg = f"Locale file root must be a JSON object, got {type(document).__name__}"
        raise ValueError(msg)
    return document


def write_locale_document(path: Path, document: LocaleDocument) -> None:
    """Write a document to path, creating parent directories.

    Raises:
        OSError: If the directory or file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_locale_document(document), encoding="utf-8")
    logger.debug("Wrote %s", path)
