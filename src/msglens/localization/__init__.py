"""Locale configuration, locale-data loading and writing.

Submodules:
    types    - PEP 695 type aliases (LocaleCode, MessageKey, PathTemplate, LocaleDocument)
    project  - ProjectLocaleConfig, LocaleConfigResolver (active locale, paths)
    loading  - LocaleDataLoader protocol, PathLocaleDataLoader, LoadResult, LoadSummary
    store    - TranslationStore (cached documents and key lookup)
    writer   - Order-preserving locale-file writes

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from msglens.enums import LoadStatus
from msglens.localization.loading import (
    LoadResult,
    LoadSummary,
    LocaleDataLoader,
    PathLocaleDataLoader,
)
from msglens.localization.project import (
    LocaleConfigResolver,
    ProjectLocaleConfig,
    load_project_config,
)
from msglens.localization.store import TranslationStore, project_value
from msglens.localization.types import LocaleCode, LocaleDocument, MessageKey, PathTemplate
from msglens.localization.writer import (
    read_locale_document,
    set_nested_value,
    write_locale_document,
)

__all__ = [
    # Configuration
    "LocaleConfigResolver",
    "ProjectLocaleConfig",
    "load_project_config",
    # Store
    "TranslationStore",
    "project_value",
    # Loader protocol and implementations
    "LocaleDataLoader",
    "PathLocaleDataLoader",
    # Load tracking
    "LoadStatus",
    "LoadResult",
    "LoadSummary",
    # Writes
    "read_locale_document",
    "set_nested_value",
    "write_locale_document",
    # Type aliases for host code annotations
    "LocaleCode",
    "LocaleDocument",
    "MessageKey",
    "PathTemplate",
]
