"""Shared constants for msglens.

This module provides centralized configuration constants used across the
scanner, localization, sync and extraction packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locale defaults: fallback locale and locale-data path template
- Project configuration: location and field names of the inlang settings file
- Call syntax: accessor identifier and key separator
- Sync: debounce delay bounds
- Extraction: key generation and write settling

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    "DEFAULT_PATH_TEMPLATE",
    "LOCALE_PLACEHOLDER",
    "LOCALE_CODE_PATTERN",
    # Project configuration
    "PROJECT_SETTINGS_DIR",
    "PROJECT_SETTINGS_FILE",
    "MESSAGE_FORMAT_PLUGIN_KEY",
    # Call syntax
    "DEFAULT_ACCESSOR",
    "KEY_SEPARATOR",
    "VARIANT_MARKER",
    # Document kinds
    "SUPPORTED_LANGUAGE_KINDS",
    "TEMPLATE_LANGUAGE_KINDS",
    # Sync
    "DEFAULT_UPDATE_DELAY_MS",
    "MIN_UPDATE_DELAY_MS",
    "MAX_UPDATE_DELAY_MS",
    # Extraction
    "KEY_GENERATION_ATTEMPTS",
    "KEY_WORD_COUNT",
    "EXTRACTION_SETTLE_DELAY",
    "JSON_INDENT",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Last tier of the active-locale priority chain (override > baseLocale > this).
DEFAULT_LOCALE: str = "en"

# Used when the project settings carry no pathPattern.
DEFAULT_PATH_TEMPLATE: str = "./messages/{locale}.json"

LOCALE_PLACEHOLDER: str = "{locale}"

# Accepted shape for a user locale override: "en" or "en-US".
LOCALE_CODE_PATTERN: str = r"^[a-z]{2}(-[A-Z]{2})?$"

# ============================================================================
# PROJECT CONFIGURATION
# ============================================================================

PROJECT_SETTINGS_DIR: str = "project.inlang"
PROJECT_SETTINGS_FILE: str = "settings.json"

# Settings section holding the locale-data "pathPattern".
MESSAGE_FORMAT_PLUGIN_KEY: str = "plugin.inlang.messageFormat"

# ============================================================================
# CALL SYNTAX
# ============================================================================

DEFAULT_ACCESSOR: str = "m"

# Joins nested locale-data segments: "login.email" -> {"login": {"email": ...}}
KEY_SEPARATOR: str = "."

# Appended to a value projected from a variant list (lossy, display only).
VARIANT_MARKER: str = "*"

# ============================================================================
# DOCUMENT KINDS
# ============================================================================

SUPPORTED_LANGUAGE_KINDS: frozenset[str] = frozenset({"javascript", "typescript", "svelte"})

# Kinds whose extracted call is wrapped as a template interpolation: {m.key()}
TEMPLATE_LANGUAGE_KINDS: frozenset[str] = frozenset({"svelte"})

# ============================================================================
# SYNC
# ============================================================================

DEFAULT_UPDATE_DELAY_MS: int = 300
MIN_UPDATE_DELAY_MS: int = 100
MAX_UPDATE_DELAY_MS: int = 2000

# ============================================================================
# EXTRACTION
# ============================================================================

# Generated keys are retried this many times against base-locale collisions
# before a timestamp suffix is appended.
KEY_GENERATION_ATTEMPTS: int = 10

# Words per generated key: "adjective_noun".
KEY_WORD_COUNT: int = 2

# Seconds between the base-locale write and the other-locale writes.
EXTRACTION_SETTLE_DELAY: float = 2.0

JSON_INDENT: int = 2
