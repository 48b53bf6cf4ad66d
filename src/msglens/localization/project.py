"""Project locale configuration and active-locale resolution.

Reads the optional inlang project settings file
(``<root>/project.inlang/settings.json``) and answers the three questions the
rest of msglens asks about a project root: which locale is active, which
locales exist, and where each locale's data file lives.

Priority for the active locale, first match wins:
    1. Explicit user override (non-empty)
    2. ``baseLocale`` from the project settings
    3. ``"en"``

A missing or malformed settings file is never an error; every question
falls through to its default.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Any

from msglens.constants import (
    DEFAULT_LOCALE,
    DEFAULT_PATH_TEMPLATE,
    LOCALE_PLACEHOLDER,
    MESSAGE_FORMAT_PLUGIN_KEY,
    PROJECT_SETTINGS_DIR,
    PROJECT_SETTINGS_FILE,
)
from msglens.diagnostics import ErrorTemplate
from msglens.locale_utils import is_safe_locale_segment
from msglens.localization.types import LocaleCode, PathTemplate

logger = logging.getLogger(__name__)

__all__ = [
    "LocaleConfigResolver",
    "ProjectLocaleConfig",
    "load_project_config",
    "settings_path",
]


@dataclass(frozen=True, slots=True)
class ProjectLocaleConfig:
    """Locale configuration declared by a project.

    Immutable. When the backing file changes the resolver replaces the
    whole object rather than mutating it.

    Attributes:
        base_locale: Source-language locale, or None if not declared
        locales: Declared locales, unique, in declared order
        path_template: Locale-data path template, or None if not declared
    """

    base_locale: LocaleCode | None = None
    locales: tuple[LocaleCode, ...] = ()
    path_template: PathTemplate | None = None


def settings_path(root: Path) -> Path:
    """Location of the project settings file under a project root."""
    return root / PROJECT_SETTINGS_DIR / PROJECT_SETTINGS_FILE


def _parse_locales(value: Any) -> tuple[LocaleCode, ...]:
    if not isinstance(value, list):
        return ()
    seen: dict[str, None] = {}
    for item in value:
        if isinstance(item, str) and item:
            seen.setdefault(item, None)
    return tuple(seen)


def _parse_path_template(settings: dict[str, Any]) -> PathTemplate | None:
    plugin = settings.get(MESSAGE_FORMAT_PLUGIN_KEY)
    if not isinstance(plugin, dict):
        return None
    pattern = plugin.get("pathPattern")
    if not isinstance(pattern, str) or not pattern:
        return None
    if LOCALE_PLACEHOLDER not in pattern:
        logger.warning(
            "Ignoring pathPattern without %s placeholder: %r", LOCALE_PLACEHOLDER, pattern
        )
        return None
    return pattern


def load_project_config(root: Path) -> ProjectLocaleConfig | None:
    """Read the project settings file under root.

    Fields with the wrong type are ignored individually.

    Args:
        root: Project root directory

    Returns:
        Parsed configuration, or None if the file is missing or malformed
    """
    path = settings_path(root)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No project settings at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read project settings %s: %s", path, e)
        return None

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in project settings %s: %s", path, e)
        return None

    if not isinstance(raw, dict):
        logger.warning("Ignoring project settings %s: root is not an object", path)
        return None

    base = raw.get("baseLocale")
    config = ProjectLocaleConfig(
        base_locale=base if isinstance(base, str) and base else None,
        locales=_parse_locales(raw.get("locales")),
        path_template=_parse_path_template(raw),
    )
    logger.info(
        "Loaded project settings from %s (base=%s, %d locales)",
        path,
        config.base_locale,
        len(config.locales),
    )
    return config


class LocaleConfigResolver:
    """Resolve active locale, locale list and locale-data paths per project root.

    Project configuration is cached per root. Call ``invalidate`` when the
    settings file changes; the next query reloads it. The cache is protected
    by an RLock.

    Example:
        >>> resolver = LocaleConfigResolver()
        >>> resolver.resolve_active_locale(Path("."), override="")
        'en'
        >>> resolver.resolve_locale_path(Path("/app"), "es")
        PosixPath('/app/messages/es.json')
    """

    __slots__ = ("_configs", "_lock")

    def __init__(self) -> None:
        """Initialize resolver with an empty cache."""
        self._configs: dict[Path, ProjectLocaleConfig | None] = {}
        self._lock = RLock()

    def config_for(self, root: Path) -> ProjectLocaleConfig | None:
        """Get the (cached) project configuration for root."""
        with self._lock:
            if root not in self._configs:
                self._configs[root] = load_project_config(root)
            return self._configs[root]

    def invalidate(self, root: Path | None = None) -> None:
        """Drop cached configuration for root, or for every root if None."""
        with self._lock:
            if root is None:
                self._configs.clear()
            else:
                self._configs.pop(root, None)

    def resolve_active_locale(self, root: Path | None, override: str = "") -> LocaleCode:
        """Determine the locale used to resolve displayed values.

        Args:
            root: Project root, or None when no project is open
            override: Explicit user override; empty means not set

        Returns:
            Override, else project base locale, else "en"
        """
        if override:
            return override
        if root is not None:
            return self.base_locale(root)
        return DEFAULT_LOCALE

    def base_locale(self, root: Path) -> LocaleCode:
        """Project base locale, ignoring any user override."""
        config = self.config_for(root)
        if config is not None and config.base_locale:
            return config.base_locale
        return DEFAULT_LOCALE

    def resolve_path_template(self, root: Path) -> PathTemplate:
        """Locale-data path template declared by the project, else the default."""
        config = self.config_for(root)
        if config is not None and config.path_template:
            return config.path_template
        return DEFAULT_PATH_TEMPLATE

    def resolve_locale_path(self, root: Path, locale: LocaleCode) -> Path:
        """Resolve the locale-data file path for one locale.

        The template is made relative to the project root: a leading "./"
        or "/" is stripped.

        Raises:
            ValueError: If locale contains path separators or ".."
        """
        if not is_safe_locale_segment(locale):
            raise ValueError(ErrorTemplate.unsafe_locale_path(locale).message)
        # replace() instead of format(): templates may contain other braces
        relative = self.resolve_path_template(root).replace(LOCALE_PLACEHOLDER, locale)
        if relative.startswith("./"):
            relative = relative[2:]
        relative = relative.lstrip("/\\")
        return root / relative

    def available_locales(self, root: Path) -> tuple[LocaleCode, ...]:
        """Locales of the project, in declared order.

        Falls back to the stems of ``*.json`` files in the default
        ``messages/`` directory, sorted, and finally to ``("en",)``.
        """
        config = self.config_for(root)
        if config is not None and config.locales:
            return config.locales

        messages_dir = root / Path(DEFAULT_PATH_TEMPLATE.removeprefix("./")).parent
        try:
            stems = sorted(p.stem for p in messages_dir.glob("*.json") if p.is_file())
        except OSError as e:
            logger.debug("Cannot list %s: %s", messages_dir, e)
            stems = []
        if stems:
            return tuple(stems)
        return (DEFAULT_LOCALE,)

    def is_locale_data_file(self, path: Path, root: Path) -> bool:
        """Check whether path is the data file of one of the project's locales."""
        try:
            target = path.resolve()
        except OSError:
            return False
        for locale in self.available_locales(root):
            try:
                candidate = self.resolve_locale_path(root, locale)
            except ValueError:
                continue
            if candidate.resolve() == target:
                return True
        return False
