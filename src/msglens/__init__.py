"""msglens - live translation values for i18n message calls.

Finds message calls such as ``m.hello()`` and ``m["login.email"]()`` in
JavaScript, TypeScript and Svelte source, resolves each against the project's
JSON locale files (with a fallback search across configured locales), and
keeps the results synchronized with a stream of editor events.

Public API:
    CallSiteScanner - Locate message calls in source text
    TranslationStore - Fail-soft, cached locale-data loading and key lookup
    LocaleConfigResolver - Active locale, configured locales and file paths
    ResolutionEngine - Classify call sites (resolved / elsewhere / unresolved)
    SyncController - Debounced, staleness-safe resolution cycles
    ExtractionCoordinator - Move a selected literal into the locale files
    Commands - Change locale, extract selection, open key, refresh
    Settings - User configuration surface

Exceptions:
    MsglensError - Base exception class
    SettingsError - Invalid configuration values
    LocaleDataError - Unusable locale file or key in an explicit operation
    ExtractionError - Failed extraction (partial writes are kept)

Submodules:
    msglens.scanner - Cursor, lexer rules and call sites
    msglens.localization - Project config, loading, caching and writing
    msglens.resolution - Resolution results and engine
    msglens.sync - Controller, debounce scheduler and change relevance
    msglens.extraction - Key generation and extraction writes
    msglens.inspection - Key overview and key navigation
    msglens.render - Annotation labels and severities
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .commands import CommandHost, Commands, TextRange
from .diagnostics import ExtractionError, LocaleDataError, MsglensError, SettingsError
from .enums import Interpolation, KeyForm, ResolutionStatus
from .extraction import ExtractionCoordinator, ExtractionOutcome
from .localization import LocaleConfigResolver, TranslationStore
from .resolution import ResolutionEngine, ResolutionResult, resolve_source
from .scanner import CallSite, CallSiteScanner, scan
from .settings import Settings
from .sync import AnnotationSink, DocumentChange, SourceDocument, SyncController, TrackedDocument

try:
    __version__ = _get_version("msglens")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AnnotationSink",
    "CallSite",
    "CallSiteScanner",
    "CommandHost",
    "Commands",
    "DocumentChange",
    "ExtractionCoordinator",
    "ExtractionError",
    "ExtractionOutcome",
    "Interpolation",
    "KeyForm",
    "LocaleConfigResolver",
    "LocaleDataError",
    "MsglensError",
    "ResolutionEngine",
    "ResolutionResult",
    "ResolutionStatus",
    "Settings",
    "SettingsError",
    "SourceDocument",
    "SyncController",
    "TextRange",
    "TrackedDocument",
    "TranslationStore",
    "__version__",
    "resolve_source",
    "scan",
]
