"""Terminal host for msglens.

Usage:
    msglens annotate src/routes/+page.svelte
    msglens annotate src/lib/api.ts --locale es
    msglens keys src/routes/+page.svelte
    msglens extract src/routes/+page.svelte --start 120 --end 131 --template
    msglens locate es login.email

Exit Codes:
    0   Success
    1   Unresolved call sites (annotate) or key not found (locate)
    2   Invalid arguments, unreadable files or failed extraction

Python 3.13+.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from msglens.constants import PROJECT_SETTINGS_DIR
from msglens.diagnostics import LocaleDataError, MsglensError
from msglens.enums import Interpolation
from msglens.extraction import ExtractionCoordinator
from msglens.inspection import build_key_overview, find_key_location
from msglens.locale_utils import describe_locale
from msglens.localization.store import TranslationStore
from msglens.render import annotation_label
from msglens.resolution import resolve_source
from msglens.scanner import CallSiteScanner, compute_line_col
from msglens.settings import Settings

logger = logging.getLogger(__name__)

__all__ = ["find_project_root", "language_kind_for", "main"]

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2

_LANGUAGE_KINDS = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".svelte": "svelte",
}


def language_kind_for(path: Path) -> str:
    """Host language kind for a file, from its suffix.

    Example:
        >>> language_kind_for(Path("src/routes/+page.svelte"))
        'svelte'
        >>> language_kind_for(Path("README.md"))
        'md'
    """
    suffix = path.suffix.lower()
    return _LANGUAGE_KINDS.get(suffix, suffix.lstrip("."))


def find_project_root(path: Path) -> Path:
    """Nearest ancestor of path holding a project settings directory.

    Falls back to the current working directory.
    """
    for candidate in path.resolve().parents:
        if (candidate / PROJECT_SETTINGS_DIR).is_dir():
            return candidate
    return Path.cwd()


def _error(message: str) -> None:
    print(f"[ERROR] {message}", file=sys.stderr)


def _read_source(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _error(f"Cannot read file: {e}")
        return None


def _cmd_annotate(args: argparse.Namespace) -> int:
    text = _read_source(args.file)
    if text is None:
        return EXIT_ERROR
    try:
        settings = Settings(locale_override=args.locale or "", accessor=args.accessor)
    except MsglensError as e:
        _error(str(e))
        return EXIT_ERROR

    root = args.root or find_project_root(args.file)
    results = resolve_source(
        text,
        root,
        TranslationStore(),
        override=settings.locale_override,
        scanner=CallSiteScanner(settings.accessor),
    )
    for result in results:
        line, column = compute_line_col(text, result.call_site.start)
        print(f"{line}:{column} {result.key} → {annotation_label(result)}")

    unresolved = sum(1 for result in results if result.is_unresolved)
    if unresolved:
        logger.info("%d of %d call sites unresolved", unresolved, len(results))
        return EXIT_FINDINGS
    return EXIT_OK


def _cmd_keys(args: argparse.Namespace) -> int:
    text = _read_source(args.file)
    if text is None:
        return EXIT_ERROR
    root = args.root or find_project_root(args.file)
    for overview in build_key_overview(text, root, TranslationStore()):
        print(overview.key)
        for entry in overview.values:
            print(f"  {describe_locale(entry.locale)}: {entry.value}")
    return EXIT_OK


def _cmd_extract(args: argparse.Namespace) -> int:
    text = _read_source(args.file)
    if text is None:
        return EXIT_ERROR
    if not 0 <= args.start < args.end <= len(text):
        _error(f"Range [{args.start}, {args.end}) is outside the file ({len(text)} characters)")
        return EXIT_ERROR

    root = args.root or find_project_root(args.file)
    try:
        coordinator = ExtractionCoordinator(settle_delay=args.settle_delay)
        outcome = asyncio.run(
            coordinator.extract(
                text[args.start : args.end],
                root,
                language_kind_for(args.file),
                interpolation=args.interpolation,
            )
        )
    except (ValueError, MsglensError) as e:
        _error(str(e))
        return EXIT_ERROR

    updated = text[: args.start] + outcome.replacement + text[args.end :]
    try:
        args.file.write_text(updated, encoding="utf-8")
    except OSError as e:
        _error(f"Cannot write file: {e}")
        return EXIT_ERROR

    verb = "Reused" if outcome.reused else "Created"
    print(f"{verb} key '{outcome.key}': {outcome.replacement}")
    for path in outcome.written_paths:
        print(f"  wrote {path}")
    return EXIT_OK


def _cmd_locate(args: argparse.Namespace) -> int:
    root = args.root or Path.cwd()
    try:
        path, location = find_key_location(root, args.locale, args.key, TranslationStore())
    except LocaleDataError as e:
        _error(str(e))
        return EXIT_FINDINGS
    print(f"{path}:{location.line}:{location.column}")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msglens",
        description="Show and manage the translated values of i18n message calls.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the value of every message call in a component:
  msglens annotate src/routes/+page.svelte

  # Move a string literal into the locale files:
  msglens extract src/routes/+page.svelte --start 120 --end 131
""",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    annotate = subparsers.add_parser("annotate", help="Print the value of every call site")
    annotate.add_argument("file", type=Path, help="Source file to scan")
    annotate.add_argument("--root", type=Path, help="Project root (default: auto-detect)")
    annotate.add_argument("--locale", help="Active locale override (e.g. 'es', 'pt-BR')")
    annotate.add_argument("--accessor", default="m", help="Message module accessor name")
    annotate.set_defaults(handler=_cmd_annotate)

    keys = subparsers.add_parser("keys", help="List keys used by a file with their values")
    keys.add_argument("file", type=Path, help="Source file to scan")
    keys.add_argument("--root", type=Path, help="Project root (default: auto-detect)")
    keys.set_defaults(handler=_cmd_keys)

    extract = subparsers.add_parser("extract", help="Extract a text range into the locale files")
    extract.add_argument("file", type=Path, help="Source file to rewrite")
    extract.add_argument("--start", type=int, required=True, help="Range start offset")
    extract.add_argument("--end", type=int, required=True, help="Range end offset (exclusive)")
    extract.add_argument("--root", type=Path, help="Project root (default: auto-detect)")
    form = extract.add_mutually_exclusive_group()
    form.add_argument(
        "--template",
        dest="interpolation",
        action="store_const",
        const=Interpolation.TEMPLATE,
        help="Write {m.key()}",
    )
    form.add_argument(
        "--code",
        dest="interpolation",
        action="store_const",
        const=Interpolation.CODE,
        help="Write m.key()",
    )
    extract.add_argument(
        "--settle-delay",
        type=float,
        default=0.0,
        help="Seconds between the base-locale write and the other writes (default: 0)",
    )
    extract.set_defaults(handler=_cmd_extract, interpolation=None)

    locate = subparsers.add_parser("locate", help="Print where a key is defined")
    locate.add_argument("locale", help="Locale whose file to search")
    locate.add_argument("key", help="Message key")
    locate.add_argument("--root", type=Path, help="Project root (default: current directory)")
    locate.set_defaults(handler=_cmd_locate)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return int(args.handler(args))


if __name__ == "__main__":
    sys.exit(main())
