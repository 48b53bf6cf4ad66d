"""Host-facing document and annotation-sink interfaces.

The sync controller does not own editor state. Hosts hand it documents that
satisfy ``TrackedDocument`` and receive results through an
``AnnotationSink``. ``SourceDocument`` is a plain implementation used by the
terminal host and by tests.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from msglens.constants import SUPPORTED_LANGUAGE_KINDS

if TYPE_CHECKING:
    from msglens.resolution import ResolutionResult

__all__ = [
    "AnnotationSink",
    "SourceDocument",
    "TrackedDocument",
    "is_supported_document",
]


class TrackedDocument(Protocol):
    """An open source document as seen by the sync controller.

    ``text`` must always return the latest content; cycles read it at the
    moment they run, never at the moment the triggering event fired.
    """

    @property
    def doc_id(self) -> str:
        """Stable identity of the document (e.g., its URI)."""
        ...

    @property
    def language_kind(self) -> str:
        """Host language identifier ("javascript", "typescript", "svelte", ...)."""
        ...

    @property
    def text(self) -> str:
        """Current document content."""
        ...

    @property
    def project_root(self) -> Path | None:
        """Root of the project containing the document, if any."""
        ...

    @property
    def path(self) -> Path | None:
        """File system path of the document, if it has one."""
        ...


class AnnotationSink(Protocol):
    """Receiver of classified results (decoration renderer, key list UI)."""

    def publish(self, document: TrackedDocument, results: Sequence[ResolutionResult]) -> None:
        """Replace the annotations shown for document."""
        ...

    def clear(self, document: TrackedDocument | None) -> None:
        """Remove annotations for document, or the whole view if None."""
        ...


@dataclass(slots=True)
class SourceDocument:
    """Mutable in-memory document.

    Example:
        >>> doc = SourceDocument("file:///app/src/a.ts", "typescript", "m.hi()")
        >>> doc.text = "m.hello()"
    """

    doc_id: str
    language_kind: str
    text: str
    project_root: Path | None = None
    path: Path | None = None

    @classmethod
    def from_path(
        cls, path: Path, language_kind: str, project_root: Path | None = None
    ) -> SourceDocument:
        """Read a document from disk.

        Raises:
            OSError: If the file cannot be read
        """
        return cls(
            doc_id=path.resolve().as_uri(),
            language_kind=language_kind,
            text=path.read_text(encoding="utf-8"),
            project_root=project_root,
            path=path,
        )


def is_supported_document(document: TrackedDocument | None) -> bool:
    """Check whether a document's kind has recognizable call syntax."""
    return document is not None and document.language_kind in SUPPORTED_LANGUAGE_KINDS
