"""Incremental synchronization of annotations with document and file events.

Submodules:
    documents  - TrackedDocument / AnnotationSink protocols, SourceDocument
    relevance  - DocumentChange and the edit-relevance heuristic
    scheduler  - DebounceScheduler (sole owner of per-document timers)
    controller - SyncController (event handling and resolution cycles)

Python 3.13+.
"""

from .controller import SyncController
from .documents import AnnotationSink, SourceDocument, TrackedDocument, is_supported_document
from .relevance import DocumentChange, is_relevant_change
from .scheduler import DebounceScheduler, TimerFactory, TimerHandle, loop_timer_factory

__all__ = [
    "AnnotationSink",
    "DebounceScheduler",
    "DocumentChange",
    "SourceDocument",
    "SyncController",
    "TimerFactory",
    "TimerHandle",
    "TrackedDocument",
    "is_relevant_change",
    "is_supported_document",
    "loop_timer_factory",
]
