#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/__init__.py
"""Synchronization between the rich view and the text view.

Components
----------
- source_map: block/line mappings produced by serialization
- controller: the SyncController that propagates edits and resolves clicks
- state: records exchanged with the controller
- scheduler: injected deferred execution (asyncio or virtual clock)
- debounce: trailing-edge debouncer for text edits
- navigation: line arithmetic, rendered-pane lookups and the outline
- surfaces: protocols of the external collaborators

"""

from __future__ import annotations

from typing import Any

from adocsync.sync.debounce import Debouncer
from adocsync.sync.navigation import (
    OutlineItem,
    RenderedPane,
    build_outline,
    count_lines,
    estimate_line,
    line_from_offset,
    line_span,
    offset_from_line,
)
from adocsync.sync.scheduler import AsyncioScheduler, ScheduledTask, Scheduler, VirtualScheduler
from adocsync.sync.source_map import SourceMap, SourceMapRegistry
from adocsync.sync.state import (
    HighlightInfo,
    NavigationRequest,
    RenderedClick,
    Side,
    SyncState,
    TextClick,
    ViewMode,
)
from adocsync.sync.surfaces import MarkupRenderer, RichEditingSurface, TextSurface


def __getattr__(name: str) -> Any:
    """Load the controller on first access.

    The controller depends on the serializer, which itself imports the
    source map from this package, so it cannot be imported eagerly here.
    """
    if name == "SyncController":
        from adocsync.sync.controller import SyncController

        globals()[name] = SyncController
        return SyncController
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "HighlightInfo",
    "MarkupRenderer",
    "NavigationRequest",
    "OutlineItem",
    "RenderedClick",
    "RenderedPane",
    "RichEditingSurface",
    "ScheduledTask",
    "Scheduler",
    "Side",
    "SourceMap",
    "SourceMapRegistry",
    "SyncController",
    "SyncState",
    "TextClick",
    "TextSurface",
    "ViewMode",
    "VirtualScheduler",
    "build_outline",
    "count_lines",
    "estimate_line",
    "line_from_offset",
    "line_span",
    "offset_from_line",
]
