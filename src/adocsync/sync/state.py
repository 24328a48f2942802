#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/state.py
"""State records exchanged with the sync controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from adocsync.constants import Side, ViewMode


@dataclass(frozen=True)
class HighlightInfo:
    """A line to highlight on one side, shown until it expires.

    Parameters
    ----------
    line : int
        1-indexed line
    side : Side
        The side the highlight is drawn on

    """

    line: int
    side: Side


@dataclass(frozen=True)
class NavigationRequest:
    """A request for one side to reveal a line.

    Parameters
    ----------
    line : int
        1-indexed line to reveal
    destination : Side
        The side that should scroll
    block_id : str or None, default None
        Block owning the line, when known
    estimated : bool, default False
        True if the line was estimated from the click position rather than
        read from the clicked element

    """

    line: int
    destination: Side
    block_id: Optional[str] = None
    estimated: bool = False


@dataclass
class SyncState:
    """Mutable session state of the sync controller.

    ``last_changed_side`` is None until either side commits an edit.
    """

    last_changed_side: Optional[Side] = None
    pending_highlight: Optional[HighlightInfo] = None
    pending_navigation: Optional[NavigationRequest] = None


@dataclass(frozen=True)
class RenderedClick:
    """A click in the rendered view.

    Parameters
    ----------
    element : bs4.element.Tag or None, default None
        The clicked element, if the caller can provide it
    block_id : str or None, default None
        Block identity reported by the surface for the clicked node
    offset_y : float, default 0.0
        Vertical click position inside the content, for estimation
    content_height : float, default 0.0
        Total content height, for estimation

    """

    element: Any = None
    block_id: Optional[str] = None
    offset_y: float = 0.0
    content_height: float = 0.0


@dataclass(frozen=True)
class TextClick:
    """A click (caret placement) in the text view.

    Parameters
    ----------
    caret_offset : int
        Character offset of the caret

    """

    caret_offset: int


__all__ = [
    "HighlightInfo",
    "NavigationRequest",
    "RenderedClick",
    "Side",
    "SyncState",
    "TextClick",
    "ViewMode",
]
