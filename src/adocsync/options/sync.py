#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/options/sync.py
"""Configuration options for the sync controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from adocsync.constants import DEFAULT_DEBOUNCE_MS, DEFAULT_HIGHLIGHT_DURATION_MS, HTML_PARSERS, ViewMode
from adocsync.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class SyncOptions(CloneFrozenMixin):
    """Configuration options for keeping the rich and text views in step.

    Parameters
    ----------
    debounce_ms : int, default 500
        Quiet period after the last text keystroke before the edit is
        committed to shared state.
    highlight_duration_ms : int, default 2000
        How long a navigation highlight stays visible before clearing itself.
    initial_view_mode : ViewMode, default ViewMode.EDITOR_ONLY
        Pane layout the session starts in.
    assign_missing_block_ids : bool, default False
        Give blocks without an identity (or with a repeated one) a fresh
        identity before each tree serialization.
    html_parser : str, default "html.parser"
        BeautifulSoup tree builder used to index the rendered pane
        ("html.parser", "lxml" or "html5lib").

    """

    debounce_ms: int = field(
        default=DEFAULT_DEBOUNCE_MS,
        metadata={"help": "Debounce window for text edits in milliseconds", "type": int, "importance": "core"},
    )
    highlight_duration_ms: int = field(
        default=DEFAULT_HIGHLIGHT_DURATION_MS,
        metadata={"help": "Lifetime of a navigation highlight in milliseconds", "type": int, "importance": "core"},
    )
    initial_view_mode: ViewMode = field(
        default=ViewMode.EDITOR_ONLY,
        metadata={"help": "Pane layout at session start", "choices": [m.value for m in ViewMode]},
    )
    assign_missing_block_ids: bool = field(
        default=False,
        metadata={"help": "Assign identities to blocks that lack one before serializing", "importance": "advanced"},
    )
    html_parser: str = field(
        default="html.parser",
        metadata={
            "help": "BeautifulSoup parser for the rendered pane",
            "choices": list(HTML_PARSERS),
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for sync options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be non-negative, got {self.debounce_ms}")

        if self.highlight_duration_ms <= 0:
            raise ValueError(f"highlight_duration_ms must be positive, got {self.highlight_duration_ms}")

        if not isinstance(self.initial_view_mode, ViewMode):
            raise ValueError(f"initial_view_mode must be a ViewMode, got {self.initial_view_mode!r}")

        if self.html_parser not in HTML_PARSERS:
            raise ValueError(f"html_parser must be one of {list(HTML_PARSERS)}, got {self.html_parser!r}")
