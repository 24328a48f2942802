#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for adocsync.

This module centralizes the hardcoded values used by the serializer and the
sync controller. Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Inline Marks - Mark names, priority and AsciiDoc delimiters
3. Block Syntax - Delimiters and markers emitted by the serializer
4. Sync Behavior - Debounce, highlight and navigation defaults
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

AdmonitionType = Literal["NOTE", "TIP", "WARNING", "CAUTION", "IMPORTANT"]
MarkType = Literal["link", "bold", "italic", "code", "underline", "strike", "highlight"]
ListKind = Literal["bullet", "ordered"]


class Side(str, Enum):
    """The two views that edit and display the shared document."""

    TREE = "tree"
    TEXT = "text"

    @property
    def opposite(self) -> "Side":
        return Side.TEXT if self is Side.TREE else Side.TREE


class ViewMode(str, Enum):
    """Pane layouts. In SPLIT mode the rendered pane is a read-only projection of the text."""

    EDITOR_ONLY = "editor-only"
    SPLIT = "split"


# =============================================================================
# Inline Marks
# =============================================================================

# Outermost first: a link wraps the whole styled run
MARK_PRIORITY: tuple[MarkType, ...] = ("link", "bold", "italic", "code", "underline", "strike", "highlight")

MARK_RANK: dict[str, int] = {name: index for index, name in enumerate(MARK_PRIORITY)}

DEFAULT_HIGHLIGHT_COLOR = "yellow"

# Schemes AsciiDoc autolinks without the link: macro prefix
AUTOLINK_SCHEMES = ("http://", "https://", "ftp://", "irc://", "mailto:")

# =============================================================================
# Block Syntax
# =============================================================================

ADMONITION_TYPES: frozenset[str] = frozenset({"NOTE", "TIP", "WARNING", "CAUTION", "IMPORTANT"})
DEFAULT_ADMONITION_TYPE: AdmonitionType = "NOTE"

HEADING_MARKER = "="
BULLET_MARKER = "*"
ORDERED_MARKER = "."
LIST_CONTINUATION = "+"
HARD_BREAK = " +\n"

CODE_FENCE = "----"
QUOTE_FENCE = "____"
EXAMPLE_FENCE = "===="
TABLE_FENCE = "|==="
TABLE_CELL_SEPARATOR = "| "
THEMATIC_BREAK = "'''"

# =============================================================================
# Sync Behavior
# =============================================================================

DEFAULT_DEBOUNCE_MS = 500
DEFAULT_HIGHLIGHT_DURATION_MS = 2000

# Attributes the rendered pane carries on block elements
LINE_ATTRIBUTE = "data-line"
BLOCK_ID_ATTRIBUTE = "data-block-id"

# BeautifulSoup tree builders accepted for the rendered pane
HTML_PARSERS = ("html.parser", "lxml", "html5lib")
