#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/navigation.py
"""Line arithmetic and rendered-pane lookups for cross-view navigation.

The text view addresses content by caret offset and 1-indexed line; the
rendered view by HTML elements carrying ``data-line`` (and optionally
``data-block-id``) attributes. The helpers here translate between the two.

Examples
--------
    >>> text = "== Title\\n\\nHello\\n"
    >>> line_from_offset(text, text.index("Hello"))
    3
    >>> offset_from_line(text, 3)
    10
    >>> pane = RenderedPane('<h2 data-line="1">Title</h2><p data-line="3">Hello</p>')
    >>> pane.element_for_line(2).name
    'h2'

"""

from __future__ import annotations

import bisect
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from bs4.exceptions import FeatureNotFound

from adocsync.ast.nodes import Heading
from adocsync.ast.utils import extract_text, iter_blocks
from adocsync.constants import BLOCK_ID_ATTRIBUTE, LINE_ATTRIBUTE
from adocsync.exceptions import ValidationError

if TYPE_CHECKING:
    from adocsync.ast.nodes import Node
    from adocsync.sync.source_map import SourceMap

logger = logging.getLogger(__name__)


# ============================================================================
# Text offsets and lines
# ============================================================================


def count_lines(text: str) -> int:
    """Return the number of lines in ``text``; a trailing newline starts an empty last line."""
    return text.count("\n") + 1


def line_from_offset(text: str, offset: int) -> int:
    """Return the 1-indexed line containing caret ``offset``.

    The line is one more than the number of newlines before the caret.
    Offsets outside the text are clamped to it.

    """
    offset = min(max(offset, 0), len(text))
    return text.count("\n", 0, offset) + 1


def offset_from_line(text: str, line: int) -> int:
    """Return the caret offset at the start of 1-indexed ``line``.

    Lines outside the text are clamped to its first and last line.

    """
    line = min(max(line, 1), count_lines(text))
    offset = 0
    for _ in range(line - 1):
        offset = text.index("\n", offset) + 1
    return offset


def line_span(text: str, line: int) -> tuple[int, int]:
    """Return the ``(start, end)`` offsets of ``line``, excluding its newline."""
    start = offset_from_line(text, line)
    end = text.find("\n", start)
    return start, len(text) if end == -1 else end


def estimate_line(offset_y: float, content_height: float, total_lines: int) -> int:
    """Estimate the line under a vertical position, proportionally to the content height.

    Used when a click in the rendered view lands on nothing that carries a
    line number. The result is ``ceil(offset_y / content_height * total_lines)``
    clamped to ``[1, total_lines]``.

    Parameters
    ----------
    offset_y : float
        Vertical position of the click inside the content
    content_height : float
        Total height of the rendered content
    total_lines : int
        Number of lines in the text

    Returns
    -------
    int
        Estimated 1-indexed line

    """
    if total_lines < 1:
        return 1
    if content_height <= 0:
        return 1
    line = math.ceil(offset_y / content_height * total_lines)
    return min(max(line, 1), total_lines)


# ============================================================================
# Rendered pane
# ============================================================================


def _int_attribute(tag: Tag, name: str) -> Optional[int]:
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        value = value[0] if value else ""
    try:
        return int(str(value).strip())
    except ValueError:
        logger.debug(f"Ignoring non-numeric {name}={value!r} on <{tag.name}>")
        return None


def line_for_element(element: Tag) -> Optional[int]:
    """Return the ``data-line`` of ``element`` or of its nearest ancestor carrying one."""
    current: Optional[Tag] = element
    while current is not None:
        if isinstance(current, Tag):
            line = _int_attribute(current, LINE_ATTRIBUTE)
            if line is not None:
                return line
        current = current.parent
    return None


def block_id_for_element(element: Tag) -> Optional[str]:
    """Return the ``data-block-id`` of ``element`` or of its nearest ancestor carrying one."""
    current: Optional[Tag] = element
    while current is not None:
        if isinstance(current, Tag):
            value = current.get(BLOCK_ID_ATTRIBUTE)
            if value:
                return value if isinstance(value, str) else " ".join(value)
        current = current.parent
    return None


class RenderedPane:
    """Read-only index over the rendered HTML of the text view.

    Parameters
    ----------
    html : str
        HTML produced by the markup renderer; block elements carry ``data-line``
    parser : str, default "html.parser"
        BeautifulSoup tree builder

    Raises
    ------
    ValidationError
        If the requested parser is not installed

    """

    def __init__(self, html: str, parser: str = "html.parser"):
        try:
            self.soup = BeautifulSoup(html, parser)
        except FeatureNotFound as e:
            raise ValidationError(
                f"HTML parser '{parser}' is not available: {e}",
                parameter_name="parser",
                parameter_value=parser,
                original_error=e,
            ) from e

        self._by_line: dict[int, Tag] = {}
        for element in self.soup.find_all(attrs={LINE_ATTRIBUTE: True}):
            line = _int_attribute(element, LINE_ATTRIBUTE)
            if line is not None:
                self._by_line.setdefault(line, element)
        self._lines = sorted(self._by_line)

    def lines(self) -> list[int]:
        """Return every line number present in the pane, ascending."""
        return list(self._lines)

    def line_for_element(self, element: Tag) -> Optional[int]:
        """Return the line of ``element``, walking up to the nearest ancestor with one."""
        return line_for_element(element)

    def element_for_line(self, line: int) -> Optional[Tag]:
        """Return the element to reveal for ``line``.

        The element with exactly that ``data-line`` if there is one, else the
        nearest element above it, else the first element below it.

        """
        if not self._lines:
            return None
        if line in self._by_line:
            return self._by_line[line]

        index = bisect.bisect_left(self._lines, line)
        if index > 0:
            return self._by_line[self._lines[index - 1]]
        return self._by_line[self._lines[0]]

    def element_for_block(self, block_id: str) -> Optional[Tag]:
        """Return the first element carrying ``data-block-id`` equal to ``block_id``."""
        return self.soup.find(attrs={BLOCK_ID_ATTRIBUTE: block_id})


# ============================================================================
# Outline
# ============================================================================


@dataclass(frozen=True)
class OutlineItem:
    """One heading in the document outline.

    Parameters
    ----------
    level : int
        Heading level (1-6)
    title : str
        Plain heading text
    block_id : str or None
        Identity of the heading block
    line : int or None
        Line the heading was serialized to, if mapped

    """

    level: int
    title: str
    block_id: Optional[str]
    line: Optional[int]


def build_outline(document: Node, source_map: SourceMap) -> list[OutlineItem]:
    """List the document's headings in order with the lines they map to.

    Parameters
    ----------
    document : Node
        Document tree
    source_map : SourceMap
        Source map from serializing ``document``

    Returns
    -------
    list of OutlineItem
        Headings in document order

    """
    outline: list[OutlineItem] = []
    for block in iter_blocks(document):
        if not isinstance(block, Heading):
            continue
        line = source_map.line_for_block(block.block_id) if block.block_id else None
        outline.append(
            OutlineItem(
                level=block.level,
                title=extract_text(block.content, joiner="").strip(),
                block_id=block.block_id,
                line=line,
            )
        )
    return outline
