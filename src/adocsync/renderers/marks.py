#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/renderers/marks.py
"""Inline mark encoding for AsciiDoc output.

Marks on a text run are applied in a fixed nesting order so that the output
does not depend on the order the editor happened to store them in:

    link > bold > italic > code > underline > strike > highlight

A link is always the outermost wrapper and a highlight the innermost. No
escaping is performed; text is wrapped exactly as given.

Examples
--------
    >>> from adocsync.ast.nodes import Mark
    >>> apply_marks("world", [Mark("italic"), Mark("bold")])
    '*_world_*'
    >>> apply_marks("docs", [Mark("link", {"href": "https://example.org"})])
    'https://example.org[docs]'

"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from adocsync.ast.nodes import Mark
from adocsync.constants import AUTOLINK_SCHEMES, DEFAULT_HIGHLIGHT_COLOR, MARK_RANK

logger = logging.getLogger(__name__)


def _link_target(href: str) -> str:
    """Return the link macro target, omitting ``link:`` for autolinked schemes."""
    if href.lower().startswith(AUTOLINK_SCHEMES):
        return href
    return f"link:{href}"


def _wrap_link(text: str, mark: Mark, highlight_color: str) -> str:
    href = str(mark.attrs.get("href") or "")
    return f"{_link_target(href)}[{text}]"


def _wrap_highlight(text: str, mark: Mark, highlight_color: str) -> str:
    color = mark.attrs.get("color") or highlight_color
    return f"[.highlight-{color}]#{text}#"


_MARK_WRAPPERS: dict[str, Callable[[str, Mark, str], str]] = {
    "link": _wrap_link,
    "bold": lambda text, mark, color: f"*{text}*",
    "italic": lambda text, mark, color: f"_{text}_",
    "code": lambda text, mark, color: f"`{text}`",
    "underline": lambda text, mark, color: f"[.underline]#{text}#",
    "strike": lambda text, mark, color: f"[.line-through]#{text}#",
    "highlight": _wrap_highlight,
}


def sort_marks(marks: Iterable[Mark]) -> list[Mark]:
    """Order marks outermost first and drop repeats and unknown types.

    Parameters
    ----------
    marks : iterable of Mark
        Marks in any order

    Returns
    -------
    list of Mark
        Known marks, one per type, in nesting priority order (link first).
        A repeated type keeps its first instance.

    """
    unique: dict[str, Mark] = {}
    for mark in marks:
        if mark.type not in MARK_RANK:
            logger.debug(f"Skipping unknown mark type '{mark.type}'")
            continue
        if mark.type in unique:
            logger.debug(f"Ignoring repeated '{mark.type}' mark")
            continue
        unique[mark.type] = mark

    return sorted(unique.values(), key=lambda mark: MARK_RANK[mark.type])


def wrap_mark(text: str, mark: Mark, highlight_color: str = DEFAULT_HIGHLIGHT_COLOR) -> str:
    """Wrap ``text`` in the AsciiDoc delimiters for a single mark.

    Parameters
    ----------
    text : str
        Text to wrap
    mark : Mark
        The mark to apply
    highlight_color : str, default "yellow"
        Color for highlight marks that carry no ``color`` attribute

    Returns
    -------
    str
        Wrapped text, or ``text`` unchanged for unknown mark types

    """
    wrapper = _MARK_WRAPPERS.get(mark.type)
    if wrapper is None:
        return text
    return wrapper(text, mark, highlight_color)


def apply_marks(text: str, marks: Iterable[Mark], highlight_color: str = DEFAULT_HIGHLIGHT_COLOR) -> str:
    """Apply all marks to ``text`` in nesting priority order.

    Marks are applied innermost first, so the highest-priority mark (link)
    ends up as the outermost wrapper.

    Parameters
    ----------
    text : str
        Text content of the run
    marks : iterable of Mark
        Marks on the run, in any order
    highlight_color : str, default "yellow"
        Color for highlight marks that carry no ``color`` attribute

    Returns
    -------
    str
        The marked-up text

    """
    for mark in reversed(sort_marks(marks)):
        text = wrap_mark(text, mark, highlight_color)
    return text


__all__ = ["apply_marks", "sort_marks", "wrap_mark"]
