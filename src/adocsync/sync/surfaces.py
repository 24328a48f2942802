#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/surfaces.py
"""Interfaces of the collaborators the sync controller drives.

The editing surfaces and the markup renderer live outside this library; the
controller only relies on the structural protocols below.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from adocsync.ast.nodes import Document


@runtime_checkable
class RichEditingSurface(Protocol):
    """The block-structured rich view."""

    def get_tree(self) -> Document:
        """Return the current document tree."""
        ...

    def set_tree(self, content: Union[Document, str], emit_events: bool) -> None:
        """Replace the content with a tree or with rendered HTML to absorb.

        With ``emit_events=False`` the surface must not report the change back
        as a user edit.
        """
        ...


@runtime_checkable
class TextSurface(Protocol):
    """The plain AsciiDoc text view."""

    def get_text(self) -> str:
        """Return the current text."""
        ...

    def set_text(self, text: str) -> None:
        """Replace the text."""
        ...


@runtime_checkable
class MarkupRenderer(Protocol):
    """Converts AsciiDoc text to HTML whose block elements carry ``data-line``."""

    def render_to_html(self, text: str) -> str:
        """Render ``text`` to HTML."""
        ...
