#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/renderers/asciidoc.py
"""AsciiDoc serialization of the rich editor's document tree.

This module provides the AsciiDocSerializer class, which converts a document
tree to AsciiDoc text and, in the same pass, builds the source map that ties
every block to the first line it produced.

Output is line-oriented: every block writes whole lines, sibling blocks are
separated by exactly one blank line, and the text ends with a single newline.
A block's source-map entry is recorded immediately before its first
non-blank line, so a list, its first item and that item's paragraph all map
to the marker line.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from adocsync.ast.nodes import (
    Admonition,
    BlockQuote,
    CodeBlock,
    Document,
    HardBreak,
    Heading,
    HorizontalRule,
    Image,
    Include,
    List,
    ListItem,
    Node,
    Paragraph,
    RawBlock,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
)
from adocsync.ast.utils import extract_text, node_size
from adocsync.ast.visitors import NodeVisitor
from adocsync.constants import (
    ADMONITION_TYPES,
    BULLET_MARKER,
    CODE_FENCE,
    EXAMPLE_FENCE,
    HARD_BREAK,
    HEADING_MARKER,
    LIST_CONTINUATION,
    ORDERED_MARKER,
    QUOTE_FENCE,
    TABLE_CELL_SEPARATOR,
    TABLE_FENCE,
    THEMATIC_BREAK,
    ListKind,
)
from adocsync.exceptions import AdocSyncError, RenderingError
from adocsync.options.asciidoc import AsciiDocSerializerOptions
from adocsync.renderers.base import BaseRenderer
from adocsync.renderers.marks import apply_marks
from adocsync.sync.source_map import SourceMap, SourceMapRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializeResult:
    """AsciiDoc text together with the source map built while producing it.

    Parameters
    ----------
    text : str
        AsciiDoc text, ending in a single newline (empty for an empty document)
    source_map : SourceMap
        Block and offset mappings for ``text``

    """

    text: str
    source_map: SourceMap


@dataclass
class _PendingRecord:
    node: Node
    block_id: Optional[str]
    offset: Optional[int]


@dataclass
class _SerializeContext:
    """Per-call accumulator threaded through one serialization pass."""

    registry: SourceMapRegistry
    record_offsets: bool
    lines: list[str] = field(default_factory=list)
    list_depth: int = 0
    list_kinds: list[ListKind] = field(default_factory=list)
    offset: int = 0
    pending: list[_PendingRecord] = field(default_factory=list)


class AsciiDocSerializer(NodeVisitor, BaseRenderer):
    """Serialize a document tree to AsciiDoc and build its source map.

    The serializer keeps no state between calls: each ``serialize`` call
    creates its own ``_SerializeContext``, so one instance may be reused and
    even called re-entrantly.

    Parameters
    ----------
    options : AsciiDocSerializerOptions or None, default = None
        Serialization options

    Examples
    --------
    Basic usage:

        >>> from adocsync.ast import Document, Heading, Mark, Paragraph, Text
        >>> doc = Document(children=[
        ...     Heading(level=1, content=[Text(content="Title")], block_id="h"),
        ...     Paragraph(content=[Text(content="Hello "), Text(content="world", marks=[Mark("bold")])],
        ...               block_id="p"),
        ... ])
        >>> result = AsciiDocSerializer().serialize(doc)
        >>> print(result.text)
        == Title
        <BLANKLINE>
        Hello *world*
        <BLANKLINE>
        >>> dict(result.source_map.block_id_to_line)
        {'h': 1, 'p': 3}

    """

    def __init__(self, options: AsciiDocSerializerOptions | None = None):
        """Initialize the serializer with options."""
        BaseRenderer._validate_options_type(options, AsciiDocSerializerOptions, "AsciiDocSerializer")
        options = options or AsciiDocSerializerOptions()
        BaseRenderer.__init__(self, options)
        self.options: AsciiDocSerializerOptions = options
        self._ctx: Optional[_SerializeContext] = None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def serialize(self, document: Document) -> SerializeResult:
        """Serialize a document tree to AsciiDoc text and a source map.

        Parameters
        ----------
        document : Document
            Root of the tree to serialize

        Returns
        -------
        SerializeResult
            The text and its source map

        Raises
        ------
        RenderingError
            If serialization fails unexpectedly. Malformed trees and unknown
            node kinds never raise; they degrade with a logged warning.

        """
        saved_ctx = self._ctx
        self._ctx = _SerializeContext(
            registry=SourceMapRegistry(),
            record_offsets=self.options.record_legacy_offsets,
        )
        try:
            if isinstance(document, Document):
                document.accept(self)
            else:
                self._visit_children([document], parent_offset=-1)
            text = self._finish(self._ctx.lines)
            return SerializeResult(text=text, source_map=self._ctx.registry.snapshot())
        except AdocSyncError:
            raise
        except Exception as e:
            raise RenderingError(
                f"Failed to serialize document: {e!r}", rendering_stage="serialization", original_error=e
            ) from e
        finally:
            self._ctx = saved_ctx

    def render_to_string(self, doc: Document) -> str:
        """Render a document tree to AsciiDoc text, discarding the source map."""
        return self.serialize(doc).text

    @staticmethod
    def _finish(lines: list[str]) -> str:
        end = len(lines)
        while end > 0 and not lines[end - 1].strip():
            end -= 1
        if end == 0:
            return ""
        return "\n".join(lines[:end]) + "\n"

    # ------------------------------------------------------------------
    # Line emission and source-map recording
    # ------------------------------------------------------------------

    @property
    def _context(self) -> _SerializeContext:
        if self._ctx is None:
            raise RenderingError("Visitor methods can only be called through serialize()", rendering_stage="setup")
        return self._ctx

    def _push(self, line: str) -> None:
        """Append one output line, first flushing pending records onto it if it is not blank."""
        ctx = self._context
        if ctx.pending and line.strip():
            line_number = len(ctx.lines) + 1
            for record in ctx.pending:
                ctx.registry.record(record.block_id, record.offset, line_number)
            ctx.pending.clear()
        ctx.lines.append(line)

    def _push_text(self, text: str) -> None:
        """Append text that may span several lines (hard breaks).

        A hard break at the very end only closes the last line; it does not
        open an empty one.
        """
        for line in text.rstrip("\n").split("\n"):
            self._push(line)

    def _push_blank(self) -> None:
        self._context.lines.append("")

    def _trim_trailing_blank(self) -> None:
        lines = self._context.lines
        if lines and lines[-1] == "":
            lines.pop()

    def _begin(self, node: Node, offset: int) -> None:
        """Queue a source-map record for ``node``, written at its first non-blank line."""
        ctx = self._context
        block_id = getattr(node, "block_id", None)
        approx_offset = offset if ctx.record_offsets else None
        if block_id is None and approx_offset is None:
            return
        ctx.pending.append(_PendingRecord(node=node, block_id=block_id, offset=approx_offset))

    def _end(self, node: Node) -> None:
        """Drop the pending record of a block that emitted nothing."""
        ctx = self._context
        if ctx.pending:
            ctx.pending[:] = [record for record in ctx.pending if record.node is not node]

    # ------------------------------------------------------------------
    # Traversal helpers
    # ------------------------------------------------------------------

    def _visit_block(self, node: Node, offset: int) -> None:
        ctx = self._context
        saved_offset = ctx.offset
        ctx.offset = offset
        self._begin(node, offset)
        try:
            result = node.accept(self)
            # Row and cell visitors return text; emit it if they were reached at block level
            if isinstance(result, str) and result.strip():
                self._push_text(result)
                self._push_blank()
        finally:
            self._end(node)
            ctx.offset = saved_offset

    def _visit_children(self, children: list[Node], parent_offset: int) -> None:
        """Visit block children, gathering stray inline runs into their own lines.

        Child offsets follow the editor's position model: the first child
        starts one past its parent, each later child after its preceding
        siblings.
        """
        offset = parent_offset + 1
        inline_run: list[Node] = []

        for child in children:
            if isinstance(child, (Text, HardBreak)):
                inline_run.append(child)
            else:
                self._flush_inline_run(inline_run)
                inline_run = []
                self._visit_block(child, offset)
            offset += node_size(child)

        self._flush_inline_run(inline_run)

    def _flush_inline_run(self, run: list[Node]) -> None:
        if not run:
            return
        text = self._render_inline(run)
        if text.strip():
            self._push_text(text)
            self._push_blank()

    def _visit_isolated(self, children: list[Node], parent_offset: int) -> None:
        """Visit the children of a delimited block, where list nesting restarts."""
        ctx = self._context
        saved_depth, saved_kinds = ctx.list_depth, ctx.list_kinds
        ctx.list_depth, ctx.list_kinds = 0, []
        try:
            self._visit_children(children, parent_offset)
        finally:
            ctx.list_depth, ctx.list_kinds = saved_depth, saved_kinds

    def _render_inline(self, content: list[Node]) -> str:
        """Render inline nodes to a single string.

        Text runs and hard breaks go through their visitors, images use the
        inline ``image:`` macro, and anything else is reduced to its plain
        text with a warning.
        """
        parts: list[str] = []
        for node in content:
            if isinstance(node, (Text, HardBreak)):
                parts.append(node.accept(self))
            elif isinstance(node, Image):
                parts.append(f"image:{node.src}[{node.alt}]")
            else:
                if self.options.warn_on_unknown_nodes:
                    logger.warning(f"Unexpected inline node '{node.kind}', emitting its plain text")
                parts.append(extract_text(node, joiner=""))
        return "".join(parts)

    # ------------------------------------------------------------------
    # Block visitors
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Serialize a Document node; top-level blocks start at offset 0."""
        self._visit_children(node.children, parent_offset=-1)

    def visit_heading(self, node: Heading) -> None:
        """Serialize a heading as ``level + 1`` equals signs, the level-0 title being reserved."""
        text = self._render_inline(node.content)
        self._push_text(f"{HEADING_MARKER * (node.level + 1)} {text}")
        self._push_blank()

    def visit_paragraph(self, node: Paragraph) -> None:
        """Serialize a paragraph; whitespace-only paragraphs emit nothing."""
        text = self._render_inline(node.content)
        if not text.strip():
            return
        self._push_text(text)
        self._push_blank()

    def visit_list(self, node: List) -> None:
        """Serialize a bullet or ordered list.

        Nested lists are emitted directly after their parent item; only the
        outermost list is followed by a blank line.
        """
        if not node.items:
            return

        ctx = self._context
        ctx.list_depth += 1
        ctx.list_kinds.append("ordered" if node.ordered else "bullet")
        try:
            self._visit_children(list(node.items), ctx.offset)
        finally:
            ctx.list_kinds.pop()
            ctx.list_depth -= 1

        if ctx.list_depth == 0:
            self._push_blank()

    def visit_list_item(self, node: ListItem) -> None:
        """Serialize a list item.

        The first paragraph goes on the marker line. Nested lists follow
        directly; any other block is attached with a ``+`` continuation line.
        """
        ctx = self._context
        depth = max(ctx.list_depth, 1)
        kind = ctx.list_kinds[-1] if ctx.list_kinds else "bullet"
        marker = (ORDERED_MARKER if kind == "ordered" else BULLET_MARKER) * depth
        item_offset = ctx.offset
        children = node.children

        if children and not isinstance(children[0], Paragraph):
            self._visit_children(children, item_offset)
            return

        if children:
            first = children[0]
            self._begin(first, item_offset + 1)
            text = self._render_inline(first.content)  # type: ignore[attr-defined]
        else:
            text = ""
        self._push_text(f"{marker} {text}")

        offset = item_offset + 1 + (node_size(children[0]) if children else 0)
        for child in children[1:]:
            if isinstance(child, List):
                self._visit_block(child, offset)
            else:
                self._visit_continuation(child, offset)
            offset += node_size(child)

    def _visit_continuation(self, child: Node, offset: int) -> None:
        lines = self._context.lines
        self._push(LIST_CONTINUATION)
        start = len(lines)
        self._visit_block(child, offset)
        self._trim_trailing_blank()
        if len(lines) == start:
            # Nothing attached, so drop the dangling continuation
            lines.pop()

    def visit_code_block(self, node: CodeBlock) -> None:
        """Serialize a code block; the body is emitted verbatim."""
        if node.language:
            self._push(f"[source,{node.language}]")
        self._push(CODE_FENCE)

        body = node.content
        if body.endswith("\n"):
            body = body[:-1]
        if body:
            self._context.lines.extend(body.split("\n"))

        self._push(CODE_FENCE)
        self._push_blank()

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Serialize a block quote as a ``[quote]`` delimited block."""
        self._push("[quote]")
        self._push(QUOTE_FENCE)
        self._visit_isolated(node.children, self._context.offset)
        self._trim_trailing_blank()
        self._push(QUOTE_FENCE)
        self._push_blank()

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Serialize a horizontal rule."""
        self._push(THEMATIC_BREAK)
        self._push_blank()

    def visit_image(self, node: Image) -> None:
        """Serialize a block image, with its title as a caption line."""
        if node.title:
            self._push(f".{node.title}")
        self._push(f"image::{node.src}[{node.alt}]")
        self._push_blank()

    def visit_table(self, node: Table) -> None:
        """Serialize a table.

        The column count and header flag come from the first row. Ragged rows
        are written as they are; rows without cells are skipped.
        """
        rows = [row for row in node.rows if isinstance(row, TableRow) and row.cells]
        cols = len(rows[0].cells) if rows and rows[0].cells else 1
        has_header = bool(rows) and rows[0].is_header

        if has_header:
            self._push(f'[%header,cols="{cols}"]')
        else:
            self._push(f'[cols="{cols}"]')
        self._push(TABLE_FENCE)

        for index, row in enumerate(rows):
            if index == 1 and has_header:
                self._push_blank()
            self._push(row.accept(self))

        self._push(TABLE_FENCE)
        self._push_blank()

    def visit_table_row(self, node: TableRow) -> str:
        """Return the line for a table row."""
        return " ".join(cell.accept(self) for cell in node.cells).rstrip()

    def visit_table_cell(self, node: TableCell) -> str:
        """Return a table cell with its separator, preceded by any span specifier."""
        parts: list[str] = []
        for child in node.children:
            if isinstance(child, Paragraph):
                text = self._render_inline(child.content)
            elif isinstance(child, (Text, HardBreak, Image)):
                text = self._render_inline([child])
            else:
                text = extract_text(child)
            if text:
                parts.append(text)

        prefix = ""
        if node.colspan > 1:
            prefix += f"{node.colspan}+"
        if node.rowspan > 1:
            prefix += f".{node.rowspan}+"
        return f"{prefix}{TABLE_CELL_SEPARATOR}" + " ".join(parts).replace("\n", " ")

    def visit_admonition(self, node: Admonition) -> None:
        """Serialize an admonition as a typed example block."""
        admonition_type = (node.admonition_type or "").upper()
        if admonition_type not in ADMONITION_TYPES:
            logger.warning(
                f"Unknown admonition type '{node.admonition_type}', "
                f"using {self.options.default_admonition_type}"
            )
            admonition_type = self.options.default_admonition_type

        self._push(f"[{admonition_type}]")
        self._push(EXAMPLE_FENCE)
        self._visit_isolated(node.children, self._context.offset)
        self._trim_trailing_blank()
        self._push(EXAMPLE_FENCE)
        self._push_blank()

    def visit_include(self, node: Include) -> None:
        """Serialize an include directive with its attributes in a fixed order."""
        attrs: list[str] = []
        if node.level_offset:
            attrs.append(f"leveloffset={node.level_offset}")
        if node.line_range:
            attrs.append(f"lines={node.line_range}")
        if node.tag:
            attrs.append(f"tag={node.tag}")
        self._push(f"include::{node.path}[{','.join(attrs)}]")
        self._push_blank()

    def visit_raw_block(self, node: RawBlock) -> None:
        """Write the saved source back verbatim; empty source emits nothing."""
        self._emit_raw(node.source)

    def _emit_raw(self, source: str) -> None:
        source = source.rstrip("\n")
        if not source.strip():
            return
        for line in source.split("\n"):
            self._push(line)
        self._push_blank()

    def visit_unknown(self, node: UnknownNode) -> None:
        """Degrade a node of an unknown kind to raw output.

        A ``source`` attribute is written like a raw block; otherwise the
        children are emitted (inline runs as lines, blocks recursively), and
        failing that the node's text.
        """
        if self.options.warn_on_unknown_nodes:
            logger.warning(f"Unknown node type '{node.kind_name}', emitting it as raw content")

        source = node.attrs.get("source")
        if isinstance(source, str) and source.strip():
            self._emit_raw(source)
        elif node.children:
            self._visit_children(node.children, self._context.offset)
        elif node.text and node.text.strip():
            self._push_text(node.text)
            self._push_blank()

    # ------------------------------------------------------------------
    # Inline visitors
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> str:
        """Return the text run with its marks applied."""
        return apply_marks(node.content, node.marks, self.options.default_highlight_color)

    def visit_hard_break(self, node: HardBreak) -> str:
        """Return the AsciiDoc hard line break."""
        return HARD_BREAK


def serialize(document: Document, options: AsciiDocSerializerOptions | None = None) -> SerializeResult:
    """Serialize a document tree to AsciiDoc text and a source map.

    Parameters
    ----------
    document : Document
        Root of the tree to serialize
    options : AsciiDocSerializerOptions or None, default = None
        Serialization options

    Returns
    -------
    SerializeResult
        The text and its source map

    """
    return AsciiDocSerializer(options).serialize(document)


def document_to_asciidoc(document: Document, options: AsciiDocSerializerOptions | None = None) -> str:
    """Serialize a document tree to AsciiDoc text only."""
    return AsciiDocSerializer(options).serialize(document).text
