#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/ast/nodes.py
"""Node classes for the rich editor's document tree.

This module defines the node hierarchy the editing surface produces and the
serializer consumes. Each node represents a structural or inline element of
an AsciiDoc document as the rich view sees it.

The hierarchy is designed to:
- Mirror the editing surface's node kinds one class per kind
- Enable serialization and validation via the visitor pattern
- Carry the editor-assigned block identity used as a source-map key
- Degrade gracefully: kinds this library does not know become UnknownNode

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Paragraph, Heading, CodeBlock, BlockQuote, HorizontalRule
    - List, ListItem, Table, TableRow, TableCell
    - Image, Admonition, Include, RawBlock

Inline nodes carry the text of a block:
    - Text (with formatting marks), HardBreak
    - Image (inline use inside paragraphs)

UnknownNode stands in for any kind outside this set.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from adocsync.constants import DEFAULT_ADMONITION_TYPE


@dataclass
class Mark:
    """Formatting instruction attached to a text run.

    Parameters
    ----------
    type : str
        Mark name (``bold``, ``italic``, ``code``, ``underline``, ``strike``,
        ``link`` or ``highlight``)
    attrs : dict, default = empty dict
        Mark attributes, e.g. ``href`` for links or ``color`` for highlights

    """

    type: str
    attrs: dict[str, Any] = field(default_factory=dict)


class Node(ABC):
    """Base class for all document tree nodes.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node

    """

    kind: ClassVar[str] = "node"
    is_block: ClassVar[bool] = True

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node.

    The Document node is the single root of the tree; its children are
    block-level nodes only.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata

    """

    kind: ClassVar[str] = "doc"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (levels 1-6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Heading metadata

    """

    kind: ClassVar[str] = "heading"

    level: int
    content: list[Node] = field(default_factory=list)
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_heading method

        Returns
        -------
        Any
            Result from visitor.visit_heading(self)

        """
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Paragraph metadata

    """

    kind: ClassVar[str] = "paragraph"

    content: list[Node] = field(default_factory=list)
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Code block node with optional language specification.

    Code content is plain text: formatting marks never apply inside a code
    block, so the content is held as a single string.

    Parameters
    ----------
    content : str
        Code content (emitted verbatim)
    language : str or None, default = None
        Programming language for the ``[source]`` declaration
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Code block metadata

    """

    kind: ClassVar[str] = "codeBlock"

    content: str = ""
    language: Optional[str] = None
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_code_block method

        Returns
        -------
        Any
            Result from visitor.visit_code_block(self)

        """
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the quote
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Block quote metadata

    """

    kind: ClassVar[str] = "blockquote"

    children: list[Node] = field(default_factory=list)
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """List node (ordered or bulleted).

    Parameters
    ----------
    ordered : bool
        True for ordered lists (``orderedList``), False for bulleted ones
        (``bulletList``)
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        List metadata

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:  # type: ignore[override]
        """Editor kind name for this list."""
        return "orderedList" if self.ordered else "bulletList"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_list method

        Returns
        -------
        Any
            Result from visitor.visit_list(self)

        """
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    The first paragraph is written on the marker line; nested lists and
    other blocks follow it.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        List item metadata

    """

    kind: ClassVar[str] = "listItem"

    children: list[Node] = field(default_factory=list)
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node.

    The column count and header presence are derived from the first row.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows, header row first when present
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Table metadata

    """

    kind: ClassVar[str] = "table"

    rows: list[TableRow] = field(default_factory=list)
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    metadata : dict, default = empty dict
        Row metadata

    """

    kind: ClassVar[str] = "tableRow"

    cells: list[TableCell] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_header(self) -> bool:
        """Whether the row holds any header cell."""
        return any(cell.header for cell in self.cells)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node (``tableCell`` or ``tableHeader``) with optional spans.

    Parameters
    ----------
    children : list of Node, default = empty list
        Paragraphs holding the cell text
    header : bool, default = False
        True for header cells
    colspan : int, default = 1
        Number of columns this cell spans
    rowspan : int, default = 1
        Number of rows this cell spans
    metadata : dict, default = empty dict
        Cell metadata

    """

    children: list[Node] = field(default_factory=list)
    header: bool = False
    colspan: int = 1
    rowspan: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:  # type: ignore[override]
        """Editor kind name for this cell."""
        return "tableHeader" if self.header else "tableCell"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class HorizontalRule(Node):
    """Horizontal rule node.

    Parameters
    ----------
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Rule metadata

    """

    kind: ClassVar[str] = "horizontalRule"

    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this horizontal rule."""
        return visitor.visit_horizontal_rule(self)


@dataclass
class Image(Node):
    """Image node.

    At block level the image becomes an ``image::`` directive; inside a
    paragraph it is written with the inline ``image:`` macro.

    Parameters
    ----------
    src : str
        Image target
    alt : str, default = ""
        Alternative text
    title : str or None, default = None
        Caption written on a line before the directive
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Image metadata

    """

    kind: ClassVar[str] = "image"

    src: str
    alt: str = ""
    title: Optional[str] = None
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_image method

        Returns
        -------
        Any
            Result from visitor.visit_image(self)

        """
        return visitor.visit_image(self)


@dataclass
class Admonition(Node):
    """Admonition (callout) block.

    Parameters
    ----------
    admonition_type : str, default = "NOTE"
        One of NOTE, TIP, WARNING, CAUTION, IMPORTANT
    children : list of Node, default = empty list
        Block-level nodes inside the callout
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Admonition metadata

    """

    kind: ClassVar[str] = "admonition"

    admonition_type: str = DEFAULT_ADMONITION_TYPE
    children: list[Node] = field(default_factory=list)
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this admonition."""
        return visitor.visit_admonition(self)


@dataclass
class Include(Node):
    """Include (transclusion) directive.

    Parameters
    ----------
    path : str
        Path of the included document
    level_offset : str or None, default = None
        Value of the ``leveloffset`` attribute (e.g. ``+1``)
    line_range : str or None, default = None
        Value of the ``lines`` attribute (e.g. ``1..10``)
    tag : str or None, default = None
        Value of the ``tag`` attribute
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Include metadata

    """

    kind: ClassVar[str] = "include"

    path: str
    level_offset: Optional[str] = None
    line_range: Optional[str] = None
    tag: Optional[str] = None
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this include directive."""
        return visitor.visit_include(self)


@dataclass
class RawBlock(Node):
    """Escape-hatch block preserving AsciiDoc source verbatim.

    Holds syntax the rich view cannot represent structurally; the serializer
    writes the saved source back unmodified.

    Parameters
    ----------
    source : str
        Saved AsciiDoc source
    context : str or None, default = None
        Kind of construct the source came from, for diagnostics
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Raw block metadata

    """

    kind: ClassVar[str] = "rawBlock"

    source: str = ""
    context: Optional[str] = None
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this raw block."""
        return visitor.visit_raw_block(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Text run with formatting marks.

    Parameters
    ----------
    content : str
        Text content
    marks : list of Mark, default = empty list
        Formatting instructions, at most one per mark type
    metadata : dict, default = empty dict
        Text metadata

    """

    kind: ClassVar[str] = "text"
    is_block: ClassVar[bool] = False

    content: str
    marks: list[Mark] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_text method

        Returns
        -------
        Any
            Result from visitor.visit_text(self)

        """
        return visitor.visit_text(self)


@dataclass
class HardBreak(Node):
    """Explicit line break inside a paragraph."""

    kind: ClassVar[str] = "hardBreak"
    is_block: ClassVar[bool] = False

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_hard_break(self)


# ============================================================================
# Forward compatibility
# ============================================================================


@dataclass
class UnknownNode(Node):
    """Node of a kind this library does not model.

    Editors gain node kinds faster than serializers learn them. Such nodes
    are kept with their raw attributes so the serializer can degrade them to
    raw output instead of dropping their content.

    Parameters
    ----------
    kind_name : str
        The editor's kind name
    attrs : dict, default = empty dict
        Attributes as received from the editor
    children : list of Node, default = empty list
        Child nodes, block or inline
    text : str or None, default = None
        Text payload, if the node had one
    block_id : str or None, default = None
        Stable identity assigned by the editing surface
    metadata : dict, default = empty dict
        Node metadata

    """

    kind_name: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    text: Optional[str] = None
    block_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> str:  # type: ignore[override]
        """Editor kind name for this node."""
        return self.kind_name

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node."""
        return visitor.visit_unknown(self)


INLINE_NODE_TYPES: tuple[type[Node], ...] = (Text, HardBreak, Image)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Returns the child nodes of any node kind, so traversals do not need to
    know which attribute each kind keeps its children in.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    """
    if isinstance(node, (Document, BlockQuote, ListItem, Admonition, TableCell, UnknownNode)):
        return list(node.children)

    if isinstance(node, (Heading, Paragraph)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        return list(node.rows)

    if isinstance(node, TableRow):
        return list(node.cells)

    # Leaf nodes (no children)
    return []


def is_block_node(node: Node) -> bool:
    """Return whether ``node`` may appear where block content is expected.

    ``Image`` counts as both; an ``UnknownNode`` is accepted anywhere.

    """
    if isinstance(node, (Image, UnknownNode)):
        return True
    return type(node).is_block


def is_inline_node(node: Node) -> bool:
    """Return whether ``node`` may appear inside a paragraph or heading."""
    return isinstance(node, INLINE_NODE_TYPES + (UnknownNode,))
