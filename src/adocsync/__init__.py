"""adocsync - Two-view AsciiDoc editing: a rich block tree kept in step with its markup.

adocsync serializes the block-structured document tree of a rich editor into
AsciiDoc text while recording which line every block produced, and keeps a
rich view and a plain-text view of the same document synchronized: each edit
is propagated to the other view exactly once, and a click in either view
becomes a navigation request and a highlight in the other.

Key Features
------------
- Tree-to-AsciiDoc serializer with a block/line source map
- Deterministic mark nesting for inline formatting
- Graceful degradation of unknown node kinds to raw output
- Debounced, echo-free propagation between the two views
- Click-to-line and line-to-element navigation, with a proportional
  estimate when a click carries no line information

Requirements
------------
- Python 3.10+
- beautifulsoup4 (rendered-pane lookups)

Examples
--------
Serialize a tree:

    >>> from adocsync import Document, Heading, Paragraph, Text, serialize
    >>> result = serialize(Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")], block_id="h"),
    ...     Paragraph(content=[Text(content="Hello")], block_id="p"),
    ... ]))
    >>> result.text
    '== Title\\n\\nHello\\n'
    >>> result.source_map.line_for_block("p")
    3

Drive two views from one controller:

    >>> from adocsync import SyncController, VirtualScheduler
    >>> controller = SyncController(rich, text, renderer, VirtualScheduler())

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "adocsync requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from typing import Any  # noqa: E402

from adocsync.ast import (  # noqa: E402
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
    Mark,
    Node,
    Paragraph,
    RawBlock,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
    ValidationVisitor,
    assign_block_ids,
    dict_to_ast,
    json_to_ast,
)
from adocsync.constants import Side, ViewMode  # noqa: E402
from adocsync.exceptions import (  # noqa: E402
    AdocSyncError,
    InvalidOptionsError,
    RenderingError,
    SyncError,
    ValidationError,
)
from adocsync.options import AsciiDocSerializerOptions, SyncOptions  # noqa: E402
from adocsync.renderers.asciidoc import (  # noqa: E402
    AsciiDocSerializer,
    SerializeResult,
    document_to_asciidoc,
    serialize,
)
from adocsync.sync import (  # noqa: E402
    AsyncioScheduler,
    HighlightInfo,
    NavigationRequest,
    RenderedClick,
    SourceMap,
    TextClick,
    VirtualScheduler,
)


def __getattr__(name: str) -> Any:
    """Load the sync controller on first access."""
    if name == "SyncController":
        from adocsync.sync.controller import SyncController

        globals()[name] = SyncController
        return SyncController
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    # Tree
    "Node",
    "Mark",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "HorizontalRule",
    "Image",
    "Admonition",
    "Include",
    "RawBlock",
    "Text",
    "HardBreak",
    "UnknownNode",
    "ValidationVisitor",
    "assign_block_ids",
    "dict_to_ast",
    "json_to_ast",
    # Serialization
    "AsciiDocSerializer",
    "AsciiDocSerializerOptions",
    "SerializeResult",
    "serialize",
    "document_to_asciidoc",
    # Sync
    "SyncController",
    "SyncOptions",
    "Side",
    "ViewMode",
    "SourceMap",
    "HighlightInfo",
    "NavigationRequest",
    "RenderedClick",
    "TextClick",
    "AsyncioScheduler",
    "VirtualScheduler",
    # Errors
    "AdocSyncError",
    "ValidationError",
    "InvalidOptionsError",
    "RenderingError",
    "SyncError",
]
