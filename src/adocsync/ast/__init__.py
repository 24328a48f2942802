#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/ast/__init__.py
"""Document tree module for the rich editing view.

This module provides the tree the rich editor edits and the serializer turns
into AsciiDoc. The tree approach allows for:

1. Structural serialization with a line-level source map
2. Validation of the tree invariants independently of serialization
3. Loading and saving the editing surface's JSON representation

The module consists of several components:

- nodes: node classes representing document structure
- visitors: visitor pattern implementation for tree traversal and validation
- serialization: editor JSON serialization and deserialization
- utils: text extraction, block traversal and block-identity assignment

Examples
--------
Basic usage:

    >>> from adocsync.ast import Document, Heading, Paragraph, Text
    >>> from adocsync.renderers.asciidoc import serialize
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")], block_id="h"),
    ...     Paragraph(content=[Text(content="Hello world")], block_id="p")
    ... ])
    >>> result = serialize(doc)
    >>> result.source_map.line_for_block("p")
    3

"""

from __future__ import annotations

from adocsync.ast.nodes import (
    INLINE_NODE_TYPES,
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
    get_node_children,
    is_block_node,
    is_inline_node,
)
from adocsync.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from adocsync.ast.utils import assign_block_ids, extract_text, iter_blocks, node_size
from adocsync.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    # Nodes
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
    "INLINE_NODE_TYPES",
    "get_node_children",
    "is_block_node",
    "is_inline_node",
    # Visitors
    "NodeVisitor",
    "ValidationVisitor",
    # Serialization
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
    # Utilities
    "assign_block_ids",
    "extract_text",
    "iter_blocks",
    "node_size",
]
