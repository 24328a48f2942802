#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/ast/visitors.py
"""Visitor pattern implementation for document tree traversal.

This module provides the visitor base class used by the serializer and the
validator. Node kinds form a closed set with one ``visit_*`` method each, plus
``visit_unknown`` as the explicit fallback arm for kinds this library does
not model.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
    get_node_children,
    is_block_node,
    is_inline_node,
)
from adocsync.exceptions import ValidationError


class NodeVisitor(ABC):
    """Abstract base class for document tree visitors.

    Subclasses implement a ``visit_*`` method for each node kind. Unknown
    kinds reach ``visit_unknown``, which defaults to ``generic_visit`` so that
    new editor kinds never break an existing visitor.

    Examples
    --------
    Simple visitor that counts nodes:

        >>> class NodeCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def generic_visit(self, node):
        ...         self.count += 1
        ...         for child in get_node_children(node):
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_admonition(self, node: Admonition) -> Any:
        """Visit an Admonition node."""
        pass

    @abstractmethod
    def visit_include(self, node: Include) -> Any:
        """Visit an Include node."""
        pass

    @abstractmethod
    def visit_raw_block(self, node: RawBlock) -> Any:
        """Visit a RawBlock node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_hard_break(self, node: HardBreak) -> Any:
        """Visit a HardBreak node."""
        pass

    def visit_unknown(self, node: UnknownNode) -> Any:
        """Visit a node of a kind this library does not model.

        Parameters
        ----------
        node : UnknownNode
            The node to visit

        Returns
        -------
        Any
            Result of ``generic_visit``

        """
        return self.generic_visit(node)

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        The default implementation does nothing but can be overridden.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class ValidationVisitor(NodeVisitor):
    """Visitor that checks the document tree invariants.

    The checks are:
    - The root's children are block-level nodes only
    - Headings contain inline nodes only, and never an image
    - Paragraphs contain inline nodes only
    - Container blocks (quotes, list items, admonitions) contain blocks only
    - A text run carries at most one mark of each type
    - Heading levels are 1-6
    - No two blocks share a block identity

    The serializer never requires a valid tree; validation is a separate
    step for callers that want to reject malformed input early.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise ``ValidationError`` on the first failure. When False,
        failures are collected in ``errors``.

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator with a strictness policy."""
        self.strict = strict
        self.errors: list[str] = []
        self._seen_block_ids: set[str] = set()

    def _add_error(self, message: str) -> None:
        """Record a validation error, raising it in strict mode."""
        self.errors.append(message)
        if self.strict:
            raise ValidationError(message)

    def _validate_children_are_inline(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if not is_inline_node(child):
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")

    def _validate_children_are_blocks(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if not is_block_node(child) or isinstance(child, (TableRow, TableCell, ListItem)):
                self._add_error(f"{context} can only contain block nodes, but child {i} is {type(child).__name__}")

    def _visit_all(self, children: list[Node]) -> None:
        for child in children:
            block_id = getattr(child, "block_id", None)
            if block_id:
                if block_id in self._seen_block_ids:
                    self._add_error(f"Duplicate block identity: {block_id!r}")
                self._seen_block_ids.add(block_id)
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._validate_children_are_blocks(node.children, "Document")
        self._visit_all(node.children)

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}")
        self._validate_children_are_inline(node.content, "Heading")
        for i, child in enumerate(node.content):
            if isinstance(child, Image):
                self._add_error(f"Heading cannot contain an image, but child {i} is Image")
        self._visit_all(node.content)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._validate_children_are_inline(node.content, "Paragraph")
        self._visit_all(node.content)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        if not isinstance(node.content, str):
            self._add_error(f"CodeBlock content must be a string, got {type(node.content).__name__}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._validate_children_are_blocks(node.children, "BlockQuote")
        self._visit_all(node.children)

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        for i, item in enumerate(node.items):
            if not isinstance(item, ListItem):
                self._add_error(f"List can only contain ListItem nodes, but item {i} is {type(item).__name__}")
        self._visit_all(list(node.items))

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        self._validate_children_are_blocks(node.children, "ListItem")
        self._visit_all(node.children)

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        for i, row in enumerate(node.rows):
            if not isinstance(row, TableRow):
                self._add_error(f"Table can only contain TableRow nodes, but row {i} is {type(row).__name__}")
        self._visit_all(list(node.rows))

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        for i, cell in enumerate(node.cells):
            if not isinstance(cell, TableCell):
                self._add_error(f"TableRow can only contain TableCell nodes, but cell {i} is {type(cell).__name__}")
        self._visit_all(list(node.cells))

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        if node.colspan < 1 or node.rowspan < 1:
            self._add_error(f"TableCell spans must be positive, got colspan={node.colspan} rowspan={node.rowspan}")
        self._visit_all(node.children)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        """Validate a HorizontalRule node."""
        pass

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""
        if not node.src:
            self._add_error("Image must have a src")

    def visit_admonition(self, node: Admonition) -> None:
        """Validate an Admonition node."""
        self._validate_children_are_blocks(node.children, "Admonition")
        self._visit_all(node.children)

    def visit_include(self, node: Include) -> None:
        """Validate an Include node."""
        if not node.path:
            self._add_error("Include must have a path")

    def visit_raw_block(self, node: RawBlock) -> None:
        """Validate a RawBlock node."""
        pass

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        seen: set[str] = set()
        for mark in node.marks:
            if mark.type in seen:
                self._add_error(f"Text carries duplicate '{mark.type}' marks")
            seen.add(mark.type)

    def visit_hard_break(self, node: HardBreak) -> None:
        """Validate a HardBreak node."""
        pass

    def visit_unknown(self, node: UnknownNode) -> None:
        """Unknown kinds are accepted; only their children are checked."""
        self._visit_all(get_node_children(node))
