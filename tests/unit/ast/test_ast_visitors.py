#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_ast_visitors.py
"""Tests for the tree visitors."""

import pytest

from adocsync.ast import (
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
    Paragraph,
    RawBlock,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
    ValidationVisitor,
)
from adocsync.exceptions import ValidationError


def _valid_document():
    return Document(
        children=[
            Heading(level=1, content=[Text(content="Title")], block_id="h"),
            Paragraph(content=[Text(content="a", marks=[Mark("bold")]), HardBreak()], block_id="p"),
            List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text(content="item")])])]),
            Table(
                rows=[
                    TableRow(cells=[TableCell(children=[Paragraph(content=[Text(content="A")])], header=True)]),
                    TableRow(cells=[TableCell(children=[Paragraph(content=[Text(content="1")])])]),
                ]
            ),
            CodeBlock(content="print(1)", language="python"),
            Admonition(admonition_type="TIP", children=[Paragraph(content=[Text(content="tip")])]),
            Include(path="chapter.adoc"),
            RawBlock(source="// comment"),
            HorizontalRule(),
            Image(src="a.png"),
            UnknownNode(kind_name="widget", children=[Paragraph()]),
        ]
    )


@pytest.mark.unit
class TestValidationVisitor:
    """Tests for ValidationVisitor."""

    def test_valid_document_passes(self):
        """Test that a well-formed tree produces no errors."""
        visitor = ValidationVisitor()
        _valid_document().accept(visitor)
        assert visitor.errors == []

    def test_inline_at_root_is_rejected(self):
        """Test that inline nodes directly under the document fail."""
        doc = Document(children=[Text(content="stray")])
        with pytest.raises(ValidationError, match="block nodes"):
            doc.accept(ValidationVisitor())

    def test_block_in_paragraph_is_rejected(self):
        """Test that paragraphs only hold inline content."""
        doc = Document(children=[Paragraph(content=[Paragraph()])])
        with pytest.raises(ValidationError, match="inline nodes"):
            doc.accept(ValidationVisitor())

    def test_image_in_heading_is_rejected(self):
        """Test that headings never contain images."""
        doc = Document(children=[Heading(level=2, content=[Image(src="a.png")])])
        with pytest.raises(ValidationError, match="image"):
            doc.accept(ValidationVisitor())

    def test_duplicate_marks_are_rejected(self):
        """Test that a text run carries at most one mark per type."""
        doc = Document(children=[Paragraph(content=[Text(content="x", marks=[Mark("bold"), Mark("bold")])])])
        with pytest.raises(ValidationError, match="duplicate 'bold'"):
            doc.accept(ValidationVisitor())

    def test_code_content_must_be_string(self):
        """Test that code block content is plain text."""
        doc = Document(children=[CodeBlock(content=["not", "a", "string"])])  # type: ignore[arg-type]
        with pytest.raises(ValidationError, match="CodeBlock content"):
            doc.accept(ValidationVisitor())

    def test_table_shapes(self):
        """Test that tables hold rows and rows hold cells."""
        with pytest.raises(ValidationError, match="TableRow"):
            Document(children=[Table(rows=[Paragraph()])]).accept(ValidationVisitor())  # type: ignore[list-item]
        with pytest.raises(ValidationError, match="TableCell"):
            Table(rows=[TableRow(cells=[Paragraph()])]).accept(ValidationVisitor())  # type: ignore[list-item]

    def test_spans_must_be_positive(self):
        """Test that cell spans are at least one."""
        with pytest.raises(ValidationError, match="spans"):
            TableCell(colspan=0).accept(ValidationVisitor())

    def test_missing_paths(self):
        """Test that images need a src and includes need a path."""
        with pytest.raises(ValidationError, match="src"):
            Image(src="").accept(ValidationVisitor())
        with pytest.raises(ValidationError, match="path"):
            Include(path="").accept(ValidationVisitor())

    def test_list_items_must_be_list_items(self):
        """Test that lists hold list items only."""
        with pytest.raises(ValidationError, match="ListItem"):
            List(ordered=True, items=[Paragraph()]).accept(ValidationVisitor())  # type: ignore[list-item]

    def test_non_strict_collects_all_errors(self):
        """Test that non-strict mode reports every problem without raising."""
        doc = Document(
            children=[
                Text(content="stray"),
                Heading(level=1, content=[Image(src="")]),
                Include(path=""),
            ]
        )
        visitor = ValidationVisitor(strict=False)
        doc.accept(visitor)
        assert len(visitor.errors) == 4
        assert any("block nodes" in error for error in visitor.errors)
        assert any("Include" in error for error in visitor.errors)

    def test_duplicate_block_ids_are_reported(self):
        """Test that a repeated identity is flagged, including inside containers."""
        doc = Document(
            children=[
                Paragraph(content=[Text(content="a")], block_id="p"),
                BlockQuote(children=[Paragraph(content=[Text(content="b")], block_id="p")]),
            ]
        )
        visitor = ValidationVisitor(strict=False)
        doc.accept(visitor)
        assert visitor.errors == ["Duplicate block identity: 'p'"]

        with pytest.raises(ValidationError, match="Duplicate block identity"):
            doc.accept(ValidationVisitor())

    def test_unknown_node_children_are_checked(self):
        """Test that unknown nodes are accepted but their children are still validated."""
        node = UnknownNode(kind_name="widget", children=[Paragraph(content=[Paragraph()])])
        visitor = ValidationVisitor(strict=False)
        node.accept(visitor)
        assert len(visitor.errors) == 1
