#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_ast_utils.py
"""Tests for tree utility functions."""

import itertools

import pytest

from adocsync.ast import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    List,
    ListItem,
    Mark,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
    assign_block_ids,
)
from adocsync.ast.utils import extract_text, iter_blocks, node_size


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text."""

    def test_single_text(self):
        """Test extracting from one text run."""
        assert extract_text(Text(content="Hello")) == "Hello"

    def test_marks_ignored(self):
        """Test that marks do not affect the extracted text."""
        heading = Heading(level=1, content=[Text(content="Hello "), Text(content="world", marks=[Mark("bold")])])
        assert extract_text(heading, joiner="") == "Hello world"

    def test_nested_blocks(self):
        """Test extraction through lists and quotes."""
        doc = Document(
            children=[
                BlockQuote(children=[Paragraph(content=[Text(content="quoted")])]),
                List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text(content="item")])])]),
            ]
        )
        assert extract_text(doc) == "quoted item"

    def test_code_and_unknown_text(self):
        """Test that code content and unknown node text are included."""
        assert extract_text(CodeBlock(content="x = 1")) == "x = 1"
        assert extract_text(UnknownNode(kind_name="w", text="raw")) == "raw"

    def test_empty_parts_skipped(self):
        """Test that empty parts do not produce doubled joiners."""
        assert extract_text([Text(content="a"), Paragraph(), Text(content="b")], joiner="|") == "a|b"


@pytest.mark.unit
class TestIterBlocks:
    """Tests for iter_blocks."""

    def test_document_order(self):
        """Test that blocks are yielded parents first."""
        inner = Paragraph(content=[Text(content="x")], block_id="p")
        item = ListItem(children=[inner], block_id="li")
        lst = List(ordered=False, items=[item], block_id="l")
        heading = Heading(level=1, block_id="h")
        doc = Document(children=[heading, lst])

        assert list(iter_blocks(doc)) == [heading, lst, item, inner]

    def test_rows_and_text_skipped(self):
        """Test that nodes without an identity slot are not yielded."""
        paragraph = Paragraph(content=[Text(content="A")])
        table = Table(rows=[TableRow(cells=[TableCell(children=[paragraph])])])
        assert list(iter_blocks(table)) == [table, paragraph]


@pytest.mark.unit
class TestNodeSize:
    """Tests for node_size."""

    def test_leaf_sizes(self):
        """Test text, code and empty nodes."""
        assert node_size(Text(content="abc")) == 4
        assert node_size(CodeBlock(content="ab")) == 3
        assert node_size(Paragraph()) == 1

    def test_nested_size(self):
        """Test that a container adds one for itself to its children."""
        paragraph = Paragraph(content=[Text(content="Hello"), Text(content="!")])
        assert node_size(paragraph) == 1 + 6 + 2
        assert node_size(ListItem(children=[paragraph])) == 1 + node_size(paragraph)


@pytest.mark.unit
class TestAssignBlockIds:
    """Tests for assign_block_ids."""

    def test_fills_missing_ids(self):
        """Test that every block receives an identity."""
        doc = Document(
            children=[
                Heading(level=1, content=[Text(content="T")]),
                List(ordered=False, items=[ListItem(children=[Paragraph()])]),
            ]
        )
        issued = assign_block_ids(doc)

        blocks = list(iter_blocks(doc))
        assert issued == len(blocks) == 4
        ids = [block.block_id for block in blocks]
        assert all(ids)
        assert len(set(ids)) == len(ids)

    def test_keeps_existing_ids(self):
        """Test that present identities are left alone."""
        doc = Document(children=[Paragraph(block_id="keep"), Paragraph()])
        counter = itertools.count()
        issued = assign_block_ids(doc, generate_id=lambda: f"new{next(counter)}")

        assert issued == 1
        assert [child.block_id for child in doc.children] == ["keep", "new0"]

    def test_regenerates_duplicates(self):
        """Test that a repeated identity is re-issued for the later block."""
        doc = Document(children=[Paragraph(block_id="dup"), Paragraph(block_id="dup")])
        assign_block_ids(doc, generate_id=lambda: "fresh")

        assert [child.block_id for child in doc.children] == ["dup", "fresh"]

    def test_duplicates_kept_when_disabled(self):
        """Test that duplicates survive when regeneration is off."""
        doc = Document(children=[Paragraph(block_id="dup"), Paragraph(block_id="dup")])
        assert assign_block_ids(doc, regenerate_duplicates=False) == 0
        assert [child.block_id for child in doc.children] == ["dup", "dup"]

    def test_generator_collisions_retried(self):
        """Test that a generated identity already in use is not handed out."""
        doc = Document(children=[Paragraph(block_id="a"), Paragraph()])
        values = iter(["a", "b"])
        assign_block_ids(doc, generate_id=lambda: next(values))

        assert doc.children[1].block_id == "b"
