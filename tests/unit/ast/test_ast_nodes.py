#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_ast_nodes.py
"""Tests for document tree node classes."""

import pytest

from adocsync.ast import (
    Admonition,
    BlockQuote,
    CodeBlock,
    Document,
    HardBreak,
    Heading,
    Image,
    List,
    ListItem,
    Mark,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
)
from adocsync.ast.nodes import get_node_children, is_block_node, is_inline_node


@pytest.mark.unit
class TestHeading:
    """Tests for the Heading node."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_valid_levels(self, level):
        """Test that levels 1-6 are accepted."""
        heading = Heading(level=level, content=[Text(content="Title")])
        assert heading.level == level

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_invalid_level_raises(self, level):
        """Test that levels outside 1-6 are rejected."""
        with pytest.raises(ValueError, match="Heading level must be 1-6"):
            Heading(level=level)

    def test_kind_and_block_id(self):
        """Test the editor kind name and identity."""
        heading = Heading(level=2, block_id="abc")
        assert heading.kind == "heading"
        assert heading.block_id == "abc"


@pytest.mark.unit
class TestKinds:
    """Tests for the editor kind names exposed by each class."""

    def test_list_kind_follows_ordered_flag(self):
        """Test that lists report bulletList or orderedList."""
        assert List(ordered=False).kind == "bulletList"
        assert List(ordered=True).kind == "orderedList"

    def test_cell_kind_follows_header_flag(self):
        """Test that cells report tableCell or tableHeader."""
        assert TableCell().kind == "tableCell"
        assert TableCell(header=True).kind == "tableHeader"

    def test_unknown_node_reports_original_kind(self):
        """Test that an unknown node keeps the kind it was loaded from."""
        node = UnknownNode(kind_name="mermaidDiagram")
        assert node.kind == "mermaidDiagram"

    def test_row_is_header_when_any_cell_is(self):
        """Test header detection on rows."""
        assert TableRow(cells=[TableCell(header=True), TableCell()]).is_header
        assert not TableRow(cells=[TableCell(), TableCell()]).is_header
        assert not TableRow().is_header


@pytest.mark.unit
class TestNodeHelpers:
    """Tests for the block/inline classification helpers."""

    def test_get_node_children(self):
        """Test that children are found for every container kind."""
        text = Text(content="x")
        paragraph = Paragraph(content=[text])
        item = ListItem(children=[paragraph])
        lst = List(ordered=False, items=[item])
        cell = TableCell(children=[paragraph])
        row = TableRow(cells=[cell])
        table = Table(rows=[row])

        assert get_node_children(paragraph) == [text]
        assert get_node_children(item) == [paragraph]
        assert get_node_children(lst) == [item]
        assert get_node_children(table) == [row]
        assert get_node_children(row) == [cell]
        assert get_node_children(cell) == [paragraph]
        assert get_node_children(BlockQuote(children=[paragraph])) == [paragraph]
        assert get_node_children(Admonition(children=[paragraph])) == [paragraph]
        assert get_node_children(CodeBlock(content="x = 1")) == []
        assert get_node_children(text) == []

    def test_children_are_copies(self):
        """Test that the returned list can be modified without touching the node."""
        doc = Document(children=[Paragraph()])
        children = get_node_children(doc)
        children.clear()
        assert len(doc.children) == 1

    def test_block_and_inline_classification(self):
        """Test which nodes count as block and inline content."""
        assert is_block_node(Paragraph())
        assert not is_block_node(Text(content="x"))
        assert is_inline_node(Text(content="x"))
        assert is_inline_node(HardBreak())
        assert not is_inline_node(Paragraph())

    def test_image_and_unknown_are_both(self):
        """Test that images and unknown nodes are accepted in either position."""
        image = Image(src="a.png")
        unknown = UnknownNode(kind_name="widget")
        assert is_block_node(image) and is_inline_node(image)
        assert is_block_node(unknown) and is_inline_node(unknown)


@pytest.mark.unit
class TestMark:
    """Tests for the Mark record."""

    def test_defaults(self):
        """Test that attributes default to an empty dict per instance."""
        first = Mark("bold")
        second = Mark("italic")
        first.attrs["x"] = 1
        assert second.attrs == {}

    def test_equality(self):
        """Test that marks compare by value."""
        assert Mark("link", {"href": "a"}) == Mark("link", {"href": "a"})
        assert Mark("link", {"href": "a"}) != Mark("link", {"href": "b"})
