#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/sync/test_source_map.py
"""Tests for SourceMap and SourceMapRegistry."""

import pytest

from adocsync.sync.source_map import SourceMap, SourceMapRegistry


@pytest.mark.unit
class TestSourceMapRegistry:
    """Tests for recording entries during a serialization pass."""

    def test_record_and_snapshot(self):
        """Test that recorded entries appear in the snapshot."""
        registry = SourceMapRegistry()
        registry.record("h", 0, 1)
        registry.record("p", 7, 3)
        source_map = registry.snapshot()

        assert dict(source_map.block_id_to_line) == {"h": 1, "p": 3}
        assert dict(source_map.line_to_block_id) == {1: "h", 3: "p"}
        assert dict(source_map.pos_to_line) == {0: 1, 7: 3}
        assert dict(source_map.line_to_pos) == {1: 0, 3: 7}

    def test_later_block_on_same_line_owns_it(self):
        """Test that the last block recorded on a line owns that line."""
        registry = SourceMapRegistry()
        registry.record("list", 0, 1)
        registry.record("item", 1, 1)
        registry.record("para", 2, 1)
        source_map = registry.snapshot()

        assert source_map.block_at_line(1) == "para"
        assert source_map.line_for_block("list") == 1
        assert source_map.offset_for_line(1) == 0

    def test_duplicates_first_wins(self):
        """Test that a repeated identity keeps its first line and is reported."""
        registry = SourceMapRegistry()
        registry.record("d", None, 1)
        registry.record("d", None, 5)
        source_map = registry.snapshot()

        assert source_map.line_for_block("d") == 1
        assert 5 not in source_map.line_to_block_id
        assert source_map.duplicate_block_ids == frozenset({"d"})

    def test_offset_only_record(self):
        """Test recording a block that has no identity."""
        registry = SourceMapRegistry()
        registry.record(None, 4, 2)
        source_map = registry.snapshot()

        assert len(source_map) == 0
        assert source_map.line_for_offset(4) == 2

    def test_snapshot_is_independent(self):
        """Test that later records do not change an earlier snapshot."""
        registry = SourceMapRegistry()
        registry.record("a", None, 1)
        snapshot = registry.snapshot()
        registry.record("b", None, 3)

        assert snapshot.line_for_block("b") is None
        assert registry.snapshot().line_for_block("b") == 3


@pytest.mark.unit
class TestSourceMap:
    """Tests for SourceMap lookups."""

    def test_empty(self):
        """Test the empty map."""
        source_map = SourceMap.empty()
        assert len(source_map) == 0
        assert source_map.line_for_block("x") is None
        assert source_map.block_at_line(1) is None
        assert source_map.line_for_offset(0) is None
        assert source_map.offset_for_line(1) is None

    def test_block_at_line(self):
        """Test ownership lookups before, on and between block lines."""
        registry = SourceMapRegistry()
        registry.record("a", None, 3)
        registry.record("b", None, 6)
        source_map = registry.snapshot()

        assert source_map.block_at_line(1) is None
        assert source_map.block_at_line(3) == "a"
        assert source_map.block_at_line(5) == "a"
        assert source_map.block_at_line(6) == "b"
        assert source_map.block_at_line(40) == "b"

    def test_read_only(self):
        """Test that the mappings cannot be modified."""
        registry = SourceMapRegistry()
        registry.record("a", 0, 1)
        source_map = registry.snapshot()

        with pytest.raises(TypeError):
            source_map.block_id_to_line["b"] = 2  # type: ignore[index]
        with pytest.raises(AttributeError):
            source_map.block_id_to_line = {}  # type: ignore[misc]
