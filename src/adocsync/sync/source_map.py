#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/sync/source_map.py
"""Block-to-line source maps produced by serialization.

A ``SourceMapRegistry`` accumulates entries while the serializer emits lines;
``snapshot()`` freezes them into an immutable ``SourceMap`` that the sync
controller keeps until the next serialization pass.

Two families of mappings are kept:

- Block identity <-> line: the primary navigation mapping. The first
  occurrence of an identity wins; later repeats are remembered in
  ``duplicate_block_ids``. When several blocks start on the same line (a
  list, its first item and that item's paragraph) the line resolves to the
  innermost one, which is the last recorded.
- Approximate editor offset <-> line: the legacy fallback for blocks without
  identities. The first offset per line and the first line per offset are
  kept.

"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_EMPTY: Mapping = MappingProxyType({})


@dataclass(frozen=True)
class SourceMap:
    """Immutable result of one serialization pass.

    Parameters
    ----------
    block_id_to_line : Mapping[str, int]
        First output line (1-indexed) of every identified block
    line_to_block_id : Mapping[int, str]
        Innermost block starting on each line
    pos_to_line : Mapping[int, int]
        Approximate editor offset to line (legacy)
    line_to_pos : Mapping[int, int]
        Line to approximate editor offset (legacy)
    duplicate_block_ids : frozenset of str
        Identities that occurred more than once; only their first occurrence
        is mapped

    """

    block_id_to_line: Mapping[str, int] = field(default_factory=lambda: _EMPTY)
    line_to_block_id: Mapping[int, str] = field(default_factory=lambda: _EMPTY)
    pos_to_line: Mapping[int, int] = field(default_factory=lambda: _EMPTY)
    line_to_pos: Mapping[int, int] = field(default_factory=lambda: _EMPTY)
    duplicate_block_ids: frozenset[str] = frozenset()
    _block_lines: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_block_lines", tuple(sorted(self.line_to_block_id)))

    @classmethod
    def empty(cls) -> "SourceMap":
        """Return a source map with no entries."""
        return cls()

    def __len__(self) -> int:
        return len(self.block_id_to_line)

    def line_for_block(self, block_id: str) -> Optional[int]:
        """Return the first line of ``block_id``, or None if it is not mapped."""
        return self.block_id_to_line.get(block_id)

    def block_at_line(self, line: int) -> Optional[str]:
        """Return the block that owns ``line``.

        This is the innermost block starting on ``line`` or, failing that, the
        nearest block starting above it. Lines before the first mapped block
        have no owner.

        Parameters
        ----------
        line : int
            1-indexed line number

        Returns
        -------
        str or None
            Owning block identity

        """
        index = bisect.bisect_right(self._block_lines, line)
        if index == 0:
            return None
        return self.line_to_block_id[self._block_lines[index - 1]]

    def line_for_offset(self, offset: int) -> Optional[int]:
        """Return the line recorded for an approximate editor offset (legacy)."""
        return self.pos_to_line.get(offset)

    def offset_for_line(self, line: int) -> Optional[int]:
        """Return the approximate editor offset recorded for a line (legacy)."""
        return self.line_to_pos.get(line)


class SourceMapRegistry:
    """Mutable accumulator for source-map entries during one serialization pass.

    Examples
    --------
        >>> registry = SourceMapRegistry()
        >>> registry.record("h1", 0, 1)
        >>> registry.record("p1", 7, 3)
        >>> registry.snapshot().line_for_block("p1")
        3

    """

    def __init__(self) -> None:
        self._block_id_to_line: dict[str, int] = {}
        self._line_to_block_id: dict[int, str] = {}
        self._pos_to_line: dict[int, int] = {}
        self._line_to_pos: dict[int, int] = {}
        self._duplicates: set[str] = set()

    def record(self, block_id: Optional[str], approx_offset: Optional[int], line: int) -> None:
        """Record that a block starts on ``line``.

        Parameters
        ----------
        block_id : str or None
            Block identity; None records only the legacy offset
        approx_offset : int or None
            Approximate editor offset of the block; None records only the identity
        line : int
            1-indexed output line

        """
        if block_id is not None:
            if block_id in self._block_id_to_line:
                if block_id not in self._duplicates:
                    logger.debug(
                        f"Block id '{block_id}' already mapped to line {self._block_id_to_line[block_id]}, "
                        f"ignoring repeat on line {line}"
                    )
                self._duplicates.add(block_id)
            else:
                self._block_id_to_line[block_id] = line
                self._line_to_block_id[line] = block_id

        if approx_offset is not None:
            self._line_to_pos.setdefault(line, approx_offset)
            self._pos_to_line.setdefault(approx_offset, line)

    def snapshot(self) -> SourceMap:
        """Freeze the recorded entries into a read-only ``SourceMap``."""
        return SourceMap(
            block_id_to_line=MappingProxyType(dict(self._block_id_to_line)),
            line_to_block_id=MappingProxyType(dict(self._line_to_block_id)),
            pos_to_line=MappingProxyType(dict(self._pos_to_line)),
            line_to_pos=MappingProxyType(dict(self._line_to_pos)),
            duplicate_block_ids=frozenset(self._duplicates),
        )
