#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/ast/utils.py
"""Utility functions for working with document tree nodes.

This module provides helper functions for common operations on the tree:
plain-text extraction, block traversal, approximate editor positions and
block-identity assignment.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
iter_blocks : Iterate over identity-carrying nodes in document order
node_size : Approximate editor size of a node
assign_block_ids : Give every block a unique identity

Examples
--------
Extract text from a heading:

    >>> from adocsync.ast import Heading, Mark, Text
    >>> from adocsync.ast.utils import extract_text
    >>>
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Text(content="world", marks=[Mark("bold")])
    ... ])
    >>> extract_text(heading, joiner="")
    'Hello world'

"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Callable, Iterator, Optional, Union

from adocsync.ast.nodes import CodeBlock, Text, UnknownNode, get_node_children

if TYPE_CHECKING:
    from adocsync.ast.nodes import Node

logger = logging.getLogger(__name__)


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text content is preserved exactly, marks are ignored, and the joiner is
    applied between sibling parts at every level of the tree.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String used to join text parts. Use "" to keep only the spacing that
        is already inside the text runs.

    Returns
    -------
    str
        Concatenated text content

    Examples
    --------
        >>> from adocsync.ast import List, ListItem, Paragraph, Text
        >>> lst = List(ordered=False, items=[
        ...     ListItem(children=[Paragraph(content=[Text(content="Item 1")])]),
        ...     ListItem(children=[Paragraph(content=[Text(content="Item 2")])])
        ... ])
        >>> extract_text(lst)
        'Item 1 Item 2'

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(part for part in (extract_text(node, joiner) for node in node_or_nodes) if part)

    node = node_or_nodes
    if isinstance(node, Text):
        return node.content
    if isinstance(node, CodeBlock):
        return node.content
    if isinstance(node, UnknownNode) and node.text:
        return node.text

    return extract_text(get_node_children(node), joiner)


def iter_blocks(node: Node) -> Iterator[Node]:
    """Iterate over ``node`` and its descendants that can carry a block identity.

    Traversal is depth-first in document order (parents before children).

    Parameters
    ----------
    node : Node
        Root of the traversal

    Yields
    ------
    Node
        Every node with a ``block_id`` attribute

    """
    if hasattr(node, "block_id"):
        yield node
    for child in get_node_children(node):
        yield from iter_blocks(child)


def _own_text_length(node: Node) -> int:
    if isinstance(node, (Text, CodeBlock)):
        return len(node.content)
    if isinstance(node, UnknownNode) and node.text:
        return len(node.text)
    return 0


def node_size(node: Node) -> int:
    """Approximate the size of ``node`` in editor positions.

    A node occupies one position for itself plus its text length plus the
    sizes of its children. The result is an approximation of the editing
    surface's own position model and is only used for the legacy offset maps.

    Parameters
    ----------
    node : Node
        Node to measure

    Returns
    -------
    int
        Approximate size, always at least 1

    """
    return 1 + _own_text_length(node) + sum(node_size(child) for child in get_node_children(node))


def _new_block_id() -> str:
    return uuid.uuid4().hex


def assign_block_ids(
    document: Node,
    generate_id: Optional[Callable[[], str]] = None,
    regenerate_duplicates: bool = True,
) -> int:
    """Give every identity-carrying block in ``document`` a unique identity.

    Blocks without a ``block_id`` receive a fresh one. When
    ``regenerate_duplicates`` is True, a block whose identity repeats an
    earlier block's (in document order) is re-issued a fresh identity, which
    is what the editing surface does when a block is copied and pasted.

    The tree is modified in place.

    Parameters
    ----------
    document : Node
        Root of the tree, usually a Document
    generate_id : callable, optional
        Zero-argument function returning a new identity. Defaults to
        ``uuid.uuid4().hex``.
    regenerate_duplicates : bool, default = True
        Whether to re-issue identities that repeat an earlier block's

    Returns
    -------
    int
        Number of identities issued

    """
    generate = generate_id or _new_block_id
    seen: set[str] = set()
    issued = 0

    for block in iter_blocks(document):
        block_id = block.block_id  # type: ignore[attr-defined]
        if block_id is None or (regenerate_duplicates and block_id in seen):
            new_id = generate()
            while new_id in seen:
                new_id = generate()
            if block_id is not None:
                logger.debug(f"Re-issuing duplicate block id '{block_id}' as '{new_id}'")
            block.block_id = new_id  # type: ignore[attr-defined]
            block_id = new_id
            issued += 1
        seen.add(block_id)

    return issued


__all__ = [
    "extract_text",
    "iter_blocks",
    "node_size",
    "assign_block_ids",
]
