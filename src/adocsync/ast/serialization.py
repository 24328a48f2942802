#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/ast/serialization.py
"""Editor JSON serialization and deserialization for document trees.

The rich editing surface exchanges documents as nested JSON objects of the
form ``{"type", "attrs", "content", "text", "marks"}``. This module converts
that representation to and from the node classes in ``adocsync.ast.nodes``.

The JSON format preserves:
- All known node kinds and their attributes
- Block identities (``attrs.id``)
- Formatting marks on text runs
- Kinds this library does not model (as ``UnknownNode``)

Examples
--------
Load a document produced by the editor:

    >>> from adocsync.ast.serialization import dict_to_ast
    >>> doc = dict_to_ast({
    ...     "type": "doc",
    ...     "content": [
    ...         {"type": "heading", "attrs": {"level": 1, "id": "h1"},
    ...          "content": [{"type": "text", "text": "Title"}]},
    ...     ],
    ... })
    >>> doc.children[0].block_id
    'h1'

Write it back out:

    >>> from adocsync.ast.serialization import ast_to_json
    >>> json_str = ast_to_json(doc, indent=2)

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

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
    Mark,
    Node,
    Paragraph,
    RawBlock,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
)
from adocsync.exceptions import ValidationError

logger = logging.getLogger(__name__)


# ============================================================================
# Serialization (nodes -> editor JSON)
# ============================================================================


def _with_attrs(result: dict[str, Any], attrs: dict[str, Any]) -> dict[str, Any]:
    """Attach non-None attributes to a serialized node."""
    cleaned = {key: value for key, value in attrs.items() if value is not None}
    if cleaned:
        result["attrs"] = cleaned
    return result


def _with_content(result: dict[str, Any], children: list[Node]) -> dict[str, Any]:
    if children:
        result["content"] = [ast_to_dict(child) for child in children]
    return result


def _serialize_document(node: Document) -> dict[str, Any]:
    return _with_content({"type": "doc"}, node.children)


def _serialize_heading(node: Heading) -> dict[str, Any]:
    result = _with_attrs({"type": "heading"}, {"level": node.level, "id": node.block_id})
    return _with_content(result, node.content)


def _serialize_paragraph(node: Paragraph) -> dict[str, Any]:
    return _with_content(_with_attrs({"type": "paragraph"}, {"id": node.block_id}), node.content)


def _serialize_code_block(node: CodeBlock) -> dict[str, Any]:
    """Serialize a CodeBlock node; the code becomes a single unmarked text child."""
    result = _with_attrs({"type": "codeBlock"}, {"language": node.language, "id": node.block_id})
    if node.content:
        result["content"] = [{"type": "text", "text": node.content}]
    return result


def _serialize_block_quote(node: BlockQuote) -> dict[str, Any]:
    return _with_content(_with_attrs({"type": "blockquote"}, {"id": node.block_id}), node.children)


def _serialize_list(node: List) -> dict[str, Any]:
    """Serialize a List node as ``orderedList`` or ``bulletList``."""
    attrs: dict[str, Any] = {"id": node.block_id}
    if node.ordered and node.start != 1:
        attrs["start"] = node.start
    return _with_content(_with_attrs({"type": node.kind}, attrs), list(node.items))


def _serialize_list_item(node: ListItem) -> dict[str, Any]:
    return _with_content(_with_attrs({"type": "listItem"}, {"id": node.block_id}), node.children)


def _serialize_table(node: Table) -> dict[str, Any]:
    return _with_content(_with_attrs({"type": "table"}, {"id": node.block_id}), list(node.rows))


def _serialize_table_row(node: TableRow) -> dict[str, Any]:
    return _with_content({"type": "tableRow"}, list(node.cells))


def _serialize_table_cell(node: TableCell) -> dict[str, Any]:
    """Serialize a TableCell node; spans of 1 are omitted."""
    attrs: dict[str, Any] = {}
    if node.colspan != 1:
        attrs["colspan"] = node.colspan
    if node.rowspan != 1:
        attrs["rowspan"] = node.rowspan
    return _with_content(_with_attrs({"type": node.kind}, attrs), node.children)


def _serialize_horizontal_rule(node: HorizontalRule) -> dict[str, Any]:
    return _with_attrs({"type": "horizontalRule"}, {"id": node.block_id})


def _serialize_image(node: Image) -> dict[str, Any]:
    return _with_attrs(
        {"type": "image"}, {"src": node.src, "alt": node.alt, "title": node.title, "id": node.block_id}
    )


def _serialize_admonition(node: Admonition) -> dict[str, Any]:
    result = _with_attrs({"type": "admonition"}, {"type": node.admonition_type, "id": node.block_id})
    return _with_content(result, node.children)


def _serialize_include(node: Include) -> dict[str, Any]:
    return _with_attrs(
        {"type": "include"},
        {
            "path": node.path,
            "leveloffset": node.level_offset,
            "lines": node.line_range,
            "tag": node.tag,
            "id": node.block_id,
        },
    )


def _serialize_raw_block(node: RawBlock) -> dict[str, Any]:
    return _with_attrs(
        {"type": "rawBlock"}, {"source": node.source, "context": node.context, "id": node.block_id}
    )


def _serialize_text(node: Text) -> dict[str, Any]:
    """Serialize a Text node with its marks."""
    result: dict[str, Any] = {"type": "text", "text": node.content}
    if node.marks:
        result["marks"] = [_with_attrs({"type": mark.type}, mark.attrs) for mark in node.marks]
    return result


def _serialize_hard_break(node: HardBreak) -> dict[str, Any]:
    return {"type": "hardBreak"}


def _serialize_unknown(node: UnknownNode) -> dict[str, Any]:
    """Serialize an UnknownNode back to the kind it was loaded from."""
    attrs = dict(node.attrs)
    if node.block_id is not None:
        attrs["id"] = node.block_id
    result = _with_attrs({"type": node.kind_name}, attrs)
    if node.text is not None:
        result["text"] = node.text
    return _with_content(result, node.children)


# Dispatch table mapping node classes to serializer functions
_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: _serialize_document,
    Heading: _serialize_heading,
    Paragraph: _serialize_paragraph,
    CodeBlock: _serialize_code_block,
    BlockQuote: _serialize_block_quote,
    List: _serialize_list,
    ListItem: _serialize_list_item,
    Table: _serialize_table,
    TableRow: _serialize_table_row,
    TableCell: _serialize_table_cell,
    HorizontalRule: _serialize_horizontal_rule,
    Image: _serialize_image,
    Admonition: _serialize_admonition,
    Include: _serialize_include,
    RawBlock: _serialize_raw_block,
    Text: _serialize_text,
    HardBreak: _serialize_hard_break,
    UnknownNode: _serialize_unknown,
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to the editor's JSON-compatible dictionary form.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValidationError
        If ``node`` is not an instance of a known node class

    Examples
    --------
    >>> ast_to_dict(Text(content="Hello"))
    {'type': 'text', 'text': 'Hello'}

    """
    node_class = type(node)
    serializer = _SERIALIZATION_DISPATCH.get(node_class)
    if serializer:
        return serializer(node)

    raise ValidationError(
        f"Unknown node type for serialization: {node_class.__name__}",
        parameter_name="node",
        parameter_value=node_class.__name__,
    )


# ============================================================================
# Deserialization (editor JSON -> nodes)
# ============================================================================


def _attrs(data: dict[str, Any]) -> dict[str, Any]:
    return data.get("attrs") or {}


def _block_id(data: dict[str, Any]) -> str | None:
    block_id = _attrs(data).get("id")
    return str(block_id) if block_id is not None else None


def _first_present(attrs: dict[str, Any], *names: str) -> Any:
    """Return the first attribute among ``names`` that is set, else None."""
    for name in names:
        value = attrs.get(name)
        if value is not None and value != "":
            return value
    return None


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _deserialize_children(children_data: list[dict[str, Any]] | None, strict_mode: bool) -> list[Node]:
    return [dict_to_ast(child, strict_mode=strict_mode) for child in children_data or []]


def _deserialize_document(data: dict[str, Any], strict_mode: bool) -> Document:
    return Document(children=_deserialize_children(data.get("content"), strict_mode))


def _deserialize_heading(data: dict[str, Any], strict_mode: bool) -> Heading:
    """Deserialize a heading, clamping an out-of-range level in lenient mode."""
    raw_level = _attrs(data).get("level", 1)
    try:
        level = int(raw_level)
    except (TypeError, ValueError) as e:
        if strict_mode:
            raise ValidationError(
                f"Heading level must be an integer, got {raw_level!r}",
                parameter_name="level",
                parameter_value=raw_level,
                original_error=e,
            ) from e
        logger.warning(f"Heading level {raw_level!r} is not an integer, using 1")
        level = 1

    if not 1 <= level <= 6:
        if strict_mode:
            raise ValidationError(
                f"Heading level must be 1-6, got {level}", parameter_name="level", parameter_value=level
            )
        clamped = min(max(level, 1), 6)
        logger.warning(f"Heading level {level} out of range, clamping to {clamped}")
        level = clamped

    return Heading(
        level=level,
        content=_deserialize_children(data.get("content"), strict_mode),
        block_id=_block_id(data),
    )


def _deserialize_paragraph(data: dict[str, Any], strict_mode: bool) -> Paragraph:
    return Paragraph(content=_deserialize_children(data.get("content"), strict_mode), block_id=_block_id(data))


def _deserialize_code_block(data: dict[str, Any], strict_mode: bool) -> CodeBlock:
    """Deserialize a code block; text children are joined and their marks dropped."""
    parts = [child.get("text", "") for child in data.get("content") or [] if child.get("type") == "text"]
    return CodeBlock(
        content="".join(parts),
        language=_optional_str(_first_present(_attrs(data), "language")),
        block_id=_block_id(data),
    )


def _deserialize_block_quote(data: dict[str, Any], strict_mode: bool) -> BlockQuote:
    return BlockQuote(children=_deserialize_children(data.get("content"), strict_mode), block_id=_block_id(data))


def _deserialize_list(data: dict[str, Any], strict_mode: bool) -> List:
    ordered = data.get("type") == "orderedList"
    start = _attrs(data).get("start", 1) if ordered else 1
    return List(
        ordered=ordered,
        items=_deserialize_children(data.get("content"), strict_mode),  # type: ignore[arg-type]
        start=start if isinstance(start, int) else 1,
        block_id=_block_id(data),
    )


def _deserialize_list_item(data: dict[str, Any], strict_mode: bool) -> ListItem:
    return ListItem(children=_deserialize_children(data.get("content"), strict_mode), block_id=_block_id(data))


def _deserialize_table(data: dict[str, Any], strict_mode: bool) -> Table:
    return Table(
        rows=_deserialize_children(data.get("content"), strict_mode),  # type: ignore[arg-type]
        block_id=_block_id(data),
    )


def _deserialize_table_row(data: dict[str, Any], strict_mode: bool) -> TableRow:
    return TableRow(cells=_deserialize_children(data.get("content"), strict_mode))  # type: ignore[arg-type]


def _deserialize_table_cell(data: dict[str, Any], strict_mode: bool) -> TableCell:
    attrs = _attrs(data)
    return TableCell(
        children=_deserialize_children(data.get("content"), strict_mode),
        header=data.get("type") == "tableHeader",
        colspan=int(attrs.get("colspan") or 1),
        rowspan=int(attrs.get("rowspan") or 1),
    )


def _deserialize_horizontal_rule(data: dict[str, Any], strict_mode: bool) -> HorizontalRule:
    return HorizontalRule(block_id=_block_id(data))


def _deserialize_image(data: dict[str, Any], strict_mode: bool) -> Image:
    attrs = _attrs(data)
    return Image(
        src=str(attrs.get("src") or ""),
        alt=str(attrs.get("alt") or ""),
        title=_optional_str(_first_present(attrs, "title")),
        block_id=_block_id(data),
    )


def _deserialize_admonition(data: dict[str, Any], strict_mode: bool) -> Admonition:
    admonition_type = str(_attrs(data).get("type") or "NOTE").upper()
    return Admonition(
        admonition_type=admonition_type,
        children=_deserialize_children(data.get("content"), strict_mode),
        block_id=_block_id(data),
    )


def _deserialize_include(data: dict[str, Any], strict_mode: bool) -> Include:
    """Deserialize an include; both camelCase and AsciiDoc attribute names are accepted."""
    attrs = _attrs(data)
    return Include(
        path=str(attrs.get("path") or ""),
        level_offset=_optional_str(_first_present(attrs, "levelOffset", "leveloffset")),
        line_range=_optional_str(_first_present(attrs, "lineRange", "lines")),
        tag=_optional_str(_first_present(attrs, "tag")),
        block_id=_block_id(data),
    )


def _deserialize_raw_block(data: dict[str, Any], strict_mode: bool) -> RawBlock:
    attrs = _attrs(data)
    return RawBlock(
        source=str(attrs.get("source") or ""),
        context=_optional_str(_first_present(attrs, "context")),
        block_id=_block_id(data),
    )


def _deserialize_text(data: dict[str, Any], strict_mode: bool) -> Text:
    marks = [
        Mark(type=str(mark_data.get("type", "")), attrs=dict(mark_data.get("attrs") or {}))
        for mark_data in data.get("marks") or []
    ]
    return Text(content=str(data.get("text", "")), marks=marks)


def _deserialize_hard_break(data: dict[str, Any], strict_mode: bool) -> HardBreak:
    return HardBreak()


def _deserialize_unknown(data: dict[str, Any], strict_mode: bool) -> UnknownNode:
    attrs = {key: value for key, value in _attrs(data).items() if key != "id"}
    text = data.get("text")
    return UnknownNode(
        kind_name=str(data.get("type")),
        attrs=attrs,
        children=_deserialize_children(data.get("content"), strict_mode),
        text=None if text is None else str(text),
        block_id=_block_id(data),
    )


# Dispatch table mapping editor kind names to deserializer functions
_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any], bool], Node]] = {
    "doc": _deserialize_document,
    "heading": _deserialize_heading,
    "paragraph": _deserialize_paragraph,
    "codeBlock": _deserialize_code_block,
    "blockquote": _deserialize_block_quote,
    "bulletList": _deserialize_list,
    "orderedList": _deserialize_list,
    "listItem": _deserialize_list_item,
    "table": _deserialize_table,
    "tableRow": _deserialize_table_row,
    "tableCell": _deserialize_table_cell,
    "tableHeader": _deserialize_table_cell,
    "horizontalRule": _deserialize_horizontal_rule,
    "image": _deserialize_image,
    "admonition": _deserialize_admonition,
    "include": _deserialize_include,
    "rawBlock": _deserialize_raw_block,
    "text": _deserialize_text,
    "hardBreak": _deserialize_hard_break,
}


def dict_to_ast(data: dict[str, Any], strict_mode: bool = False) -> Node:
    """Convert an editor JSON dictionary to a document tree node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node, as produced by the editor
    strict_mode : bool, default False
        If True, raise ValidationError on unknown kinds and invalid attributes.
        If False, unknown kinds become ``UnknownNode`` and invalid attributes
        are repaired with a logged warning.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValidationError
        If the dictionary has no ``type`` or an unknown one and strict_mode is True

    Examples
    --------
    >>> node = dict_to_ast({"type": "text", "text": "Hello"})
    >>> print(node.content)
    Hello

    """
    node_type = data.get("type")
    if not node_type:
        if strict_mode:
            raise ValidationError("Dictionary must contain a 'type' field", parameter_name="type")
        logger.warning("Dictionary missing 'type' field, treating it as an unknown node")
        return _deserialize_unknown({**data, "type": "unknown"}, strict_mode)

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if not deserializer:
        if strict_mode:
            raise ValidationError(
                f"Unknown node type: {node_type}", parameter_name="type", parameter_value=node_type
            )
        logger.warning(f"Unknown node type '{node_type}', keeping it as an unknown node")
        return _deserialize_unknown(data, strict_mode)

    return deserializer(data, strict_mode)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to an editor JSON string.

    Unicode characters are preserved without escape sequences.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string representation

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, strict_mode: bool = False) -> Node:
    """Deserialize an editor JSON string to a node.

    Parameters
    ----------
    json_str : str
        JSON string representation
    strict_mode : bool, default False
        If True, raise ValidationError on unknown kinds or invalid attributes

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValidationError
        If the JSON is malformed, is not an object, or (in strict mode)
        contains unknown kinds

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid editor JSON: {e}", parameter_name="json_str", original_error=e) from e

    if not isinstance(data, dict):
        raise ValidationError(
            f"Editor JSON must be an object, got {type(data).__name__}",
            parameter_name="json_str",
            parameter_value=type(data).__name__,
        )

    return dict_to_ast(data, strict_mode=strict_mode)


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
