#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/renderers/__init__.py
"""Renderers that turn the document tree into AsciiDoc.

Examples
--------
    >>> from adocsync.ast import Document, Paragraph, Text
    >>> from adocsync.renderers import AsciiDocSerializer
    >>> AsciiDocSerializer().render_to_string(Document(children=[Paragraph(content=[Text(content="Hi")])]))
    'Hi\\n'

"""

from adocsync.renderers.asciidoc import AsciiDocSerializer, SerializeResult, document_to_asciidoc, serialize
from adocsync.renderers.base import BaseRenderer
from adocsync.renderers.marks import apply_marks, sort_marks, wrap_mark

__all__ = [
    "BaseRenderer",
    "AsciiDocSerializer",
    "SerializeResult",
    "serialize",
    "document_to_asciidoc",
    "apply_marks",
    "sort_marks",
    "wrap_mark",
]
