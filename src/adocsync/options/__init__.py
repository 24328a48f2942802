#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for the serializer and the sync controller."""

from adocsync.options.asciidoc import AsciiDocSerializerOptions
from adocsync.options.base import BaseRendererOptions, CloneFrozenMixin
from adocsync.options.sync import SyncOptions

__all__ = [
    "AsciiDocSerializerOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "SyncOptions",
]
