#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/options/asciidoc.py
"""Configuration options for tree-to-AsciiDoc serialization."""

from __future__ import annotations

from dataclasses import dataclass, field

from adocsync.constants import ADMONITION_TYPES, DEFAULT_ADMONITION_TYPE, DEFAULT_HIGHLIGHT_COLOR
from adocsync.options.base import BaseRendererOptions


@dataclass(frozen=True)
class AsciiDocSerializerOptions(BaseRendererOptions):
    """Configuration options for document-tree-to-AsciiDoc serialization.

    Parameters
    ----------
    default_admonition_type : str, default "NOTE"
        Admonition type used when a node carries none or an unknown one.
    default_highlight_color : str, default "yellow"
        Color written for highlight marks that carry no color attribute.
    record_legacy_offsets : bool, default True
        Whether the source map also records approximate editor offsets for
        every block (the fallback for blocks without a stable identity).

    """

    default_admonition_type: str = field(
        default=DEFAULT_ADMONITION_TYPE,
        metadata={
            "help": "Admonition type for nodes with a missing or unknown type",
            "choices": sorted(ADMONITION_TYPES),
            "importance": "core",
        },
    )
    default_highlight_color: str = field(
        default=DEFAULT_HIGHLIGHT_COLOR,
        metadata={"help": "Color used for highlight marks without a color attribute", "importance": "core"},
    )
    record_legacy_offsets: bool = field(
        default=True,
        metadata={
            "help": "Record approximate editor offsets alongside block identities in the source map",
            "cli_name": "no-record-legacy-offsets",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate AsciiDoc serializer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.default_admonition_type not in ADMONITION_TYPES:
            raise ValueError(
                f"default_admonition_type must be one of {sorted(ADMONITION_TYPES)}, "
                f"got {self.default_admonition_type!r}"
            )

        if not self.default_highlight_color:
            raise ValueError("default_highlight_color must be a non-empty string")
