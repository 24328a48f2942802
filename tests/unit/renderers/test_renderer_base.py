#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_renderer_base.py
"""Tests for the renderer base class."""

import pytest

from adocsync.ast import Document, Paragraph, Text
from adocsync.exceptions import InvalidOptionsError
from adocsync.options import AsciiDocSerializerOptions, SyncOptions
from adocsync.renderers import AsciiDocSerializer, BaseRenderer


@pytest.mark.unit
class TestBaseRenderer:
    """Tests for the BaseRenderer contract."""

    def test_is_abstract(self):
        """Test that a renderer must implement render_to_string."""
        with pytest.raises(TypeError):
            BaseRenderer()  # type: ignore[abstract]

    def test_render_to_string(self):
        """Test the string rendering entry point of the serializer."""
        doc = Document(children=[Paragraph(content=[Text(content="Hi")])])
        assert AsciiDocSerializer().render_to_string(doc) == "Hi\n"

    def test_no_file_output_surface(self):
        """Test that renderers only produce strings."""
        assert not hasattr(AsciiDocSerializer, "render")
        assert not hasattr(BaseRenderer, "write_text_output")

    def test_wrong_options_type(self):
        """Test that the serializer refuses options meant for another component."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            AsciiDocSerializer(SyncOptions())  # type: ignore[arg-type]
        assert exc_info.value.component_name == "AsciiDocSerializer"
        assert exc_info.value.expected_type is AsciiDocSerializerOptions
        assert exc_info.value.received_type is SyncOptions
