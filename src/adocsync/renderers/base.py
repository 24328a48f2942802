#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocsync/renderers/base.py
"""Base classes for document tree renderers.

This module defines the abstract base class that tree renderers inherit from,
together with the check that a renderer was handed its own options class.

"""

from __future__ import annotations

from abc import ABC, abstractmethod

from adocsync.ast.nodes import Document
from adocsync.exceptions import InvalidOptionsError
from adocsync.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for document tree renderers.

    Renderers implement ``render_to_string``. Writing the result anywhere is
    left to the host editor.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the tree to a string.

        Parameters
        ----------
        doc : Document
            Document node to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
