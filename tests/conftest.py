"""Pytest configuration and shared fixtures for the adocsync test suite.

This module provides the Hypothesis profiles, custom markers and the fake
editing surfaces that stand in for a real editor in controller tests.
"""

import os
from typing import Any, Optional

import pytest
from hypothesis import Phase, Verbosity, settings

from adocsync.ast import Document, Heading, Mark, Paragraph, Text
from adocsync.sync import VirtualScheduler

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


class FakeRichSurface:
    """Rich editing surface that records every tree pushed into it.

    When ``on_set`` is given it is called from inside ``set_tree``, which is
    how a real editor would echo the update back as an edit event.
    """

    def __init__(self, tree: Optional[Document] = None):
        self.tree = tree
        self.set_calls: list[tuple[Any, bool]] = []
        self.on_set = None
        self.fail_on_set: Optional[Exception] = None

    def get_tree(self) -> Optional[Document]:
        return self.tree

    def set_tree(self, content: Any, emit_events: bool = False) -> None:
        if self.fail_on_set is not None:
            raise self.fail_on_set
        self.set_calls.append((content, emit_events))
        if self.on_set is not None:
            self.on_set(content)


class FakeTextSurface:
    """Plain-text surface that records every text pushed into it."""

    def __init__(self, text: str = ""):
        self.text = text
        self.set_calls: list[str] = []
        self.on_set = None
        self.fail_on_get: Optional[Exception] = None

    def get_text(self) -> str:
        if self.fail_on_get is not None:
            raise self.fail_on_get
        return self.text

    def set_text(self, text: str) -> None:
        self.text = text
        self.set_calls.append(text)
        if self.on_set is not None:
            self.on_set(text)


class FakeRenderer:
    """Markup renderer producing one ``<p data-line>`` element per non-blank line."""

    def __init__(self):
        self.calls: list[str] = []
        self.fail_with: Optional[Exception] = None

    def render_to_html(self, text: str) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(text)
        parts = [
            f'<p data-line="{number}">{line}</p>'
            for number, line in enumerate(text.split("\n"), start=1)
            if line.strip()
        ]
        return "<div>" + "".join(parts) + "</div>"


@pytest.fixture
def rich_surface() -> FakeRichSurface:
    """Provide a fake rich editing surface."""
    return FakeRichSurface()


@pytest.fixture
def text_surface() -> FakeTextSurface:
    """Provide a fake text surface."""
    return FakeTextSurface()


@pytest.fixture
def markup_renderer() -> FakeRenderer:
    """Provide a fake AsciiDoc-to-HTML renderer."""
    return FakeRenderer()


@pytest.fixture
def scheduler() -> VirtualScheduler:
    """Provide a virtual-clock scheduler."""
    return VirtualScheduler()


@pytest.fixture
def title_document() -> Document:
    """Provide a heading followed by a paragraph with a bold run."""
    return Document(
        children=[
            Heading(level=1, content=[Text(content="Title")], block_id="h1"),
            Paragraph(
                content=[Text(content="Hello "), Text(content="world", marks=[Mark("bold")])],
                block_id="p1",
            ),
        ]
    )
