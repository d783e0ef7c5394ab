"""Shared test fixtures for the modelinks test suite.

WHY: Most test modules need a built-in registry and in-memory buffers
whose capture routine inserts a known link. Centralizing them here keeps
the sample links identical across modules.

HOW: Fixtures provide a fresh registry per test and a factory that
builds a TextBuffer with a NativeLinkInserter.

RULES:
- Every test gets its own registry; registration never leaks
- make_buffer() places the point at the end of ``text`` unless given
"""

from typing import Optional

import pytest

from modelinks.core.host import NativeLinkInserter, TextBuffer
from modelinks.formatters import build_registry

SAMPLE_URL = "https://example.com"
SAMPLE_DESCRIPTION = "Example Site"


@pytest.fixture
def registry():
    """A registry seeded with the built-in formatters."""
    return build_registry()


@pytest.fixture
def make_buffer():
    """Factory for TextBuffers whose capture inserts (url, description)."""

    def _make(
        text: str = "",
        point: Optional[int] = None,
        document_type: str = "plain-text",
        url: str = SAMPLE_URL,
        description: str = SAMPLE_DESCRIPTION,
    ) -> TextBuffer:
        return TextBuffer(
            text,
            point=point,
            document_type=document_type,
            inserter=NativeLinkInserter(url, description),
        )

    return _make
