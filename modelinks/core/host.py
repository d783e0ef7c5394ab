"""Host-editor collaborator interface and an in-memory implementation.

WHY: Link capture, the document-type query and buffer mutation all
belong to the host editor. The rewriter only needs four narrow
capabilities from it, so they are gathered in one abstract class that
any editor integration (or test) can implement.

HOW: EditorHost is an ABC. Concrete hosts supply the buffer text, the
cursor, the capture routine, the document type and span replacement.
find_link_span() has a default implementation built on
links.find_link_at(), which hosts with their own regexp search may
override. TextBuffer is a plain in-memory host used by the CLI and the
test suite; NativeLinkInserter stands in for the capture routine.

RULES:
- Offsets are character offsets into ``text``; the point lies in
  [0, len(text)]
- replace_span() substitutes text verbatim, no syntax interpretation
- insert_link() owns all side effects of capture (text, point)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from modelinks.core.links import LinkSpan, find_link_at, make_link


class EditorHost(ABC):
    """The editor capabilities the link rewriter consumes.

    To integrate with a new editor:
    1. Subclass EditorHost
    2. Implement text, point, insert_link(), document_type() and
       replace_span()
    3. Optionally override find_link_span() with the editor's own search
    """

    @property
    @abstractmethod
    def text(self) -> str:
        """Current buffer contents."""

    @property
    @abstractmethod
    def point(self) -> int:
        """Current cursor offset."""

    @abstractmethod
    def insert_link(self) -> None:
        """Run the editor's own link capture, inserting a native link at the point."""

    @abstractmethod
    def document_type(self) -> str:
        """Identifier of the kind of document in the active buffer."""

    @abstractmethod
    def replace_span(self, span: LinkSpan, replacement: str) -> None:
        """Substitute ``replacement`` for the text in ``[span.start, span.end)``."""

    def find_link_span(self, position: int, search_lines: int = 1) -> Optional[LinkSpan]:
        """Locate the native link enclosing ``position``, or None."""
        return find_link_at(self.text, position, search_lines)


Inserter = Callable[["TextBuffer"], None]


class TextBuffer(EditorHost):
    """An in-memory buffer with a cursor and a fixed document type.

    WHY: The command-line driver edits files rather than live editor
    buffers, and tests need a host whose state is easy to inspect.

    RULES:
    - point is clamped to [0, len(text)] on construction and on move
    - replace_span() leaves the point after the replacement when the
      point was inside or after the replaced span
    - inserter=None makes insert_link() a no-op (capture cancelled)
    """

    def __init__(
        self,
        text: str = "",
        point: Optional[int] = None,
        document_type: str = "plain-text",
        inserter: Optional[Inserter] = None,
    ) -> None:
        self._text = text
        self._point = len(text) if point is None else min(max(point, 0), len(text))
        self._document_type = document_type
        self._inserter = inserter

    @property
    def text(self) -> str:
        return self._text

    @property
    def point(self) -> int:
        return self._point

    def goto(self, position: int) -> None:
        self._point = min(max(position, 0), len(self._text))

    def insert(self, value: str) -> None:
        """Insert ``value`` at the point and move the point past it."""
        self._text = self._text[:self._point] + value + self._text[self._point:]
        self._point += len(value)

    def insert_link(self) -> None:
        if self._inserter is not None:
            self._inserter(self)

    def document_type(self) -> str:
        return self._document_type

    def replace_span(self, span: LinkSpan, replacement: str) -> None:
        self._text = self._text[:span.start] + replacement + self._text[span.end:]
        if self._point >= span.end:
            self._point += len(replacement) - (span.end - span.start)
        elif self._point > span.start:
            self._point = span.start + len(replacement)


class NativeLinkInserter:
    """Capture stand-in that inserts a fixed link in native syntax.

    An empty url models a cancelled capture: nothing is inserted.
    """

    def __init__(self, url: str, description: str = "") -> None:
        self.url = url
        self.description = description

    def __call__(self, buffer: TextBuffer) -> None:
        if not self.url.strip():
            return
        buffer.insert(make_link(self.url, self.description))
