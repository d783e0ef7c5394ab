"""Rewrite a just-captured native link for the current document type.

WHY: The host editor's capture command always inserts its own bracketed
link syntax. In an HTML page, a plain text file or a source comment that
syntax is wrong; the link should read the way that document type writes
links. The rewriter runs the capture and then swaps the raw link for the
registered rendering.

HOW: rewrite_last_inserted_link() is a linear pipeline:
  1. remember the point, run host.insert_link()
  2. locate the native link enclosing the new point
  3. parse it into (url, description)
  4. ask the host for the document type
  5. look up a formatter for it
  6. replace exactly the located span with the formatter's output
The span found in step 2 is carried through to step 6, so the buffer is
searched once.

RULES:
- Every early exit leaves the buffer exactly as insert_link() left it
- A span that ends at or before the pre-capture point predates this
  capture and is ignored (capture cancelled next to an old link)
- Nothing is raised toward the host; failures from any host call or
  from a formatter are logged and reported as RewriteOutcome.FAILED
- Each call is independent: no state survives between runs
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from modelinks.core.host import EditorHost
from modelinks.core.links import LinkSpan, ParsedLink, parse_link
from modelinks.formatters import build_registry
from modelinks.formatters.registry import FormatterRegistry

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LINES = 1


class RewriteOutcome(enum.Enum):
    """How a rewrite run ended."""

    REWRITTEN = "rewritten"
    NO_LINK = "no_link"
    MALFORMED = "malformed"
    NO_FORMATTER = "no_formatter"
    FAILED = "failed"


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of one rewrite run, with whatever was learned on the way.

    RULES:
    - span is None for NO_LINK, and for FAILED when capture or the link
      search failed
    - link and document_type are None up to and including MALFORMED;
      document_type is also None when the type query failed
    - replacement is set only for REWRITTEN
    """

    outcome: RewriteOutcome
    span: Optional[LinkSpan] = None
    link: Optional[ParsedLink] = None
    document_type: Optional[str] = None
    replacement: Optional[str] = None

    @property
    def rewritten(self) -> bool:
        return self.outcome is RewriteOutcome.REWRITTEN


class LinkRewriter:
    """Runs link capture and re-renders the inserted link.

    Args:
        host: The editor collaborator (buffer, cursor, capture, type).
        registry: Formatters by document type; a built-in registry is
                  created when omitted.
        search_lines: Lines either side of the point searched for the link.
    """

    def __init__(
        self,
        host: EditorHost,
        registry: Optional[FormatterRegistry] = None,
        search_lines: int = DEFAULT_SEARCH_LINES,
    ) -> None:
        self.host = host
        self.registry = registry if registry is not None else build_registry()
        self.search_lines = search_lines

    def rewrite_last_inserted_link(self) -> RewriteResult:
        """Capture a link and rewrite it for the current document type.

        Returns:
            A RewriteResult describing what happened. Only REWRITTEN
            means the buffer was changed by this method.
        """
        try:
            origin = self.host.point
            self.host.insert_link()
        except Exception:
            logger.exception("Link capture failed")
            return RewriteResult(RewriteOutcome.FAILED)

        try:
            position = self.host.point
            span = self.host.find_link_span(position, self.search_lines)
        except Exception:
            logger.exception("Link search failed")
            return RewriteResult(RewriteOutcome.FAILED)
        if span is None or span.end <= origin:
            logger.debug("No captured link around point %d", position)
            return RewriteResult(RewriteOutcome.NO_LINK)

        link = parse_link(span.text)
        if link is None:
            logger.debug("Ignoring malformed link %r at %d-%d", span.text, span.start, span.end)
            return RewriteResult(RewriteOutcome.MALFORMED, span=span)

        try:
            document_type = self.host.document_type()
        except Exception:
            logger.exception("Document type query failed")
            return RewriteResult(RewriteOutcome.FAILED, span=span, link=link)
        formatter = self.registry.lookup(document_type)
        if formatter is None:
            logger.debug("No formatter for document type %s; keeping %s", document_type, span.text)
            return RewriteResult(
                RewriteOutcome.NO_FORMATTER,
                span=span,
                link=link,
                document_type=document_type,
            )

        try:
            replacement = formatter(link.url, link.description)
        except Exception:
            logger.exception("Formatter for %s failed on %s", document_type, link.url)
            return RewriteResult(
                RewriteOutcome.FAILED,
                span=span,
                link=link,
                document_type=document_type,
            )

        if not isinstance(replacement, str):
            logger.error(
                "Formatter for %s returned %s, expected str",
                document_type, type(replacement).__name__,
            )
            return RewriteResult(
                RewriteOutcome.FAILED,
                span=span,
                link=link,
                document_type=document_type,
            )

        try:
            self.host.replace_span(span, replacement)
        except Exception:
            logger.exception("Replacing %d-%d failed", span.start, span.end)
            return RewriteResult(
                RewriteOutcome.FAILED,
                span=span,
                link=link,
                document_type=document_type,
            )
        logger.info("Rewrote %s link at %d-%d for %s", link.url, span.start, span.end, document_type)
        return RewriteResult(
            RewriteOutcome.REWRITTEN,
            span=span,
            link=link,
            document_type=document_type,
            replacement=replacement,
        )


def rewrite_last_inserted_link(
    host: EditorHost,
    registry: Optional[FormatterRegistry] = None,
    search_lines: int = DEFAULT_SEARCH_LINES,
) -> RewriteResult:
    """One-shot convenience wrapper around LinkRewriter."""
    return LinkRewriter(host, registry, search_lines).rewrite_last_inserted_link()
