"""Link formatter registry: pluggable per-document-type rendering.

WHY: The rewriter needs a single lookup to find the right rendering for
the current document type. A central table of built-ins makes it
trivial to add new types: create the formatter class, import it here,
add one line.

HOW: BUILTIN_FORMATTERS maps document-type identifiers to formatter
*classes* (not instances). build_registry() instantiates them into a
fresh FormatterRegistry, then layers any template formatters on top.

RULES:
- Keys are the document-type identifiers hosts report ("html", ...)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
- Templates registered after the built-ins override them
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional

from modelinks.formatters.code_comment import CodeCommentFormatter
from modelinks.formatters.html import HtmlFormatter
from modelinks.formatters.org import OrgLinkFormatter
from modelinks.formatters.plain_text import PlainTextFormatter
from modelinks.formatters.registry import FormatterRegistry

if TYPE_CHECKING:
    from modelinks.formatters.base import BaseFormatter, Formatter

BUILTIN_FORMATTERS: dict[str, type[BaseFormatter]] = {
    "html": HtmlFormatter,
    "plain-text": PlainTextFormatter,
    "source-code": CodeCommentFormatter,
    "org": OrgLinkFormatter,
}


def build_registry(templates: Optional[Mapping[str, Formatter]] = None) -> FormatterRegistry:
    """Create a registry seeded with the built-in formatters.

    Args:
        templates: Extra formatters keyed by document type, typically
                   from template.load_templates(). Applied last.

    Returns:
        A new, independent FormatterRegistry.
    """
    registry = FormatterRegistry()
    for document_type, formatter_cls in BUILTIN_FORMATTERS.items():
        registry.register(document_type, formatter_cls())
    for document_type, formatter in (templates or {}).items():
        registry.register(document_type, formatter)
    return registry


__all__ = ["BUILTIN_FORMATTERS", "FormatterRegistry", "build_registry"]
