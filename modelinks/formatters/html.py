"""HTML anchor formatter for structured-markup documents.

WHY: In an HTML document a captured link should become a real
hyperlink, not the editor's bracketed syntax. Links captured while
writing pages are usually references, so they open in a new tab.

HOW: The URL is split at its first colon into scheme and remainder.
_anchor() takes the two parts separately, the way a markup generator
builds an href from a protocol and a path, and reassembles them into
``<a href="scheme:rest" target="_blank">description</a>``.

RULES:
- Split only at the FIRST colon ("https://example.com/a:b" keeps its
  inner colon in the remainder)
- A URL with no colon produces a scheme-less href
- href and link text are HTML-escaped
- target is always "_blank"
"""

from __future__ import annotations

from html import escape

from modelinks.core.links import split_scheme
from modelinks.formatters.base import BaseFormatter

LINK_TARGET = "_blank"


def _anchor(scheme: str, rest: str, text: str, target: str = LINK_TARGET) -> str:
    """Build an anchor element from a scheme, the rest of the URL and the link text."""
    href = "{}:{}".format(scheme, rest) if scheme else rest
    return '<a href="{href}" target="{target}">{text}</a>'.format(
        href=escape(href, quote=True),
        target=escape(target, quote=True),
        text=escape(text, quote=False),
    )


class HtmlFormatter(BaseFormatter):
    """Formatter that renders links as ``<a>`` elements opening in a new tab."""

    @property
    def name(self) -> str:
        return "HTML anchor"

    def format(self, url: str, description: str) -> str:
        scheme, rest = split_scheme(url)
        return _anchor(scheme, rest, description)
