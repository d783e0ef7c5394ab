"""Native bracketed-link formatter.

WHY: In documents that use the editor's own markup, the captured link is
already in the right syntax. Re-rendering it through make_link() still
helps: the link comes out canonical (trimmed, escaped, and collapsed to
``[[url]]`` when the description adds nothing).

RULES:
- Output parses back to the same (url, description) with
  links.parse_link(), given trimmed input
- See links.make_link() for the escaping rules
"""

from __future__ import annotations

from modelinks.core.links import make_link
from modelinks.formatters.base import BaseFormatter


class OrgLinkFormatter(BaseFormatter):
    """Formatter that produces the canonical ``[[url][description]]`` form."""

    @property
    def name(self) -> str:
        return "Org link"

    def format(self, url: str, description: str) -> str:
        return make_link(url, description)
