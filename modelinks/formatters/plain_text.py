"""Plain text link formatter.

WHY: Plain text has no link syntax. The most readable rendering keeps
the description in the sentence and puts the URL in a parenthetical.

RULES:
- Output: "<description> (see <url>)"
- No escaping; plain text has nothing to escape
"""

from __future__ import annotations

from modelinks.formatters.base import BaseFormatter


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces "description (see url)"."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, url: str, description: str) -> str:
        return "{description} (see {url})".format(description=description, url=url)
