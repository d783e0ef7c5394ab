"""Source-code comment link formatter.

WHY: Documentation comments in Lisp-family code quote URLs as
``URL `...'`` so that help buffers turn them into clickable buttons.
Links captured while editing source follow the same convention.

RULES:
- Output: "<description> (see URL `<url>')"
- Opening quote is a backtick, closing quote an apostrophe
"""

from __future__ import annotations

from modelinks.formatters.base import BaseFormatter


class CodeCommentFormatter(BaseFormatter):
    """Formatter that produces "description (see URL `url')"."""

    @property
    def name(self) -> str:
        return "Code comment"

    def format(self, url: str, description: str) -> str:
        return "{description} (see URL `{url}')".format(description=description, url=url)
