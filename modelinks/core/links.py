"""Native bracketed-link syntax: search, parse, and produce.

WHY: The host editor's capture routine inserts links in its own
lightweight-markup syntax (``[[url][description]]`` or ``[[url]]``).
Before a link can be re-rendered for another document type, the raw
text has to be found in the buffer and split into its URL and
description.

HOW: LINK_RE matches one bracketed link, honouring backslash-escaped
brackets inside the URL part. find_link_at() scans a window of lines
around a position and returns the match enclosing it as a LinkSpan.
parse_link() turns a span's raw text into a ParsedLink. make_link() is
the inverse and produces the canonical native form.

RULES:
- A match encloses a position when start <= position <= end, so a
  cursor left just after the closing brackets still finds the link
- Missing or blank descriptions default to the URL
- A link with an empty URL is malformed: parse_link() returns None
- split_scheme() splits at the FIRST colon only
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

LINK_RE = re.compile(
    r"\[\["
    r"(?P<url>(?:[^\[\]\\]|\\(?:\\\\)*[\[\]]|\\+[^\[\]])+)"
    r"\]"
    r"(?:\[(?P<description>.+?)\])?"
    r"\]",
    re.DOTALL,
)
"""One native bracketed link. Group ``url`` is still escaped."""

_ZERO_WIDTH_SPACE = "\u200b"


@dataclass(frozen=True)
class LinkSpan:
    """A raw link located in the buffer.

    RULES:
    - start/end are half-open offsets into the buffer text
    - text is exactly buffer[start:end] at the time of the search
    """

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class ParsedLink:
    """A link decomposed into its URL and human-readable description."""

    url: str
    description: str


def _line_window(text: str, position: int, search_lines: int) -> Tuple[int, int]:
    """Return the [start, end) offsets of the line at position plus search_lines either side."""
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    if end < 0:
        end = len(text)

    for _ in range(search_lines):
        if start > 0:
            start = text.rfind("\n", 0, start - 1) + 1
        if end < len(text):
            end = text.find("\n", end + 1)
            if end < 0:
                end = len(text)

    return start, end


def find_link_at(text: str, position: int, search_lines: int = 1) -> Optional[LinkSpan]:
    """Find the native link enclosing position.

    WHY: After the capture routine runs, the cursor normally sits right
    after the link it inserted. The link may wrap over a line break when
    its description is long, so the search looks a few lines either way.

    HOW: Scan LINK_RE across the window returned by _line_window() and
    return the first match whose extent contains position. Matches cannot
    overlap, so two can only contain position when it sits exactly
    between adjacent links; the one ending at position wins, since the
    capture routine leaves the cursor after the link it inserted.

    Args:
        text: Full buffer contents.
        position: Cursor offset, clamped to the buffer.
        search_lines: Lines either side of position to scan.

    Returns:
        The enclosing LinkSpan, or None when no link contains position.
    """
    position = min(max(position, 0), len(text))
    window_start, window_end = _line_window(text, position, max(search_lines, 0))

    for match in LINK_RE.finditer(text, window_start, window_end):
        if match.start() > position:
            break
        if match.end() >= position:
            return LinkSpan(match.start(), match.end(), match.group(0))
    return None


def unescape_url(url: str) -> str:
    """Undo native escaping: halve backslashes before brackets and at the end."""
    url = re.sub(
        r"(\\+)([\[\]])",
        lambda m: "\\" * (len(m.group(1)) // 2) + m.group(2),
        url,
    )
    return re.sub(r"(\\+)$", lambda m: "\\" * (len(m.group(1)) // 2), url)


def escape_url(url: str) -> str:
    """Escape brackets, and backslashes before brackets or at the end."""
    url = re.sub(
        r"(\\*)([\[\]])",
        lambda m: m.group(1) * 2 + "\\" + m.group(2),
        url,
    )
    return re.sub(r"(\\+)$", lambda m: m.group(1) * 2, url)


def _unseparate(description: str) -> str:
    """Drop the zero-width spaces make_link() puts between brackets."""
    description = re.sub(r"([\[\]])\u200b(?=[\[\]])", r"\1", description)
    return re.sub(r"\]\u200b$", "]", description)


def parse_link(raw: str) -> Optional[ParsedLink]:
    """Split raw native link text into a ParsedLink.

    RULES:
    - raw must be one complete link, nothing before or after it
    - Surrounding whitespace of the URL is dropped
    - A missing or blank description becomes the URL
    - Returns None when raw is not a link or the URL is empty
    """
    match = LINK_RE.fullmatch(raw)
    if match is None:
        return None

    url = unescape_url(match.group("url")).strip()
    if not url:
        return None

    description = _unseparate(match.group("description") or "").strip()
    return ParsedLink(url=url, description=description or url)


def split_scheme(url: str) -> Tuple[str, str]:
    """Split a URL into (scheme, rest) at the first colon.

    ``"https://example.com/a:b"`` gives ``("https", "//example.com/a:b")``.
    A URL without a colon gives ``("", url)``.
    """
    scheme, sep, rest = url.partition(":")
    if not sep:
        return "", url
    return scheme, rest


def make_link(url: str, description: str = "") -> str:
    """Build the canonical native link for (url, description).

    RULES:
    - ``[[url]]`` when description is blank or equal to url
    - ``[[url][description]]`` otherwise
    - Adjacent brackets in the description are separated with a
      zero-width space, as is a trailing ``]``, so the result parses
      back as a single link; parse_link() removes them again
    """
    url = url.strip()
    description = description.strip()
    escaped = escape_url(url)
    if not description or description == url:
        return "[[{}]]".format(escaped)

    description = re.sub(r"([\[\]])(?=[\[\]])", r"\1" + _ZERO_WIDTH_SPACE, description)
    if description.endswith("]"):
        description += _ZERO_WIDTH_SPACE
    return "[[{}][{}]]".format(escaped, description)
