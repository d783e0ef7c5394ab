"""Unit tests for native link search, parsing and production.

WHY: Everything downstream depends on finding exactly the captured link
and reading its parts correctly. A span that is one character off would
corrupt the text around the link on replacement.

HOW: Tests cover parse_link() on well-formed and malformed input,
find_link_at() positioning rules, scheme splitting, and make_link()
canonicalization and round-tripping.
"""

import pytest

from modelinks.core.links import (
    LinkSpan,
    ParsedLink,
    escape_url,
    find_link_at,
    make_link,
    parse_link,
    split_scheme,
    unescape_url,
)


class TestParseLink:
    """parse_link() splits raw native text into url and description."""

    def test_url_and_description(self):
        assert parse_link("[[https://example.com][Example Site]]") == ParsedLink(
            url="https://example.com", description="Example Site",
        )

    def test_missing_description_defaults_to_url(self):
        link = parse_link("[[https://example.com]]")
        assert link.description == "https://example.com"

    def test_blank_description_defaults_to_url(self):
        link = parse_link("[[https://example.com][   ]]")
        assert link.description == "https://example.com"

    def test_description_with_single_bracket(self):
        link = parse_link("[[https://x.com][a]b]]")
        assert link.description == "a]b"

    def test_escaped_brackets_in_url(self):
        link = parse_link(r"[[file:notes\[1\].txt][Notes]]")
        assert link.url == "file:notes[1].txt"

    def test_empty_url_is_malformed(self):
        assert parse_link("[[ ][desc]]") is None

    @pytest.mark.parametrize("raw", [
        "",
        "https://example.com",
        "[https://example.com]",
        "[[https://example.com]",
        "x [[https://example.com]]",
    ])
    def test_not_a_link(self, raw):
        assert parse_link(raw) is None


class TestFindLinkAt:
    """find_link_at() returns the link enclosing the position."""

    TEXT = "See [[https://a.com][A]] and [[https://b.com]] here."

    def test_point_just_after_link(self):
        end = self.TEXT.index("]] and") + 2
        span = find_link_at(self.TEXT, end)
        assert span == LinkSpan(4, end, "[[https://a.com][A]]")

    def test_point_inside_link(self):
        position = self.TEXT.index("b.com")
        span = find_link_at(self.TEXT, position)
        assert span.text == "[[https://b.com]]"
        assert self.TEXT[span.start:span.end] == span.text

    def test_point_at_link_start(self):
        span = find_link_at(self.TEXT, 4)
        assert span.start == 4

    def test_point_outside_any_link(self):
        assert find_link_at(self.TEXT, len(self.TEXT)) is None
        assert find_link_at(self.TEXT, 0) is None

    def test_adjacent_links_prefer_the_one_ending_at_point(self):
        text = "[[https://a.com]][[https://b.com]]"
        span = find_link_at(text, len("[[https://a.com]]"))
        assert span.text == "[[https://a.com]]"

    def test_link_wrapped_over_lines(self):
        text = "intro\n[[https://a.com][a long\ndescription]]\noutro"
        position = text.index("]]\noutro") + 2
        span = find_link_at(text, position, search_lines=1)
        assert span.text == "[[https://a.com][a long\ndescription]]"

    def test_links_beyond_search_window_are_ignored(self):
        text = "[[https://a.com][a\nb\nc]]"
        assert find_link_at(text, len(text), search_lines=0) is None
        assert find_link_at(text, len(text), search_lines=2) is not None

    def test_position_is_clamped(self):
        text = "[[https://a.com]]"
        assert find_link_at(text, 1000).text == text
        assert find_link_at(text, -5).text == text


class TestSplitScheme:
    """split_scheme() splits at the first colon only."""

    def test_inner_colons_stay_in_rest(self):
        assert split_scheme("https://example.com/a:b") == ("https", "//example.com/a:b")

    def test_mailto(self):
        assert split_scheme("mailto:someone@example.com") == ("mailto", "someone@example.com")

    def test_no_colon(self):
        assert split_scheme("index.html") == ("", "index.html")


class TestMakeLink:
    """make_link() produces canonical native links that parse back."""

    def test_with_description(self):
        assert make_link("https://x.com", "X") == "[[https://x.com][X]]"

    def test_description_equal_to_url_is_dropped(self):
        assert make_link("https://x.com", "https://x.com") == "[[https://x.com]]"

    def test_whitespace_trimmed(self):
        assert make_link("  https://x.com ", " X  ") == "[[https://x.com][X]]"

    @pytest.mark.parametrize("url,description", [
        ("https://example.com/a:b", "Example"),
        ("file:notes[1].txt", "Notes"),
        ("C:\\dir\\", "Windows dir"),
        ("https://x.com", "https://x.com"),
        ("https://x.com/?q=a&b=c", "Query [draft]"),
    ])
    def test_round_trip(self, url, description):
        assert parse_link(make_link(url, description)) == ParsedLink(url, description)

    def test_adjacent_description_brackets_are_separated(self):
        raw = make_link("https://x.com", "a]]b")
        assert "]]b" not in raw
        assert parse_link(raw) == ParsedLink("https://x.com", "a]]b")


class TestEscaping:
    """escape_url() and unescape_url() are inverses."""

    @pytest.mark.parametrize("url", ["a[b]c", "a\\]", "trailing\\", "plain"])
    def test_inverse(self, url):
        assert unescape_url(escape_url(url)) == url
