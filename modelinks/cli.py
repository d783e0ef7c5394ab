"""Command-line interface for modelinks.

WHY: Outside a live editor, the rewrite is still useful on files: a
script that captures links (from a browser, a bookmark export, a clip
tool) can drop them into a document and have them rendered the way that
document writes links. The CLI wires file loading, document-type
detection, the registry and the rewriter behind one command.

HOW: Uses argparse to accept a target file, the captured URL and
description, the insertion offset and an optional document-type
override. The file is loaded into a TextBuffer whose capture routine is
a NativeLinkInserter, so the rewriter sees exactly what an editor would:
a native link inserted at the point. The result goes to stdout, or back
to the file with --in-place. Status messages go to stderr.

RULES:
- Positional argument: file path (not required with --list-types)
- --point defaults to the end of the file
- --type overrides extension-based detection
- --templates overrides MODELINKS_TEMPLATES_FILE
- An unmapped document type keeps the native link (exit status 0)
- Configuration and file errors print "Error: ..." and exit 1
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from modelinks.config import (
    LOG_LEVEL,
    SEARCH_LINES,
    detect_document_type,
    load_configured_templates,
    parse_log_level,
)
from modelinks.core.host import NativeLinkInserter, TextBuffer
from modelinks.core.rewriter import LinkRewriter, RewriteOutcome
from modelinks.formatters import build_registry
from modelinks.formatters.registry import FormatterRegistry


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _load_registry(templates_path: Optional[str]) -> FormatterRegistry:
    try:
        templates = load_configured_templates(templates_path)
    except ValueError as exc:
        _fail(str(exc))
    return build_registry(templates)


def _list_types(registry: FormatterRegistry) -> None:
    for document_type in registry.document_types():
        formatter = registry.lookup(document_type)
        name = getattr(formatter, "name", None) or repr(formatter)
        print("{}\t{}".format(document_type, name))


def _run(args: argparse.Namespace) -> None:
    """Insert the captured link into the file and rewrite it.

    RULES:
    - Load the registry first so --list-types works without a file
    - Validate the file before building the buffer
    - Line endings are kept as they are on disk (no newline translation),
      so --point counts the file's real characters
    - Write back only when --in-place is given and the text changed
    """
    registry = _load_registry(args.templates)

    if args.list_types:
        _list_types(registry)
        return

    if not args.file:
        _fail("a file is required unless --list-types is given")
    if not args.url:
        _fail("--url is required")

    path = Path(args.file)
    if not path.is_file():
        _fail("File not found: {}".format(path))

    try:
        with open(path, encoding="utf-8", newline="") as f:
            original = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        _fail("Could not read {}: {}".format(path, exc))

    if args.point is not None and not 0 <= args.point <= len(original):
        _fail("--point {} is outside the file (0-{})".format(args.point, len(original)))

    document_type = args.type or detect_document_type(path)
    buffer = TextBuffer(
        original,
        point=args.point,
        document_type=document_type,
        inserter=NativeLinkInserter(args.url, args.description or ""),
    )

    result = LinkRewriter(buffer, registry, search_lines=SEARCH_LINES).rewrite_last_inserted_link()

    if result.outcome is RewriteOutcome.REWRITTEN:
        _status("Rewrote link for {}: {}".format(document_type, result.replacement))
    elif result.outcome is RewriteOutcome.NO_FORMATTER:
        _status("No formatter for '{}'; kept native link".format(document_type))
    elif result.outcome is RewriteOutcome.FAILED and result.span is None:
        _status("Link capture or search failed; file left unchanged")
    elif result.outcome is RewriteOutcome.FAILED:
        _status("Rewrite for '{}' failed; kept native link".format(document_type))
    else:
        _status("No link inserted")

    if args.in_place:
        if buffer.text != original:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(buffer.text)
            _status("Saved: {}".format(path))
    else:
        sys.stdout.write(buffer.text)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without running the rewrite.
    """
    parser = argparse.ArgumentParser(
        prog="modelinks",
        description="Insert a captured link into a document, rendered the way "
                    "that document type writes links.",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Document to insert the link into.",
    )

    parser.add_argument(
        "--url",
        default=None,
        help="Captured link target.",
    )

    parser.add_argument(
        "--description",
        default=None,
        help="Human-readable link text (default: the URL).",
    )

    parser.add_argument(
        "--point",
        type=int,
        default=None,
        help="Character offset to insert at (default: end of file).",
    )

    parser.add_argument(
        "--type",
        default=None,
        help="Document type, overriding detection from the file extension.",
    )

    parser.add_argument(
        "--templates",
        default=None,
        help="JSON file of extra template formatters "
             "(default: $MODELINKS_TEMPLATES_FILE).",
    )

    parser.add_argument(
        "--in-place",
        action="store_true",
        help="Write the result back to the file instead of stdout.",
    )

    parser.add_argument(
        "--list-types",
        action="store_true",
        help="List document types with a registered formatter and exit.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log rewrite details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        level = logging.DEBUG if args.verbose else parse_log_level(LOG_LEVEL)
    except ValueError as exc:
        _fail(str(exc))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    _run(args)


if __name__ == "__main__":
    main()
