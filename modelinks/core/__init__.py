"""Core link location, parsing and rewriting.

WHY: The core package holds the parts with real design content: the
native link syntax, the host-editor interface, and the rewrite pipeline
that ties them to the formatter registry.

HOW: links.py finds and parses native links, host.py defines what the
editor must provide (plus an in-memory buffer), rewriter.py runs one
capture-and-rewrite.

RULES:
- Nothing here touches files or the environment; config.py and cli.py
  do that
- Formatter-specific logic lives in formatters/, not here
"""
