"""modelinks: render captured links the way the current document writes them.

WHY: An editor's link-capture command inserts links in its own
bracketed syntax regardless of what is being edited. HTML pages, plain
text notes and source comments each have their own link conventions.

HOW: Two-stage pipeline: the host captures a native link, the
LinkRewriter locates and parses it, then replaces it with the output of
the formatter registered for the current document type.

RULES:
- Adding a document type = one formatter registration, no core changes
- Document types without a formatter keep the native link
- The rewriter never raises toward the host editor
"""

__version__ = "0.1.0"
