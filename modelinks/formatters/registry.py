"""Document-type to formatter registry.

WHY: The rewriter has to find the right rendering for whatever document
type the host reports, and downstream configuration has to be able to
add types without touching the rewriter. A registry instance owned by
the rewriter keeps that mapping explicit instead of global.

HOW: A thin wrapper around a dict. register() overwrites, lookup()
returns None for unknown types.

RULES:
- Keys are document-type identifiers ("html", "plain-text", ...)
- Last registration for a type wins; registration order is irrelevant
- lookup() never raises; most types have no formatter
- Values must be callable; anything else is rejected at registration
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from modelinks.formatters.base import Formatter

logger = logging.getLogger(__name__)


class FormatterRegistry:
    """Mapping from document type to formatter."""

    def __init__(self, formatters: Optional[Iterable[Tuple[str, Formatter]]] = None) -> None:
        self._formatters: Dict[str, Formatter] = {}
        for document_type, formatter in formatters or ():
            self.register(document_type, formatter)

    def register(self, document_type: str, formatter: Formatter) -> None:
        """Insert or overwrite the formatter for ``document_type``.

        Raises:
            TypeError: If formatter is not callable.
        """
        if not callable(formatter):
            raise TypeError(
                "Formatter for document type '{}' must be callable, got {!r}".format(
                    document_type, formatter,
                )
            )
        previous = self._formatters.get(document_type)
        if previous is not None and previous is not formatter:
            logger.debug("Replacing formatter for %s: %r -> %r", document_type, previous, formatter)
        self._formatters[document_type] = formatter

    def unregister(self, document_type: str) -> None:
        """Remove the formatter for ``document_type`` if one is registered."""
        self._formatters.pop(document_type, None)

    def lookup(self, document_type: str) -> Optional[Formatter]:
        """Return the formatter for ``document_type``, or None when absent.

        An unhashable identifier can never have been registered, so it is
        absent too.
        """
        try:
            return self._formatters.get(document_type)
        except TypeError:
            return None

    def document_types(self) -> List[str]:
        """Registered document types, sorted."""
        return sorted(self._formatters)

    def __contains__(self, document_type: object) -> bool:
        return document_type in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)
