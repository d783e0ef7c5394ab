"""Abstract base formatter.

WHY: Every document type renders the same (url, description) pair, but
as different text. A shared base class gives the built-in formatters a
consistent interface so the registry, the rewriter and the CLI can work
with any of them generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format(url, description)`` method. Instances are callable, so a
BaseFormatter can be registered anywhere a plain
``(url, description) -> str`` function is accepted.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` is pure: same input, same output, no buffer access
- The returned text is inserted literally; formatters escape whatever
  their target syntax requires
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

Formatter = Callable[[str, str], str]
"""Any callable taking (url, description) and returning the replacement text."""


class BaseFormatter(ABC):
    """Abstract base for the built-in link formatters.

    To add a new document type:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Add it to BUILTIN_FORMATTERS in formatters/__init__.py, or
       register it on a FormatterRegistry at startup
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'HTML anchor'."""

    @abstractmethod
    def format(self, url: str, description: str) -> str:
        """Render a link for this document type.

        Args:
            url: Non-empty link target.
            description: Human-readable text; equals url when the
                         captured link had none.

        Returns:
            The text that replaces the raw native link.
        """

    def __call__(self, url: str, description: str) -> str:
        return self.format(url, description)

    def __repr__(self) -> str:
        return "{}()".format(type(self).__name__)
