"""Configuration constants, document-type mappings, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The extension-to-document-type table and the
rewrite defaults are plain data structures, not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level dicts and strings with os.getenv() overrides.
detect_document_type() maps a file path to a document type.
load_configured_templates() reads the templates file named in the
environment, if any.

RULES:
- DOCUMENT_TYPE_MAP keys are lowercase extensions with the dot
- Unmapped extensions fall back to DEFAULT_DOCUMENT_TYPE
- All defaults can be overridden via environment variables
- Invalid values raise ValueError with the variable name in the message
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from modelinks.formatters.template import TemplateFormatter, load_templates

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Document types by file extension
# ---------------------------------------------------------------------------

DOCUMENT_TYPE_MAP: dict[str, str] = {
    ".org": "org",
    ".html": "html",
    ".htm": "html",
    ".xhtml": "html",
    ".txt": "plain-text",
    ".text": "plain-text",
    ".el": "source-code",
    ".lisp": "source-code",
    ".scm": "source-code",
    ".clj": "source-code",
    ".py": "source-code",
    ".c": "source-code",
    ".h": "source-code",
    ".js": "source-code",
    ".md": "markdown",
    ".markdown": "markdown",
    ".rst": "rst",
}

DEFAULT_DOCUMENT_TYPE = os.getenv("MODELINKS_DEFAULT_DOCUMENT_TYPE", "plain-text")


def detect_document_type(path: str | Path) -> str:
    """Map a file path to a document type.

    WHY: An editor knows the mode of the buffer; a file on disk only has
    its extension. This is the command-line driver's document-type query.

    RULES:
    - Extension match is case-insensitive
    - Unknown extensions return DEFAULT_DOCUMENT_TYPE
    """
    return DOCUMENT_TYPE_MAP.get(Path(path).suffix.lower(), DEFAULT_DOCUMENT_TYPE)


# ---------------------------------------------------------------------------
# Rewrite and logging defaults
# ---------------------------------------------------------------------------


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw)) from exc
    if value < 0:
        raise ValueError("{} must not be negative, got {}".format(name, value))
    return value


SEARCH_LINES = _int_env("MODELINKS_SEARCH_LINES", 1)
"""Lines either side of the cursor searched for the captured link."""

LOG_LEVEL = os.getenv("MODELINKS_LOG_LEVEL", "WARNING").strip().upper()

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_log_level(name: str) -> str:
    """Validate a logging level name such as MODELINKS_LOG_LEVEL.

    RULES:
    - Case-insensitive; returns the upper-case name
    - Raises ValueError naming the variable for anything else
    """
    level = name.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            "MODELINKS_LOG_LEVEL must be one of {}, got {!r}".format(", ".join(_LOG_LEVELS), name)
        )
    return level

TEMPLATES_FILE: Optional[str] = os.getenv("MODELINKS_TEMPLATES_FILE") or None
"""Path to a JSON file of extra template formatters, if configured."""


def load_configured_templates(path: str | Path | None = None) -> Dict[str, TemplateFormatter]:
    """Load template formatters from ``path`` or MODELINKS_TEMPLATES_FILE.

    RULES:
    - Returns {} when neither is set
    - Raises ValueError for a missing or invalid file (see
      formatters.template.load_templates)
    """
    source = path if path is not None else TEMPLATES_FILE
    if not source:
        return {}
    return load_templates(source)
