"""User-defined formatters declared as format-string templates.

WHY: Most extra document types only need a fixed pattern around the
URL and description (Markdown, reStructuredText, wiki markup). Writing a
Python class for each is overkill; a JSON file of templates lets a user
register them at startup without code changes.

HOW: The templates file is validated against templates_schema.json with
jsonschema, then every template is checked for unknown placeholders.
Each surviving template becomes a TemplateFormatter that renders with
str.format_map().

RULES:
- File shape: {"formatters": {"<document type>": "<template>", ...}}
- Placeholders: {url}, {description}, {scheme}, {rest}; literal braces
  are written {{ and }}
- Any schema or placeholder problem raises ValueError naming the file
  location, before anything is registered
"""

from __future__ import annotations

import json
import string
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from modelinks.core.links import split_scheme
from modelinks.formatters.base import BaseFormatter

_SCHEMA_PATH = Path(__file__).resolve().parent / "templates_schema.json"

PLACEHOLDERS = frozenset({"url", "description", "scheme", "rest"})

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    """Load and cache the templates JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _check_placeholders(template: str) -> None:
    """Raise ValueError if template uses a placeholder other than PLACEHOLDERS."""
    try:
        fields = [field for _, field, _, _ in string.Formatter().parse(template) if field is not None]
    except ValueError as exc:
        raise ValueError("Malformed template {!r}: {}".format(template, exc)) from exc

    for field in fields:
        if field not in PLACEHOLDERS:
            raise ValueError(
                "Unknown placeholder {{{}}} in template {!r}. Allowed: {}".format(
                    field, template, ", ".join(sorted(PLACEHOLDERS)),
                )
            )


class TemplateFormatter(BaseFormatter):
    """Formatter that fills a str.format template.

    RULES:
    - Template must pass _check_placeholders(); checked on construction
    - {scheme} is empty for URLs without a colon, {rest} then equals {url}
    """

    def __init__(self, template: str, label: str = "") -> None:
        _check_placeholders(template)
        self.template = template
        self._label = label

    @property
    def name(self) -> str:
        return self._label or "Template {!r}".format(self.template)

    def format(self, url: str, description: str) -> str:
        scheme, rest = split_scheme(url)
        return self.template.format_map({
            "url": url,
            "description": description,
            "scheme": scheme,
            "rest": rest,
        })

    def __repr__(self) -> str:
        return "TemplateFormatter({!r})".format(self.template)


def parse_templates(data: Any) -> Dict[str, TemplateFormatter]:
    """Validate decoded template data and build one formatter per document type.

    Args:
        data: The decoded JSON document.

    Returns:
        Dict mapping document type to TemplateFormatter.

    Raises:
        ValueError: If data does not match the schema or a template
                    uses an unknown placeholder.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ValueError("Invalid templates at {}: {}".format(location, exc.message)) from exc

    return {
        document_type: TemplateFormatter(template, label="Template ({})".format(document_type))
        for document_type, template in data["formatters"].items()
    }


def load_templates(path: str | Path) -> Dict[str, TemplateFormatter]:
    """Read a templates JSON file and build its formatters.

    Raises:
        ValueError: If the file is missing, unreadable, not JSON, or
                    fails validation.
    """
    template_path = Path(path)
    try:
        data = json.loads(template_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError("Templates file not found: {}".format(template_path)) from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError("Could not read templates file {}: {}".format(template_path, exc)) from exc

    try:
        return parse_templates(data)
    except ValueError as exc:
        raise ValueError("{}: {}".format(template_path, exc)) from exc
