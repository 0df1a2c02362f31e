"""Named projection templates for Jira search responses.

Templates define which fields of a `/search` response are handed on to the
consumer and how they are re-nested. The raw search body is fetched
elsewhere; projections are applied to the parsed JSON document here.

issue_search keeps the historical output shape: `total` plus one list per
picked issue field (`id`, `self`, `key`), each collected from `issues`.
"""

import json
import logging
from pathlib import Path
from typing import Any

from jira_projector.projector import project
from jira_projector.templates import Template, TemplateError, parse_template

logger = logging.getLogger(__name__)

TEMPLATES: dict[str, Any] = {
    "issue_search": {
        "total": "total",
        "id": {
            "keyName": "issues",
            "fields": ["id"],
        },
        "self": {
            "keyName": "issues",
            "fields": ["self"],
        },
        "key": {
            "keyName": "issues",
            "fields": ["key"],
        },
    },
    "issue_keys": {
        "-": {
            "keyName": "issues",
            "fields": ["key"],
        },
    },
    "issue_summary": {
        "total": "total",
        "start_at": "startAt",
        "issues": {
            "fields": {
                "key": "key",
                "summary": "fields.summary",
                "status": "fields.status.name",
                "assignee": "fields.assignee.displayName",
            },
        },
    },
}


def get_template(name: str) -> Template:
    """Return the parsed template registered under ``name``.

    Raises:
        TemplateError: If no template is registered under ``name``.
    """
    if name not in TEMPLATES:
        raise TemplateError(
            f"Unknown template: '{name}'. "
            f"Available: {sorted(TEMPLATES.keys())}"
        )
    return parse_template(TEMPLATES[name])


def apply_template(data: Any, name: str) -> Any:
    """Project ``data`` with the template registered under ``name``."""
    return project(data, get_template(name))


def load_template_file(path: str | Path) -> Template:
    """Read and parse a template authored as a JSON file.

    Raises:
        TemplateError: If the file cannot be read, is not valid JSON, or
            does not describe a valid template.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TemplateError(f"Cannot read template file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise TemplateError(f"Template file {path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TemplateError(f"Template file {path} is not valid JSON: {exc}") from exc

    template = parse_template(raw)
    logger.info("Loaded template from %s", path)
    return template
