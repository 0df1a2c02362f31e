"""Command line entry point for the Jira search projector.

Reads a saved search response (file or stdin), shapes it with a named or
file-based template and prints the projected JSON. Subcommands:

    project    shape a response document
    templates  list the registered templates
    check      validate configuration
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from jira_projector.config import (
    Settings,
    configure_logging,
    load_settings,
    run_validation,
)
from jira_projector.models import ProjectionError
from jira_projector.projections import TEMPLATES, get_template, load_template_file
from jira_projector.responses import interpret_response
from jira_projector.templates import Template, TemplateError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jira-projector",
        description="Shape Jira search responses with declarative templates.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    project_parser = subparsers.add_parser(
        "project", help="Project a JSON response document"
    )
    project_parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Path to the response JSON (default: stdin)",
    )
    source = project_parser.add_mutually_exclusive_group()
    source.add_argument("--template", help="Registered template name")
    source.add_argument("--template-file", help="Path to a JSON template file")
    project_parser.add_argument(
        "--status",
        type=int,
        default=200,
        help="HTTP status the response was returned with (default: 200)",
    )
    project_parser.add_argument(
        "--envelope",
        action="store_true",
        help="Print the result with its metadata envelope",
    )

    subparsers.add_parser("templates", help="List registered templates")
    subparsers.add_parser("check", help="Validate configuration")
    return parser


def _read_document(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _select_template(args, settings: Settings) -> tuple[Template, str]:
    """Resolve the template: CLI flags first, then configured settings."""
    if args.template_file:
        return load_template_file(args.template_file), args.template_file
    if args.template:
        return get_template(args.template), args.template
    if settings.template_file:
        return load_template_file(settings.template_file), settings.template_file
    return get_template(settings.template), settings.template


def _run_project(args, settings: Settings) -> int:
    try:
        template, template_name = _select_template(args, settings)
    except TemplateError as exc:
        print(f"Template error: {exc}", file=sys.stderr)
        return 1

    try:
        document = _read_document(args.input)
    except OSError as exc:
        print(f"Error: cannot read {args.input}: {exc}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"Error: input is not valid UTF-8: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"Error: input is not valid JSON: {exc}", file=sys.stderr)
        return 1

    logger.debug("Projecting %s with template %s", args.input, template_name)
    outcome = interpret_response(
        args.status, document, template, template_name=template_name
    )
    if isinstance(outcome, ProjectionError):
        print(f"Error: {outcome.message}", file=sys.stderr)
        return 1

    payload = outcome.to_dict()
    Console().print_json(
        data=payload if args.envelope else payload["result"],
        indent=settings.indent,
    )
    return 0


def _run_templates() -> int:
    console = Console()
    table = Table(title="Registered Templates")
    table.add_column("Template", style="bold")
    table.add_column("Top-level fields")
    for name in sorted(TEMPLATES):
        raw = TEMPLATES[name]
        fields = raw.keys() if isinstance(raw, dict) else raw
        table.add_row(name, ", ".join(fields))
    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings)

    if args.command == "check":
        return run_validation()
    if args.command == "templates":
        return _run_templates()
    return _run_project(args, settings)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
