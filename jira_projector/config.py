"""Configuration module with layered validation.

Provides Settings dataclass loaded from environment variables (and a .env
file), settings validation, and a rich table report of the checks.
"""

import logging
import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jira_projector.projections import TEMPLATES, load_template_file
from jira_projector.templates import TemplateError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """All configuration loaded from environment variables."""

    # Projection
    template: str = "issue_search"
    template_file: str = ""

    # Output
    indent: int = 2
    log_level: str = "WARNING"


ENV_VARS: dict[str, str] = {
    "PROJECTOR_TEMPLATE": "Registered template name",
    "PROJECTOR_TEMPLATE_FILE": "Path to a JSON template file (overrides PROJECTOR_TEMPLATE)",
    "PROJECTOR_INDENT": "JSON output indentation",
    "PROJECTOR_LOG_LEVEL": "Logging level",
}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default


def load_settings() -> Settings:
    """Load and return settings from .env file."""
    load_dotenv()
    return Settings(
        template=os.getenv("PROJECTOR_TEMPLATE", "issue_search"),
        template_file=os.getenv("PROJECTOR_TEMPLATE_FILE", ""),
        indent=_int_env("PROJECTOR_INDENT", 2),
        log_level=os.getenv("PROJECTOR_LOG_LEVEL", "WARNING").upper(),
    )


def validate_settings(settings: Settings) -> tuple[list[str], list[str]]:
    """Check every setting. Returns (passed, failed) lists.

    Reports ALL problems at once (not fail-fast) so they can be fixed in
    one pass.
    """
    passed: list[str] = []
    failed: list[str] = []

    if settings.template_file:
        try:
            load_template_file(settings.template_file)
            passed.append("PROJECTOR_TEMPLATE_FILE")
        except TemplateError as exc:
            failed.append(f"PROJECTOR_TEMPLATE_FILE ({exc})")
    elif settings.template in TEMPLATES:
        passed.append("PROJECTOR_TEMPLATE")
    else:
        failed.append(
            f"PROJECTOR_TEMPLATE (unknown template '{settings.template}'; "
            f"available: {', '.join(sorted(TEMPLATES))})"
        )

    if settings.indent >= 0:
        passed.append("PROJECTOR_INDENT")
    else:
        failed.append(f"PROJECTOR_INDENT (must be >= 0, got {settings.indent})")

    if settings.log_level in LOG_LEVELS:
        passed.append("PROJECTOR_LOG_LEVEL")
    else:
        failed.append(
            f"PROJECTOR_LOG_LEVEL (got '{settings.log_level}'; "
            f"expected one of {', '.join(LOG_LEVELS)})"
        )

    return passed, failed


def configure_logging(settings: Settings) -> None:
    """Route log records to stderr at the configured level."""
    level = settings.log_level if settings.log_level in LOG_LEVELS else "WARNING"
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_validation() -> int:
    """Validate settings and display results as a rich table.

    Returns 1 if any check fails, 0 otherwise.
    """
    console = Console()
    table = Table(title="Configuration Validation")
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Details")

    settings = load_settings()
    passed, failed = validate_settings(settings)

    for var in passed:
        table.add_row(f"Env: {var}", "[green]PASS[/green]", ENV_VARS[var])

    for var_desc in failed:
        var = var_desc.split(" (")[0]
        table.add_row(f"Env: {var}", "[red]FAIL[/red]", escape(var_desc[len(var) + 2:-1]))

    console.print(table)

    if failed:
        console.print(
            f"\n[red]Validation failed:[/red] {len(failed)} setting(s) invalid."
        )
        return 1

    console.print("\n[green]All checks passed.[/green]")
    return 0


def validate_and_display() -> None:
    """Run the validation report and exit with its status."""
    sys.exit(run_validation())


if __name__ == "__main__":
    validate_and_display()
