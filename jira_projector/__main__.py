"""Enable execution via `python -m jira_projector`."""

from jira_projector.main import run

run()
