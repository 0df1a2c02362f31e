"""Shared pytest fixtures for loading mock responses and managing env vars."""

import json
from pathlib import Path

import pytest

from jira_projector.config import Settings


@pytest.fixture
def fixtures_dir():
    """Return the path to the tests/fixtures/ directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def search_response(fixtures_dir):
    """Load the mock Jira search response."""
    with open(fixtures_dir / "search_response.json") as f:
        return json.load(f)


@pytest.fixture
def search_response_path(fixtures_dir):
    """Path to the mock Jira search response file."""
    return fixtures_dir / "search_response.json"


@pytest.fixture
def clean_env(monkeypatch):
    """Clear all PROJECTOR_* env vars and prevent .env reload."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("PROJECTOR_"):
            monkeypatch.delenv(key, raising=False)

    # Prevent load_dotenv() from re-reading .env file during tests
    monkeypatch.setattr("jira_projector.config.load_dotenv", lambda *a, **kw: None)


@pytest.fixture
def mock_env_vars(clean_env, monkeypatch):
    """Set every PROJECTOR_* env var to a non-default test value."""
    monkeypatch.setenv("PROJECTOR_TEMPLATE", "issue_keys")
    monkeypatch.setenv("PROJECTOR_INDENT", "4")
    monkeypatch.setenv("PROJECTOR_LOG_LEVEL", "debug")


@pytest.fixture
def mock_settings():
    """Return a Settings instance with test values."""
    return Settings(
        template="issue_search",
        template_file="",
        indent=2,
        log_level="WARNING",
    )


@pytest.fixture
def template_file(tmp_path):
    """Write a small JSON template file and return its path."""
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"-": {"keyName": "issues", "fields": ["key"]}}))
    return path
