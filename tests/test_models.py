"""Tests for result envelope serialization."""

from jira_projector.models import ProjectionError, ProjectionMetadata, ProjectionResult
from jira_projector.paths import ABSENT


class TestProjectionResult:
    """Tests for ProjectionResult.to_dict()."""

    def test_to_dict(self):
        result = ProjectionResult(
            metadata=ProjectionMetadata(template="issue_keys", empty=False, project_ms=0.12),
            result=["ABC-1"],
        )
        assert result.to_dict() == {
            "metadata": {"template": "issue_keys", "empty": False, "project_ms": 0.12},
            "result": ["ABC-1"],
        }

    def test_absent_serializes_as_none(self):
        result = ProjectionResult(
            metadata=ProjectionMetadata(template="issue_keys", empty=True, project_ms=0.0),
            result=ABSENT,
        )
        d = result.to_dict()
        assert d["result"] is None
        assert d["metadata"]["empty"] is True


class TestProjectionError:
    """Tests for ProjectionError.to_dict()."""

    def test_to_dict(self):
        error = ProjectionError(code="not_found", message="404: gone")
        assert error.to_dict() == {"code": "not_found", "message": "404: gone"}
