"""Result envelopes for projected search responses.

ProjectionResult wraps a successful projection with its metadata;
ProjectionError describes an upstream response that produced no payload.
"""

from dataclasses import asdict, dataclass
from typing import Any

from jira_projector.paths import ABSENT


@dataclass
class ProjectionMetadata:
    """Metadata envelope for a projection."""

    template: str
    empty: bool
    project_ms: float


@dataclass
class ProjectionResult:
    """Wrapper for a successful projection."""

    metadata: ProjectionMetadata
    result: Any

    def to_dict(self) -> dict:
        """Serialize for the consumer. ABSENT becomes None."""
        return {
            "metadata": asdict(self.metadata),
            "result": None if self.result is ABSENT else self.result,
        }


@dataclass
class ProjectionError:
    """Structured error for responses that could not be projected."""

    code: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)
