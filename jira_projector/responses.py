"""Interpretation of Jira search responses.

Maps an upstream status code and parsed body to either a ProjectionResult
(the shaped payload) or a ProjectionError. Transport happens elsewhere;
this module only sees what the HTTP layer returned.
"""

import logging
import time
from typing import Any

from jira_projector.models import ProjectionError, ProjectionMetadata, ProjectionResult
from jira_projector.paths import ABSENT
from jira_projector.projections import get_template
from jira_projector.projector import project
from jira_projector.templates import Template

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "Returned if the issue with the given id/key does not exist or if the "
    "currently authenticated user does not have permission to view it."
)

_INLINE_TEMPLATE_NAME = "<inline>"


def project_body(
    body: Any,
    template: str | Template | dict | list,
    *,
    template_name: str | None = None,
) -> ProjectionResult:
    """Project a response body and wrap it with timing metadata.

    Args:
        body: Parsed JSON body of the upstream response.
        template: Registered template name, or a raw / parsed template.
        template_name: Label recorded in the metadata for non-registered
            templates.
    """
    if isinstance(template, str):
        template_name = template
        template = get_template(template)

    start = time.perf_counter()
    shaped = project(body, template)
    project_ms = round((time.perf_counter() - start) * 1000, 3)

    if shaped is ABSENT:
        logger.info("Template '%s' produced no data", template_name or _INLINE_TEMPLATE_NAME)

    return ProjectionResult(
        metadata=ProjectionMetadata(
            template=template_name or _INLINE_TEMPLATE_NAME,
            empty=shaped is ABSENT,
            project_ms=project_ms,
        ),
        result=shaped,
    )


def interpret_response(
    status_code: int,
    body: Any,
    template: str | Template | dict | list,
    *,
    template_name: str | None = None,
) -> ProjectionResult | ProjectionError:
    """Turn an upstream search response into a result or an error.

    200 projects the body. 404 and every other status return a
    ProjectionError and leave the body untouched. Template errors are
    raised, not wrapped.
    """
    if status_code == 200:
        return project_body(body, template, template_name=template_name)

    if status_code == 404:
        logger.warning("Search returned 404")
        return ProjectionError(
            code="not_found",
            message=f"{status_code}: {NOT_FOUND_MESSAGE}",
        )

    logger.warning("Search returned unexpected status %s", status_code)
    return ProjectionError(
        code="http_error",
        message=f"{status_code}: Unexpected response status.",
    )
