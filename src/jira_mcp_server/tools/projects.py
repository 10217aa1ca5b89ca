"""Jira project operations MCP tools.

Provides MCP tools for listing and inspecting Jira projects.
"""

import logging

from ..formatters.projects import format_project_details, format_projects_list
from ..server import mcp
from ..utils.errors import handle_jira_error
from ..utils.jira_client import jira_request
from ..utils.validation import clamp_limit, validate_start_at

logger = logging.getLogger(__name__)


@mcp.tool()
def jira_list_projects(
    query: str | None = None,
    limit: int = 25,
    start_at: int = 0,
) -> str:
    """List Jira projects visible to the authenticated user.

    Optional:
    - query: filter by project name or key (substring match)
    - limit: max projects to return (default: 25, max: 100)
    - start_at: offset of the first project (use the value from the footer)

    Returns: markdown list of projects with a pagination footer
    """
    validate_start_at(start_at)

    try:
        page = jira_request(
            "GET",
            "/rest/api/3/project/search",
            params={
                "query": query,
                "startAt": start_at,
                "maxResults": clamp_limit(limit),
                "expand": "description,lead",
            },
        )

        logger.info(
            f"Retrieved {len(page.get('values') or [])} projects "
            f"(query={query}, start_at={start_at})"
        )
        return format_projects_list(page)
    except Exception as e:
        logger.error(f"Failed to list projects: {e}")
        raise handle_jira_error(e)


@mcp.tool()
def jira_get_project(
    project_key_or_id: str,
    include_components: bool = True,
    include_versions: bool = True,
) -> str:
    """Retrieve Jira project details.

    Optional:
    - include_components: list project components (default: True)
    - include_versions: list project versions (default: True)

    Returns: markdown document with project information, components and versions
    """
    if not project_key_or_id or not project_key_or_id.strip():
        raise ValueError("project_key_or_id is required")
    identifier = project_key_or_id.strip()

    try:
        project = jira_request(
            "GET",
            f"/rest/api/3/project/{identifier}",
            params={"expand": "description,lead"},
        )
        logger.info(f"Retrieved project {project.get('key', identifier)}")
        return format_project_details(
            project,
            include_components=include_components,
            include_versions=include_versions,
        )
    except Exception as e:
        logger.error(f"Failed to get project {identifier}: {e}")
        raise handle_jira_error(e)


logger.info("Project tools registered: jira_list_projects, jira_get_project")
