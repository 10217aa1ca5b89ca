"""Jira issue operations MCP tools.

Provides MCP tools for searching, retrieving and creating Jira issues,
and for discovering the fields required to create them.
"""

import logging
from typing import Any

from ..config.defaults import DEFAULT_SITE
from ..formatters.create_issue import format_create_issue_response, format_create_meta
from ..formatters.issues import format_issue_details, format_issues_list, plain_text_to_adf
from ..server import mcp
from ..utils.errors import JiraAPIError, handle_jira_error
from ..utils.jira_client import jira_request
from ..utils.validation import clamp_limit, require_project_key, validate_issue_key

logger = logging.getLogger(__name__)

LIST_FIELDS = "summary,status,issuetype,priority,assignee,updated"


@mcp.tool()
def jira_list_issues(
    jql: str | None = None,
    limit: int = 25,
    next_page_token: str | None = None,
) -> str:
    """Search Jira issues with JQL and token pagination.

    Optional:
    - jql: JQL query (default: issues of JIRA_DEFAULT_PROJECT, newest first)
    - limit: max issues to return (default: 25, max: 100)
    - next_page_token: page token shown after --start-at in the previous footer

    Returns: markdown list of issues with a pagination footer
    """
    if not jql:
        if DEFAULT_SITE.default_project:
            jql = f"project = {DEFAULT_SITE.default_project} ORDER BY updated DESC"
        else:
            jql = "ORDER BY updated DESC"

    try:
        response = jira_request(
            "GET",
            "/rest/api/3/search/jql",
            params={
                "jql": jql,
                "maxResults": clamp_limit(limit),
                "fields": LIST_FIELDS,
                "nextPageToken": next_page_token or None,
            },
        )

        logger.info(
            f"Retrieved {len(response.get('issues') or [])} issues "
            f"(jql={jql!r}, next_page_token={next_page_token})"
        )
        return format_issues_list(response)
    except Exception as e:
        logger.error(f"Failed to list issues: {e}")
        raise handle_jira_error(e)


@mcp.tool()
def jira_get_issue(issue_key: str) -> str:
    """Retrieve full Jira issue details including the description.

    Returns: markdown document with basic information, description, labels and links
    """
    key = validate_issue_key(issue_key)

    try:
        issue = jira_request("GET", f"/rest/api/3/issue/{key}")
        logger.info(f"Retrieved issue {key}")
        return format_issue_details(issue)
    except Exception as e:
        logger.error(f"Failed to get issue {key}: {e}")
        raise handle_jira_error(e)


def _fetch_issue_type_meta(project_key: str, issue_type_id: str) -> dict[str, Any]:
    base = f"/rest/api/3/issue/createmeta/{project_key}/issuetypes"
    listing = jira_request("GET", base)
    issue_types = listing.get("issueTypes") or listing.get("values") or []

    issue_type = next((t for t in issue_types if str(t.get("id")) == str(issue_type_id)), None)
    if issue_type is None:
        raise JiraAPIError(
            code="RESOURCE_NOT_FOUND",
            message=f"Issue type '{issue_type_id}' not found in project {project_key}",
            details={"status": 404, "project": project_key},
            suggestions=["Call jira_get_create_meta without issue_type_id to list issue types"],
        )

    fields_response = jira_request("GET", f"{base}/{issue_type_id}")
    return {
        "name": issue_type.get("name"),
        "description": issue_type.get("description"),
        "fields": fields_response.get("fields") or fields_response.get("values") or [],
    }


@mcp.tool()
def jira_get_create_meta(
    project_key: str = DEFAULT_SITE.default_project,
    issue_type_id: str | None = None,
) -> str:
    """List issue types and the fields needed to create issues in a project.

    Optional:
    - issue_type_id: restrict output to one issue type (all fields, no truncation)

    Returns: markdown document with required and optional fields per issue type
    """
    key = require_project_key(project_key)

    try:
        if issue_type_id:
            metadata = _fetch_issue_type_meta(key, issue_type_id)
        else:
            metadata = jira_request(
                "GET",
                "/rest/api/3/issue/createmeta",
                params={"projectKeys": key, "expand": "projects.issuetypes.fields"},
            )

        logger.info(f"Retrieved create metadata for project {key}")
        return format_create_meta(metadata, key)
    except Exception as e:
        logger.error(f"Failed to get create metadata for {key}: {e}")
        raise handle_jira_error(e)


@mcp.tool()
def jira_create_issue(
    summary: str,
    issue_type: str = "Task",
    project_key: str = DEFAULT_SITE.default_project,
    description: str | None = None,
    priority: str | None = None,
    labels: list[str] | None = None,
    additional_fields: dict[str, Any] | None = None,
) -> str:
    """Create a Jira issue.

    - issue_type: issue type name or numeric ID (default: "Task")

    Optional:
    - description: plain text, converted to Atlassian Document Format
    - priority: priority name (e.g., "High")
    - labels: list of labels
    - additional_fields: raw field values keyed by field ID
      (see jira_get_create_meta for required fields)

    Returns: markdown confirmation with issue key and links
    """
    key = require_project_key(project_key)
    if not summary or not summary.strip():
        raise ValueError("summary is required")

    fields: dict[str, Any] = {
        "project": {"key": key},
        "issuetype": {"id": issue_type} if issue_type.isdigit() else {"name": issue_type},
        "summary": summary.strip(),
    }
    if description:
        fields["description"] = plain_text_to_adf(description)
    if priority:
        fields["priority"] = {"name": priority}
    if labels:
        fields["labels"] = labels
    if additional_fields:
        fields.update(additional_fields)

    try:
        response = jira_request("POST", "/rest/api/3/issue", json={"fields": fields})
        logger.info(f"Created issue {response.get('key')}: {summary}")
        return format_create_issue_response(response)
    except Exception as e:
        logger.error(f"Failed to create issue in {key}: {e}")
        raise handle_jira_error(e)


logger.info(
    "Issue tools registered: jira_list_issues, jira_get_issue, "
    "jira_get_create_meta, jira_create_issue"
)
