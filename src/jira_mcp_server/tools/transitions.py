"""Jira transition operations MCP tools.

Provides MCP tools for listing and applying workflow transitions.
"""

import logging
from typing import Any

from ..formatters.issues import plain_text_to_adf
from ..formatters.transitions import format_transition_result, format_transitions
from ..server import mcp
from ..utils.errors import JiraAPIError, handle_jira_error
from ..utils.jira_client import jira_request
from ..utils.validation import validate_issue_key

logger = logging.getLogger(__name__)


@mcp.tool()
def jira_get_transitions(issue_key: str) -> str:
    """List the workflow transitions currently available for an issue.

    Returns: markdown list of transitions (ID, name, target status)
    """
    key = validate_issue_key(issue_key)

    try:
        response = jira_request("GET", f"/rest/api/3/issue/{key}/transitions")
        logger.info(f"Retrieved {len(response.get('transitions') or [])} transitions for {key}")
        return format_transitions(key, response)
    except Exception as e:
        logger.error(f"Failed to get transitions for {key}: {e}")
        raise handle_jira_error(e)


@mcp.tool()
def jira_transition_issue(
    issue_key: str,
    transition_id: str,
    comment: str | None = None,
) -> str:
    """Move an issue through its workflow.

    - transition_id: ID from jira_get_transitions

    Optional:
    - comment: plain text comment added with the transition

    Returns: markdown confirmation with the new status
    """
    key = validate_issue_key(issue_key)
    if not transition_id or not str(transition_id).strip():
        raise ValueError("transition_id is required")
    transition_id = str(transition_id).strip()

    try:
        available = jira_request("GET", f"/rest/api/3/issue/{key}/transitions")
        transition = next(
            (t for t in available.get("transitions") or [] if str(t.get("id")) == transition_id),
            None,
        )
        if transition is None:
            raise JiraAPIError(
                code="TRANSITION_NOT_FOUND",
                message=f"Transition '{transition_id}' not found for issue {key}",
                details={"status": 400, "issue": key},
                suggestions=["Call jira_get_transitions to list valid transition IDs"],
            )

        payload: dict[str, Any] = {"transition": {"id": transition_id}}
        if comment:
            payload["update"] = {
                "comment": [{"add": {"body": plain_text_to_adf(comment)}}],
            }

        jira_request("POST", f"/rest/api/3/issue/{key}/transitions", json=payload)
        logger.info(f"Transitioned issue {key} via '{transition.get('name')}'")
        return format_transition_result(key, transition, comment_added=bool(comment))
    except Exception as e:
        logger.error(f"Failed to transition issue {key}: {e}")
        raise handle_jira_error(e)


logger.info("Transition tools registered: jira_get_transitions, jira_transition_issue")
