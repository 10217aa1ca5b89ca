"""Input validation shared by MCP tools.

Validation runs before any Jira request so malformed input fails fast
with a ValueError instead of a round trip to the API.
"""

import re

ISSUE_KEY_PATTERN = re.compile(r"^(?:[A-Z][A-Z0-9_]*-\d+|\d+)$")

MAX_RESULTS_LIMIT = 100


def validate_issue_key(issue_key: str) -> str:
    """Normalise and validate an issue key (PROJ-123) or numeric issue ID."""
    key = (issue_key or "").strip().upper()
    if not ISSUE_KEY_PATTERN.match(key):
        raise ValueError(
            f"Invalid issue key: '{issue_key}'. Expected a key like PROJ-123 or a numeric ID"
        )
    return key


def require_project_key(project_key: str) -> str:
    key = (project_key or "").strip().upper()
    if not key:
        raise ValueError("project_key is required (or set JIRA_DEFAULT_PROJECT)")
    return key


def clamp_limit(limit: int) -> int:
    return min(max(1, limit), MAX_RESULTS_LIMIT)


def validate_start_at(start_at: int) -> int:
    if start_at < 0:
        raise ValueError("start_at must be zero or positive")
    return start_at
