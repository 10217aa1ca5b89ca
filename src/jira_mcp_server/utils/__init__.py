"""Jira MCP server utilities."""

from .errors import JiraAPIError, handle_jira_error
from .formatter import (
    format_bullet_list,
    format_date,
    format_heading,
    format_numbered_list,
    format_pagination,
    format_separator,
    format_url,
    format_value,
)
from .jira_client import get_jira_client, jira_request, reset_jira_client

__all__ = [
    "JiraAPIError",
    "handle_jira_error",
    "format_bullet_list",
    "format_date",
    "format_heading",
    "format_numbered_list",
    "format_pagination",
    "format_separator",
    "format_url",
    "format_value",
    "get_jira_client",
    "jira_request",
    "reset_jira_client",
]
