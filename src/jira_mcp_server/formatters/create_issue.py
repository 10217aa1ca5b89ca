"""Formatters for Jira issue creation responses.

Renders createmeta responses (single issue type and legacy multi-type
shapes) and create-issue results as markdown.
"""

from collections.abc import Mapping
from typing import Any

from ..utils.formatter import (
    format_bullet_list,
    format_date,
    format_heading,
    format_separator,
    format_url,
    utcnow,
)
from ..utils.types import (
    CreateIssueResponse,
    CreateMeta,
    FieldDescriptor,
    LegacyProjectsMeta,
    SingleIssueTypeMeta,
    field_entries,
    parse_create_meta,
    partition_fields,
)

OPTIONAL_FIELDS_LIMIT = 10
ALLOWED_VALUES_LIMIT = 5

REST_API_PATH = "/rest/api/"
API_ISSUE_PATH = "/rest/api/3/issue/"
BROWSE_PATH = "/browse/"


def _display_value(value: Any) -> str:
    if isinstance(value, Mapping) and "name" in value:
        return str(value["name"])
    return str(value)


def _format_field_list(
    fields: list[tuple[str, FieldDescriptor]],
    limit_optional: bool = False,
) -> str:
    """Render field entries as bullets with an indented detail line."""
    if not fields:
        return "*None*"

    lines = []
    fields_to_show = fields[:OPTIONAL_FIELDS_LIMIT] if limit_optional else fields

    for field_id, field in fields_to_show:
        display_id = field.get("key") or field.get("fieldId") or field_id
        lines.append(f"- **{field.get('name', field_id)}** (`{display_id}`)")

        schema = field.get("schema") or {}
        details = [f"Type: {schema.get('type', 'unknown')}"]

        if schema.get("system"):
            details.append(f"System: {schema['system']}")
        if schema.get("custom"):
            details.append(f"Custom: {schema['custom']}")

        allowed_values = field.get("allowedValues")
        if isinstance(allowed_values, list):
            values = [_display_value(v) for v in allowed_values[:ALLOWED_VALUES_LIMIT]]
            more = "..." if len(allowed_values) > ALLOWED_VALUES_LIMIT else ""
            details.append(f"Values: {', '.join(values)}{more}")

        if field.get("defaultValue") is not None:
            details.append(f"Default: {_display_value(field['defaultValue'])}")

        lines.append(f"  {' | '.join(details)}")

    if limit_optional and len(fields) > OPTIONAL_FIELDS_LIMIT:
        lines.append(f"*... and {len(fields) - OPTIONAL_FIELDS_LIMIT} more optional fields*")

    return "\n".join(lines)


def _format_single_issue_type(meta: SingleIssueTypeMeta) -> list[str]:
    lines = [format_heading(f"Issue Type: {meta.name}", 2)]
    if meta.description:
        lines.append(f"*{meta.description}*")
        lines.append("")

    required, optional = partition_fields(field_entries(meta.fields))

    lines.append(format_heading("Required Fields", 3))
    lines.append(_format_field_list(required))
    lines.append("")
    lines.append(format_heading("Optional Fields", 3))
    lines.append(_format_field_list(optional))
    return lines


def _format_legacy_projects(meta: LegacyProjectsMeta) -> list[str]:
    project = meta.projects[0]
    lines = [f"**{project.get('name')}** ({project.get('key')})", ""]

    for index, issue_type in enumerate(project.get("issuetypes") or []):
        if index > 0:
            lines.extend(["", format_separator(), ""])

        lines.append(format_heading(f"{issue_type.get('name')}", 2))
        lines.append(f"**ID**: {issue_type.get('id')}")
        if issue_type.get("description"):
            lines.append(f"**Description**: {issue_type['description']}")
        lines.append(f"**Subtask**: {'Yes' if issue_type.get('subtask') else 'No'}")
        lines.append("")

        required, optional = partition_fields(field_entries(issue_type.get("fields")))

        lines.append(format_heading("Required Fields", 3))
        lines.append(_format_field_list(required))
        lines.append("")
        lines.append(format_heading("Optional Fields", 3))
        if optional:
            lines.append(_format_field_list(optional, limit_optional=True))
        else:
            lines.append("*No optional fields available.*")

    return lines


def format_create_meta(metadata: Mapping[str, Any] | CreateMeta, project_key: str) -> str:
    """
    Format create metadata response for display.

    Args:
        metadata: Createmeta response from the Jira API, raw or already resolved
        project_key: Project key for context

    Returns:
        Markdown document describing creatable issue types and their fields
    """
    lines = [
        format_heading("Issue Creation Metadata", 1),
        f"Project: **{project_key}**",
        "",
    ]

    meta = parse_create_meta(metadata)
    if isinstance(meta, SingleIssueTypeMeta):
        lines.extend(_format_single_issue_type(meta))
    elif isinstance(meta, LegacyProjectsMeta):
        lines.extend(_format_legacy_projects(meta))
    else:
        lines.append("*No issue types available for this project.*")

    lines.append("")
    lines.append(format_separator())
    lines.append(f"*Retrieved at: {format_date(utcnow())}*")

    return "\n".join(lines)


def browse_url(self_url: str | None) -> str | None:
    """Derive the human browse URL from an issue's REST URL.

    A URL without the REST issue path is returned unchanged.
    """
    if not self_url:
        return None
    return self_url.replace(API_ISSUE_PATH, BROWSE_PATH)


def key_browse_url(self_url: str | None, key: str | None) -> str | None:
    """Build `{site}/browse/{key}` from any REST resource URL of the site."""
    if not self_url or not key or REST_API_PATH not in self_url:
        return None
    return self_url.split(REST_API_PATH)[0] + f"{BROWSE_PATH}{key}"


def format_create_issue_response(response: CreateIssueResponse) -> str:
    """
    Format create issue response for display.

    Args:
        response: Create issue response from the Jira API

    Returns:
        Markdown confirmation including links and any transition errors
    """
    lines = [format_heading("✅ Issue Created Successfully", 1), ""]

    self_url = response.get("self")
    issue_info = {
        "Issue Key": response.get("key"),
        "Issue ID": response.get("id"),
        "Jira URL": format_url(self_url, "Open in Jira"),
        "Browse URL": format_url(browse_url(self_url), "View in Browser"),
    }
    lines.append(format_bullet_list(issue_info))

    transition = response.get("transition")
    if transition:
        lines.append("")
        lines.append(format_heading("Creation Status", 2))
        lines.append(f"Status Code: {transition.get('status')}")

        errors = transition.get("errorCollection")
        if errors:
            if errors.get("errorMessages"):
                lines.append("")
                lines.append("**Warnings:**")
                lines.extend(f"- {msg}" for msg in errors["errorMessages"])
            if errors.get("errors"):
                lines.append("")
                lines.append("**Field Errors:**")
                lines.extend(f"- **{name}**: {msg}" for name, msg in errors["errors"].items())

    lines.append("")
    lines.append(format_separator())
    lines.append(f"*Issue created at: {format_date(utcnow())}*")

    return "\n".join(lines)
