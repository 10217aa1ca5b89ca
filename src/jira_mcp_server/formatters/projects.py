"""Formatters for Jira project listings and project details."""

import logging
from collections.abc import Mapping
from typing import Any

from ..utils.formatter import (
    format_bullet_list,
    format_date,
    format_heading,
    format_numbered_list,
    format_pagination,
    format_separator,
    utcnow,
)
from ..utils.types import ResponsePagination
from .create_issue import key_browse_url

logger = logging.getLogger(__name__)


def _project_url(project: Mapping[str, Any]) -> dict[str, str] | None:
    url = key_browse_url(project.get("self"), project.get("key"))
    return {"url": url, "title": "View in Browser"} if url else None


def _lead_name(project: Mapping[str, Any]) -> str | None:
    lead = project.get("lead")
    if isinstance(lead, Mapping):
        return lead.get("displayName")
    return None


def _format_project_summary(project: Mapping[str, Any], index: int) -> str:
    info = {
        "Key": project.get("key"),
        "Name": project.get("name"),
        "ID": project.get("id"),
        "Type": project.get("projectTypeKey"),
        "Style": project.get("style"),
        "Lead": _lead_name(project),
        "URL": _project_url(project),
    }
    return "\n".join(
        [
            format_heading(f"{index + 1}. {project.get('name') or project.get('key')}", 3),
            format_bullet_list(info),
        ]
    )


def format_projects_list(page: Mapping[str, Any]) -> str:
    """
    Format a project search page as a numbered markdown list.

    Args:
        page: Response of the project search endpoint
            ({values, startAt, maxResults, total, isLast})

    Returns:
        Markdown document with one section per project and a pagination footer
    """
    projects = page.get("values") or []
    pagination = ResponsePagination.from_offset(
        start_at=page.get("startAt") or 0,
        count=len(projects),
        total=page.get("total"),
        is_last=page.get("isLast"),
    )

    lines = [format_heading("Jira Projects", 1), ""]
    if projects:
        lines.append(format_numbered_list(projects, _format_project_summary))
    else:
        lines.append("*No projects found.*")

    lines.append("")
    lines.append(format_pagination(pagination, logger))
    return "\n".join(lines)


def format_project_details(
    project: Mapping[str, Any],
    include_components: bool = True,
    include_versions: bool = True,
) -> str:
    """
    Format a single project as a markdown document.

    Args:
        project: Project response from the Jira API
        include_components: Render the components section
        include_versions: Render the versions section

    Returns:
        Markdown document with basic information, description,
        components and versions
    """
    lines = [format_heading(f"Project: {project.get('name')}", 1), ""]

    lines.append(format_heading("Basic Information", 2))
    lines.append(
        format_bullet_list(
            {
                "Key": project.get("key"),
                "ID": project.get("id"),
                "Type": project.get("projectTypeKey"),
                "Style": project.get("style"),
                "Simplified": project.get("simplified"),
                "Lead": _lead_name(project),
                "URL": _project_url(project),
            }
        )
    )

    if project.get("description"):
        lines.append("")
        lines.append(format_heading("Description", 2))
        lines.append(project["description"])

    if include_components:
        components = project.get("components") or []
        lines.append("")
        lines.append(format_heading("Components", 2))
        if components:
            for component in components:
                description = component.get("description")
                suffix = f": {description}" if description else ""
                lines.append(f"- **{component.get('name')}**{suffix}")
        else:
            lines.append("*No components defined.*")

    if include_versions:
        versions = project.get("versions") or []
        lines.append("")
        lines.append(format_heading("Versions", 2))
        if versions:
            for version in versions:
                status = "Released" if version.get("released") else "Unreleased"
                if version.get("archived"):
                    status += ", Archived"
                release_date = version.get("releaseDate")
                date_part = f" (release date: {release_date})" if release_date else ""
                lines.append(f"- **{version.get('name')}**: {status}{date_part}")
        else:
            lines.append("*No versions defined.*")

    lines.append("")
    lines.append(format_separator())
    lines.append(f"*Information retrieved at: {format_date(utcnow())}*")
    return "\n".join(lines)
