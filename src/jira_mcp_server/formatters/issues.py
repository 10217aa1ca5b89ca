"""Formatters for Jira issue search results and issue details."""

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
    format_url,
    utcnow,
)
from ..utils.types import ResponsePagination
from .create_issue import key_browse_url

logger = logging.getLogger(__name__)

INLINE_TYPES = frozenset({"text", "hardBreak", "mention", "emoji", "inlineCard", "date", "status"})


def _name(value: Any, attribute: str = "name") -> str | None:
    if isinstance(value, Mapping):
        return value.get(attribute)
    return None


def _adf_inline(nodes: list[dict[str, Any]]) -> str:
    parts = []
    for node in nodes or []:
        node_type = node.get("type")
        attrs = node.get("attrs") or {}
        if node_type == "text":
            text = node.get("text", "")
            for mark in node.get("marks") or []:
                mark_type = mark.get("type")
                if mark_type == "strong":
                    text = f"**{text}**"
                elif mark_type == "em":
                    text = f"*{text}*"
                elif mark_type == "code":
                    text = f"`{text}`"
                elif mark_type == "link":
                    text = format_url((mark.get("attrs") or {}).get("href"), text)
            parts.append(text)
        elif node_type == "hardBreak":
            parts.append("\n")
        elif node_type == "mention":
            parts.append(f"@{str(attrs.get('text', '')).lstrip('@')}")
        elif node_type == "emoji":
            parts.append(attrs.get("text") or attrs.get("shortName", ""))
        elif node_type == "inlineCard":
            parts.append(format_url(attrs.get("url")))
        else:
            parts.append(_adf_inline(node.get("content") or []))
    return "".join(parts)


def _adf_block(node: dict[str, Any], depth: int = 0) -> str:
    node_type = node.get("type")
    content = node.get("content") or []

    if node_type == "paragraph":
        return _adf_inline(content)
    if node_type == "heading":
        level = (node.get("attrs") or {}).get("level", 1)
        return format_heading(_adf_inline(content), level)
    if node_type in ("bulletList", "orderedList"):
        indent = "  " * depth
        lines = []
        for index, item in enumerate(content, start=1):
            marker = f"{index}." if node_type == "orderedList" else "-"
            blocks = item.get("content") or []
            first = _adf_block(blocks[0], depth + 1) if blocks else ""
            lines.append(f"{indent}{marker} {first}")
            lines.extend(_adf_block(child, depth + 1) for child in blocks[1:])
        return "\n".join(lines)
    if node_type == "codeBlock":
        language = (node.get("attrs") or {}).get("language") or ""
        return f"```{language}\n{_adf_inline(content)}\n```"
    if node_type == "blockquote":
        return "\n".join(f"> {line}" for line in adf_to_markdown(node).splitlines())
    if node_type == "rule":
        return format_separator()
    if node_type == "table":
        return "\n".join(_adf_block(row, depth) for row in content)
    if node_type == "tableRow":
        return " | ".join(_adf_block(cell, depth) for cell in content)
    if node_type in ("tableCell", "tableHeader"):
        return " ".join(block for block in (_adf_block(child, depth) for child in content) if block)
    if any(child.get("type") not in INLINE_TYPES for child in content):
        blocks = (_adf_block(child, depth) for child in content)
        return "\n\n".join(block for block in blocks if block)
    return _adf_inline(content)


def adf_to_markdown(document: Any) -> str:
    """
    Convert an Atlassian Document Format (ADF) document to markdown.

    Plain strings are returned unchanged; unknown nodes degrade to their
    text content.
    """
    if not document:
        return ""
    if isinstance(document, str):
        return document
    if not isinstance(document, Mapping):
        return str(document)

    blocks = [_adf_block(node) for node in document.get("content") or []]
    return "\n\n".join(block for block in blocks if block).strip()


def plain_text_to_adf(plain: str) -> dict[str, Any]:
    """Convert plain text to Atlassian Document Format (one paragraph per line)."""
    if not plain or not plain.strip():
        return {"type": "doc", "version": 1, "content": []}
    content = []
    for line in plain.strip().split("\n"):
        text = line.strip() or " "
        content.append({"type": "paragraph", "content": [{"type": "text", "text": text}]})
    return {"type": "doc", "version": 1, "content": content}


def _link(url: str | None, title: str) -> dict[str, str] | None:
    return {"url": url, "title": title} if url else None


def _browse_url(issue: Mapping[str, Any]) -> str | None:
    return key_browse_url(issue.get("self"), issue.get("key"))


def _format_issue_summary(issue: Mapping[str, Any], index: int) -> str:
    fields = issue.get("fields") or {}
    info = {
        "Key": issue.get("key"),
        "Summary": fields.get("summary"),
        "Status": _name(fields.get("status")),
        "Type": _name(fields.get("issuetype")),
        "Priority": _name(fields.get("priority")),
        "Assignee": _name(fields.get("assignee"), "displayName") or "Unassigned",
        "Updated": format_date(fields.get("updated")) if fields.get("updated") else None,
        "URL": _link(_browse_url(issue), "View in Browser"),
    }
    return "\n".join(
        [
            format_heading(f"{index + 1}. {fields.get('summary') or issue.get('key')}", 3),
            format_bullet_list(info),
        ]
    )


def format_issues_list(search_response: Mapping[str, Any]) -> str:
    """
    Format an issue search response as a numbered markdown list.

    Args:
        search_response: Response of the Jira search/jql endpoint
            ({issues, nextPageToken, isLast})

    Returns:
        Markdown document with one section per issue and a pagination footer
    """
    issues = search_response.get("issues") or []
    pagination = ResponsePagination.from_token(
        count=len(issues),
        next_page_token=search_response.get("nextPageToken"),
        is_last=search_response.get("isLast"),
    )

    lines = [format_heading("Jira Issues", 1), "", format_heading("Issues", 2), ""]
    if issues:
        lines.append(format_numbered_list(issues, _format_issue_summary))
    else:
        lines.append("*No issues found matching the query.*")

    lines.append("")
    lines.append(format_pagination(pagination, logger))
    return "\n".join(lines)


def format_issue_details(issue: Mapping[str, Any]) -> str:
    """Format a single issue as a markdown document."""
    fields = issue.get("fields") or {}
    key = issue.get("key")

    lines = [format_heading(f"Jira Issue: {key}", 1), ""]

    lines.append(format_heading("Basic Information", 2))
    lines.append(
        format_bullet_list(
            {
                "Key": key,
                "Summary": fields.get("summary"),
                "Status": _name(fields.get("status")),
                "Type": _name(fields.get("issuetype")),
                "Priority": _name(fields.get("priority")),
                "Project": _name(fields.get("project"), "key"),
                "Assignee": _name(fields.get("assignee"), "displayName") or "Unassigned",
                "Reporter": _name(fields.get("reporter"), "displayName"),
                "Created": format_date(fields.get("created")) if fields.get("created") else None,
                "Updated": format_date(fields.get("updated")) if fields.get("updated") else None,
            }
        )
    )

    lines.append("")
    lines.append(format_heading("Description", 2))
    lines.append(adf_to_markdown(fields.get("description")) or "*No description provided.*")

    labels = fields.get("labels") or []
    if labels:
        lines.append("")
        lines.append(format_heading("Labels", 2))
        lines.extend(f"- {label}" for label in labels)

    lines.append("")
    lines.append(format_heading("Links", 2))
    lines.append(
        format_bullet_list(
            {
                "Web UI": _link(_browse_url(issue), "View in Browser"),
                "API": _link(issue.get("self"), "Open in Jira"),
            }
        )
    )

    lines.append("")
    lines.append(format_separator())
    lines.append(f"*Information retrieved at: {format_date(utcnow())}*")
    return "\n".join(lines)
