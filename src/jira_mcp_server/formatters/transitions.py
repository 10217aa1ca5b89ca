"""Formatters for Jira issue transitions."""

from collections.abc import Mapping
from typing import Any

from ..utils.formatter import (
    format_bullet_list,
    format_date,
    format_heading,
    format_numbered_list,
    format_separator,
    utcnow,
)


def _format_transition(transition: Mapping[str, Any], index: int) -> str:
    target = transition.get("to") or {}
    category = target.get("statusCategory") or {}
    info = {
        "ID": transition.get("id"),
        "Target Status": target.get("name"),
        "Status Category": category.get("name"),
        "Has Screen": transition.get("hasScreen"),
        "Global": transition.get("isGlobal"),
        "Conditional": transition.get("isConditional"),
    }
    return "\n".join([format_heading(f"{transition.get('name')}", 3), format_bullet_list(info)])


def format_transitions(issue_key: str, response: Mapping[str, Any]) -> str:
    """
    Format the transitions available for an issue.

    Args:
        issue_key: Issue the transitions belong to
        response: Transitions response ({transitions: [...]})

    Returns:
        Markdown document listing each transition with usage instructions
    """
    transitions = response.get("transitions") or []
    count = len(transitions)

    lines = [
        format_heading(f"Available Transitions for {issue_key}", 1),
        "",
        f"Found {count} available transition{'' if count == 1 else 's'}.",
        "",
    ]

    if transitions:
        lines.append(format_numbered_list(transitions, _format_transition))
        lines.append("")
        lines.append(format_heading("Usage", 2))
        lines.append(
            "Use `jira_transition_issue` with the issue key and one of the transition IDs "
            "above to move the issue to a new status."
        )
    else:
        lines.append("*No transitions are available for this issue in its current status.*")

    lines.append("")
    lines.append(format_separator())
    lines.append(f"*Information retrieved at: {format_date(utcnow())}*")
    return "\n".join(lines)


def format_transition_result(
    issue_key: str,
    transition: Mapping[str, Any],
    comment_added: bool = False,
) -> str:
    """Format the confirmation of an applied transition."""
    target = transition.get("to") or {}
    lines = [
        format_heading("✅ Issue Transitioned Successfully", 1),
        "",
        format_bullet_list(
            {
                "Issue Key": issue_key,
                "Transition": transition.get("name"),
                "Transition ID": transition.get("id"),
                "New Status": target.get("name"),
                "Comment Added": comment_added,
            }
        ),
        "",
        format_separator(),
        f"*Issue transitioned at: {format_date(utcnow())}*",
    ]
    return "\n".join(lines)
