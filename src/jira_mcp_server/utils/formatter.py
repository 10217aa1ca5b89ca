"""Response formatting utilities for MCP tools.

Standardized markdown building blocks shared by every formatter so that all
tool responses look alike: headings, bullet lists, links, separators,
numbered lists, dates and pagination footers.
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from .types import ResponsePagination

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_AVAILABLE = "Not available"

_ISO_DATETIME_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_iso(value: str) -> datetime:
    # Jira reports offsets as +0000; fromisoformat wants +00:00
    value = _COMPACT_OFFSET.sub(r"\1:\2", value.replace("Z", "+00:00"))
    return datetime.fromisoformat(value)


def format_url(url: str | None = None, title: str | None = None) -> str:
    """Format a URL as a markdown link.

    Args:
        url: URL to format
        title: Link title (defaults to the URL itself)

    Returns:
        Markdown link, or "Not available" when no URL is given
    """
    if not url:
        return NOT_AVAILABLE

    return f"[{title or url}]({url})"


def format_heading(text: str, level: int = 1) -> str:
    """Format a heading, clamping the level to 1-6."""
    valid_level = min(max(level, 1), 6)
    return f"{'#' * valid_level} {text}"


def format_value(value: Any) -> str:
    """Format a single value based on its type.

    Never raises: unparseable dates degrade to a sentinel string.

    Args:
        value: Value to format

    Returns:
        Markdown representation of the value
    """
    if value is None:
        return NOT_AVAILABLE

    if isinstance(value, datetime):
        try:
            return value.strftime("%c")
        except (ValueError, OverflowError):
            return "Invalid date"

    if isinstance(value, Mapping) and isinstance(value.get("url"), str):
        title = value.get("title")
        return format_url(value["url"], title if isinstance(title, str) else None)

    if isinstance(value, str):
        if value.startswith(("http://", "https://")):
            return format_url(value)

        if _ISO_DATETIME_PREFIX.match(value):
            try:
                return _parse_iso(value).strftime("%c")
            except (ValueError, OverflowError):
                return "Invalid date string"

        return value

    if isinstance(value, bool):
        return "Yes" if value else "No"

    return str(value)


def format_bullet_list(
    items: Mapping[str, Any],
    key_formatter: Callable[[str], str] | None = None,
) -> str:
    """Format key-value pairs as a bullet list.

    Entries whose value is None are skipped; insertion order is preserved.

    Args:
        items: Mapping of keys to values
        key_formatter: Optional function to transform each key

    Returns:
        Lines of the form "- **key**: value"
    """
    lines = []
    for key, value in items.items():
        if value is None:
            continue
        formatted_key = key_formatter(key) if key_formatter else key
        lines.append(f"- **{formatted_key}**: {format_value(value)}")
    return "\n".join(lines)


def format_separator() -> str:
    return "---"


def format_numbered_list(items: Sequence[T], formatter: Callable[[T, int], str]) -> str:
    """Format each item independently and join them with separators.

    Args:
        items: Items to format
        formatter: Function receiving (item, index) and returning markdown

    Returns:
        Joined markdown, or "No items." for an empty sequence
    """
    if not items:
        return "No items."

    joiner = f"\n\n{format_separator()}\n\n"
    return joiner.join(formatter(item, index) for index, item in enumerate(items))


def format_date(date_input: str | datetime | int | float | None = None) -> str:
    """Format a date as YYYY-MM-DD HH:MM:SS UTC.

    Args:
        date_input: ISO 8601 string, datetime (naive values are taken as UTC)
            or epoch timestamp in milliseconds

    Returns:
        Standardized date string, "Not available" for None, or
        "Invalid date input" when the input cannot be interpreted
    """
    if date_input is None:
        return NOT_AVAILABLE

    try:
        if isinstance(date_input, datetime):
            date = date_input
        elif isinstance(date_input, (int, float)) and not isinstance(date_input, bool):
            date = datetime.fromtimestamp(date_input / 1000, tz=timezone.utc)
        elif isinstance(date_input, str):
            date = _parse_iso(date_input.strip())
        else:
            return "Invalid date input"

        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return date.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    except (ValueError, OverflowError, OSError):
        return "Invalid date input"


def format_pagination(
    pagination: ResponsePagination,
    log: logging.Logger | None = None,
) -> str:
    """Format a pagination footer for list output.

    Includes separator, item counts, availability message, next page
    instructions and a retrieval timestamp.

    Args:
        pagination: Pagination state of the rendered page
        log: Logger receiving the rendered footer at DEBUG level
            (defaults to this module's logger)

    Returns:
        Markdown footer starting with a separator line
    """
    parts = [format_separator()]

    count = pagination.count or 0
    total = pagination.total

    if total is not None and total >= 0:
        parts.append(f"*Showing {count} of {total} total items.*")
    elif count >= 0:
        parts.append(f"*Showing {count} item{'' if count == 1 else 's'}.*")

    if pagination.has_more:
        parts.append("More results are available.")

    if pagination.has_more and pagination.next_cursor not in (None, ""):
        # next_cursor holds the next startAt offset
        parts.append(f"*Use --start-at {pagination.next_cursor} to view more.*")

    parts.append(f"*Information retrieved at: {format_date(utcnow())}*")

    result = "\n".join(parts).strip()
    (log or logger).debug(f"Formatted pagination footer: {result}")
    return result
