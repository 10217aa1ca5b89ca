"""Structured error handling for Jira API operations.

Provides custom error classes and utilities for handling Jira API errors
with actionable error messages and troubleshooting suggestions.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class JiraAPIError(Exception):
    """
    Custom error class for Jira API errors with structured information.

    Attributes:
        code: Error code for categorization (e.g., "RESOURCE_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error details
        suggestions: Optional troubleshooting suggestions

    Example:
        >>> error = JiraAPIError(
        ...     code="RESOURCE_NOT_FOUND",
        ...     message="Issue PROJ-999 not found",
        ...     details={"status": 404},
        ...     suggestions=["Verify the issue key", "Check project permissions"]
        ... )
        >>> error.to_dict()
        {'error': True, 'code': 'RESOURCE_NOT_FOUND', ...}
    """

    code: str
    message: str
    details: dict[str, Any] | None = None
    suggestions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Initialize the exception base class."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert error to dictionary for structured responses.

        Returns:
            Dictionary with error information including code, message, details, and suggestions
        """
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }


def _response_data(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _extract_validation_errors(data: Any) -> tuple[str, list[str]]:
    """
    Extract detailed validation error messages from a Jira error body.

    Jira reports errors as {"errorMessages": [...], "errors": {field: message}}.

    Args:
        data: Decoded response body (typically a dict)

    Returns:
        Tuple of (main_message, list_of_field_errors)
    """
    if not isinstance(data, dict):
        return "Validation failed", []

    messages = [str(m) for m in data.get("errorMessages") or [] if m]
    main_message = "; ".join(messages) if messages else "Validation failed"

    field_errors = []
    errors = data.get("errors") or {}
    if isinstance(errors, dict):
        for field_name, error_message in errors.items():
            if error_message:
                field_errors.append(f"Field '{field_name}': {error_message}")
            else:
                field_errors.append(f"Field '{field_name}' has an invalid value")

    return main_message, field_errors


def _error_messages(data: Any) -> str | None:
    if isinstance(data, dict):
        messages = [str(m) for m in data.get("errorMessages") or [] if m]
        if messages:
            return "; ".join(messages)
    return None


def handle_jira_error(error: Exception) -> JiraAPIError:
    """
    Handle Jira API errors and convert to structured JiraAPIError.

    Provides specific error codes and actionable suggestions based on
    exception types and HTTP status codes. For validation errors (400/422),
    extracts detailed field-level error information from the Jira
    error body.

    Args:
        error: Exception raised while calling the Jira API (typically
            httpx.HTTPStatusError or httpx.RequestError)

    Returns:
        JiraAPIError with structured information including detailed
        validation messages when available

    Example:
        >>> try:
        ...     jira_request("GET", "/rest/api/3/issue/PROJ-999")
        ... except Exception as e:
        ...     structured_error = handle_jira_error(e)
        ...     print(structured_error.to_dict())
    """
    if isinstance(error, JiraAPIError):
        return error

    if isinstance(error, httpx.RequestError):
        return JiraAPIError(
            code="NETWORK_ERROR",
            message=f"Could not reach Jira: {error}",
            details={"original_error": type(error).__name__},
            suggestions=[
                "Check network connectivity",
                "Verify ATLASSIAN_SITE_NAME points to an existing site",
            ],
        )

    status = None
    data = None
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        data = _response_data(error.response)

    error_str = str(error)

    if status == 404 or (status is None and "404" in error_str):
        return JiraAPIError(
            code="RESOURCE_NOT_FOUND",
            message=_error_messages(data) or f"Resource not found: {error_str}",
            details={"status": 404},
            suggestions=["Verify the resource exists", "Check you have access to this project"],
        )

    if status == 403 or (status is None and "403" in error_str):
        return JiraAPIError(
            code="FORBIDDEN",
            message="Access denied. Check API token permissions.",
            details={"status": 403},
            suggestions=[
                "Verify ATLASSIAN_API_TOKEN belongs to a user with access",
                "Check project permission scheme",
            ],
        )

    if status == 401 or (status is None and "401" in error_str):
        return JiraAPIError(
            code="UNAUTHORIZED",
            message="Authentication failed.",
            details={"status": 401},
            suggestions=[
                "Verify ATLASSIAN_API_TOKEN is valid",
                "Check ATLASSIAN_USER_EMAIL matches the token owner",
            ],
        )

    if status in (400, 422) or (status is None and ("400" in error_str or "422" in error_str)):
        if status is None:
            status = 422 if "422" in error_str else 400
        main_message, field_errors = _extract_validation_errors(data)

        if field_errors:
            detailed_message = f"{main_message}:\n" + "\n".join(f"  - {e}" for e in field_errors)
        else:
            detailed_message = main_message

        suggestions = [
            "Review the parameter values in your request",
            "Use jira_get_create_meta to list required fields and allowed values",
        ]

        if any("summary" in e.lower() for e in field_errors):
            suggestions.append("Summary must be non-empty and shorter than 255 characters")
        if any("issuetype" in e.lower() for e in field_errors):
            suggestions.append("Ensure the issue type exists in the target project")
        if "jql" in main_message.lower():
            suggestions.append("Check the JQL query syntax and field names")

        return JiraAPIError(
            code="VALIDATION_FAILED",
            message=detailed_message,
            details={"status": status, "field_errors": field_errors, "raw_data": data},
            suggestions=suggestions,
        )

    details: dict[str, Any] = {"original_error": type(error).__name__}
    if status is not None:
        details["status"] = status

    return JiraAPIError(
        code="JIRA_API_ERROR",
        message=str(error),
        details=details,
    )
