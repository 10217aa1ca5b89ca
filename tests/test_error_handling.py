"""Unit tests for structured error handling.

Tests cover:
- JiraAPIError dataclass structure
- Error conversion to dictionary format
- HTTP status code handling (404, 403, 401, 400/422)
- Jira error body extraction
- Transport and unknown error fallback
"""

import json

import httpx
import pytest

from jira_mcp_server.utils.errors import JiraAPIError, handle_jira_error


def _status_error(status: int, body=None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://testsite.atlassian.net/rest/api/3/issue/TEST-1")
    if body is None:
        response = httpx.Response(status, request=request)
    elif isinstance(body, str):
        response = httpx.Response(status, text=body, request=request)
    else:
        response = httpx.Response(status, json=body, request=request)
    return httpx.HTTPStatusError(f"Client error '{status}'", request=request, response=response)


class TestJiraAPIError:
    """Test JiraAPIError dataclass."""

    def test_error_creation_with_all_fields(self):
        """Test creating error with all fields."""
        error = JiraAPIError(
            code="RESOURCE_NOT_FOUND",
            message="Issue TEST-999 not found",
            details={"status": 404, "resource": "issue"},
            suggestions=["Verify the issue key", "Check project access"],
        )

        assert error.code == "RESOURCE_NOT_FOUND"
        assert error.message == "Issue TEST-999 not found"
        assert error.details == {"status": 404, "resource": "issue"}
        assert len(error.suggestions) == 2

    def test_error_creation_minimal_fields(self):
        """Test creating error with only required fields."""
        error = JiraAPIError(code="TEST_ERROR", message="Test message")

        assert error.details is None
        assert error.suggestions == []

    def test_error_to_dict_conversion(self):
        """Test converting error to dictionary format."""
        error = JiraAPIError(
            code="VALIDATION_FAILED",
            message="Invalid parameters",
            details={"field": "summary"},
            suggestions=["Provide a summary"],
        )

        result = error.to_dict()

        assert result == {
            "error": True,
            "code": "VALIDATION_FAILED",
            "message": "Invalid parameters",
            "details": {"field": "summary"},
            "suggestions": ["Provide a summary"],
        }
        assert '"code": "VALIDATION_FAILED"' in json.dumps(result)

    def test_error_exception_behavior(self):
        """Test that error can be raised and caught as exception."""
        with pytest.raises(JiraAPIError) as exc_info:
            raise JiraAPIError(code="TEST_ERROR", message="Test exception")

        assert str(exc_info.value) == "Test exception"
        assert exc_info.value.code == "TEST_ERROR"


class TestHandleJiraError:
    """Test handle_jira_error for different error scenarios."""

    def test_handle_404_uses_jira_message(self):
        """Test that Jira's errorMessages become the message."""
        error = _status_error(
            404, {"errorMessages": ["Issue does not exist or you do not have permission to see it."]}
        )

        result = handle_jira_error(error)

        assert result.code == "RESOURCE_NOT_FOUND"
        assert result.message == "Issue does not exist or you do not have permission to see it."
        assert result.details == {"status": 404}
        assert any("exists" in s.lower() for s in result.suggestions)

    def test_handle_404_without_body(self):
        """Test the fallback message for a 404 without error messages."""
        result = handle_jira_error(_status_error(404, "not json"))

        assert result.code == "RESOURCE_NOT_FOUND"
        assert "not found" in result.message.lower()

    def test_handle_403_forbidden(self):
        """Test handling 403 Forbidden errors."""
        result = handle_jira_error(_status_error(403))

        assert result.code == "FORBIDDEN"
        assert result.details["status"] == 403
        assert any("token" in s.lower() for s in result.suggestions)

    def test_handle_401_unauthorized(self):
        """Test handling 401 Unauthorized errors."""
        result = handle_jira_error(_status_error(401))

        assert result.code == "UNAUTHORIZED"
        assert result.details["status"] == 401
        assert "ATLASSIAN_API_TOKEN" in result.suggestions[0]

    def test_handle_400_field_errors(self):
        """Test extraction of per-field errors."""
        error = _status_error(
            400,
            {
                "errorMessages": [],
                "errors": {
                    "summary": "You must specify a summary of the issue.",
                    "issuetype": "Specify a valid issue type",
                },
            },
        )

        result = handle_jira_error(error)

        assert result.code == "VALIDATION_FAILED"
        assert result.details["status"] == 400
        assert result.details["field_errors"] == [
            "Field 'summary': You must specify a summary of the issue.",
            "Field 'issuetype': Specify a valid issue type",
        ]
        assert result.message.startswith("Validation failed:\n  - Field 'summary'")
        assert any("Summary must be" in s for s in result.suggestions)
        assert any("issue type" in s for s in result.suggestions)

    def test_handle_400_jql_error(self):
        """Test that JQL errors get a JQL suggestion."""
        error = _status_error(400, {"errorMessages": ["Error in the JQL Query: bad"], "errors": {}})

        result = handle_jira_error(error)

        assert result.message == "Error in the JQL Query: bad"
        assert any("JQL" in s for s in result.suggestions)

    def test_handle_generic_status_strings(self):
        """Test status detection from plain exception messages."""
        assert handle_jira_error(Exception("404 Not Found")).code == "RESOURCE_NOT_FOUND"
        assert handle_jira_error(Exception("403 Forbidden")).code == "FORBIDDEN"
        assert handle_jira_error(Exception("401 Unauthorized")).code == "UNAUTHORIZED"

        result = handle_jira_error(Exception("422 Validation Failed"))
        assert result.code == "VALIDATION_FAILED"
        assert result.details["status"] == 422
        assert "field_errors" in result.details
        assert "raw_data" in result.details

    def test_handle_server_error(self):
        """Test that other statuses fall back to a generic error."""
        result = handle_jira_error(_status_error(500))

        assert result.code == "JIRA_API_ERROR"
        assert result.details == {"original_error": "HTTPStatusError", "status": 500}

    def test_handle_network_error(self):
        """Test that transport failures are reported as network errors."""
        result = handle_jira_error(httpx.ConnectError("Name or service not known"))

        assert result.code == "NETWORK_ERROR"
        assert "Name or service not known" in result.message
        assert any("ATLASSIAN_SITE_NAME" in s for s in result.suggestions)

    def test_handle_unknown_error(self):
        """Test handling unknown/generic errors."""
        result = handle_jira_error(Exception("Something went wrong"))

        assert result.code == "JIRA_API_ERROR"
        assert result.message == "Something went wrong"
        assert result.details == {"original_error": "Exception"}

    def test_structured_error_passthrough(self):
        """Test that an existing JiraAPIError is returned unchanged."""
        error = JiraAPIError(code="TRANSITION_NOT_FOUND", message="Transition '9' not found")

        assert handle_jira_error(error) is error

    def test_multiple_errors_have_consistent_format(self):
        """Test that all error types return consistent format."""
        errors = [
            _status_error(404),
            _status_error(403),
            _status_error(401),
            _status_error(400),
            httpx.ReadTimeout("timed out"),
            Exception("Unknown error"),
        ]

        for error in errors:
            result_dict = handle_jira_error(error).to_dict()
            assert set(result_dict) == {"error", "code", "message", "details", "suggestions"}
