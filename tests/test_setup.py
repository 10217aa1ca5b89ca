"""Tests for MCP server setup and infrastructure.

Tests Jira client configuration, the request helper and tool registration.
"""

import os
from unittest.mock import patch

import httpx
import pytest

from jira_mcp_server.utils.jira_client import get_jira_client, jira_request, reset_jira_client

CREDENTIALS = {
    "ATLASSIAN_SITE_NAME": "testsite",
    "ATLASSIAN_USER_EMAIL": "bot@example.com",
    "ATLASSIAN_API_TOKEN": "test_token",
}


def _mock_client(handler) -> httpx.Client:
    return httpx.Client(
        base_url="https://testsite.atlassian.net",
        transport=httpx.MockTransport(handler),
    )


class TestJiraClient:
    """Test Jira client singleton functionality."""

    def setup_method(self) -> None:
        """Reset singleton before each test."""
        reset_jira_client()

    def teardown_method(self) -> None:
        """Reset singleton after each test."""
        reset_jira_client()

    @patch.dict(os.environ, CREDENTIALS)
    def test_get_jira_client_success(self) -> None:
        """Test successful client initialization."""
        client = get_jira_client()

        assert isinstance(client, httpx.Client)
        assert client.base_url.host == "testsite.atlassian.net"
        assert client.headers["Accept"] == "application/json"

    @patch.dict(os.environ, {}, clear=True)
    def test_get_jira_client_no_credentials(self) -> None:
        """Test error when credentials are not set."""
        with pytest.raises(ValueError) as exc_info:
            get_jira_client()

        assert "ATLASSIAN_SITE_NAME" in str(exc_info.value)
        assert "ATLASSIAN_API_TOKEN" in str(exc_info.value)

    @patch.dict(os.environ, {**CREDENTIALS, "ATLASSIAN_API_TOKEN": ""})
    def test_get_jira_client_partial_credentials(self) -> None:
        """Test that only missing variables are reported."""
        with pytest.raises(ValueError) as exc_info:
            get_jira_client()

        assert "ATLASSIAN_API_TOKEN" in str(exc_info.value)
        assert str(exc_info.value).startswith("Atlassian credentials not set: ATLASSIAN_API_TOKEN.")

    @patch.dict(os.environ, CREDENTIALS)
    def test_get_jira_client_singleton(self) -> None:
        """Test that get_jira_client returns the same instance."""
        assert get_jira_client() is get_jira_client()


class TestJiraRequest:
    """Test the jira_request helper against a mock transport."""

    def test_returns_decoded_json(self) -> None:
        """Test JSON decoding and None parameter filtering."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            return httpx.Response(200, json={"key": "TEST-1"})

        with patch("jira_mcp_server.utils.jira_client.get_jira_client", return_value=_mock_client(handler)):
            result = jira_request("GET", "/rest/api/3/issue/TEST-1", params={"expand": None, "fields": "summary"})

        assert result == {"key": "TEST-1"}
        assert seen["url"].path == "/rest/api/3/issue/TEST-1"
        assert seen["url"].params.get("fields") == "summary"
        assert "expand" not in seen["url"].params

    def test_no_content(self) -> None:
        """Test that 204 responses return an empty dict."""
        with patch(
            "jira_mcp_server.utils.jira_client.get_jira_client",
            return_value=_mock_client(lambda request: httpx.Response(204)),
        ):
            result = jira_request("POST", "/rest/api/3/issue/TEST-1/transitions", json={})

        assert result == {}

    def test_http_error_raises(self) -> None:
        """Test that error statuses raise HTTPStatusError."""
        with patch(
            "jira_mcp_server.utils.jira_client.get_jira_client",
            return_value=_mock_client(lambda request: httpx.Response(404, json={"errorMessages": ["x"]})),
        ):
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                jira_request("GET", "/rest/api/3/issue/TEST-999")

        assert exc_info.value.response.status_code == 404


class TestServerStartup:
    """Test tool registration and the server entry point."""

    def test_tools_registered(self) -> None:
        """Test the registered tool names."""
        from jira_mcp_server.server import registered_tool_names

        assert {
            "jira_list_projects",
            "jira_get_project",
            "jira_list_issues",
            "jira_get_issue",
            "jira_get_create_meta",
            "jira_create_issue",
            "jira_get_transitions",
            "jira_transition_issue",
        } <= set(registered_tool_names())

    @patch("jira_mcp_server.server.mcp")
    @patch("jira_mcp_server.server.registered_tool_names", return_value=[])
    def test_main_refuses_to_start_without_tools(self, mock_names, mock_mcp) -> None:
        """Test that an empty registry stops startup before serving."""
        from jira_mcp_server.server import main

        with pytest.raises(RuntimeError, match="Tool registration failed"):
            main()

        mock_mcp.run.assert_not_called()

    @patch("jira_mcp_server.server.mcp")
    @patch("jira_mcp_server.server.registered_tool_names", return_value=["jira_get_issue"])
    def test_main_runs_server(self, mock_names, mock_mcp) -> None:
        """Test that main serves and treats Ctrl+C as a clean shutdown."""
        from jira_mcp_server.server import main

        mock_mcp.run.side_effect = KeyboardInterrupt

        main()

        mock_mcp.run.assert_called_once_with()

    @patch.dict(os.environ, {**CREDENTIALS, "ATLASSIAN_USER_EMAIL": ""})
    def test_missing_credentials(self) -> None:
        """Test that empty variables are reported by name."""
        from jira_mcp_server.server import missing_credentials

        assert missing_credentials() == ["ATLASSIAN_USER_EMAIL"]
