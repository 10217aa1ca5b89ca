"""Read-only integration tests against a real Jira site.

Skipped unless ATLASSIAN_* credentials and TEST_PROJECT are configured.
"""

import pytest

from jira_mcp_server.tools.issues import jira_get_create_meta, jira_list_issues
from jira_mcp_server.tools.projects import jira_get_project, jira_list_projects
from jira_mcp_server.utils.errors import JiraAPIError

pytestmark = pytest.mark.integration


class TestReadOnlyTools:
    """Exercise listing tools without modifying site data."""

    def test_list_projects(self, test_config, live_client):
        """Test that the configured project is listed."""
        result = jira_list_projects(query=test_config["project"], limit=5)

        assert result.startswith("# Jira Projects")
        assert test_config["project"] in result

    def test_get_project(self, test_config, live_client):
        """Test project details for the configured project."""
        result = jira_get_project(test_config["project"])

        assert f"- **Key**: {test_config['project']}" in result
        assert "## Components" in result

    def test_list_issues(self, test_config, live_client):
        """Test a JQL search scoped to the configured project."""
        result = jira_list_issues(jql=f"project = {test_config['project']}", limit=3)

        assert "## Issues" in result
        assert "*Information retrieved at:" in result

    def test_create_meta(self, test_config, live_client):
        """Test that create metadata renders for the configured project."""
        result = jira_get_create_meta(project_key=test_config["project"])

        assert result.startswith("# Issue Creation Metadata")

    def test_missing_project(self, test_config, live_client):
        """Test that an unknown project maps to a structured error."""
        with pytest.raises(JiraAPIError) as exc_info:
            jira_get_project("NOPE_DOES_NOT_EXIST_42")

        assert exc_info.value.code == "RESOURCE_NOT_FOUND"
