"""Pytest configuration and fixtures for integration tests.

Provides test configuration and Jira client setup against a real site.
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from dotenv import load_dotenv

from jira_mcp_server.utils.jira_client import reset_jira_client

# Load test environment variables
TEST_ENV_FILE = Path(__file__).parent.parent.parent / ".env.test"
if TEST_ENV_FILE.exists():
    load_dotenv(TEST_ENV_FILE, override=True)
else:
    # Fall back to regular .env for local development
    load_dotenv(override=True)


@pytest.fixture(scope="session")
def test_config() -> dict:
    """Provide test configuration from environment variables.

    Returns:
        Dictionary with site name and project key.

    Raises:
        pytest.skip: If Atlassian credentials or TEST_PROJECT are not set.
    """
    if not os.getenv("ATLASSIAN_API_TOKEN") or not os.getenv("ATLASSIAN_USER_EMAIL"):
        pytest.skip("ATLASSIAN_API_TOKEN not set - skipping integration tests")

    site = os.getenv("ATLASSIAN_SITE_NAME")
    project = os.getenv("TEST_PROJECT")
    if not site or site == "testsite" or not project:
        pytest.skip("ATLASSIAN_SITE_NAME and TEST_PROJECT must be set for integration tests")

    return {"site": site, "project": project}


@pytest.fixture
def live_client(test_config: dict) -> Generator[None, None, None]:
    """Ensure every test starts with a fresh client for the configured site."""
    reset_jira_client()
    yield
    reset_jira_client()
