"""Root pytest configuration for jira-mcp-server tests.

Sets up environment variables for the default site and project used in unit tests.
"""

import importlib
import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Set up test environment before tests run."""
    # These are used by defaults.py when tools are called without an explicit project
    os.environ["ATLASSIAN_SITE_NAME"] = "testsite"
    os.environ["JIRA_DEFAULT_PROJECT"] = "TEST"

    # Reload the defaults module to pick up the new environment variables
    # This is needed because defaults.py evaluates os.getenv at import time
    import jira_mcp_server.config.defaults as defaults_module

    importlib.reload(defaults_module)
