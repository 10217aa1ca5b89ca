"""Default configuration values for Jira operations.

Provides the default Atlassian site and project from environment variables.
Users can set ATLASSIAN_SITE_NAME and JIRA_DEFAULT_PROJECT environment
variables to configure defaults for all operations.
"""

import os

from ..utils.types import JiraSiteConfig

# If not set, defaults to empty string (tools will require explicit values)
DEFAULT_SITE_NAME = os.getenv("ATLASSIAN_SITE_NAME", "")
DEFAULT_PROJECT = os.getenv("JIRA_DEFAULT_PROJECT", "")

DEFAULT_SITE = JiraSiteConfig(site_name=DEFAULT_SITE_NAME, default_project=DEFAULT_PROJECT)
