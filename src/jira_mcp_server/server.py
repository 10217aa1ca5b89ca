"""Jira MCP Server - Main entry point.

FastMCP server that provides Jira operation tools to chat clients via MCP protocol.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import mcp

__all__ = ["mcp", "main"]

# src/jira_mcp_server/server.py -> project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path, override=True)

# stdout carries the MCP protocol
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS = ("ATLASSIAN_SITE_NAME", "ATLASSIAN_USER_EMAIL", "ATLASSIAN_API_TOKEN")


def missing_credentials() -> list[str]:
    """Names of required Atlassian variables that are unset or empty."""
    return [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]


def registered_tool_names() -> list[str]:
    return [tool.name for tool in mcp._tool_manager.list_tools()]


missing = missing_credentials()
if missing:
    logger.error(
        f"Atlassian credentials incomplete (checked {env_path}), missing: {', '.join(missing)}"
    )
else:
    logger.info(f"Atlassian credentials loaded from {env_path}")

# Tools register themselves through @mcp.tool() on import
from .tools import issues, projects, transitions  # noqa: E402, F401


def main() -> None:
    """Verify tool registration and serve MCP over stdio until interrupted."""
    names = registered_tool_names()
    if not names:
        raise RuntimeError("Tool registration failed - cannot start server")
    logger.info(f"Jira MCP Server starting with {len(names)} tools: {', '.join(names)}")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
