"""Jira client utilities."""

import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_client_instance: httpx.Client | None = None

CREDENTIAL_VARS = ("ATLASSIAN_SITE_NAME", "ATLASSIAN_USER_EMAIL", "ATLASSIAN_API_TOKEN")

DEFAULT_TIMEOUT = 30.0


def get_jira_client() -> httpx.Client:
    """Get authenticated Jira HTTP client (singleton)."""
    global _client_instance

    if _client_instance is None:
        missing = [name for name in CREDENTIAL_VARS if not os.getenv(name)]
        if missing:
            raise ValueError(
                f"Atlassian credentials not set: {', '.join(missing)}. "
                "Please create .env file with ATLASSIAN_SITE_NAME, "
                "ATLASSIAN_USER_EMAIL and ATLASSIAN_API_TOKEN."
            )

        site_name = os.environ["ATLASSIAN_SITE_NAME"]
        _client_instance = httpx.Client(
            base_url=f"https://{site_name}.atlassian.net",
            auth=(os.environ["ATLASSIAN_USER_EMAIL"], os.environ["ATLASSIAN_API_TOKEN"]),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=DEFAULT_TIMEOUT,
        )
        logger.info(f"✅ Jira client configured for site: {site_name}")

    return _client_instance


def jira_request(
    method: str,
    path: str,
    params: dict[str, Any] | None = None,
    json: Any = None,
) -> Any:
    """
    Call the Jira REST API and return the decoded JSON body.

    Raises httpx.HTTPStatusError for 4xx/5xx responses and
    httpx.RequestError for transport failures. Responses without a body
    (e.g. 204 No Content) return an empty dict.
    """
    client = get_jira_client()
    if params:
        params = {k: v for k, v in params.items() if v is not None}

    logger.debug(f"{method} {path} params={params}")
    response = client.request(method, path, params=params or None, json=json)
    response.raise_for_status()

    if response.status_code == 204 or not response.content:
        return {}
    return response.json()


def reset_jira_client() -> None:
    """Reset Jira client singleton (for testing)."""
    global _client_instance
    if _client_instance is not None:
        _client_instance.close()
    _client_instance = None
