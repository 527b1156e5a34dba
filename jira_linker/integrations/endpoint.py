"""Client for an alternate task metadata endpoint.

Some deployments put a small service in front of Jira that answers
GET {endpoint}/{key} with a flat record and needs no credentials.
"""

from __future__ import annotations

from urllib.parse import quote

from ..config.models import FetchMode
from .base import TaskDetailClient
from .models import TaskMetadata, parse_endpoint_task


class TaskEndpointClient(TaskDetailClient):
    """Client for a flat task metadata endpoint."""

    def __init__(self, endpoint_url: str, timeout: float = 30.0):
        """Initialize endpoint client.

        Args:
            endpoint_url: Endpoint base URL; the key is appended as a path segment
            timeout: Request timeout in seconds
        """
        if not endpoint_url:
            raise ValueError("Endpoint client requires endpoint_url.")

        super().__init__(timeout=timeout)
        self.endpoint_url = endpoint_url.rstrip("/")

    @property
    def mode(self) -> FetchMode:
        """Return the fetch mode."""
        return FetchMode.ENDPOINT

    def task_url(self, key: str) -> str:
        """Build the endpoint URL for an issue key."""
        return f"{self.endpoint_url}/{quote(key, safe='')}"

    def fetch_task(self, key: str) -> TaskMetadata:
        """Fetch a flat task record.

        Args:
            key: The issue key (e.g., "ABC-123")

        Returns:
            Parsed TaskMetadata
        """
        return parse_endpoint_task(self._get_json(self.task_url(key)))
