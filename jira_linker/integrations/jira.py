"""Jira REST API client.

Fetches a single issue from /rest/api/<version>/issue/{key} using a
pre-encoded Basic auth token.
"""

from __future__ import annotations

from urllib.parse import quote

from ..config.models import FetchMode, FieldMapping
from .base import TaskDetailClient
from .models import TaskMetadata, parse_jira_issue


class JiraRestClient(TaskDetailClient):
    """Client for the Jira REST API (issue endpoint)."""

    def __init__(
        self,
        api_base_url: str,
        token: str,
        field_mapping: FieldMapping | None = None,
        api_version: str = "3",
        timeout: float = 30.0,
    ):
        """Initialize Jira client.

        Args:
            api_base_url: Jira base URL, e.g. https://example.atlassian.net
            token: Base64-encoded "email:api_token" credential
            field_mapping: Custom field ids for developer, QA and completion date
            api_version: REST API version segment
            timeout: Request timeout in seconds
        """
        if not api_base_url or not token:
            raise ValueError("Jira client requires both api_base_url and token.")

        super().__init__(timeout=timeout)
        self.api_base_url = api_base_url.rstrip("/")
        self.field_mapping = field_mapping or FieldMapping()
        self.api_version = api_version
        self._session.headers.update(
            {
                "Authorization": f"Basic {token}",
                "Accept": "application/json",
            }
        )

    @property
    def mode(self) -> FetchMode:
        """Return the fetch mode."""
        return FetchMode.JIRA

    def issue_url(self, key: str) -> str:
        """Build the REST URL for an issue key."""
        issue_key = quote(key, safe="")
        return f"{self.api_base_url}/rest/api/{self.api_version}/issue/{issue_key}"

    def fetch_task(self, key: str) -> TaskMetadata:
        """Fetch a Jira issue and map it through the configured fields.

        Args:
            key: The issue key (e.g., "ABC-123")

        Returns:
            Parsed TaskMetadata
        """
        payload = self._get_json(self.issue_url(key))
        return parse_jira_issue(payload, self.field_mapping)
