"""Abstract base class for task detail clients.

A client performs exactly one HTTP GET per fetch_task call and maps the
body into TaskMetadata. Failures are raised as TaskFetchError; the fetcher
decides what callers see.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import requests

from ..linker_logging import get_logger
from .errors import MalformedResponseError, TaskFetchError

if TYPE_CHECKING:
    from ..config.models import FetchMode
    from .models import TaskMetadata

logger = get_logger()


class TaskDetailClient(ABC):
    """Base class for clients that fetch metadata for one issue key."""

    def __init__(self, timeout: float = 30.0):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self._session = requests.Session()

    @property
    @abstractmethod
    def mode(self) -> FetchMode:
        """Return the fetch mode served by this client."""
        pass

    @abstractmethod
    def fetch_task(self, key: str) -> TaskMetadata:
        """Fetch and parse metadata for an issue key.

        Args:
            key: The issue key (e.g., "ABC-123")

        Returns:
            Parsed TaskMetadata

        Raises:
            TaskFetchError: If the request fails or the body is unusable
        """
        pass

    def _get_json(self, url: str, headers: dict[str, str] | None = None) -> Any:
        """GET a URL and decode its JSON body.

        Args:
            url: Absolute URL to request
            headers: Extra request headers

        Returns:
            Decoded JSON body

        Raises:
            TaskFetchError: On connection errors, timeouts and non-2xx statuses
            MalformedResponseError: If the body is not valid JSON
        """
        logger.debug(f"GET {url}")
        try:
            response = self._session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TaskFetchError(str(e), status_code=status_code) from e
        except requests.RequestException as e:
            raise TaskFetchError(str(e)) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON response: {e}") from e

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
