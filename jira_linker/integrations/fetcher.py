"""Task detail cache-fetcher.

TaskDetailFetcher is the single entry point hover and decoration code use
to get ticket metadata. Every lookup runs in this order:

1. sweep expired cache entries
2. serve a live cache entry if there is one
3. check the connection settings
4. fetch from the remote in a worker thread
5. cache and return the result

Failures never propagate: they are reported through the notify callback
and the caller receives the default/error metadata instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from ..config.models import FetchMode, LinkerConfig
from ..linker_logging import get_logger
from ..scanning import is_issue_key
from .base import TaskDetailClient
from .cache import TaskCache
from .endpoint import TaskEndpointClient
from .errors import ConfigurationMissingError, TaskFetchError
from .jira import JiraRestClient
from .models import TaskMetadata, default_task_metadata

logger = get_logger()

ConfigProvider = Callable[[], LinkerConfig]
NotifyCallback = Callable[[str], None]
ClientFactory = Callable[[LinkerConfig], TaskDetailClient]


def require_settings(config: LinkerConfig) -> None:
    """Raise ConfigurationMissingError if the active mode lacks settings."""
    missing = config.missing_settings()
    if missing:
        raise ConfigurationMissingError(
            missing, f"JIRA settings are not set: {', '.join(missing)}"
        )


def build_client(config: LinkerConfig) -> TaskDetailClient:
    """Create the client for the configured fetch mode.

    Args:
        config: Current linker configuration

    Returns:
        A JiraRestClient or TaskEndpointClient

    Raises:
        ConfigurationMissingError: If the mode's required settings are empty
    """
    require_settings(config)

    if config.mode == FetchMode.ENDPOINT:
        return TaskEndpointClient(
            config.task_endpoint_url, timeout=config.request_timeout_seconds
        )

    return JiraRestClient(
        api_base_url=config.api_base_url,
        token=config.jira_token,
        field_mapping=config.jira_fields,
        api_version=config.api_version,
        timeout=config.request_timeout_seconds,
    )


class TaskDetailFetcher:
    """Per-key memoizing front for the remote task metadata lookup.

    Owns its cache; construct one per activation. Concurrent lookups of
    the same uncached key share one in-flight fetch.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        notify: NotifyCallback,
        cache: TaskCache | None = None,
        client_factory: ClientFactory = build_client,
    ):
        """Initialize the fetcher.

        Args:
            config_provider: Returns the current configuration; read on every call
            notify: Fire-and-forget error message sink
            cache: Cache to use; a new one is created if omitted
            client_factory: Builds a client from configuration
        """
        self._config_provider = config_provider
        self._notify = notify
        self._client_factory = client_factory
        self.cache = cache if cache is not None else TaskCache()

        self._client: TaskDetailClient | None = None
        self._client_config: LinkerConfig | None = None
        self._in_flight: dict[str, asyncio.Task[TaskMetadata]] = {}
        self._retired_clients: list[TaskDetailClient] = []

    async def get_task_detail(self, key: str) -> TaskMetadata:
        """Get metadata for an issue key, from cache or the remote.

        Args:
            key: The issue key (e.g., "ABC-123")

        Returns:
            TaskMetadata; the default/error value if it could not be fetched
        """
        config = self._read_config()
        if config is not None:
            self.cache.ttl_seconds = config.cache_ttl_seconds

        self.cache.sweep()

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Task retrieved from cache: {key}")
            return cached

        if config is None:
            return default_task_metadata()

        if not is_issue_key(key):
            logger.warning(f"Ignoring lookup for invalid issue key: {key!r}")
            return default_task_metadata(config.error_status)

        try:
            client = self._get_client(config)
        except ConfigurationMissingError as e:
            self._send_notification(str(e))
            fallback = default_task_metadata(config.error_status)
            if config.cache_configuration_errors:
                self.cache.set(key, fallback)
            return fallback

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(client, key, config))
            self._in_flight[key] = task
            task.add_done_callback(lambda _: self._on_fetch_done(key))
        else:
            logger.debug(f"Joining in-flight fetch for {key}")

        # Shielded so an abandoned hover still lets the fetch fill the cache
        return await asyncio.shield(task)

    async def _fetch_and_store(
        self, client: TaskDetailClient, key: str, config: LinkerConfig
    ) -> TaskMetadata:
        """Fetch metadata off the event loop and cache the outcome."""
        try:
            metadata = await asyncio.to_thread(client.fetch_task, key)
        except TaskFetchError as e:
            logger.warning(f"Fetching {key} failed: {e}")
            self._send_notification(f"JIRA API request failed: {e}")
            metadata = default_task_metadata(config.error_status)
        except Exception as e:
            logger.exception(f"Unexpected error fetching {key}")
            self._send_notification(f"JIRA API request failed: {e}")
            metadata = default_task_metadata(config.error_status)
        else:
            logger.debug(f"Fetched task details for {key}")

        self.cache.set(key, metadata)
        return metadata

    def _read_config(self) -> LinkerConfig | None:
        """Read the current configuration, reporting unreadable settings."""
        try:
            return self._config_provider()
        except Exception as e:
            logger.exception(f"Could not read linker configuration: {e}")
            self._send_notification(str(e))
            return None

    def _get_client(self, config: LinkerConfig) -> TaskDetailClient:
        """Return a client for the configuration, rebuilding it on change."""
        require_settings(config)
        if self._client is not None and config == self._client_config:
            return self._client

        client = self._client_factory(config)
        if self._client is not None and self._client is not client:
            self._retired_clients.append(self._client)
        self._client = client
        self._client_config = config
        if not self._in_flight:
            self._close_retired_clients()
        return client

    def _on_fetch_done(self, key: str) -> None:
        self._in_flight.pop(key, None)
        # Replaced clients may serve a fetch until nothing is in flight
        if not self._in_flight:
            self._close_retired_clients()

    def _close_retired_clients(self) -> None:
        while self._retired_clients:
            self._retired_clients.pop().close()

    def _send_notification(self, message: str) -> None:
        try:
            self._notify(message)
        except Exception:
            logger.exception(f"Failed to deliver notification: {message}")

    def close(self) -> None:
        """Release the HTTP client and drop all cached entries."""
        self._close_retired_clients()
        if self._client is not None:
            self._client.close()
            self._client = None
            self._client_config = None
        self.cache.clear()
