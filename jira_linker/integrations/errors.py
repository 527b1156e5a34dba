"""Exceptions raised while resolving task details.

None of these cross TaskDetailFetcher.get_task_detail; the fetcher turns
them into the default task metadata and a notification.
"""


class TaskDetailError(Exception):
    """Base class for task detail errors."""


class ConfigurationMissingError(TaskDetailError):
    """Required connection settings are absent."""

    def __init__(self, missing: list[str], message: str | None = None):
        self.missing = list(missing)
        super().__init__(message or f"Missing Jira settings: {', '.join(missing)}")


class TaskFetchError(TaskDetailError):
    """The remote request failed (connection, timeout, non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(TaskFetchError):
    """The remote answered with a body that is not a usable JSON object."""
