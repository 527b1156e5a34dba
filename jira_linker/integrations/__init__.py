"""Task metadata integration for the linker.

This package provides the clients that fetch ticket metadata from Jira
(or an alternate metadata endpoint) and the TTL-cached fetcher that the
editor projections call.
"""

from .base import TaskDetailClient
from .cache import CacheEntry, TaskCache
from .endpoint import TaskEndpointClient
from .errors import (
    ConfigurationMissingError,
    MalformedResponseError,
    TaskDetailError,
    TaskFetchError,
)
from .fetcher import TaskDetailFetcher, build_client
from .jira import JiraRestClient
from .models import (
    PLACEHOLDER,
    Person,
    TaskMetadata,
    default_task_metadata,
    parse_endpoint_task,
    parse_jira_issue,
    parse_person,
)

__all__ = [
    # Clients
    "TaskDetailClient",
    "JiraRestClient",
    "TaskEndpointClient",
    "build_client",
    # Cache
    "CacheEntry",
    "TaskCache",
    "TaskDetailFetcher",
    # Errors
    "TaskDetailError",
    "ConfigurationMissingError",
    "TaskFetchError",
    "MalformedResponseError",
    # Models
    "PLACEHOLDER",
    "Person",
    "TaskMetadata",
    "default_task_metadata",
    "parse_jira_issue",
    "parse_endpoint_task",
    "parse_person",
]
