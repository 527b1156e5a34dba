"""Jira Comment Linker - issue key links and hover details for editors.

Finds issue-tracker keys (e.g. ``ABC-123``) in source text, turns them into
links to the tracker's web UI and shows live ticket metadata on hover.
"""

__version__ = "1.0.0"
__description__ = "Issue key links and hover details backed by a TTL cache"

from .config import FetchMode, FieldMapping, LinkerConfig, load_config
from .extension import LinkerExtension
from .integrations import TaskDetailFetcher, TaskMetadata
from .scanning import KeyMatch, extract_keys

__all__ = [
    "FetchMode",
    "FieldMapping",
    "LinkerConfig",
    "load_config",
    "LinkerExtension",
    "TaskDetailFetcher",
    "TaskMetadata",
    "KeyMatch",
    "extract_keys",
]
