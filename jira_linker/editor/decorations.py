"""Link decorations for issue keys.

Decorations only need the key and its offsets; they never trigger a
metadata fetch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote

from ..scanning import extract_keys

OPEN_TASK_COMMAND = "jiraLinker.openTask"
OPEN_TASK_TITLE = "Open JIRA Task"


@dataclass(frozen=True)
class Command:
    """An editor command bound to a decoration."""

    command: str
    title: str
    arguments: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Decoration:
    """An underlined, clickable range over one issue key."""

    key: str
    start: int
    end: int
    hover_message: str
    command: Command


def browse_url(web_base_url: str, key: str) -> str:
    """Build the web UI link for an issue key.

    Args:
        web_base_url: Tracker web UI base, e.g. https://example.atlassian.net
        key: The issue key

    Returns:
        URL of the form {base}/browse/{key}
    """
    return f"{web_base_url.rstrip('/')}/browse/{quote(key, safe='')}"


def build_decorations(text: str, web_base_url: str) -> list[Decoration]:
    """Build one link decoration per issue key occurrence.

    Args:
        text: Full document text
        web_base_url: Tracker web UI base; no decorations when empty

    Returns:
        Decorations in document order
    """
    if not web_base_url:
        return []

    decorations = []
    for match in extract_keys(text):
        url = browse_url(web_base_url, match.key)
        decorations.append(
            Decoration(
                key=match.key,
                start=match.start,
                end=match.end,
                hover_message=f"**Task:** [{match.key}]({url})",
                command=Command(OPEN_TASK_COMMAND, OPEN_TASK_TITLE, (url,)),
            )
        )
    return decorations
