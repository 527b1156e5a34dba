"""Hover popups with live task metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..scanning import find_key_at

if TYPE_CHECKING:
    from ..integrations.fetcher import TaskDetailFetcher
    from ..integrations.models import Person, TaskMetadata


@dataclass(frozen=True)
class Hover:
    """Markdown sections to show for a hovered issue key."""

    contents: tuple[str, ...]
    start: int
    end: int


def _format_person(label: str, person: Person) -> list[str]:
    line = person.display_name
    if person.avatar_url:
        line = f"![{label} Avatar]({person.avatar_url}) {line}"
    return [f"**{label}**", line]


def format_task_popup(metadata: TaskMetadata) -> tuple[str, ...]:
    """Render metadata as popup sections.

    Name and Status always come first; Developer, QA and Complete Date
    only appear when the metadata has them.
    """
    sections = [f"**Name:** {metadata.summary}", f"**Status:** {metadata.status}"]

    if metadata.developer:
        sections.extend(_format_person("Developer", metadata.developer))
    if metadata.qa:
        sections.extend(_format_person("QA", metadata.qa))
    if metadata.complete_date:
        sections.extend(["**Complete Date**", metadata.complete_date])

    return tuple(sections)


class HoverProvider:
    """Resolves hover queries to task popups."""

    def __init__(self, fetcher: TaskDetailFetcher):
        self.fetcher = fetcher

    async def provide_hover(self, text: str, offset: int) -> Hover | None:
        """Build the popup for the issue key under an offset.

        Args:
            text: Full document text
            offset: Hovered character offset

        Returns:
            Hover for the key, or None when no key is under the offset
        """
        match = find_key_at(text, offset)
        if match is None:
            return None

        metadata = await self.fetcher.get_task_detail(match.key)
        return Hover(
            contents=format_task_popup(metadata), start=match.start, end=match.end
        )
