"""Data models for task metadata.

This module defines the immutable metadata shown in hover popups and the
functions that map remote payloads into it. Missing remote fields become
placeholders or empty values, never errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..config.models import DEFAULT_ERROR_STATUS, FieldMapping
from .errors import MalformedResponseError

PLACEHOLDER = "-"
AVATAR_SIZE = "16x16"


@dataclass(frozen=True)
class Person:
    """A user attached to a task (developer or QA)."""

    # display_name is always set; avatar_url may be None when the remote has
    # no avatar (e.g. a plain-name developer from the task endpoint).

    display_name: str
    avatar_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"displayName": self.display_name, "avatarUrl": self.avatar_url}


@dataclass(frozen=True)
class TaskMetadata:
    """Ticket metadata served to hover and decoration consumers.

    ``summary`` and ``status`` are always populated (PLACEHOLDER when the
    remote has nothing); ``developer``, ``qa`` and ``complete_date`` are
    either None or fully populated.
    """

    summary: str = PLACEHOLDER
    status: str = PLACEHOLDER
    developer: Person | None = None
    qa: Person | None = None
    complete_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "summary": self.summary,
            "status": self.status,
            "developer": self.developer.to_dict() if self.developer else None,
            "qa": self.qa.to_dict() if self.qa else None,
            "completeDate": self.complete_date,
        }


def default_task_metadata(status: str = DEFAULT_ERROR_STATUS) -> TaskMetadata:
    """Build the default/error metadata returned when details are unavailable.

    Args:
        status: Status text to show in place of the real status

    Returns:
        TaskMetadata with placeholder summary and no optional fields
    """
    return TaskMetadata(summary=PLACEHOLDER, status=status)


def _text(value: Any) -> str | None:
    """Return a non-empty string for scalar values, else None."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


def parse_person(raw: Any) -> Person | None:
    """Parse a user reference.

    Accepts a Jira user object (``displayName`` plus ``avatarUrls``), a flat
    object (``displayName``/``name`` plus ``avatarUrl``) or a plain name.

    Args:
        raw: The raw field value

    Returns:
        Person, or None when no display name is present
    """
    if isinstance(raw, str):
        name = _text(raw)
        return Person(display_name=name) if name else None

    if not isinstance(raw, dict):
        return None

    name = _text(raw.get("displayName")) or _text(raw.get("name"))
    if not name:
        return None

    avatar_url = None
    avatar_urls = raw.get("avatarUrls")
    if isinstance(avatar_urls, dict):
        avatar_url = _text(avatar_urls.get(AVATAR_SIZE))
    if avatar_url is None:
        avatar_url = _text(raw.get("avatarUrl"))

    return Person(display_name=name, avatar_url=avatar_url)


def parse_date(raw: Any) -> str | None:
    """Parse a completion date field into display text."""
    if isinstance(raw, dict):
        # Jira date pickers sometimes come back wrapped, e.g. {"value": "..."}
        return _text(raw.get("value"))
    return _text(raw)


def parse_status(raw: Any) -> str:
    """Parse a status given as a Jira status object or a plain string."""
    if isinstance(raw, dict):
        return _text(raw.get("name")) or PLACEHOLDER
    return _text(raw) or PLACEHOLDER


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    return payload


def parse_jira_issue(payload: Any, field_mapping: FieldMapping) -> TaskMetadata:
    """Map a Jira REST issue into TaskMetadata.

    Args:
        payload: Decoded JSON body of GET /rest/api/<version>/issue/{key}
        field_mapping: Custom field ids for developer, QA and completion date

    Returns:
        Parsed TaskMetadata

    Raises:
        MalformedResponseError: If the body is not a JSON object
    """
    fields = _require_object(payload).get("fields")
    if not isinstance(fields, dict):
        fields = {}

    def custom(field_id: str | None) -> Any:
        return fields.get(field_id) if field_id else None

    return TaskMetadata(
        summary=_text(fields.get("summary")) or PLACEHOLDER,
        status=parse_status(fields.get("status")),
        developer=parse_person(custom(field_mapping.developer)),
        qa=parse_person(custom(field_mapping.qa)),
        complete_date=parse_date(custom(field_mapping.complete_date)),
    )


def parse_endpoint_task(payload: Any) -> TaskMetadata:
    """Map a flat task record from the alternate metadata endpoint.

    Args:
        payload: Decoded JSON body of GET {endpoint}/{key}

    Returns:
        Parsed TaskMetadata

    Raises:
        MalformedResponseError: If the body is not a JSON object
    """
    data = _require_object(payload)
    return TaskMetadata(
        summary=_text(data.get("title")) or PLACEHOLDER,
        status=parse_status(data.get("status")),
        developer=parse_person(data.get("developer")),
        qa=parse_person(data.get("qa_tester")),
        complete_date=parse_date(data.get("last_uat_opam_date")),
    )
