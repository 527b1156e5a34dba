"""Issue key extraction.

Keys are one or more uppercase ASCII letters, a hyphen and one or more
digits, matched as a whole word (``ABC-123`` but not ``xABC-1``).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

# Only the compiled pattern is shared; every scan gets its own iterator.
ISSUE_KEY_PATTERN = re.compile(r"\b[A-Z]+-[0-9]+\b", re.ASCII)


@dataclass(frozen=True)
class KeyMatch:
    """One occurrence of an issue key in a text buffer."""

    key: str
    start: int
    end: int  # exclusive

    def contains(self, offset: int) -> bool:
        """Check whether an offset falls on this key.

        The end offset counts as inside, so a cursor placed right
        after the key still resolves to it.
        """
        return self.start <= offset <= self.end

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"key": self.key, "start": self.start, "end": self.end}


def extract_keys(text: str) -> Iterator[KeyMatch]:
    """Yield issue keys in left-to-right order.

    Args:
        text: The text buffer to scan

    Yields:
        Non-overlapping KeyMatch occurrences
    """
    for match in ISSUE_KEY_PATTERN.finditer(text):
        yield KeyMatch(key=match.group(0), start=match.start(), end=match.end())


def find_key_at(text: str, offset: int) -> KeyMatch | None:
    """Find the issue key under an offset.

    Args:
        text: The text buffer to scan
        offset: Character offset, e.g. a hover position

    Returns:
        The KeyMatch containing the offset or None
    """
    for match in extract_keys(text):
        if match.start > offset:
            break
        if match.contains(offset):
            return match
    return None


def is_issue_key(value: str) -> bool:
    """Check that a whole string is a single issue key."""
    return ISSUE_KEY_PATTERN.fullmatch(value) is not None
