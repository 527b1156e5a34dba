"""Issue key detection in source text."""

from .extractor import (
    ISSUE_KEY_PATTERN,
    KeyMatch,
    extract_keys,
    find_key_at,
    is_issue_key,
)

__all__ = [
    "ISSUE_KEY_PATTERN",
    "KeyMatch",
    "extract_keys",
    "find_key_at",
    "is_issue_key",
]
