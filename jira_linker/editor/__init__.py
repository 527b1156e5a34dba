"""Editor-facing projections: link decorations and hover popups."""

from .decorations import (
    OPEN_TASK_COMMAND,
    Command,
    Decoration,
    browse_url,
    build_decorations,
)
from .host import EditorHost, TextDocument
from .hover import Hover, HoverProvider, format_task_popup

__all__ = [
    "OPEN_TASK_COMMAND",
    "Command",
    "Decoration",
    "browse_url",
    "build_decorations",
    "EditorHost",
    "TextDocument",
    "Hover",
    "HoverProvider",
    "format_task_popup",
]
