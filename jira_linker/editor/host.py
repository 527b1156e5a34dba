"""Interface the linker expects from the host editor.

The scanning and integrations packages never import this module; only the
projections and the extension wiring talk to the editor.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .decorations import Decoration


@dataclass(frozen=True)
class TextDocument:
    """A snapshot of an open document."""

    uri: str
    language_id: str
    text: str


class EditorHost(Protocol):
    """Operations the host editor provides to the linker."""

    def show_error_message(self, message: str) -> None:
        """Show an error toast. Must not block."""
        ...

    def show_information_message(self, message: str) -> None:
        """Show an informational toast. Must not block."""
        ...

    def open_external(self, url: str) -> None:
        """Open a URL in the user's browser."""
        ...

    def set_decorations(
        self, document: TextDocument, decorations: Sequence[Decoration]
    ) -> None:
        """Replace the link decorations shown for a document."""
        ...

    def active_document(self) -> TextDocument | None:
        """Return the document in the active editor, if any."""
        ...
