"""Extension activation and editor event wiring.

LinkerExtension connects the host editor's events (document opened or
changed, active editor changed, hover requested, link clicked) to the
decoration and hover projections. It owns the TaskDetailFetcher, so each
activation starts with an empty cache and deactivation tears it down.
"""

from __future__ import annotations

from collections.abc import Callable

from .config.models import LinkerConfig
from .editor.decorations import OPEN_TASK_COMMAND, build_decorations
from .editor.host import EditorHost, TextDocument
from .editor.hover import Hover, HoverProvider
from .integrations.fetcher import ClientFactory, TaskDetailFetcher, build_client
from .linker_logging import get_logger

logger = get_logger()

ACTIVATION_MESSAGE = "Jira Comment Linker is active!"


class LinkerExtension:
    """The linker as seen by the host editor."""

    def __init__(
        self,
        host: EditorHost,
        config_provider: Callable[[], LinkerConfig],
        client_factory: ClientFactory = build_client,
    ):
        """Initialize the extension.

        Args:
            host: The editor host interface
            config_provider: Returns the current configuration
            client_factory: Builds task detail clients (injectable for tests)
        """
        self.host = host
        self._config_provider = config_provider
        self.fetcher = TaskDetailFetcher(
            config_provider=config_provider,
            notify=host.show_error_message,
            client_factory=client_factory,
        )
        self.hover_provider = HoverProvider(self.fetcher)
        self.commands: dict[str, Callable[..., None]] = {}
        self.active = False

    def activate(self) -> None:
        """Register commands and decorate the active document."""
        self.host.show_information_message(ACTIVATION_MESSAGE)
        self.commands[OPEN_TASK_COMMAND] = self.open_task
        self.active = True
        logger.info("Jira Comment Linker activated")

        document = self.host.active_document()
        if document is not None:
            self.update_decorations(document)

    def deactivate(self) -> None:
        """Drop registrations and release the fetcher."""
        self.commands.clear()
        self.fetcher.close()
        self.active = False
        logger.info("Jira Comment Linker is deactivated.")

    def execute_command(self, command: str, *arguments: str) -> None:
        """Run a registered command by id."""
        handler = self.commands.get(command)
        if handler is None:
            raise KeyError(f"Unknown command: {command}")
        handler(*arguments)

    def update_decorations(self, document: TextDocument) -> None:
        """Recompute and publish link decorations for a document."""
        config = self._read_config()
        if config is None or not config.jira_base_url:
            return
        decorations = build_decorations(document.text, config.jira_base_url)
        self.host.set_decorations(document, decorations)

    def _is_active_document(self, document: TextDocument) -> bool:
        active = self.host.active_document()
        return active is not None and active.uri == document.uri

    def on_document_opened(self, document: TextDocument) -> None:
        """Handle a newly opened document."""
        if self._is_active_document(document):
            self.update_decorations(document)

    def on_document_changed(self, document: TextDocument) -> None:
        """Handle an edit to a document."""
        if self._is_active_document(document):
            self.update_decorations(document)

    def on_active_editor_changed(self, document: TextDocument | None) -> None:
        """Handle a switch of the active editor."""
        if document is not None:
            self.update_decorations(document)

    async def provide_hover(self, document: TextDocument, offset: int) -> Hover | None:
        """Answer a hover query for documents in the configured languages."""
        config = self._read_config()
        if config is None or document.language_id not in config.languages:
            return None
        return await self.hover_provider.provide_hover(document.text, offset)

    def open_task(self, url: str) -> None:
        """Open a task link in the browser."""
        logger.debug(f"Opening URL {url}")
        self.host.open_external(url)

    def _read_config(self) -> LinkerConfig | None:
        try:
            return self._config_provider()
        except Exception as e:
            logger.exception(f"Could not read linker configuration: {e}")
            return None
