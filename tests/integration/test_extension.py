"""Integration tests for the extension wiring.

Drives LinkerExtension through a recording editor host with the HTTP
session mocked, covering activation, decoration updates, hover lookups
and the open-task command.
"""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests

from jira_linker.config.models import FieldMapping, LinkerConfig
from jira_linker.editor.decorations import OPEN_TASK_COMMAND
from jira_linker.editor.host import TextDocument
from jira_linker.extension import ACTIVATION_MESSAGE, LinkerExtension
from jira_linker.integrations.fetcher import build_client

pytestmark = pytest.mark.integration

DEVELOPER_FIELD = "customfield_10010"


class RecordingHost:
    """Editor host that records every call."""

    def __init__(self, active: TextDocument | None = None):
        self.active = active
        self.errors: list[str] = []
        self.infos: list[str] = []
        self.opened: list[str] = []
        self.decorations: dict[str, list] = {}

    def show_error_message(self, message: str) -> None:
        self.errors.append(message)

    def show_information_message(self, message: str) -> None:
        self.infos.append(message)

    def open_external(self, url: str) -> None:
        self.opened.append(url)

    def set_decorations(self, document, decorations) -> None:
        self.decorations[document.uri] = list(decorations)

    def active_document(self) -> TextDocument | None:
        return self.active


def make_config(**overrides) -> LinkerConfig:
    """Build a complete Jira-mode configuration."""
    values = {
        "jira_base_url": "https://example.atlassian.net",
        "jira_token": "dG9rZW4=",
        "jira_fields": FieldMapping(developer=DEVELOPER_FIELD),
    }
    values.update(overrides)
    return LinkerConfig(**values)


def issue_response(payload):
    """Build a successful mock response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = 200
    response.json.return_value = payload
    return response


@pytest.fixture
def document() -> TextDocument:
    """Create an active JavaScript document."""
    return TextDocument(
        uri="file:///src/app.js",
        language_id="javascript",
        text="// PROJ-42: handle retries\nconst x = 1; // see OPS-7\n",
    )


@pytest.fixture
def session_get():
    """Patch requests.Session.get for every client."""
    with patch.object(requests.Session, "get") as mock_get:
        yield mock_get


class TestActivation:
    """Test activate and deactivate."""

    def test_activate_decorates_active_document(self, document):
        """Test activation announces itself and decorates the active editor."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)

        extension.activate()

        assert host.infos == [ACTIVATION_MESSAGE]
        keys = [d.key for d in host.decorations[document.uri]]
        assert keys == ["PROJ-42", "OPS-7"]

    def test_activate_without_base_url(self, document):
        """Test no decorations are published without a web base URL."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, lambda: LinkerConfig())

        extension.activate()

        assert host.decorations == {}

    def test_deactivate_unregisters_commands(self, document):
        """Test deactivation drops commands and the cache."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)
        extension.activate()
        extension.fetcher.cache.set("PROJ-42", object())

        extension.deactivate()

        assert extension.commands == {}
        assert len(extension.fetcher.cache) == 0
        assert extension.active is False


class TestDocumentEvents:
    """Test document event handlers."""

    def test_change_to_active_document(self, document):
        """Test edits to the active document refresh decorations."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)

        edited = TextDocument(document.uri, document.language_id, "ABC-1")
        host.active = edited
        extension.on_document_changed(edited)

        assert [d.key for d in host.decorations[document.uri]] == ["ABC-1"]

    def test_change_to_background_document_is_ignored(self, document):
        """Test edits to other documents are not decorated."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)

        other = TextDocument("file:///other.js", "javascript", "ABC-1")
        extension.on_document_opened(other)
        extension.on_document_changed(other)

        assert host.decorations == {}

    def test_active_editor_changed(self, document):
        """Test switching editors decorates the new document."""
        host = RecordingHost()
        extension = LinkerExtension(host, make_config)

        extension.on_active_editor_changed(document)
        extension.on_active_editor_changed(None)

        assert list(host.decorations) == [document.uri]

    def test_decorations_do_not_fetch(self, document, session_get):
        """Test decorating never calls the remote."""
        host = RecordingHost(active=document)
        LinkerExtension(host, make_config).activate()

        session_get.assert_not_called()


class TestHover:
    """Test hover lookups end to end."""

    def test_hover_fetches_and_caches(self, document, session_get):
        """Test a hover renders remote metadata and repeats hit the cache."""
        session_get.return_value = issue_response(
            {
                "fields": {
                    "summary": "Handle retries",
                    "status": {"name": "Done"},
                    DEVELOPER_FIELD: {
                        "displayName": "Alice",
                        "avatarUrls": {"16x16": "u"},
                    },
                }
            }
        )
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)
        offset = document.text.index("PROJ-42") + 2

        first = asyncio.run(extension.provide_hover(document, offset))
        second = asyncio.run(extension.provide_hover(document, offset))

        assert first == second
        assert first.contents == (
            "**Name:** Handle retries",
            "**Status:** Done",
            "**Developer**",
            "![Developer Avatar](u) Alice",
        )
        session_get.assert_called_once()
        url = session_get.call_args.args[0]
        assert url == "https://example.atlassian.net/rest/api/3/issue/PROJ-42"
        assert host.errors == []

    def test_hover_network_failure(self, document, session_get):
        """Test a failing remote yields the error popup and one toast."""
        session_get.side_effect = requests.ConnectionError("connection refused")
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)
        offset = document.text.index("OPS-7")

        hover = asyncio.run(extension.provide_hover(document, offset))
        asyncio.run(extension.provide_hover(document, offset))

        assert hover.contents == (
            "**Name:** -",
            "**Status:** Error occurred while retrieving task details",
        )
        assert host.errors == ["JIRA API request failed: connection refused"]
        assert session_get.call_count == 1

    def test_hover_missing_token(self, document, session_get):
        """Test missing credentials show a configuration error."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(
            host, lambda: make_config(jira_token=""), client_factory=build_client
        )

        hover = asyncio.run(extension.provide_hover(document, 5))

        assert "Error occurred" in hover.contents[1]
        assert len(host.errors) == 1
        session_get.assert_not_called()

    def test_hover_unsupported_language(self, session_get):
        """Test documents outside the configured languages get no hover."""
        host = RecordingHost()
        extension = LinkerExtension(host, make_config)
        markdown = TextDocument("file:///README.md", "markdown", "PROJ-42")

        assert asyncio.run(extension.provide_hover(markdown, 1)) is None
        session_get.assert_not_called()


class TestOpenTask:
    """Test the open-task command."""

    def test_command_opens_url(self, document):
        """Test the decoration command opens the browse URL."""
        host = RecordingHost(active=document)
        extension = LinkerExtension(host, make_config)
        extension.activate()

        decoration = host.decorations[document.uri][0]
        command = decoration.command
        extension.execute_command(command.command, *command.arguments)

        assert decoration.command.command == OPEN_TASK_COMMAND
        assert host.opened == ["https://example.atlassian.net/browse/PROJ-42"]

    def test_unknown_command(self, document):
        """Test unknown commands raise KeyError."""
        extension = LinkerExtension(RecordingHost(), make_config)
        with pytest.raises(KeyError):
            extension.execute_command("nope")


class TestUnreadableConfiguration:
    """Test a failing config provider never escapes the extension."""

    def test_hover_with_failing_provider(self, document, session_get):
        """Test hover answers without raising when settings cannot be read."""

        def broken_config() -> LinkerConfig:
            raise OSError("settings unavailable")

        host = RecordingHost(active=document)
        extension = LinkerExtension(host, broken_config)

        assert asyncio.run(extension.provide_hover(document, 5)) is None
        extension.on_document_changed(document)

        assert host.decorations == {}
        session_get.assert_not_called()
