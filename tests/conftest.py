"""Shared fixtures for linker tests."""

from __future__ import annotations

import threading

import pytest

from jira_linker.config.models import FetchMode, FieldMapping, LinkerConfig
from jira_linker.integrations.base import TaskDetailClient
from jira_linker.integrations.models import TaskMetadata


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeClient(TaskDetailClient):
    """Client returning canned results and counting fetches."""

    def __init__(self, result: TaskMetadata | Exception | None = None):
        super().__init__(timeout=1.0)
        self.result = result or TaskMetadata(summary="Fix login", status="Done")
        self.calls: list[str] = []
        self.closed = False

    @property
    def mode(self) -> FetchMode:
        """Return the fetch mode served by this client."""
        return FetchMode.JIRA

    def fetch_task(self, key: str) -> TaskMetadata:
        """Record the call and return or raise the canned result."""
        self.calls.append(key)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def close(self) -> None:
        """Record the close and release the session."""
        self.closed = True
        super().close()


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def fake_client() -> FakeClient:
    """Create a fake task detail client."""
    return FakeClient()


@pytest.fixture
def jira_config() -> LinkerConfig:
    """Create a complete Jira-mode configuration."""
    return LinkerConfig(
        jira_base_url="https://example.atlassian.net",
        jira_token="dXNlcjp0b2tlbg==",
        jira_fields=FieldMapping(
            developer="customfield_10010",
            qa="customfield_10020",
            complete_date="customfield_10030",
        ),
    )


class BlockingClient(FakeClient):
    """Client whose fetch waits in its worker thread until released."""

    def __init__(self):
        super().__init__()
        self.release = threading.Event()
        self.released = False

    def fetch_task(self, key: str) -> TaskMetadata:
        """Block until released, then return the canned result."""
        self.calls.append(key)
        self.released = self.release.wait(timeout=5)
        return self.result


@pytest.fixture
def make_client():
    """Factory for fake clients with a canned result or error."""

    def _make(result: TaskMetadata | Exception | None = None) -> FakeClient:
        return FakeClient(result=result)

    return _make


@pytest.fixture
def blocking_client():
    """Create a client that blocks until released."""
    client = BlockingClient()
    yield client
    client.release.set()
