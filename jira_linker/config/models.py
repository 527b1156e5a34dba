"""Configuration models for the linker.

Settings use the camelCase keys of the editor settings file
(``jiraBaseURL``, ``jiraToken``, ``jiraFields``...) as aliases, while
Python code reads the snake_case attribute names.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LANGUAGES = ("javascript", "html", "css")
DEFAULT_ERROR_STATUS = "Error occurred while retrieving task details"


class FetchMode(str, Enum):
    """Where task metadata is fetched from.

    - JIRA: the Jira REST API with a Basic auth token
    - ENDPOINT: an alternate metadata service queried as {endpoint}/{key}
    """

    JIRA = "jira"
    ENDPOINT = "endpoint"


class FieldMapping(BaseModel):
    """Custom field ids holding developer, QA and completion date."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    developer: str | None = None
    qa: str | None = None
    complete_date: str | None = Field(default=None, alias="completeDate")


class LinkerConfig(BaseModel):
    """Settings read by the linker on every lookup."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    jira_base_url: str = Field(default="", alias="jiraBaseURL")
    jira_api_base_url: str = Field(default="", alias="jiraApiBaseURL")
    jira_token: str = Field(default="", alias="jiraToken")
    jira_fields: FieldMapping = Field(default_factory=FieldMapping, alias="jiraFields")
    mode: FetchMode = FetchMode.JIRA
    task_endpoint_url: str = Field(default="", alias="taskEndpointURL")
    api_version: str = Field(default="3", alias="apiVersion")
    cache_ttl_seconds: float = Field(default=300.0, gt=0, alias="cacheTtlSeconds")
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, alias="requestTimeoutSeconds"
    )
    cache_configuration_errors: bool = Field(
        default=False, alias="cacheConfigurationErrors"
    )
    error_status: str = Field(default=DEFAULT_ERROR_STATUS, alias="errorStatus")
    languages: tuple[str, ...] = DEFAULT_LANGUAGES

    @property
    def api_base_url(self) -> str:
        """API base URL, falling back to the web UI base URL."""
        return (self.jira_api_base_url or self.jira_base_url).rstrip("/")

    def missing_settings(self) -> list[str]:
        """List the settings the active mode needs but does not have.

        Returns:
            Setting names (aliases) that are empty
        """
        if self.mode == FetchMode.ENDPOINT:
            return [] if self.task_endpoint_url else ["taskEndpointURL"]

        missing = []
        if not self.api_base_url:
            missing.append("jiraBaseURL")
        if not self.jira_token:
            missing.append("jiraToken")
        return missing
