"""Configuration loading with project file and environment support.

Precedence (highest to lowest):
1. Explicit overrides
2. Environment variables (JIRA_LINKER_*)
3. Project config (.jira-linker/config.json)
4. Defaults
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from ..linker_logging import get_logger
from .models import FieldMapping, LinkerConfig

logger = get_logger()

# Environment variable -> settings alias
ENV_MAPPINGS: dict[str, str] = {
    "JIRA_LINKER_BASE_URL": "jiraBaseURL",
    "JIRA_LINKER_API_BASE_URL": "jiraApiBaseURL",
    "JIRA_LINKER_TOKEN": "jiraToken",
    "JIRA_LINKER_MODE": "mode",
    "JIRA_LINKER_ENDPOINT_URL": "taskEndpointURL",
    "JIRA_LINKER_API_VERSION": "apiVersion",
    "JIRA_LINKER_CACHE_TTL": "cacheTtlSeconds",
    "JIRA_LINKER_TIMEOUT": "requestTimeoutSeconds",
    "JIRA_LINKER_DEVELOPER_FIELD": "jiraFields.developer",
    "JIRA_LINKER_QA_FIELD": "jiraFields.qa",
    "JIRA_LINKER_COMPLETE_DATE_FIELD": "jiraFields.completeDate",
}


class ConfigLoader:
    """Loads LinkerConfig from the project file, environment and overrides."""

    CONFIG_DIR = ".jira-linker"
    CONFIG_FILE = "config.json"

    def __init__(self, project_path: Path | None = None):
        """Initialize the configuration loader.

        Args:
            project_path: Path to the project root. Defaults to current directory.
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()
        self.config_path = self.project_path / self.CONFIG_DIR / self.CONFIG_FILE

    def load(self, **overrides: Any) -> LinkerConfig:
        """Load configuration from all sources.

        Args:
            **overrides: Settings by alias or field name, applied last

        Returns:
            Merged LinkerConfig

        Raises:
            ValueError: If the project file or merged settings are invalid
        """
        data = self._to_aliases(self._load_file())
        self._merge(data, self._load_env())
        self._merge(data, self._to_aliases(overrides))

        try:
            return LinkerConfig.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid linker configuration: {e}")
            raise ValueError(f"Invalid linker configuration: {e}") from None

    def _load_file(self) -> dict[str, Any]:
        """Read the project config file, if present."""
        if not self.config_path.exists():
            logger.debug(f"No project config at {self.config_path}")
            return {}

        try:
            with open(self.config_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in project config: {e}")
            raise ValueError(f"Invalid project config: {e}") from None
        except OSError as e:
            logger.error(f"Failed to read project config: {e}")
            raise ValueError(f"Invalid project config: {e}") from None

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid project config: expected an object in {self.config_path}"
            )

        logger.info(f"Loaded project config from {self.config_path}")
        return data

    def _load_env(self) -> dict[str, Any]:
        """Collect settings from JIRA_LINKER_* environment variables."""
        result: dict[str, Any] = {}
        for env_name, path in ENV_MAPPINGS.items():
            value = os.environ.get(env_name)
            if value is None or value == "":
                continue
            if "." in path:
                section, key = path.split(".", 1)
                result.setdefault(section, {})[key] = value
            else:
                result[path] = value
        return result

    def _to_aliases(self, values: dict[str, Any]) -> dict[str, Any]:
        """Rename snake_case field names to their settings aliases."""
        result: dict[str, Any] = {}
        for key, value in values.items():
            alias = self._field_alias(LinkerConfig, key)
            if alias == "jiraFields" and isinstance(value, dict):
                value = {
                    self._field_alias(FieldMapping, name): item
                    for name, item in value.items()
                }
            result[alias] = value
        return result

    @staticmethod
    def _field_alias(model: type[BaseModel], name: str) -> str:
        field = model.model_fields.get(name)
        return field.alias if field and field.alias else name

    def _merge(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Merge updates into base, one level deep for nested sections."""
        for key, value in updates.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = {**base[key], **value}
            else:
                base[key] = value


def load_config(project_path: Path | None = None, **overrides: Any) -> LinkerConfig:
    """Load configuration from multiple sources with precedence.

    Args:
        project_path: Project root containing .jira-linker/config.json
        **overrides: Explicit configuration overrides

    Returns:
        Configured LinkerConfig instance
    """
    return ConfigLoader(project_path=project_path).load(**overrides)
