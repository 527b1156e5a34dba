"""Configuration for the linker."""

from .config_loader import ConfigLoader, load_config
from .models import DEFAULT_LANGUAGES, FetchMode, FieldMapping, LinkerConfig

__all__ = [
    "ConfigLoader",
    "load_config",
    "DEFAULT_LANGUAGES",
    "FetchMode",
    "FieldMapping",
    "LinkerConfig",
]
