"""Configuration loading and management."""

from local_skills.config.loader import (
    find_config_files,
    load_config,
    merge_configs,
)
from local_skills.config.schema import (
    LocalSkillsConfig,
    SettingsConfig,
)

__all__ = [
    # Loader functions
    "find_config_files",
    "load_config",
    "merge_configs",
    # Schema classes
    "LocalSkillsConfig",
    "SettingsConfig",
]
