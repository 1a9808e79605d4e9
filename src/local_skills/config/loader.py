"""Configuration loader with merge logic and precedence handling."""

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from local_skills.config.defaults import DEFAULT_CONFIG
from local_skills.config.schema import LocalSkillsConfig
from local_skills.utils.paths import expand_path

PROJECT_CONFIG_NAME = "local-skills.yaml"
USER_CONFIG_PATH = "~/.config/local-skills/config.yaml"


def find_config_files(project_dir: Optional[Path] = None) -> list[Path]:
    """Find configuration files in standard locations.

    Searches in order of precedence (lowest to highest):
    1. User config (~/.config/local-skills/config.yaml)
    2. Project config (<project_dir>/local-skills.yaml)

    Args:
        project_dir: Project directory (defaults to the current directory)

    Returns:
        Existing config files, ordered from lowest to highest precedence
    """
    config_files = []

    user_config = expand_path(USER_CONFIG_PATH)
    if user_config.exists():
        config_files.append(user_config)

    project_config = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    if project_config.exists():
        config_files.append(project_config)

    return config_files


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Raises:
        yaml.YAMLError: If the file contains invalid YAML
        FileNotFoundError: If the file doesn't exist
    """
    with open(file_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
        return content if content is not None else {}


def merge_configs(configs: list[dict[str, Any]]) -> dict[str, Any]:
    """Deep merge configuration dictionaries, later ones taking precedence.

    Nested dictionaries are merged recursively; any other value (including
    lists) from a later config replaces the earlier one.
    """
    result: dict[str, Any] = {}

    for config in configs:
        result = _deep_merge(result, config)

    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to configuration.

    Supports the following environment variables:
    - LOCAL_SKILLS_BASE_DIR: Override settings.base_dir
    - LOCAL_SKILLS_GIT: Override settings.git_executable
    - LOCAL_SKILLS_TEMP_DIR: Override settings.temp_dir
    - LOCAL_SKILLS_GITHUB_URL: Override settings.github_url
    """
    result = copy.deepcopy(config)
    settings = result.setdefault("settings", {})

    if base_dir := os.getenv("LOCAL_SKILLS_BASE_DIR"):
        settings["base_dir"] = base_dir

    if git_executable := os.getenv("LOCAL_SKILLS_GIT"):
        settings["git_executable"] = git_executable

    if temp_dir := os.getenv("LOCAL_SKILLS_TEMP_DIR"):
        settings["temp_dir"] = temp_dir

    if github_url := os.getenv("LOCAL_SKILLS_GITHUB_URL"):
        settings["github_url"] = github_url

    return result


def load_config(
    config_path: Optional[Path] = None, project_dir: Optional[Path] = None
) -> LocalSkillsConfig:
    """Load and merge configuration from all sources.

    Configuration precedence (lowest to highest):
    1. Built-in defaults
    2. User config (~/.config/local-skills/config.yaml)
    3. Project config (<project_dir>/local-skills.yaml)
    4. Environment variables
    5. Explicitly provided config_path (if given)

    Args:
        config_path: Optional explicit config file, merged last
        project_dir: Project whose local-skills.yaml should be read

    Returns:
        Validated LocalSkillsConfig instance

    Raises:
        ValidationError: If the merged configuration is invalid
        yaml.YAMLError: If a config file contains invalid YAML
        FileNotFoundError: If config_path is provided but doesn't exist
    """
    configs_to_merge = [DEFAULT_CONFIG]

    for config_file in find_config_files(project_dir):
        try:
            configs_to_merge.append(load_yaml_file(config_file))
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error loading {config_file}: {e}") from e

    merged_config = apply_env_overrides(merge_configs(configs_to_merge))

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        merged_config = merge_configs([merged_config, load_yaml_file(config_path)])

    return LocalSkillsConfig(**merged_config)
