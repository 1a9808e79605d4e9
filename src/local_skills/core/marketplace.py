"""Marketplace resolution.

A marketplace is a git repository with a ``.claude-plugin/marketplace.json``
listing plugins. Each plugin's ``source`` is either a path relative to the
marketplace root (optionally below ``metadata.pluginRoot``) or a reference to
another repository. This module only locates things inside an existing clone;
cloning is left to the commands.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from local_skills.core.errors import (
    MarketplaceNotFoundError,
    MarketplaceParseError,
    PluginNotFoundError,
    SkillNotFoundError,
)
from local_skills.core.models import LocalPluginDir, PluginLocation, RemotePluginRepo
from local_skills.core.schemas import (
    GitHubPluginSource,
    MarketplaceConfig,
    MarketplacePlugin,
)
from local_skills.core.specifier import DEFAULT_GITHUB_URL

logger = logging.getLogger(__name__)

MARKETPLACE_FILE = Path(".claude-plugin") / "marketplace.json"
SKILLS_DIRNAME = "skills"


def read_marketplace(clone_dir: Path) -> MarketplaceConfig:
    """Read and validate a marketplace manifest from a clone.

    Args:
        clone_dir: Root of the cloned marketplace repository

    Returns:
        Validated MarketplaceConfig

    Raises:
        MarketplaceNotFoundError: If marketplace.json is missing or unreadable
        MarketplaceParseError: If it is not valid JSON or fails validation
    """
    file_path = Path(clone_dir) / MARKETPLACE_FILE

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise MarketplaceNotFoundError(f'Marketplace file not found at "{file_path}"') from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MarketplaceParseError(f"Invalid JSON in marketplace.json: {e}") from e

    try:
        config = MarketplaceConfig.model_validate(data)
    except ValidationError as e:
        raise MarketplaceParseError("Invalid marketplace.json schema") from e

    logger.debug("Marketplace at %s lists %d plugin(s)", clone_dir, len(config.plugins))
    return config


def find_plugin(config: MarketplaceConfig, name: str) -> MarketplacePlugin:
    """Find a plugin by name.

    Raises:
        PluginNotFoundError: If no plugin has that name
    """
    for plugin in config.plugins:
        if plugin.name == name:
            return plugin
    raise PluginNotFoundError(f'Plugin "{name}" not found in marketplace')


def resolve_plugin_dir(
    plugin: MarketplacePlugin,
    clone_dir: Path,
    plugin_root: Optional[str] = None,
    github_url: str = DEFAULT_GITHUB_URL,
) -> PluginLocation:
    """Locate a plugin's files.

    Args:
        plugin: Plugin entry from the marketplace
        clone_dir: Root of the cloned marketplace
        plugin_root: Optional ``metadata.pluginRoot`` prefix for relative sources
        github_url: Base URL used for ``{"source": "github"}`` plugins

    Returns:
        LocalPluginDir for relative sources, RemotePluginRepo otherwise
    """
    source = plugin.source

    if isinstance(source, str):
        base = Path(clone_dir)
        if plugin_root:
            base = base / plugin_root
        return LocalPluginDir(path=(base / source).resolve())

    if isinstance(source, GitHubPluginSource):
        return RemotePluginRepo(url=f"{github_url.rstrip('/')}/{source.repo}.git")

    return RemotePluginRepo(url=source.url)


def skill_dir(plugin_dir: Path, skill_name: str) -> Path:
    """Path of a skill inside a plugin directory."""
    return Path(plugin_dir) / SKILLS_DIRNAME / skill_name


def list_skills(plugin_dir: Path) -> list[str]:
    """List skill names (subdirectories of ``skills/``) in a plugin.

    Raises:
        SkillNotFoundError: If the plugin has no skills directory
    """
    skills_dir = Path(plugin_dir) / SKILLS_DIRNAME
    if not skills_dir.is_dir():
        raise SkillNotFoundError(f'No skills directory found at "{skills_dir}"')

    return sorted(entry.name for entry in skills_dir.iterdir() if entry.is_dir())
